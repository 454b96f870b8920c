"""Vigenere family: letter Vigenere, autokey Vigenere and 8-bit Vigenere.

Research / education only. Do NOT use in production.
"""

from __future__ import annotations

from typing import List

from .letters import (
    A_UPPER,
    ALPHABET_SIZE,
    DEFAULT_GROUP_SIZE,
    DEFAULT_GROUPS_PER_LINE,
    LetterGrouper,
    as_key_bytes,
    key_letters,
    require_letter,
)
from .transform import Decryptor, Encryptor, KeyConstructionError


def _letter_key(key) -> List[int]:
    raw = as_key_bytes(key)
    if not raw:
        raise KeyConstructionError("key cannot be empty")
    shifts = key_letters(raw)
    if not shifts:
        raise KeyConstructionError("key must contain at least one letter")
    return shifts


class Vigenere(Encryptor, Decryptor):
    """Repeating-key shift over A-Z. Ciphertext is uppercase and grouped."""

    def __init__(self, key, *, group_size: int = DEFAULT_GROUP_SIZE, groups_per_line: int = DEFAULT_GROUPS_PER_LINE):
        self.key = _letter_key(key)
        self.count = 0
        self._grouper = LetterGrouper(group_size, groups_per_line)

    def _shift(self) -> int:
        shift = self.key[self.count % len(self.key)]
        self.count += 1
        return shift

    def encrypt_byte(self, byte: int) -> bytes:
        p = require_letter(byte)
        c = (p + self._shift()) % ALPHABET_SIZE
        return self._grouper.emit(bytes([c + A_UPPER]))

    def encrypt_finish(self) -> bytes:
        return b""

    def decrypt_byte(self, byte: int) -> bytes:
        c = require_letter(byte)
        p = (c - self._shift()) % ALPHABET_SIZE
        return bytes([p + A_UPPER])

    def decrypt_finish(self) -> bytes:
        return b""


class VigenereAutokey(Encryptor, Decryptor):
    """Vigenere whose key stream is extended by the plaintext itself.

    Each processed position overwrites its key slot with the plaintext
    letter, so an instance cannot be resumed mid-message.
    """

    def __init__(self, key, *, group_size: int = DEFAULT_GROUP_SIZE, groups_per_line: int = DEFAULT_GROUPS_PER_LINE):
        self.key = _letter_key(key)
        self.count = 0
        self._grouper = LetterGrouper(group_size, groups_per_line)

    def _slot(self) -> int:
        ix = self.count % len(self.key)
        self.count += 1
        return ix

    def encrypt_byte(self, byte: int) -> bytes:
        p = require_letter(byte)
        ix = self._slot()
        shift, self.key[ix] = self.key[ix], p
        c = (p + shift) % ALPHABET_SIZE
        return self._grouper.emit(bytes([c + A_UPPER]))

    def encrypt_finish(self) -> bytes:
        return b""

    def decrypt_byte(self, byte: int) -> bytes:
        c = require_letter(byte)
        ix = self._slot()
        p = (c - self.key[ix]) % ALPHABET_SIZE
        self.key[ix] = p
        return bytes([p + A_UPPER])

    def decrypt_finish(self) -> bytes:
        return b""


class Vigenere256(Encryptor, Decryptor):
    """Vigenere over the full byte range with wrapping arithmetic; no formatting."""

    def __init__(self, key):
        raw = as_key_bytes(key)
        if not raw:
            raise KeyConstructionError("key cannot be empty")
        self.key = raw
        self.offset = 0

    def _next(self) -> int:
        k = self.key[self.offset % len(self.key)]
        self.offset += 1
        return k

    def encrypt_byte(self, byte: int) -> bytes:
        return bytes([(byte + self._next()) & 0xFF])

    def encrypt_finish(self) -> bytes:
        return b""

    def decrypt_byte(self, byte: int) -> bytes:
        return bytes([(byte - self._next()) & 0xFF])

    def decrypt_finish(self) -> bytes:
        return b""
