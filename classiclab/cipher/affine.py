"""Affine cipher: ``c = m*p + n (mod 26)``.

Research / education only. Do NOT use in production.
"""

from __future__ import annotations

from .letters import (
    A_UPPER,
    ALPHABET_SIZE,
    DEFAULT_GROUP_SIZE,
    DEFAULT_GROUPS_PER_LINE,
    LetterGrouper,
    require_letter,
)
from .modular import CoprimeError, Residue
from .transform import Decryptor, Encryptor, KeyConstructionError


class Affine(Encryptor, Decryptor):
    def __init__(self, m: int, n: int, *, group_size: int = DEFAULT_GROUP_SIZE, groups_per_line: int = DEFAULT_GROUPS_PER_LINE):
        if m == 0:
            raise KeyConstructionError("m is 0")
        self.m = Residue(m, ALPHABET_SIZE)
        try:
            self.m_inv = self.m.inverse()
        except CoprimeError as e:
            raise KeyConstructionError(f"{m} has common factor {e.gcd} with {ALPHABET_SIZE}") from e
        self.n = Residue(n, ALPHABET_SIZE)
        self.count = 0
        self._grouper = LetterGrouper(group_size, groups_per_line)

    def encrypt_byte(self, byte: int) -> bytes:
        p = Residue(require_letter(byte), ALPHABET_SIZE)
        c = p * self.m + self.n
        self.count += 1
        return self._grouper.emit(bytes([c.value + A_UPPER]))

    def encrypt_finish(self) -> bytes:
        return b""

    def decrypt_byte(self, byte: int) -> bytes:
        c = Residue(require_letter(byte), ALPHABET_SIZE)
        p = (c - self.n) * self.m_inv
        self.count += 1
        return bytes([p.value + A_UPPER])

    def decrypt_finish(self) -> bytes:
        return b""
