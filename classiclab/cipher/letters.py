"""Helpers shared by the letter-only ciphers (alphabet A-Z, modulus 26)."""

from __future__ import annotations

from typing import List, Optional

from .transform import CipherError

A_UPPER = ord("A")
A_LOWER = ord("a")
ALPHABET_SIZE = 26

DEFAULT_GROUP_SIZE = 5
DEFAULT_GROUPS_PER_LINE = 12


def letter_index(byte: int) -> Optional[int]:
    """Map ``A-Z``/``a-z`` to 0-25, anything else to ``None``."""
    if A_UPPER <= byte < A_UPPER + ALPHABET_SIZE:
        return byte - A_UPPER
    if A_LOWER <= byte < A_LOWER + ALPHABET_SIZE:
        return byte - A_LOWER
    return None


def require_letter(byte: int) -> int:
    idx = letter_index(byte)
    if idx is None:
        raise CipherError(f"byte {byte!r} is not an ASCII letter")
    return idx


def key_letters(key: bytes) -> List[int]:
    """Case-fold the key and drop everything that is not a letter."""
    return [i for i in (letter_index(b) for b in key) if i is not None]


def as_key_bytes(key) -> bytes:
    if isinstance(key, str):
        return key.encode("utf-8")
    return bytes(key)


class LetterGrouper:
    """Spaces ciphertext into groups of ``group_size`` letters.

    A separator goes in front of every letter whose zero-based output
    position is a non-zero multiple of ``group_size``: a newline once every
    ``groups_per_line`` groups, a space otherwise.
    """

    def __init__(self, group_size: int = DEFAULT_GROUP_SIZE, groups_per_line: int = DEFAULT_GROUPS_PER_LINE):
        if group_size < 1 or groups_per_line < 1:
            raise ValueError("group_size and groups_per_line must be positive")
        self.group_size = group_size
        self.line_size = group_size * groups_per_line
        self.count = 0

    def emit(self, letters: bytes) -> bytes:
        out = bytearray()
        for letter in letters:
            if self.count and self.count % self.group_size == 0:
                out.append(0x0A if self.count % self.line_size == 0 else 0x20)
            out.append(letter)
            self.count += 1
        return bytes(out)


def strip_formatting(text: bytes) -> bytes:
    """Remove the spaces and newlines ``LetterGrouper`` inserts."""
    return bytes(b for b in text if b not in (0x20, 0x0A))
