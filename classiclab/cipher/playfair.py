"""Playfair digraph cipher over a 5x5 key square (I and J share a cell).

Research / education only. Do NOT use in production.
"""

from __future__ import annotations

from typing import List, Optional, Tuple

from .letters import (
    DEFAULT_GROUP_SIZE,
    DEFAULT_GROUPS_PER_LINE,
    LetterGrouper,
    as_key_bytes,
    letter_index,
)
from .transform import CipherError, Decryptor, Encryptor, KeyConstructionError

SQUARE_ALPHABET = b"ABCDEFGHIKLMNOPQRSTUVWXYZ"
SIDE = 5
FILLER = SQUARE_ALPHABET.index(b"X")


def square_index(byte: int) -> Optional[int]:
    """Index of a letter in ``SQUARE_ALPHABET`` (J folds onto I), else ``None``."""
    idx = letter_index(byte)
    if idx is None:
        return None
    # letters after J shift down one slot
    return idx - 1 if idx > 9 else min(idx, 8)


def _require(byte: int) -> int:
    idx = square_index(byte)
    if idx is None:
        raise CipherError(f"byte {byte!r} is not an ASCII letter")
    return idx


class Playfair(Encryptor, Decryptor):
    """Playfair cipher.

    The key square lists the key's letters in order of first appearance,
    then the unused letters alphabetically. Encryption splits a doubled
    pair with an ``X`` and pads a dangling last letter with ``X``;
    decryption trusts its input and fails on an odd letter count.
    """

    def __init__(self, key, *, group_size: int = DEFAULT_GROUP_SIZE, groups_per_line: int = DEFAULT_GROUPS_PER_LINE):
        raw = as_key_bytes(key)
        order: List[int] = []
        for b in raw:
            idx = square_index(b)
            if idx is not None and idx not in order:
                order.append(idx)
        if not order:
            raise KeyConstructionError("key cannot be empty")
        order += [i for i in range(SIDE * SIDE) if i not in order]

        self.square = order
        self.square_inv = [0] * (SIDE * SIDE)
        for pos, letter in enumerate(order):
            self.square_inv[letter] = pos

        self.count = 0
        self._pending = 0
        self._grouper = LetterGrouper(group_size, groups_per_line)

    def key_square(self) -> List[str]:
        """The square as five row strings."""
        letters = bytes(SQUARE_ALPHABET[i] for i in self.square).decode("ascii")
        return [letters[r * SIDE:(r + 1) * SIDE] for r in range(SIDE)]

    def _transform_pair(self, a: int, b: int, step: int) -> Tuple[int, int]:
        ra, ca = divmod(self.square_inv[a], SIDE)
        rb, cb = divmod(self.square_inv[b], SIDE)
        if ra == rb:
            ca, cb = (ca + step) % SIDE, (cb + step) % SIDE
        elif ca == cb:
            ra, rb = (ra + step) % SIDE, (rb + step) % SIDE
        else:
            ca, cb = cb, ca
        return self.square[ra * SIDE + ca], self.square[rb * SIDE + cb]

    def encrypt_pair(self, a: int, b: int) -> Tuple[int, int]:
        return self._transform_pair(a, b, 1)

    def decrypt_pair(self, a: int, b: int) -> Tuple[int, int]:
        return self._transform_pair(a, b, SIDE - 1)

    def encrypt_byte(self, byte: int) -> bytes:
        letter = _require(byte)
        count = self.count
        self.count += 1
        if count % 2 == 0:
            self._pending = letter
            return b""

        a, b = self._pending, letter
        if a == b and b != FILLER:
            # the first letter stays pending and pairs with the next input
            b = FILLER
            self.count += 1
        a, b = self.encrypt_pair(a, b)
        return self._grouper.emit(bytes([SQUARE_ALPHABET[a], SQUARE_ALPHABET[b]]))

    def encrypt_finish(self) -> bytes:
        if self.count % 2 == 0:
            return b""
        return self.encrypt_byte(ord("X"))

    def decrypt_byte(self, byte: int) -> bytes:
        letter = _require(byte)
        count = self.count
        self.count += 1
        if count % 2 == 0:
            self._pending = letter
            return b""

        a, b = self.decrypt_pair(self._pending, letter)
        return bytes([SQUARE_ALPHABET[a], SQUARE_ALPHABET[b]])

    def decrypt_finish(self) -> bytes:
        if self.count % 2 != 0:
            raise CipherError("ciphertext has an unpaired final letter")
        return b""
