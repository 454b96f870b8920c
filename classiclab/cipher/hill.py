"""Hill cipher with an arbitrary N x N key matrix modulo 26.

A block of N letters is treated as a row vector ``p`` and encrypted as
``p x K``; decryption multiplies by ``K^-1``. With the textbook key
``17 17 5 / 21 18 21 / 2 2 19`` this turns ``PAYMOREMONEY`` into
``RRLMWBKASPDH``.

Research / education only. Do NOT use in production.
"""

from __future__ import annotations

from typing import List, Sequence, Union

from .letters import (
    A_UPPER,
    ALPHABET_SIZE,
    DEFAULT_GROUP_SIZE,
    DEFAULT_GROUPS_PER_LINE,
    LetterGrouper,
    require_letter,
)
from .modular import DegenerateMatrixError, MatrixInversionError, Residue, ResidueMatrix
from .transform import CipherError, Decryptor, Encryptor, KeyConstructionError

PAD_LETTER = ord("A")


def _key_matrix(key: Union[ResidueMatrix, Sequence[int], Sequence[Sequence[int]]]) -> ResidueMatrix:
    if isinstance(key, ResidueMatrix):
        if key.modulus != ALPHABET_SIZE:
            raise KeyConstructionError(f"matrix modulus must be {ALPHABET_SIZE}, got {key.modulus}")
        return key
    if len(key) == 0:
        raise KeyConstructionError("key cannot be empty")
    try:
        if isinstance(key[0], (list, tuple)):
            return ResidueMatrix.from_rows(key, ALPHABET_SIZE)
        return ResidueMatrix.from_flat(key, ALPHABET_SIZE)
    except ValueError as e:
        raise KeyConstructionError(str(e)) from e


class Hill(Encryptor, Decryptor):
    def __init__(self, key, *, group_size: int = DEFAULT_GROUP_SIZE, groups_per_line: int = DEFAULT_GROUPS_PER_LINE):
        matrix = _key_matrix(key)
        try:
            inverse = matrix.inverse()
        except DegenerateMatrixError as e:
            raise KeyConstructionError("matrix is not invertible (degenerate)") from e
        except MatrixInversionError as e:
            raise KeyConstructionError(f"matrix is not invertible: {e}") from e

        self.matrix = matrix
        self.matrix_inv = inverse
        self.block_size = matrix.size
        # slice_mult computes M x v; transposing gives v x M
        self._enc = matrix.transpose()
        self._dec = inverse.transpose()

        self.count = 0
        self._block: List[Residue] = []
        self._grouper = LetterGrouper(group_size, groups_per_line)

    def _push(self, byte: int, matrix: ResidueMatrix) -> bytes:
        self._block.append(Residue(require_letter(byte), ALPHABET_SIZE))
        self.count += 1
        if len(self._block) < self.block_size:
            return b""
        out = matrix.slice_mult(self._block)
        self._block = []
        return bytes(r.value + A_UPPER for r in out)

    def encrypt_byte(self, byte: int) -> bytes:
        return self._grouper.emit(self._push(byte, self._enc))

    def encrypt_finish(self) -> bytes:
        out = bytearray()
        while self.count % self.block_size != 0:
            out += self.encrypt_byte(PAD_LETTER)
        return bytes(out)

    def decrypt_byte(self, byte: int) -> bytes:
        return self._push(byte, self._dec)

    def decrypt_finish(self) -> bytes:
        if self.count % self.block_size != 0:
            raise CipherError(
                f"ciphertext length is not a multiple of the block size {self.block_size}"
            )
        return b""
