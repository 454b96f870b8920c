"""Residue arithmetic and square matrices over a residue ring.

Every value carries the modulus it lives in; operands of a binary
operation must agree on it. The Hill cipher inverts its key matrix with
``ResidueMatrix.inverse`` and multiplies blocks with ``slice_mult``.

Research / education only. Do NOT use in production.
"""

from __future__ import annotations

import math
from functools import total_ordering
from typing import Iterable, List, Sequence, Tuple


class MatrixInversionError(ValueError):
    """Raised when a residue matrix (or scalar) has no inverse."""


class CoprimeError(MatrixInversionError):
    def __init__(self, value: int, modulus: int, gcd: int):
        self.value = value
        self.modulus = modulus
        self.gcd = gcd
        super().__init__(f"{value} is not coprime to {modulus} (GCD: {gcd})")


class DegenerateMatrixError(MatrixInversionError):
    def __init__(self, message: str = "degenerate matrix"):
        super().__init__(message)


def extended_gcd(a: int, b: int) -> Tuple[int, int, int]:
    """Return ``(g, x, y)`` with ``a*x + b*y == g == gcd(a, b)``."""
    old_r, r = a, b
    old_x, x = 1, 0
    old_y, y = 0, 1
    while r != 0:
        q = old_r // r
        old_r, r = r, old_r - q * r
        old_x, x = x, old_x - q * x
        old_y, y = y, old_y - q * y
    if old_r < 0:
        old_r, old_x, old_y = -old_r, -old_x, -old_y
    return old_r, old_x, old_y


def mod_inverse(value: int, modulus: int) -> int:
    value %= modulus
    g, x, _ = extended_gcd(value, modulus)
    if g != 1:
        raise CoprimeError(value, modulus, g)
    return x % modulus


@total_ordering
class Residue:
    """An integer held in ``[0, modulus)``."""

    __slots__ = ("value", "modulus")

    def __init__(self, value: int, modulus: int):
        if modulus < 1:
            raise ValueError(f"modulus must be positive, got {modulus}")
        self.value = value % modulus
        self.modulus = modulus

    def _check(self, other: "Residue") -> None:
        if not isinstance(other, Residue):
            raise TypeError(f"expected Residue, got {type(other).__name__}")
        if other.modulus != self.modulus:
            raise ValueError(f"modulus mismatch: {self.modulus} != {other.modulus}")

    def __add__(self, other: "Residue") -> "Residue":
        self._check(other)
        return Residue(self.value + other.value, self.modulus)

    def __sub__(self, other: "Residue") -> "Residue":
        self._check(other)
        return Residue(self.value - other.value, self.modulus)

    def __mul__(self, other: "Residue") -> "Residue":
        self._check(other)
        return Residue(self.value * other.value, self.modulus)

    def inverse(self) -> "Residue":
        return Residue(mod_inverse(self.value, self.modulus), self.modulus)

    def __int__(self) -> int:
        return self.value

    def __index__(self) -> int:
        return self.value

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Residue):
            return NotImplemented
        return self.value == other.value and self.modulus == other.modulus

    def __lt__(self, other: "Residue") -> bool:
        self._check(other)
        return self.value < other.value

    def __hash__(self) -> int:
        return hash((self.value, self.modulus))

    def __repr__(self) -> str:
        return f"Residue({self.value}, {self.modulus})"


class ResidueMatrix:
    """Dense ``size x size`` matrix of residues, stored row-major."""

    def __init__(self, size: int, values: Iterable[int], modulus: int):
        arr = [Residue(int(v), modulus) for v in values]
        if size < 1 or len(arr) != size * size:
            raise ValueError(f"expected {size * size} entries for a {size}x{size} matrix, got {len(arr)}")
        self.size = size
        self.modulus = modulus
        self._arr: List[Residue] = arr

    @classmethod
    def from_flat(cls, values: Sequence[int], modulus: int) -> "ResidueMatrix":
        size = math.isqrt(len(values))
        if size == 0 or size * size != len(values):
            raise ValueError("matrix is not square")
        return cls(size, values, modulus)

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[int]], modulus: int) -> "ResidueMatrix":
        size = len(rows)
        if any(len(r) != size for r in rows):
            raise ValueError("matrix is not square")
        return cls(size, [v for r in rows for v in r], modulus)

    @classmethod
    def identity(cls, size: int, modulus: int) -> "ResidueMatrix":
        return cls(size, [int(i == j) for i in range(size) for j in range(size)], modulus)

    def __getitem__(self, ij: Tuple[int, int]) -> Residue:
        i, j = ij
        return self._arr[i * self.size + j]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ResidueMatrix):
            return NotImplemented
        return self.size == other.size and self._arr == other._arr

    def __repr__(self) -> str:
        return f"ResidueMatrix({self.rows()!r}, modulus={self.modulus})"

    def rows(self) -> List[List[int]]:
        n = self.size
        return [[self._arr[i * n + j].value for j in range(n)] for i in range(n)]

    def flat(self) -> List[int]:
        return [r.value for r in self._arr]

    def transpose(self) -> "ResidueMatrix":
        n = self.size
        return ResidueMatrix(n, [self._arr[j * n + i].value for i in range(n) for j in range(n)], self.modulus)

    def matmul(self, other: "ResidueMatrix") -> "ResidueMatrix":
        if other.size != self.size or other.modulus != self.modulus:
            raise ValueError("matrices must share size and modulus")
        n = self.size
        out = []
        for i in range(n):
            for j in range(n):
                acc = Residue(0, self.modulus)
                for k in range(n):
                    acc = acc + self._arr[i * n + k] * other._arr[k * n + j]
                out.append(acc.value)
        return ResidueMatrix(n, out, self.modulus)

    def inverse(self) -> "ResidueMatrix":
        """Invert by LUP decomposition with partial pivoting.

        The pivot for column ``i`` is the largest residue at or below row
        ``i``. A zero pivot raises ``DegenerateMatrixError``; a pivot with no
        inverse raises ``CoprimeError``. Works on a copy.
        """
        n = self.size
        zero = Residue(0, self.modulus)
        a = list(self._arr)
        p = list(range(n))

        for i in range(n):
            max_a = zero
            imax = i
            for k in range(i, n):
                temp = a[k * n + i]
                if temp > max_a:
                    max_a, imax = temp, k

            if max_a.value == 0:
                raise DegenerateMatrixError()

            if imax != i:
                p[i], p[imax] = p[imax], p[i]
                for j in range(n):
                    a[i * n + j], a[imax * n + j] = a[imax * n + j], a[i * n + j]

            for j in range(i + 1, n):
                a[j * n + i] = a[j * n + i] * a[i * n + i].inverse()
                for k in range(i + 1, n):
                    a[j * n + k] = a[j * n + k] - a[j * n + i] * a[i * n + k]

        ia = [zero] * (n * n)
        for j in range(n):
            for i in range(n):
                ia[i * n + j] = Residue(int(p[i] == j), self.modulus)
                for k in range(i):
                    ia[i * n + j] = ia[i * n + j] - a[i * n + k] * ia[k * n + j]

            for i in reversed(range(n)):
                for k in range(i + 1, n):
                    ia[i * n + j] = ia[i * n + j] - a[i * n + k] * ia[k * n + j]
                ia[i * n + j] = ia[i * n + j] * a[i * n + i].inverse()

        return ResidueMatrix(n, [r.value for r in ia], self.modulus)

    def slice_mult(self, vec: Sequence[Residue]) -> List[Residue]:
        """Return ``self x vec`` for a column vector of ``size`` residues."""
        n = self.size
        if len(vec) != n:
            raise ValueError(f"vector length {len(vec)} does not match matrix size {n}")
        out: List[Residue] = []
        for i in range(n):
            acc = Residue(0, self.modulus)
            for j in range(n):
                acc = acc + vec[j] * self._arr[i * n + j]
            out.append(acc)
        return out
