import math
import sys
from pathlib import Path

import numpy as np
import pytest

_project_root = Path(__file__).parent.parent
if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))

from classiclab.cipher.modular import (
    CoprimeError,
    DegenerateMatrixError,
    MatrixInversionError,
    Residue,
    ResidueMatrix,
    extended_gcd,
    mod_inverse,
)


def test_residue_reduces_and_wraps():
    assert Residue(27, 26).value == 1
    assert Residue(-1, 26).value == 25
    assert (Residue(20, 26) + Residue(10, 26)).value == 4
    assert (Residue(3, 26) - Residue(5, 26)).value == 24
    assert (Residue(7, 26) * Residue(11, 26)).value == 77 % 26
    assert int(Residue(5, 26)) == 5


def test_residue_modulus_mismatch():
    with pytest.raises(ValueError):
        Residue(1, 26) + Residue(1, 27)


def test_extended_gcd_bezout():
    for a, b in [(240, 46), (17, 26), (0, 26), (26, 13)]:
        g, x, y = extended_gcd(a, b)
        assert g == math.gcd(a, b)
        assert a * x + b * y == g


@pytest.mark.parametrize("r", [r for r in range(26) if math.gcd(r, 26) == 1])
def test_inverse_property_mod_26(r):
    res = Residue(r, 26)
    assert (res * res.inverse()).value == 1


def test_inverse_not_coprime():
    with pytest.raises(CoprimeError) as exc:
        Residue(13, 26).inverse()
    err = exc.value
    assert (err.value, err.modulus, err.gcd) == (13, 26, 13)
    assert str(err) == "13 is not coprime to 26 (GCD: 13)"


def test_mod_inverse_zero_fails():
    with pytest.raises(CoprimeError) as exc:
        mod_inverse(0, 26)
    assert exc.value.gcd == 26


def test_from_flat_requires_square():
    with pytest.raises(ValueError, match="not square"):
        ResidueMatrix.from_flat([1, 2, 3], 26)
    with pytest.raises(ValueError, match="not square"):
        ResidueMatrix.from_flat([], 26)


def test_textbook_inverse():
    key = ResidueMatrix.from_flat([17, 17, 5, 21, 18, 21, 2, 2, 19], 26)
    inv = key.inverse()
    assert inv.rows() == [[4, 9, 15], [15, 17, 6], [24, 0, 17]]
    assert key.matmul(inv) == ResidueMatrix.identity(3, 26)


def test_inverse_leaves_original_untouched():
    rows = [[3, 3], [2, 5]]
    key = ResidueMatrix.from_rows(rows, 26)
    key.inverse()
    assert key.rows() == rows


def test_one_by_one_inverse():
    assert ResidueMatrix.from_flat([7], 26).inverse().flat() == [15]


def test_zero_matrix_is_degenerate():
    with pytest.raises(DegenerateMatrixError):
        ResidueMatrix.from_flat([0] * 9, 26).inverse()


def test_rank_deficient_matrix_is_degenerate():
    with pytest.raises(DegenerateMatrixError):
        ResidueMatrix.from_rows([[1, 1], [1, 1]], 26).inverse()


def test_even_determinant_not_coprime():
    with pytest.raises(CoprimeError):
        ResidueMatrix.from_rows([[2, 4], [1, 2]], 26).inverse()


def test_largest_pivot_without_inverse_fails():
    # invertible mod 26, but 20 is picked as the first pivot
    with pytest.raises(MatrixInversionError):
        ResidueMatrix.from_rows([[6, 24, 1], [13, 16, 10], [20, 17, 15]], 26).inverse()


def test_random_inverses_match_numpy():
    rng = np.random.default_rng(1337)
    inverted = 0
    for _ in range(500):
        n = int(rng.integers(1, 5))
        a = rng.integers(0, 26, size=(n, n))
        try:
            inv = ResidueMatrix.from_rows(a.tolist(), 26).inverse()
        except MatrixInversionError:
            continue
        inverted += 1
        prod = (a @ np.array(inv.rows())) % 26
        assert np.array_equal(prod, np.eye(n, dtype=prod.dtype))
    assert inverted > 0


def test_slice_mult():
    m = ResidueMatrix.from_rows([[1, 2], [3, 4]], 26)
    vec = [Residue(5, 26), Residue(6, 26)]
    assert [r.value for r in m.slice_mult(vec)] == [17, 39 % 26]
    with pytest.raises(ValueError):
        m.slice_mult([Residue(1, 26)])


def test_transpose():
    m = ResidueMatrix.from_rows([[1, 2], [3, 4]], 26)
    assert m.transpose().rows() == [[1, 3], [2, 4]]
