import math
import sys
from pathlib import Path

import pytest

_project_root = Path(__file__).parent.parent
if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))

from classiclab.cipher.affine import Affine
from classiclab.cipher.letters import strip_formatting
from classiclab.cipher.transform import CipherError, KeyConstructionError, decrypt_all, encrypt_all


def test_affine_known_vector():
    assert encrypt_all(Affine(5, 8), b"AFFINECIPHER") == b"IHHWV CSWFR CP"
    assert decrypt_all(Affine(5, 8), b"IHHWVCSWFRCP") == b"AFFINECIPHER"


def test_identity_key():
    assert encrypt_all(Affine(1, 0), b"hello") == b"HELLO"


@pytest.mark.parametrize("m,gcd", [(2, 2), (13, 13), (24, 2), (26, 26)])
def test_multiplier_sharing_factor_is_rejected(m, gcd):
    with pytest.raises(KeyConstructionError) as exc:
        Affine(m, 3)
    assert str(exc.value) == f"{m} has common factor {gcd} with 26"


def test_zero_multiplier_is_rejected():
    with pytest.raises(KeyConstructionError, match="m is 0"):
        Affine(0, 1)


@pytest.mark.parametrize("m", [m for m in range(1, 26) if math.gcd(m, 26) == 1])
def test_all_valid_multipliers_roundtrip(m):
    pt = b"THEQUICKBROWNFOXJUMPSOVERTHELAZYDOG"
    ct = strip_formatting(encrypt_all(Affine(m, 17), pt))
    assert decrypt_all(Affine(m, 17), ct) == pt


def test_affine_rejects_digits():
    with pytest.raises(CipherError):
        Affine(5, 8).encrypt_byte(ord("7"))
    with pytest.raises(CipherError):
        Affine(5, 8).decrypt_byte(ord(" "))
