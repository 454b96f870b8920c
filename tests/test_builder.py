import sys
from pathlib import Path

import pytest
from pydantic import ValidationError

_project_root = Path(__file__).parent.parent
if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))

from classiclab.cipher.builder import build_cipher, get_template, list_algorithms
from classiclab.cipher.parsers import parse_matrix, parse_u8
from classiclab.cipher.registry import CipherEntry, CipherRegistry
from classiclab.cipher.spec import CipherSpec
from classiclab.cipher.transform import Filter, KeyConstructionError, encrypt_all
from classiclab.cipher.validator import validate_spec
from classiclab.cipher.vigenere import Vigenere, Vigenere256
from classiclab.config import load_settings


def test_spec_normalizes_algorithm():
    assert CipherSpec(algorithm="vigenere-autokey", key="k").algorithm == "VIGENERE_AUTOKEY"


@pytest.mark.parametrize("fields", [
    {"algorithm": "CAESAR", "key": "k"},
    {"algorithm": "AFFINE", "multiplier": 26, "shift": 0},
    {"algorithm": "AFFINE", "multiplier": 5, "shift": -1},
    {"algorithm": "HILL", "matrix": [1, 2, 3]},
    {"algorithm": "HILL", "matrix": [1, 2, 3, 256]},
])
def test_spec_rejects_bad_fields(fields):
    with pytest.raises(ValidationError):
        CipherSpec(**fields)


def test_letter_ciphers_are_filtered():
    cipher = build_cipher(get_template("VIGENERE"))
    assert isinstance(cipher, Filter)
    assert isinstance(cipher.inner, Vigenere)


def test_byte_cipher_is_not_filtered():
    assert isinstance(build_cipher(get_template("VIGENERE_256")), Vigenere256)


def test_filter_can_be_disabled():
    assert isinstance(build_cipher(get_template("VIGENERE", strip_non_letters=False)), Vigenere)


def test_grouping_from_spec():
    spec = CipherSpec(algorithm="VIGENERE", key="A", group_size=3, groups_per_line=2)
    assert encrypt_all(build_cipher(spec), b"aaaaaaa") == b"AAA AAA\nA"


@pytest.mark.parametrize("fields,reason", [
    ({"algorithm": "VIGENERE", "key": ""}, "empty"),
    ({"algorithm": "PLAYFAIR"}, "empty"),
    ({"algorithm": "AFFINE", "multiplier": 2, "shift": 1}, "common factor 2"),
    ({"algorithm": "HILL", "matrix": [0, 0, 0, 0]}, "degenerate"),
])
def test_build_rejects_bad_keys(fields, reason):
    with pytest.raises(KeyConstructionError, match=reason):
        build_cipher(CipherSpec(**fields))


def test_registry_lookup():
    reg = CipherRegistry()
    assert reg.exists("hill")
    assert reg.get("affine").key_kind == "PAIR"
    assert [e.algorithm for e in reg.list()] == list_algorithms()
    assert {e.algorithm for e in reg.list_by_key_kind("text")} == {
        "PLAYFAIR", "VIGENERE", "VIGENERE_256", "VIGENERE_AUTOKEY",
    }
    with pytest.raises(KeyError):
        reg.get("ENIGMA")


def test_registry_register_overrides_factory():
    reg = CipherRegistry()
    reg.register(CipherEntry(
        algorithm="VIGENERE",
        description="Vigenere without grouping",
        key_kind="TEXT",
        letters_only=True,
        factory=lambda s: Vigenere(s.key, group_size=64, groups_per_line=64),
    ))
    spec = CipherSpec(algorithm="VIGENERE", key="A")
    assert encrypt_all(build_cipher(spec, reg), b"a" * 12) == b"A" * 12


def test_validate_spec():
    assert validate_spec(get_template("HILL")) == (True, [])
    ok, errs = validate_spec(CipherSpec(algorithm="AFFINE", multiplier=5))
    assert not ok
    assert errs == ["Missing AFFINE shift"]
    ok, errs = validate_spec(CipherSpec(algorithm="PLAYFAIR"))
    assert errs == ["key cannot be empty"]


def test_parse_u8():
    assert parse_u8(" 17 ") == 17
    assert parse_u8("1_7") == 17
    assert parse_u8("2_5_5") == 255
    for bad in ["", "_1", "-3", "256", "1a"]:
        with pytest.raises(ValueError):
            parse_u8(bad)


def test_parse_matrix():
    assert parse_matrix(" 17 17 5 21 18 21 2 2 19\n") == [17, 17, 5, 21, 18, 21, 2, 2, 19]
    assert parse_matrix("3") == [3]
    for bad in ["", "1 2 3", "1 2 x 4", "1,2,3,4"]:
        with pytest.raises(ValueError, match="cannot convert key"):
            parse_matrix(bad)


def test_load_settings_reads_environment(monkeypatch):
    monkeypatch.setenv("CIPHER_GROUP_SIZE", "4")
    monkeypatch.setenv("CIPHER_LINE_GROUPS", "10")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    load_settings.cache_clear()
    try:
        settings = load_settings()
        assert settings.group_size == 4
        assert settings.groups_per_line == 10
        assert settings.log_level == "DEBUG"
    finally:
        load_settings.cache_clear()
