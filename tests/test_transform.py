import sys
from pathlib import Path

import pytest

_project_root = Path(__file__).parent.parent
if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))

from classiclab.cipher.letters import LetterGrouper, strip_formatting
from classiclab.cipher.playfair import Playfair
from classiclab.cipher.transform import (
    Chain,
    CipherError,
    Filter,
    FilterMap,
    Invert,
    Map,
    decrypt_all,
    encrypt_all,
    is_ascii_letter,
)
from classiclab.cipher.vigenere import Vigenere, Vigenere256


def test_chain_pipes_every_output_byte():
    chain = Chain(Vigenere256(b"\x01"), Vigenere256(b"\x02"))
    assert chain.encrypt_byte(0) == b"\x03"
    back = Chain(Vigenere256(b"\x02"), Vigenere256(b"\x01"))
    assert back.decrypt_byte(3) == b"\x00"


def test_chain_finish_flushes_first_stage_through_second():
    chain = Chain(Playfair("PLAYFAIR EXAMPLE"), Vigenere256(b"\x00"))
    assert chain.encrypt_byte(ord("B")) == b""
    assert chain.encrypt_finish() == b"GI"


def test_chain_failure_discards_partial_output():
    chain = Chain(Vigenere256(b"\x00"), Vigenere("A"))
    assert chain.encrypt_byte(ord("a")) == b"A"
    with pytest.raises(CipherError):
        chain.encrypt_byte(ord("1"))


def test_invert_swaps_directions():
    inv = Invert(Vigenere256(b"\x05"))
    assert inv.encrypt_byte(10) == b"\x05"
    assert inv.decrypt_byte(10) == b"\x0f"


def test_invert_of_vigenere_decrypts():
    ct = encrypt_all(Vigenere("LEMON"), b"ATTACKATDAWN")
    assert decrypt_all(Vigenere("LEMON").invert().invert(), strip_formatting(ct)) == b"ATTACKATDAWN"
    assert encrypt_all(Invert(Vigenere("LEMON")), b"LXFOPVEFRNHR") == b"ATTACKATDAWN"


def test_map_applies_before_inner():
    upper = Map(Vigenere256(b"\x00"), lambda b: b & ~0x20)
    assert encrypt_all(upper, b"abc") == b"ABC"


def test_filter_drops_rejected_bytes():
    cipher = Filter(Vigenere("A"), is_ascii_letter)
    assert cipher.encrypt_byte(ord(" ")) == b""
    assert encrypt_all(cipher, b"a b, c!") == b"ABC"


def test_filter_does_not_consume_state():
    filtered = Vigenere("AB").filter(is_ascii_letter)
    plain = Vigenere("AB")
    assert encrypt_all(filtered, b"a-a-a") == encrypt_all(plain, b"aaa") == b"ABA"


def test_filter_map():
    cipher = FilterMap(Vigenere256(b"\x00"), lambda b: None if b == 0x20 else b)
    assert encrypt_all(cipher, b"a b") == b"ab"
    assert Vigenere256(b"\x00").filter_map(lambda b: b + 1).decrypt_byte(1) == b"\x02"


def test_unfiltered_letter_cipher_rejects_punctuation():
    with pytest.raises(CipherError):
        encrypt_all(Vigenere("KEY"), b"hello world")


def test_is_ascii_letter():
    assert all(is_ascii_letter(b) for b in b"AZaz")
    assert not any(is_ascii_letter(b) for b in b"@[`{ 09")


def test_grouper_spaces_and_newlines():
    grouper = LetterGrouper()
    out = grouper.emit(b"A" * 61)
    lines = out.split(b"\n")
    assert len(lines) == 2
    assert lines[0] == b" ".join([b"AAAAA"] * 12)
    assert lines[1] == b"A"


def test_grouper_custom_sizes():
    grouper = LetterGrouper(group_size=2, groups_per_line=2)
    assert grouper.emit(b"ABCDEF") == b"AB CD\nEF"
