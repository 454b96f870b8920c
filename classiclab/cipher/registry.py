from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, List

from .affine import Affine
from .hill import Hill
from .playfair import Playfair
from .spec import CipherSpec
from .vigenere import Vigenere, Vigenere256, VigenereAutokey


@dataclass(frozen=True)
class CipherEntry:
    """A constructible cipher: how to build it from a spec and what key it wants."""
    algorithm: str
    description: str
    key_kind: str  # TEXT, PAIR, MATRIX
    letters_only: bool
    factory: Callable[[CipherSpec], object]


def _grouping(spec: CipherSpec) -> dict:
    return {"group_size": spec.group_size, "groups_per_line": spec.groups_per_line}


def builtins() -> Dict[str, CipherEntry]:
    entries = [
        CipherEntry(
            algorithm="VIGENERE",
            description="Repeating-key Vigenere over A-Z",
            key_kind="TEXT",
            letters_only=True,
            factory=lambda s: Vigenere(s.key or "", **_grouping(s)),
        ),
        CipherEntry(
            algorithm="VIGENERE_AUTOKEY",
            description="Vigenere whose key stream continues with the plaintext",
            key_kind="TEXT",
            letters_only=True,
            factory=lambda s: VigenereAutokey(s.key or "", **_grouping(s)),
        ),
        CipherEntry(
            algorithm="VIGENERE_256",
            description="Vigenere over all 256 byte values",
            key_kind="TEXT",
            letters_only=False,
            factory=lambda s: Vigenere256(s.key or ""),
        ),
        CipherEntry(
            algorithm="AFFINE",
            description="c = m*p + n (mod 26)",
            key_kind="PAIR",
            letters_only=True,
            factory=lambda s: Affine(s.multiplier or 0, s.shift or 0, **_grouping(s)),
        ),
        CipherEntry(
            algorithm="PLAYFAIR",
            description="5x5 key-square digraph substitution",
            key_kind="TEXT",
            letters_only=True,
            factory=lambda s: Playfair(s.key or "", **_grouping(s)),
        ),
        CipherEntry(
            algorithm="HILL",
            description="N x N matrix multiplication modulo 26",
            key_kind="MATRIX",
            letters_only=True,
            factory=lambda s: Hill(s.matrix or [], **_grouping(s)),
        ),
    ]
    return {e.algorithm: e for e in entries}


class CipherRegistry:
    def __init__(self):
        self._entries: Dict[str, CipherEntry] = builtins()

    def get(self, algorithm: str) -> CipherEntry:
        algorithm = algorithm.upper()
        if algorithm not in self._entries:
            raise KeyError(f"Unknown algorithm: {algorithm}")
        return self._entries[algorithm]

    def list(self) -> List[CipherEntry]:
        return sorted(self._entries.values(), key=lambda e: e.algorithm)

    def list_by_key_kind(self, key_kind: str) -> List[CipherEntry]:
        key_kind = key_kind.upper()
        return [e for e in self.list() if e.key_kind == key_kind]

    def exists(self, algorithm: str) -> bool:
        return algorithm.upper() in self._entries

    def register(self, entry: CipherEntry) -> None:
        self._entries[entry.algorithm.upper()] = entry
