from __future__ import annotations

from typing import List, Tuple

from .registry import CipherRegistry
from .spec import CipherSpec


def validate_spec(spec: CipherSpec, registry: CipherRegistry | None = None) -> Tuple[bool, List[str]]:
    """Check that the key material the algorithm needs is present.

    Whether the key is actually usable (letters present, matrix invertible,
    multiplier coprime to 26) is only known once the cipher is built.
    """
    reg = registry or CipherRegistry()
    errs: List[str] = []

    if not reg.exists(spec.algorithm):
        errs.append(f"Unknown algorithm: {spec.algorithm}")
        return False, errs

    kind = reg.get(spec.algorithm).key_kind
    if kind == "TEXT":
        if not spec.key:
            errs.append("key cannot be empty")
    elif kind == "PAIR":
        if spec.multiplier is None:
            errs.append("Missing AFFINE multiplier")
        if spec.shift is None:
            errs.append("Missing AFFINE shift")
    elif kind == "MATRIX":
        if not spec.matrix:
            errs.append("Missing HILL matrix")
    else:
        errs.append(f"Unsupported key kind: {kind}")

    return (len(errs) == 0), errs
