from __future__ import annotations

import logging
from typing import Dict, List, Optional

from .registry import CipherRegistry
from .spec import CipherSpec
from .transform import Filter, KeyConstructionError, is_ascii_letter

logger = logging.getLogger(__name__)


def build_cipher(spec: CipherSpec, registry: Optional[CipherRegistry] = None):
    """Construct a fresh cipher instance for one encrypt or decrypt session.

    Letter-only ciphers are wrapped in a letters-only ``Filter`` when
    ``spec.strip_non_letters`` is set, so spaces and punctuation in the
    input are skipped instead of failing the stream.

    Raises:
        KeyError: unknown algorithm.
        KeyConstructionError: the key material is unusable.
    """
    reg = registry or CipherRegistry()
    entry = reg.get(spec.algorithm)

    try:
        cipher = entry.factory(spec)
    except KeyConstructionError as e:
        logger.debug("Rejected %s key: %s", entry.algorithm, e)
        raise

    if entry.letters_only and spec.strip_non_letters:
        cipher = Filter(cipher, is_ascii_letter)

    logger.debug("Built %s cipher (%s)", entry.algorithm, type(cipher).__name__)
    return cipher


# Default keys used by the roundtrip suite and the scripts.
TEMPLATES: Dict[str, Dict[str, object]] = {
    "VIGENERE": {"key": "LEMON"},
    "VIGENERE_AUTOKEY": {"key": "QUEENLY"},
    "VIGENERE_256": {"key": "s3crét këY"},
    "AFFINE": {"multiplier": 5, "shift": 8},
    "PLAYFAIR": {"key": "PLAYFAIR EXAMPLE"},
    "HILL": {"matrix": [17, 17, 5, 21, 18, 21, 2, 2, 19]},
}


def get_template(name: str, **overrides) -> CipherSpec:
    name = name.upper()
    if name not in TEMPLATES:
        raise KeyError(f"No template for algorithm: {name}")
    fields = dict(TEMPLATES[name])
    fields.update(overrides)
    return CipherSpec(algorithm=name, **fields)


def list_algorithms() -> List[str]:
    return sorted(TEMPLATES)
