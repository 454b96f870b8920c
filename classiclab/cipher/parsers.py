"""Text to key-material parsing for the scripts and other front-ends."""

from __future__ import annotations

import math
import re
from typing import List

_U8_RE = re.compile(r"\d[\d_]*")


def parse_u8(text: str) -> int:
    """Parse a decimal byte; ``_`` may separate digits (``"1_7"`` -> 17)."""
    s = text.strip()
    if not _U8_RE.fullmatch(s):
        raise ValueError(f"not an unsigned decimal: {text!r}")
    value = int(s.replace("_", ""))
    if value > 255:
        raise ValueError(f"{value} does not fit in a byte")
    return value


def parse_matrix(text: str) -> List[int]:
    """Parse whitespace separated bytes whose count is a perfect square.

    >>> parse_matrix(" 17 17 5 21 18 21 2 2 19 ")
    [17, 17, 5, 21, 18, 21, 2, 2, 19]
    """
    try:
        values = [parse_u8(tok) for tok in text.split()]
    except ValueError as e:
        raise ValueError("cannot convert key") from e
    size = math.isqrt(len(values))
    if not values or size * size != len(values):
        raise ValueError("cannot convert key")
    return values
