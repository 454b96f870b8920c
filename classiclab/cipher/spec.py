from __future__ import annotations

import math
from typing import List, Literal, Optional

from pydantic import BaseModel, Field, field_validator


Algorithm = Literal["VIGENERE", "VIGENERE_AUTOKEY", "VIGENERE_256", "AFFINE", "PLAYFAIR", "HILL"]


class CipherSpec(BaseModel):
    """Key material and options for one classical cipher session.

    Only the fields the chosen algorithm needs are read:
    - VIGENERE / VIGENERE_AUTOKEY / VIGENERE_256 / PLAYFAIR: ``key``
    - AFFINE: ``multiplier`` and ``shift``
    - HILL: ``matrix`` (flat, row-major)
    """

    algorithm: Algorithm
    key: Optional[str] = Field(default=None, description="Key text for keyword ciphers")
    multiplier: Optional[int] = Field(default=None, ge=1, le=25, description="Affine m, coprime to 26")
    shift: Optional[int] = Field(default=None, ge=0, le=25, description="Affine n")
    matrix: Optional[List[int]] = Field(default=None, description="Hill key, length must be a perfect square")

    # Drop non-letters ahead of letter-only ciphers instead of failing on them
    strip_non_letters: bool = Field(default=True)
    group_size: int = Field(default=5, ge=1, le=64)
    groups_per_line: int = Field(default=12, ge=1, le=64)

    @field_validator("algorithm", mode="before")
    @classmethod
    def _upper_algorithm(cls, v):
        if isinstance(v, str):
            return v.strip().upper().replace("-", "_")
        return v

    @field_validator("matrix")
    @classmethod
    def _square_matrix(cls, v: Optional[List[int]]) -> Optional[List[int]]:
        if v is None:
            return v
        if any(x < 0 or x > 255 for x in v):
            raise ValueError("matrix entries must be in 0..255")
        size = math.isqrt(len(v))
        if size == 0 or size * size != len(v):
            raise ValueError("matrix is not square")
        return v
