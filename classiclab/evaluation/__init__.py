"""Roundtrip evaluation of the classical ciphers.

Research / education only. Do NOT use in production.
"""

from .roundtrip import (
    RoundtripResult,
    RoundtripFailure,
    canonicalize,
    run_roundtrip_tests,
    run_all_algorithms,
)
from .report import EvaluationReport

__all__ = [
    "RoundtripResult",
    "RoundtripFailure",
    "canonicalize",
    "run_roundtrip_tests",
    "run_all_algorithms",
    "EvaluationReport",
]
