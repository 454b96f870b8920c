"""Roundtrip verification: decrypt(encrypt(P)) == canonical(P).

Generates randomized messages per algorithm and checks that decryption of
the (de-formatted) ciphertext gives back the plaintext as the cipher sees
it: letters uppercased, non-letters dropped, Playfair's I/J merge and
filler letters applied, block ciphers padded.

Research / education only. Do NOT use in production.
"""
from __future__ import annotations

import logging
import math
import random
import time
from dataclasses import dataclass, field, asdict
from typing import Any, Callable, Dict, List, Optional

from classiclab.cipher.builder import build_cipher, get_template, list_algorithms
from classiclab.cipher.letters import strip_formatting
from classiclab.cipher.playfair import SQUARE_ALPHABET, square_index
from classiclab.cipher.registry import CipherRegistry
from classiclab.cipher.spec import CipherSpec
from classiclab.cipher.transform import decrypt_all, encrypt_all

logger = logging.getLogger(__name__)

_LETTERS = b"ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz"
_NOISE = b" .,!?-\n0123456789"


@dataclass
class RoundtripFailure:
    """Details of a single failed roundtrip message."""
    vector_index: int
    plaintext_hex: str
    ciphertext_hex: str
    decrypted_hex: str       # What decrypt returned
    expected_hex: str        # Canonical plaintext
    error: Optional[str]     # Exception message if encrypt/decrypt raised


@dataclass
class RoundtripResult:
    """Aggregate result of roundtrip testing for one algorithm."""
    algorithm_name: str
    total_vectors: int
    passed: int
    failed: int
    message_length: int
    failures: List[RoundtripFailure] = field(default_factory=list)
    elapsed_seconds: float = 0.0
    seed: int = 1337

    @property
    def success_rate(self) -> float:
        return self.passed / self.total_vectors if self.total_vectors > 0 else 0.0

    @property
    def is_perfect(self) -> bool:
        return self.failed == 0

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def summary(self) -> str:
        status = "PASS" if self.is_perfect else "FAIL"
        return (
            f"[{status}] {self.algorithm_name}: "
            f"{self.passed}/{self.total_vectors} messages passed "
            f"({self.elapsed_seconds:.2f}s)"
        )


def _playfair_canonical(letters: bytes) -> bytes:
    out = bytearray()
    pending: Optional[int] = None
    filler = SQUARE_ALPHABET[square_index(ord("X"))]
    for b in letters:
        letter = SQUARE_ALPHABET[square_index(b)]
        if pending is None:
            pending = letter
            continue
        if letter == pending and letter != filler:
            out += bytes([pending, filler])
            # pending stays: it now pairs with the next letter
            continue
        out += bytes([pending, letter])
        pending = None
    if pending is not None:
        out += bytes([pending, filler])
    return bytes(out)


def canonicalize(spec: CipherSpec, plaintext: bytes) -> bytes:
    """What decrypt(encrypt(plaintext)) is expected to return."""
    if spec.algorithm == "VIGENERE_256":
        return plaintext

    letters = bytes(b for b in plaintext.upper() if 0x41 <= b <= 0x5A)
    if spec.algorithm == "PLAYFAIR":
        return _playfair_canonical(letters)
    if spec.algorithm == "HILL":
        size = math.isqrt(len(spec.matrix or []))
        if size and len(letters) % size:
            letters += b"A" * (size - len(letters) % size)
    return letters


def _rand_message(rng: random.Random, spec: CipherSpec, length: int) -> bytes:
    if spec.algorithm == "VIGENERE_256":
        return bytes(rng.randrange(0, 256) for _ in range(length))
    out = bytearray()
    for _ in range(length):
        if spec.strip_non_letters and rng.random() < 0.15:
            out.append(rng.choice(_NOISE))
        else:
            out.append(rng.choice(_LETTERS))
    return bytes(out)


def run_roundtrip_tests(
    spec: CipherSpec,
    *,
    num_vectors: int = 200,
    seed: int = 1337,
    message_length: int = 48,
    max_failures_recorded: int = 10,
    registry: Optional[CipherRegistry] = None,
) -> RoundtripResult:
    """Run roundtrip verification across many random messages.

    Args:
        spec: Cipher specification (algorithm plus key material).
        num_vectors: Number of random messages to test.
        seed: Random seed for deterministic reproducibility.
        message_length: Upper bound on message length; each message has a
            random length in ``[1, message_length]``.
        max_failures_recorded: Maximum number of failure details to keep.
        registry: Optional cipher registry; uses default if not provided.

    Returns:
        RoundtripResult with pass/fail counts and failure details.
    """
    reg = registry or CipherRegistry()
    rng = random.Random(seed)
    passed = 0
    failed = 0
    failures: List[RoundtripFailure] = []

    start = time.perf_counter()

    for i in range(num_vectors):
        pt = _rand_message(rng, spec, rng.randint(1, message_length))
        expected = canonicalize(spec, pt)
        ct = b""

        try:
            ct = encrypt_all(build_cipher(spec, reg), pt)
            if spec.algorithm != "VIGENERE_256":
                ct = strip_formatting(ct)
            pt2 = decrypt_all(build_cipher(spec, reg), ct)

            if pt2 == expected:
                passed += 1
                continue
            error = None
        except Exception as exc:
            pt2 = b""
            error = f"{type(exc).__name__}: {exc}"

        failed += 1
        logger.warning("%s roundtrip failed on message %d: %s", spec.algorithm, i, error or "mismatch")
        if len(failures) < max_failures_recorded:
            failures.append(RoundtripFailure(
                vector_index=i,
                plaintext_hex=pt.hex(),
                ciphertext_hex=ct.hex(),
                decrypted_hex=pt2.hex(),
                expected_hex=expected.hex(),
                error=error,
            ))

    elapsed = time.perf_counter() - start

    return RoundtripResult(
        algorithm_name=spec.algorithm,
        total_vectors=num_vectors,
        passed=passed,
        failed=failed,
        message_length=message_length,
        failures=failures,
        elapsed_seconds=round(elapsed, 4),
        seed=seed,
    )


def run_all_algorithms(
    *,
    num_vectors: int = 200,
    seed: int = 1337,
    message_length: int = 48,
    algorithms: Optional[List[str]] = None,
    progress_callback: Optional[Callable[[str, int, int], None]] = None,
) -> List[RoundtripResult]:
    """Run roundtrip tests for every algorithm template.

    Args:
        num_vectors: Number of messages per algorithm.
        seed: Random seed for reproducibility.
        message_length: Maximum message length.
        algorithms: Subset of algorithm names (default: all templates).
        progress_callback: Optional callback(algo_name, current_index, total).

    Returns:
        List of RoundtripResult sorted by algorithm name.
    """
    algos = [a.upper() for a in algorithms] if algorithms else list_algorithms()
    registry = CipherRegistry()
    results: List[RoundtripResult] = []

    for idx, algo_name in enumerate(algos):
        if progress_callback:
            progress_callback(algo_name, idx, len(algos))

        logger.info("Roundtrip %d/%d: %s", idx + 1, len(algos), algo_name)
        result = run_roundtrip_tests(
            get_template(algo_name),
            num_vectors=num_vectors,
            seed=seed,
            message_length=message_length,
            registry=registry,
        )
        results.append(result)

    return sorted(results, key=lambda r: r.algorithm_name)
