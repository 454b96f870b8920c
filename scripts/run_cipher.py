"""Encrypt or decrypt text or a file with one of the classical ciphers.

Usage:
    python scripts/run_cipher.py encrypt vigenere --key LEMON "attack at dawn"
    python scripts/run_cipher.py decrypt affine --m 5 --n 8 "IHHWV CSWFR CP"
    python scripts/run_cipher.py encrypt hill --matrix "17 17 5 21 18 21 2 2 19" paymoremoney
    python scripts/run_cipher.py encrypt vigenere_256 --key k --file in.bin --out out.bin

Research / education only. Do NOT use in production.
"""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from pydantic import ValidationError

# Ensure project root is on path
_project_root = Path(__file__).parent.parent
if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))

from classiclab.config import load_settings
from classiclab.cipher.builder import build_cipher
from classiclab.cipher.parsers import parse_matrix
from classiclab.cipher.spec import CipherSpec
from classiclab.cipher.transform import CipherError, KeyConstructionError, decrypt_all, encrypt_all

logger = logging.getLogger(__name__)


def main() -> int:
    settings = load_settings()

    parser = argparse.ArgumentParser(description="Classical cipher encrypt/decrypt")
    parser.add_argument("operation", choices=["encrypt", "decrypt"])
    parser.add_argument("algorithm", help="vigenere, vigenere_autokey, vigenere_256, affine, playfair, hill")
    parser.add_argument("text", nargs="?", default=None, help="Input text (or use --file)")
    parser.add_argument("--key", default=None, help="Key text (Vigenere family, Playfair)")
    parser.add_argument("--m", type=int, default=None, help="Affine multiplier, 1-25, coprime to 26")
    parser.add_argument("--n", type=int, default=None, help="Affine shift, 0-25")
    parser.add_argument("--matrix", default=None, help='Hill key, e.g. "17 17 5 21 18 21 2 2 19"')
    parser.add_argument("--file", default=None, help="Read input bytes from this file")
    parser.add_argument("--out", default=None, help="Write output bytes to this file")
    parser.add_argument("--keep-non-letters", action="store_true",
                        help="Fail on non-letters instead of skipping them")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )

    if args.file:
        data = Path(args.file).read_bytes()
    elif args.text is not None:
        data = args.text.encode("utf-8")
    else:
        parser.error("either TEXT or --file is required")

    try:
        spec = CipherSpec(
            algorithm=args.algorithm,
            key=args.key,
            multiplier=args.m,
            shift=args.n,
            matrix=parse_matrix(args.matrix) if args.matrix else None,
            strip_non_letters=not args.keep_non_letters,
            group_size=settings.group_size,
            groups_per_line=settings.groups_per_line,
        )
        cipher = build_cipher(spec)
    except (ValidationError, ValueError, KeyError) as e:
        # KeyConstructionError is a ValueError
        print(f"Error, {e}", file=sys.stderr)
        return 2

    try:
        if args.operation == "encrypt":
            out = encrypt_all(cipher, data)
        else:
            out = decrypt_all(cipher, data)
    except CipherError as e:
        logger.debug("Stream failed: %s", e)
        print(f"Error, cannot {args.operation}!", file=sys.stderr)
        return 1

    if args.out:
        Path(args.out).write_bytes(out)
        logger.info("Wrote %d bytes to %s", len(out), args.out)
    else:
        print(out.decode("latin-1"))
    return 0


if __name__ == "__main__":
    sys.exit(main())
