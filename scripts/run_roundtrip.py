"""CLI entry point for the roundtrip suite.

Usage:
    python scripts/run_roundtrip.py                              # all algorithms
    python scripts/run_roundtrip.py --algorithms HILL PLAYFAIR   # subset
    python scripts/run_roundtrip.py --vectors 50 --save          # write JSON report

Research / education only. Do NOT use in production.
"""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

# Ensure project root is on path
_project_root = Path(__file__).parent.parent
if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))

from classiclab.config import load_settings
from classiclab.evaluation import EvaluationReport, run_all_algorithms
from classiclab.utils.repro import run_report_path, set_global_seed, write_json


def _cli_progress(message: str, current: int, total: int) -> None:
    """Print progress to stderr."""
    pct = (current / total * 100) if total > 0 else 0
    print(f"  [{current + 1}/{total}] ({pct:.0f}%) {message}", file=sys.stderr)


def main() -> int:
    settings = load_settings()

    parser = argparse.ArgumentParser(description="Roundtrip verification for the classical ciphers")
    parser.add_argument(
        "--algorithms", nargs="+", default=None,
        help="Algorithm names to test (default: all)",
    )
    parser.add_argument("--vectors", type=int, default=settings.roundtrip_vectors,
                        help="Messages per algorithm")
    parser.add_argument("--length", type=int, default=settings.message_length,
                        help="Maximum message length")
    parser.add_argument("--seed", type=int, default=settings.global_seed)
    parser.add_argument("--save", action="store_true", help=f"Write a JSON report under {settings.runs_dir}/")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")
    args = parser.parse_args()

    # Configure logging
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )

    set_global_seed(args.seed)
    results = run_all_algorithms(
        num_vectors=args.vectors,
        seed=args.seed,
        message_length=args.length,
        algorithms=args.algorithms,
        progress_callback=_cli_progress,
    )
    report = EvaluationReport(roundtrip_results=results)
    print(report.to_summary())

    if args.save:
        path = run_report_path(Path(settings.project_root) / settings.runs_dir, "roundtrip")
        write_json(path, report.to_dict())
        print(f"\nReport written to {path}")

    return 0 if not report.failing_algorithms() else 1


if __name__ == "__main__":
    sys.exit(main())
