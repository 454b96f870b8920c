"""Structured evaluation report builder.

Aggregates roundtrip results into a single serializable report for export
and console display.

Research / education only. Do NOT use in production.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List

from .roundtrip import RoundtripResult


@dataclass
class EvaluationReport:
    """Evaluation report aggregating all roundtrip results."""
    timestamp: str = ""
    roundtrip_results: List[RoundtripResult] = field(default_factory=list)

    def __post_init__(self):
        if not self.timestamp:
            self.timestamp = datetime.now(timezone.utc).isoformat()

    def to_dict(self) -> Dict[str, Any]:
        """Serialize full report for JSON export."""
        return {
            "timestamp": self.timestamp,
            "roundtrip": [r.to_dict() for r in self.roundtrip_results],
            "summary": {
                "total_algorithms_tested": len(self.roundtrip_results),
                "roundtrip_all_pass": all(r.is_perfect for r in self.roundtrip_results),
                "failing_algorithms": self.failing_algorithms(),
            },
        }

    def to_summary(self) -> str:
        lines = [f"Evaluation Report - {self.timestamp}", "=" * 50]

        if self.roundtrip_results:
            rt_pass = sum(1 for r in self.roundtrip_results if r.is_perfect)
            rt_total = len(self.roundtrip_results)
            lines.append(f"\nRoundtrip Tests: {rt_pass}/{rt_total} algorithms pass")
            for r in self.roundtrip_results:
                lines.append(f"  {r.summary()}")

        return "\n".join(lines)

    def failing_algorithms(self) -> List[str]:
        """Return names of algorithms with roundtrip failures."""
        return [r.algorithm_name for r in self.roundtrip_results if not r.is_perfect]
