"""In-memory metrics for tool calls and action-block dispatches.

Tool calls are recorded by the registry wrapper, block dispatches by the
dispatch bridge.  ``snapshot()`` feeds the ``/api/health`` payload and lets
tests assert call counts and success rates.
"""

from __future__ import annotations

import math
import threading
from collections import Counter, defaultdict
from dataclasses import dataclass, field


def _percentile(values: list[float], p: float) -> float:
    """Linear-interpolated percentile, ``0.0`` for no samples."""
    if not values:
        return 0.0
    ordered = sorted(values)
    pos = (len(ordered) - 1) * p
    lo, hi = math.floor(pos), math.ceil(pos)
    return ordered[lo] + (ordered[hi] - ordered[lo]) * (pos - lo)


@dataclass
class _ToolStats:
    latencies: list[float] = field(default_factory=list)
    statuses: Counter = field(default_factory=Counter)

    def summary(self) -> dict:
        total = sum(self.statuses.values())
        return {
            "count": total,
            "success_rate": self.statuses["ok"] / total if total else 0.0,
            "latency_p50_ms": round(_percentile(self.latencies, 0.5), 2),
            "latency_p95_ms": round(_percentile(self.latencies, 0.95), 2),
            "status_breakdown": dict(self.statuses),
        }


class MetricsCollector:
    """Thread-safe in-memory metrics collector."""

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._tools: dict[str, _ToolStats] = defaultdict(_ToolStats)
        self._blocks: dict[str, Counter] = defaultdict(Counter)

    def record_tool_call(self, *, tool_name: str, status: str, latency_ms: float) -> None:
        with self._lock:
            stats = self._tools[tool_name]
            stats.latencies.append(float(latency_ms))
            stats.statuses[status] += 1

    def record_block_dispatch(self, *, tool_name: str, outcome: str) -> None:
        """Count one action block outcome (``"ok"`` or ``"error"``)."""
        with self._lock:
            self._blocks[tool_name][outcome] += 1

    def snapshot(self) -> dict:
        with self._lock:
            return {
                "tools": {name: s.summary() for name, s in self._tools.items()},
                "blocks": {name: dict(c) for name, c in self._blocks.items()},
            }

    def reset(self) -> None:
        with self._lock:
            self._tools.clear()
            self._blocks.clear()


_metrics_collector = MetricsCollector()


def get_metrics_collector() -> MetricsCollector:
    return _metrics_collector
