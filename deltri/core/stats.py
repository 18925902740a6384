"""Operation statistics and their presentation.

Each structural operation (split, flip, locate, insert) records attempts,
outcomes and timings into an :class:`OpStats` entry of a registry keyed by
operation name.
"""
from __future__ import annotations
import sys
import time
from collections import defaultdict
from contextlib import contextmanager
from dataclasses import dataclass, fields
from typing import Any, DefaultDict, Dict


@dataclass
class OpStats:
    attempts: int = 0
    success: int = 0
    fail: int = 0
    # Timing (seconds)
    time_total: float = 0.0
    time_max: float = 0.0
    time_min: float = 0.0  # 0 means uninitialized

    def record_time(self, duration: float) -> None:
        self.time_total += duration
        if duration > self.time_max:
            self.time_max = duration
        if self.time_min == 0.0 or duration < self.time_min:
            self.time_min = duration

    def reset(self) -> None:
        for f in fields(self):
            setattr(self, f.name, f.default)

    def to_dict(self) -> Dict[str, Any]:  # pragma: no cover - simple mapping
        return {
            'attempts': self.attempts,
            'success': self.success,
            'fail': self.fail,
            'success_rate': (self.success / self.attempts) if self.attempts else 0.0,
            'time_total': self.time_total,
            'time_max': self.time_max,
            'time_min': self.time_min,
            'time_avg': (self.time_total / self.attempts) if self.attempts else 0.0,
        }


def new_registry() -> DefaultDict[str, OpStats]:
    return defaultdict(OpStats)


@contextmanager
def timed(stats: OpStats):
    """Count one attempt on ``stats`` and add the elapsed time when the block exits."""
    stats.attempts += 1
    t0 = time.perf_counter()
    try:
        yield stats
    finally:
        stats.record_time(time.perf_counter() - t0)


def format_stats_table(stats_dict) -> str:
    """Return a human readable multi-line table summarizing op stats."""
    if not stats_dict:
        return "<no stats>"
    header = ["op", "attempts", "succ", "fail", "succ%", "avg_ms", "min_ms", "max_ms"]
    rows = []
    for op in sorted(stats_dict.keys()):
        s = stats_dict[op]
        attempts = s['attempts']; succ = s['success']; fail = s['fail']
        succ_pct = (succ / attempts * 100.0) if attempts else 0.0
        avg_ms = s['time_avg'] * 1000.0; min_ms = s['time_min'] * 1000.0; max_ms = s['time_max'] * 1000.0
        rows.append([
            op, str(attempts), str(succ), str(fail),
            f"{succ_pct:6.2f}", f"{avg_ms:8.3f}", f"{min_ms:8.3f}", f"{max_ms:8.3f}"
        ])
    col_w = [len(h) for h in header]
    for r in rows:
        for i, v in enumerate(r):
            if len(v) > col_w[i]: col_w[i] = len(v)
    def fmt(r):
        return " ".join(r[i].rjust(col_w[i]) for i in range(len(r)))
    lines = [fmt(header), "-" * (sum(col_w) + len(col_w) - 1)] + [fmt(r) for r in rows]
    return "\n".join(lines)


def print_stats(stats_dict, file=None, pretty=True):
    out = file or sys.stdout
    if not pretty:
        print(stats_dict, file=out)
        return
    print(format_stats_table(stats_dict), file=out)


__all__ = ["OpStats", "new_registry", "timed", "print_stats", "format_stats_table"]
