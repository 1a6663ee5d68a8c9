"""
Thread-safe execution counters backing tool health checks.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass


HEALTHY_SUCCESS_RATE = 0.9


@dataclass(frozen=True)
class MetricsSnapshot:
    executions: int
    successes: int
    total_duration_ms: float

    @property
    def failures(self) -> int:
        return self.executions - self.successes

    @property
    def success_rate(self) -> float:
        # No executions yet counts as fully successful.
        if not self.executions:
            return 1.0
        return self.successes / self.executions

    def avg_latency_ms(self, idle_latency_ms: int) -> int:
        if not self.executions:
            return idle_latency_ms
        return int(self.total_duration_ms / self.executions + 0.5)

    @property
    def is_healthy(self) -> bool:
        return self.success_rate > HEALTHY_SUCCESS_RATE


class ToolMetrics:
    """Execution, success and latency counters guarded by a lock."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._executions = 0
        self._successes = 0
        self._total_duration_ms = 0.0

    def record_start(self) -> None:
        with self._lock:
            self._executions += 1

    def record_success(self, duration_ms: float) -> None:
        with self._lock:
            self._successes += 1
            self._total_duration_ms += duration_ms

    def record_failure(self, duration_ms: float) -> None:
        with self._lock:
            self._total_duration_ms += duration_ms

    def snapshot(self) -> MetricsSnapshot:
        with self._lock:
            return MetricsSnapshot(
                executions=self._executions,
                successes=self._successes,
                total_duration_ms=self._total_duration_ms,
            )

    def reset(self) -> None:
        with self._lock:
            self._executions = 0
            self._successes = 0
            self._total_duration_ms = 0.0
