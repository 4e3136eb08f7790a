"""
In-process counters for the estimate pipeline.

``compute_project_cost`` times its two stages (``vessel_costs`` and
``allocation``) through ``tracker.stage`` and reports each finished or
rejected estimate; ``GET /metrics`` reads the snapshot. The engine never
reads these numbers back.
"""
import time
import threading
from contextlib import contextmanager
from typing import Any, Dict, Iterator, Optional, Tuple


class PerformanceTracker:
    """
    Thread-safe estimate metrics.

    Tracks:
    - Estimates priced and rejected, and the vessels they covered
    - Average estimate duration
    - Per-stage average duration and the slowest stage seen
    - Stage errors by stage name
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._reset_locked()

    def _reset_locked(self) -> None:
        self._estimates_processed: int = 0
        self._estimates_rejected: int = 0
        self._vessels_priced: int = 0
        self._largest_project: int = 0
        self._total_duration_ms: float = 0.0
        self._stage_totals: Dict[str, Tuple[float, int]] = {}   # stage -> (total_ms, count)
        self._error_counts: Dict[str, int] = {}
        self._slowest_stage: Optional[str] = None
        self._slowest_stage_ms: float = 0.0

    # ------------------------------------------------------------------
    # Write API
    # ------------------------------------------------------------------

    def record_estimate_complete(self, duration_ms: float, vessel_count: int = 0) -> None:
        with self._lock:
            self._estimates_processed += 1
            self._total_duration_ms += duration_ms
            self._vessels_priced += vessel_count
            self._largest_project = max(self._largest_project, vessel_count)

    def record_estimate_rejected(self) -> None:
        """An estimate refused for a configuration error (e.g. warranty >= 100 %)."""
        with self._lock:
            self._estimates_rejected += 1

    def record_stage_duration(self, stage_name: str, duration_ms: float) -> None:
        with self._lock:
            total_ms, count = self._stage_totals.get(stage_name, (0.0, 0))
            self._stage_totals[stage_name] = (total_ms + duration_ms, count + 1)
            if duration_ms > self._slowest_stage_ms:
                self._slowest_stage_ms = duration_ms
                self._slowest_stage = stage_name

    def record_stage_error(self, stage_name: str) -> None:
        with self._lock:
            self._error_counts[stage_name] = self._error_counts.get(stage_name, 0) + 1

    @contextmanager
    def stage(self, stage_name: str) -> Iterator[None]:
        """Time a block as ``stage_name``; an exception counts as a stage error."""
        start = time.perf_counter()
        try:
            yield
        except Exception:
            self.record_stage_error(stage_name)
            raise
        finally:
            self.record_stage_duration(stage_name, (time.perf_counter() - start) * 1000)

    # ------------------------------------------------------------------
    # Read API
    # ------------------------------------------------------------------

    def get_metrics(self) -> Dict[str, Any]:
        """
        Snapshot of every counter.

        Keys: estimates_processed, estimates_rejected, vessels_priced,
        largest_project_vessels, avg_estimate_duration_ms, slowest_stage,
        slowest_stage_ms, error_count, error_count_by_stage,
        stage_avg_durations_ms. Durations are rounded to 0.01 ms.
        """
        with self._lock:
            processed = self._estimates_processed
            return {
                "estimates_processed": processed,
                "estimates_rejected": self._estimates_rejected,
                "vessels_priced": self._vessels_priced,
                "largest_project_vessels": self._largest_project,
                "avg_estimate_duration_ms": (
                    round(self._total_duration_ms / processed, 2) if processed else 0.0
                ),
                "slowest_stage": self._slowest_stage,
                "slowest_stage_ms": round(self._slowest_stage_ms, 2),
                "error_count": sum(self._error_counts.values()),
                "error_count_by_stage": dict(self._error_counts),
                "stage_avg_durations_ms": {
                    name: round(total_ms / count, 2)
                    for name, (total_ms, count) in self._stage_totals.items()
                },
            }

    def reset(self) -> None:
        with self._lock:
            self._reset_locked()


tracker = PerformanceTracker()
