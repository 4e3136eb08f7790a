"""
test_perf_monitor.py — Estimate pipeline counters.
"""

import pytest

from spa_estimator.services.perf_monitor import PerformanceTracker


@pytest.fixture
def perf():
    return PerformanceTracker()


class TestCounters:

    def test_empty_snapshot(self, perf):
        metrics = perf.get_metrics()
        assert metrics["estimates_processed"] == 0
        assert metrics["avg_estimate_duration_ms"] == 0.0
        assert metrics["slowest_stage"] is None
        assert metrics["stage_avg_durations_ms"] == {}

    def test_estimate_averages_and_vessels(self, perf):
        """(10 + 20) / 2 = 15 ms; 2 + 5 vessels."""
        perf.record_estimate_complete(10.0, vessel_count=2)
        perf.record_estimate_complete(20.0, vessel_count=5)
        metrics = perf.get_metrics()
        assert metrics["estimates_processed"] == 2
        assert metrics["avg_estimate_duration_ms"] == 15.0
        assert metrics["vessels_priced"] == 7
        assert metrics["largest_project_vessels"] == 5

    def test_slowest_stage(self, perf):
        perf.record_stage_duration("vessel_costs", 1.0)
        perf.record_stage_duration("allocation", 4.0)
        perf.record_stage_duration("vessel_costs", 3.0)
        metrics = perf.get_metrics()
        assert metrics["slowest_stage"] == "allocation"
        assert metrics["stage_avg_durations_ms"] == {"vessel_costs": 2.0, "allocation": 4.0}

    def test_reset(self, perf):
        perf.record_estimate_complete(5.0, 1)
        perf.record_estimate_rejected()
        perf.record_stage_error("allocation")
        perf.reset()
        metrics = perf.get_metrics()
        assert metrics["estimates_processed"] == 0
        assert metrics["estimates_rejected"] == 0
        assert metrics["error_count"] == 0


class TestStageContext:

    def test_successful_stage_is_timed(self, perf):
        with perf.stage("allocation"):
            pass
        metrics = perf.get_metrics()
        assert "allocation" in metrics["stage_avg_durations_ms"]
        assert metrics["error_count"] == 0

    def test_failing_stage_counts_error_and_reraises(self, perf):
        with pytest.raises(ValueError):
            with perf.stage("allocation"):
                raise ValueError("warranty")
        metrics = perf.get_metrics()
        assert metrics["error_count_by_stage"] == {"allocation": 1}
        assert "allocation" in metrics["stage_avg_durations_ms"]


class TestBoundedState:

    def test_stage_state_does_not_grow_with_estimates(self, reset_perf_tracker, scenario_vessels):
        """Per-stage state is a (total_ms, count) pair however many estimates run."""
        from spa_estimator.services.estimate_engine import compute_project_cost

        for _ in range(500):
            compute_project_cost(scenario_vessels)

        totals = reset_perf_tracker._stage_totals
        assert set(totals) == {"vessel_costs", "allocation"}
        for total_ms, count in totals.values():
            assert count == 500
            assert total_ms >= 0.0
        assert reset_perf_tracker.get_metrics()["estimates_processed"] == 500

    def test_average_from_running_totals(self, perf):
        """(2 + 4 + 9) / 3 = 5 ms."""
        for duration in (2.0, 4.0, 9.0):
            perf.record_stage_duration("allocation", duration)
        assert perf._stage_totals["allocation"] == (15.0, 3)
        assert perf.get_metrics()["stage_avg_durations_ms"]["allocation"] == 5.0
