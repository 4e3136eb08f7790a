"""
estimate_engine.py — One-call entry point for a full project estimate.

    compute_project_cost(vessels, packages, rates, scopes) -> ProjectCostResult

Every call is an independent pure recomputation of the input snapshot: the
vessel costs are derived first, then the allocation & markup engine turns
them into the client price. Nothing is cached between calls.
"""
import time
import uuid
from typing import Dict, List, Optional, Sequence

from spa_estimator.config import RATE_PRESETS
from spa_estimator.models.estimate_schema import (
    EquipmentPackage,
    ProjectCostResult,
    RateConfiguration,
    ScopeFlags,
    Vessel,
)
from spa_estimator.services.allocation_engine import AllocationEngine
from spa_estimator.services.costing_engine import CostingEngine
from spa_estimator.services.equipment_engine import default_catalog
from spa_estimator.services.errors import EstimatorError, UnknownPresetError
from spa_estimator.services.logging_config import get_logger
from spa_estimator.services.perf_monitor import tracker as perf_tracker

logger = get_logger()


def preset_names() -> List[str]:
    return list(RATE_PRESETS)


def apply_preset(rates: RateConfiguration, preset: str) -> RateConfiguration:
    """
    Return a copy of ``rates`` with the named preset's values applied.

    Fields the preset does not list keep their current values. The input
    configuration is not modified.
    """
    overrides: Optional[Dict[str, float]] = RATE_PRESETS.get(preset)
    if overrides is None:
        raise UnknownPresetError(preset, preset_names())
    return RateConfiguration.model_validate({**rates.model_dump(), **overrides})


def compute_project_cost(
    vessels: Sequence[Vessel],
    packages: Optional[Sequence[EquipmentPackage]] = None,
    rates: Optional[RateConfiguration] = None,
    scopes: Optional[ScopeFlags] = None,
) -> ProjectCostResult:
    """
    Price a whole project.

    Args:
        vessels:  Vessels to build, in display order.
        packages: Equipment catalog. Defaults to the built-in catalog.
        rates:    Rate configuration. Defaults to RateConfiguration().
        scopes:   Scope toggles. Defaults to everything in scope.

    Returns:
        ProjectCostResult with per-vessel costs, allocations and totals.

    Raises:
        WarrantyRateError: warranty scope on with warranty_pct >= 100.
    """
    catalog = list(packages) if packages is not None else default_catalog()
    rates = rates or RateConfiguration()
    scopes = scopes or ScopeFlags()
    estimate_id = uuid.uuid4().hex[:12]
    start = time.perf_counter()

    try:
        with perf_tracker.stage("vessel_costs"):
            vessel_costs = CostingEngine(rates, scopes).calculate_all(vessels, catalog)
        with perf_tracker.stage("allocation"):
            result = AllocationEngine(rates, scopes).allocate(vessel_costs)
    except EstimatorError as e:
        logger.warning(
            f"Estimate rejected: {e}",
            extra={"estimate_id": estimate_id, "vessel_count": len(vessels)},
        )
        perf_tracker.record_estimate_rejected()
        raise

    duration_ms = round((time.perf_counter() - start) * 1000, 2)
    perf_tracker.record_estimate_complete(duration_ms, len(vessels))
    logger.info(
        f"Estimate complete: {len(vessels)} vessels, client price {result.totals.client_price:,.2f}",
        extra={
            "estimate_id": estimate_id,
            "vessel_count": len(vessels),
            "duration_ms": duration_ms,
        },
    )
    return result
