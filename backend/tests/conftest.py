"""
conftest.py — Shared pytest fixtures for the spa estimator backend test suite.

No database or external service fixtures are defined here. All engine tests
are pure unit tests that exercise computation classes in isolation.

Import-path bootstrapping:
    The ``backend/`` directory is inserted into sys.path so that all
    ``spa_estimator.*`` imports resolve correctly regardless of where pytest
    is invoked.
"""

import sys
import os
import pytest

# ---------------------------------------------------------------------------
# Ensure ``backend/`` is on the import path before any package imports occur.
# ---------------------------------------------------------------------------
_BACKEND_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if _BACKEND_DIR not in sys.path:
    sys.path.insert(0, _BACKEND_DIR)


# ---------------------------------------------------------------------------
# Two-vessel reference project
# ---------------------------------------------------------------------------

@pytest.fixture
def scenario_packages():
    """One simple 3-item package per vessel type."""
    from spa_estimator.models.estimate_schema import EquipmentPackage
    return [
        EquipmentPackage(
            key="cp-simple",
            label="CP Simple",
            applies_to=["Cold Plunge"],
            items=[
                {"label": "Chiller", "cost": 5000.0},
                {"label": "Sanitization", "cost": 1500.0},
                {"label": "Pump & filter", "cost": 1000.0},
            ],
        ),
        EquipmentPackage(
            key="ht-simple",
            label="HT Simple",
            applies_to=["Hot Tub"],
            items=[
                {"label": "Heater", "cost": 4000.0},
                {"label": "Jet pump", "cost": 2500.0},
                {"label": "Filter", "cost": 1500.0},
            ],
        ),
    ]


@pytest.fixture
def scenario_vessels():
    """
    CP-1: 10 × 3 ft, 3.5 ft deep, no refrigeration line  → finish 121 sf.
    HT-1: 17.75 × 5.58 ft, 3.5 ft deep, 8 jets           → finish ≈ 262.36 sf.
    """
    from spa_estimator.models.estimate_schema import Vessel, VesselType
    return [
        Vessel(
            id="cp-1",
            type=VesselType.COLD_PLUNGE,
            name="CP-1",
            length_ft=10.0,
            width_ft=3.0,
            water_depth_ft=3.5,
            refrigeration_line=False,
            equipment_package_key="cp-simple",
        ),
        Vessel(
            id="ht-1",
            type=VesselType.HOT_TUB,
            name="HT-1",
            length_ft=17.75,
            width_ft=5.58,
            water_depth_ft=3.5,
            jets=8,
            equipment_package_key="ht-simple",
        ),
    ]


@pytest.fixture
def scenario_rates():
    """
    Materials $6/sf, labor $40/sf, region 1.0; contingency 7.5 %, waste 7.5 %,
    OH&P 12 %, warranty 1.5 %. Turnkey tile and per-vessel plumbing are off so
    labor is the per-sf rate plus the jet surcharge only.
    """
    from spa_estimator.models.estimate_schema import RateConfiguration
    return RateConfiguration(
        materials_per_sf=6.0,
        labor_per_sf=40.0,
        use_tile_turnkey=False,
        labor_per_vessel=0.0,
        handrail_install_per_ea=0.0,
        region_multiplier=1.0,
        contingency_pct=7.5,
        waste_pct=7.5,
        ohp_pct=12.0,
        warranty_pct=1.5,
    )


@pytest.fixture
def full_rates():
    """Every pooled bucket non-zero, so scope toggles have something to remove."""
    from spa_estimator.models.estimate_schema import RateConfiguration
    return RateConfiguration(
        chemical_storage_cost=2_000.0,
        rigging_per_vessel=750.0,
    )


@pytest.fixture
def all_scopes():
    from spa_estimator.models.estimate_schema import ScopeFlags
    return ScopeFlags()


# ---------------------------------------------------------------------------
# Engine fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def scenario_costing_engine(scenario_rates):
    from spa_estimator.services.costing_engine import CostingEngine
    return CostingEngine(rates=scenario_rates)


@pytest.fixture
def default_costing_engine():
    """CostingEngine with all default rates and every scope enabled."""
    from spa_estimator.services.costing_engine import CostingEngine
    return CostingEngine()


@pytest.fixture
def reset_perf_tracker():
    from spa_estimator.services.perf_monitor import tracker
    tracker.reset()
    yield tracker
    tracker.reset()
