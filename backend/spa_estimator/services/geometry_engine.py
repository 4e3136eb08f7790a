"""
geometry_engine.py — Finish-surface areas for cold plunge and hot tub vessels.

Areas exist only to drive $/sf cost rates; this is not a structural or
rendering calculation. Inputs arrive already clamped to >= 0 by the schema.

    floor  = L × W
    walls  = 2 × (L + W) × water depth
    bench  = seat top (L × D) + front face (L × H)
    steps  = count × width × (tread + riser)
    finish = floor + walls + bench + steps + extra
"""

import math
from typing import Optional

from spa_estimator.config import (
    STEP_IDEAL_RISER_FT,
    STEP_IDEAL_TREAD_FT,
    STEP_WIDTH_RUN_FRACTION,
)
from spa_estimator.models.estimate_schema import BenchSpec, StepSpec, Vessel, VesselAreas


def bench_area(bench: Optional[BenchSpec]) -> float:
    if bench is None:
        return 0.0
    return bench.length_ft * bench.depth_ft + bench.length_ft * bench.height_ft


def step_area(steps: Optional[StepSpec]) -> float:
    if steps is None:
        return 0.0
    return steps.count * steps.width_ft * (steps.tread_ft + steps.riser_ft)


def calculate_areas(vessel: Vessel) -> VesselAreas:
    """Return floor, wall, bench, step, extra and total finish area (sf)."""
    length = vessel.length_ft
    width = vessel.width_ft

    floor_sf = length * width
    wall_sf = 2.0 * (length + width) * vessel.water_depth_ft
    bench_sf = bench_area(vessel.bench)
    steps_sf = step_area(vessel.steps)
    extra_sf = vessel.extra_area_sf

    return VesselAreas(
        floor_sf=floor_sf,
        wall_sf=wall_sf,
        bench_sf=bench_sf,
        step_sf=steps_sf,
        extra_sf=extra_sf,
        finish_sf=floor_sf + wall_sf + bench_sf + steps_sf + extra_sf,
    )


def auto_size_steps(wall_height_ft: float, run_ft: float) -> StepSpec:
    """
    Size a code-friendly flight of steps for a given wall height.

    The riser count is the wall height over an ideal ~7 in riser, rounded up,
    so the actual riser is never taller than ideal. Width spans a third of
    the wall (``run_ft``) the steps are placed against.
    """
    wall_height_ft = max(0.0, wall_height_ft)
    count = math.ceil(wall_height_ft / STEP_IDEAL_RISER_FT)
    riser_ft = wall_height_ft / count if count else 0.0
    return StepSpec(
        width_ft=max(0.0, run_ft) * STEP_WIDTH_RUN_FRACTION,
        count=count,
        tread_ft=STEP_IDEAL_TREAD_FT,
        riser_ft=riser_ft,
    )
