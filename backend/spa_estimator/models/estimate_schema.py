"""
Estimate schema — input snapshot and derived results for the vessel estimator.

Input models are frozen value objects. Every numeric field clamps at
construction: negative, NaN, infinite or missing values become 0, so the
services never need their own clamp calls.
"""
import math
import uuid
from enum import Enum
from typing import Annotated, Any, FrozenSet, List, Optional, Tuple

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, computed_field, field_validator

from spa_estimator.config import (
    JET_BASELINE_DEFAULT,
    RATE_DEFAULTS,
    USE_TILE_TURNKEY_DEFAULT,
)


# ---------------------------------------------------------------------------
# Non-negative numeric types
# ---------------------------------------------------------------------------

def clamp_non_negative(value: Any) -> float:
    """Coerce to a finite float >= 0; anything unusable becomes 0.0."""
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return 0.0
    if not math.isfinite(number):
        return 0.0
    return max(0.0, number)


def _clamp_count(value: Any) -> int:
    return int(clamp_non_negative(value))


NonNegativeFloat = Annotated[float, BeforeValidator(clamp_non_negative)]
NonNegativeInt = Annotated[int, BeforeValidator(_clamp_count)]


def _short_id() -> str:
    return uuid.uuid4().hex[:7]


class VesselType(str, Enum):
    COLD_PLUNGE = "Cold Plunge"
    HOT_TUB = "Hot Tub"


# ---------------------------------------------------------------------------
# Vessel geometry
# ---------------------------------------------------------------------------

class BenchSpec(BaseModel):
    """Bench along one wall: seat top plus front riser face are finished."""
    model_config = ConfigDict(frozen=True)

    length_ft: NonNegativeFloat = 0.0
    depth_ft: NonNegativeFloat = 0.0
    height_ft: NonNegativeFloat = 0.0


class StepSpec(BaseModel):
    """Flight of entry steps: every tread and riser is finished."""
    model_config = ConfigDict(frozen=True)

    width_ft: NonNegativeFloat = 0.0
    count: NonNegativeInt = 0
    tread_ft: NonNegativeFloat = 0.0
    riser_ft: NonNegativeFloat = 0.0


class Vessel(BaseModel):
    """
    One physical cold plunge or hot tub.

    Dimensions are inside-water footprint in feet. ``refrigeration_line`` only
    matters for cold plunges and ``jets`` only for hot tubs.
    """
    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=_short_id)
    type: VesselType
    name: str = ""
    length_ft: NonNegativeFloat = 0.0
    width_ft: NonNegativeFloat = 0.0
    water_depth_ft: NonNegativeFloat = 0.0
    wall_height_ft: NonNegativeFloat = 0.0
    bench: Optional[BenchSpec] = None
    steps: Optional[StepSpec] = None
    extra_area_sf: NonNegativeFloat = Field(0.0, description="Any other finished surface")
    handrails: NonNegativeInt = 0
    refrigeration_line: bool = False
    jets: NonNegativeInt = 0
    equipment_package_key: str = ""


# ---------------------------------------------------------------------------
# Equipment catalog
# ---------------------------------------------------------------------------

class LineItem(BaseModel):
    model_config = ConfigDict(frozen=True)

    label: str
    cost: NonNegativeFloat = 0.0


class EquipmentPackage(BaseModel):
    """A named bundle of priced line items, fixed to the vessel types it fits."""
    model_config = ConfigDict(frozen=True)

    key: str
    label: str = ""
    applies_to: FrozenSet[VesselType] = frozenset()
    items: Tuple[LineItem, ...] = ()

    @property
    def total_cost(self) -> float:
        return sum(item.cost for item in self.items)

    def fits(self, vessel_type: VesselType) -> bool:
        return vessel_type in self.applies_to


# ---------------------------------------------------------------------------
# Rates & scopes
# ---------------------------------------------------------------------------

class RateConfiguration(BaseModel):
    """
    Project-wide cost rates and markups.

    Money fields are USD; ``*_pct`` fields are plain percentages.
    ``warranty_pct`` is a share of the client price, so values of 100 or more
    are accepted here but rejected by the allocation engine.
    """
    model_config = ConfigDict(frozen=True)

    materials_per_sf: NonNegativeFloat = RATE_DEFAULTS["materials_per_sf"]
    materials_per_vessel: NonNegativeFloat = RATE_DEFAULTS["materials_per_vessel"]

    labor_per_sf: NonNegativeFloat = RATE_DEFAULTS["labor_per_sf"]
    use_tile_turnkey: bool = USE_TILE_TURNKEY_DEFAULT
    tile_turnkey_per_sf: NonNegativeFloat = RATE_DEFAULTS["tile_turnkey_per_sf"]
    labor_per_vessel: NonNegativeFloat = RATE_DEFAULTS["labor_per_vessel"]
    handrail_install_per_ea: NonNegativeFloat = RATE_DEFAULTS["handrail_install_per_ea"]
    refrigeration_line_per_cp: NonNegativeFloat = RATE_DEFAULTS["refrigeration_line_per_cp"]
    jet_baseline: NonNegativeInt = JET_BASELINE_DEFAULT
    per_jet_over_baseline: NonNegativeFloat = RATE_DEFAULTS["per_jet_over_baseline"]
    region_multiplier: NonNegativeFloat = RATE_DEFAULTS["region_multiplier"]

    distance_miles: NonNegativeFloat = RATE_DEFAULTS["distance_miles"]
    freight_per_mile: NonNegativeFloat = RATE_DEFAULTS["freight_per_mile"]
    handling_per_vessel: NonNegativeFloat = RATE_DEFAULTS["handling_per_vessel"]

    design_base: NonNegativeFloat = RATE_DEFAULTS["design_base"]
    design_multiplier: NonNegativeFloat = RATE_DEFAULTS["design_multiplier"]

    rep_onsite_fee: NonNegativeFloat = RATE_DEFAULTS["rep_onsite_fee"]
    startup_cost: NonNegativeFloat = RATE_DEFAULTS["startup_cost"]
    chemical_storage_cost: NonNegativeFloat = RATE_DEFAULTS["chemical_storage_cost"]
    rigging_per_vessel: NonNegativeFloat = RATE_DEFAULTS["rigging_per_vessel"]

    contingency_pct: NonNegativeFloat = RATE_DEFAULTS["contingency_pct"]
    waste_pct: NonNegativeFloat = RATE_DEFAULTS["waste_pct"]
    ohp_pct: NonNegativeFloat = RATE_DEFAULTS["ohp_pct"]
    warranty_pct: NonNegativeFloat = RATE_DEFAULTS["warranty_pct"]


class ScopeFlags(BaseModel):
    """Independent on/off toggles; each gates one whole cost bucket."""
    model_config = ConfigDict(frozen=True)

    materials: bool = True
    labor: bool = True
    equipment: bool = True
    freight: bool = True
    design_engineering: bool = True
    design_contingency: bool = True
    warranty: bool = True


# ---------------------------------------------------------------------------
# Derived results
# ---------------------------------------------------------------------------

class VesselAreas(BaseModel):
    model_config = ConfigDict(frozen=True)

    floor_sf: float = 0.0
    wall_sf: float = 0.0
    bench_sf: float = 0.0
    step_sf: float = 0.0
    extra_sf: float = 0.0
    finish_sf: float = 0.0


class VesselCostResult(BaseModel):
    """One vessel's direct cost (materials + equipment + labor) before allocation."""
    model_config = ConfigDict(frozen=True)

    vessel_id: str
    name: str
    type: VesselType
    areas: VesselAreas
    equipment_package_key: Optional[str] = None
    materials_subtotal: float = 0.0
    equipment_subtotal: float = 0.0
    labor_subtotal: float = 0.0
    direct_cost: float = 0.0


class PooledCosts(BaseModel):
    """Project-wide costs not attributable to any single vessel until allocated."""
    model_config = ConfigDict(frozen=True)

    freight_total: float = 0.0
    design_engineering: float = 0.0
    rep_fee: float = 0.0
    startup_cost: float = 0.0
    chemical_storage_cost: float = 0.0
    rigging_total: float = 0.0

    @computed_field
    @property
    def total(self) -> float:
        return (
            self.freight_total
            + self.design_engineering
            + self.rep_fee
            + self.startup_cost
            + self.chemical_storage_cost
            + self.rigging_total
        )


class VesselAllocation(BaseModel):
    model_config = ConfigDict(frozen=True)

    vessel_id: str
    name: str
    share: float = 0.0
    direct_cost: float = 0.0
    allocated_pooled: float = 0.0
    pre_contingency_base: float = 0.0
    contingency: float = 0.0
    base_plus_contingency: float = 0.0
    waste: float = 0.0
    ohp: float = 0.0
    pre_warranty: float = 0.0
    warranty: float = 0.0
    client_total: float = 0.0


class ProjectTotals(BaseModel):
    model_config = ConfigDict(frozen=True)

    vessel_count: int = 0
    finish_area_sf: float = 0.0
    materials: float = 0.0
    equipment: float = 0.0
    labor: float = 0.0
    direct_cost: float = 0.0
    pooled: float = 0.0
    pre_contingency_base: float = 0.0
    contingency: float = 0.0
    base_plus_contingency: float = 0.0
    waste: float = 0.0
    ohp: float = 0.0
    pre_warranty: float = 0.0
    warranty: float = 0.0
    client_price: float = 0.0
    profit: float = 0.0
    gross_margin_pct: float = 0.0
    effective_cost_per_sf: float = 0.0


class ProjectCostResult(BaseModel):
    """Per-vessel allocation table plus the project rollup."""
    model_config = ConfigDict(frozen=True)

    vessel_costs: List[VesselCostResult] = Field(default_factory=list)
    pooled: PooledCosts = Field(default_factory=PooledCosts)
    allocations: List[VesselAllocation] = Field(default_factory=list)
    totals: ProjectTotals = Field(default_factory=ProjectTotals)


# ---------------------------------------------------------------------------
# API request
# ---------------------------------------------------------------------------

class EstimateRequest(BaseModel):
    """
    Body for POST /api/estimate.

    Omitted ``packages`` fall back to the built-in catalog; omitted ``rates``
    and ``scopes`` to their defaults. ``preset`` is applied on top of ``rates``.
    Package keys must be unique within ``packages``.
    """
    vessels: List[Vessel] = Field(default_factory=list)
    packages: Optional[List[EquipmentPackage]] = None
    rates: Optional[RateConfiguration] = None
    scopes: Optional[ScopeFlags] = None
    preset: Optional[str] = None

    @field_validator("packages")
    @classmethod
    def _unique_package_keys(cls, packages: Optional[List[EquipmentPackage]]):
        if packages is None:
            return packages
        seen = set()
        duplicates = []
        for package in packages:
            if package.key in seen and package.key not in duplicates:
                duplicates.append(package.key)
            seen.add(package.key)
        if duplicates:
            raise ValueError(f"duplicate equipment package keys: {', '.join(duplicates)}")
        return packages
