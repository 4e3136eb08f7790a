"""
CostingEngine — Direct cost of each vessel before any project-level allocation.

Covers:
  - Materials: combined tile + membrane rate on total finish area
  - Equipment: resolved package line items
  - Labor: EPS/waterproofing per sf, optional tile turnkey on floor + walls,
    per-vessel plumbing, handrails, refrigeration line (cold plunge),
    jets above baseline (hot tub), all scaled by the region multiplier

Each bucket is gated by its scope flag; a disabled bucket is exactly 0.
"""

from typing import List, Optional, Sequence

from spa_estimator.models.estimate_schema import (
    EquipmentPackage,
    RateConfiguration,
    ScopeFlags,
    Vessel,
    VesselAreas,
    VesselCostResult,
    VesselType,
)
from spa_estimator.services.equipment_engine import resolve_package
from spa_estimator.services.geometry_engine import calculate_areas


class CostingEngine:
    """
    Vessel cost calculator.

    All monetary values are in USD. The engine holds only the immutable rates
    and scopes it was built with, so one instance may be reused freely.
    """

    def __init__(
        self,
        rates: Optional[RateConfiguration] = None,
        scopes: Optional[ScopeFlags] = None,
    ) -> None:
        self.rates: RateConfiguration = rates or RateConfiguration()
        self.scopes: ScopeFlags = scopes or ScopeFlags()

    # ------------------------------------------------------------------
    # 1. Materials
    # ------------------------------------------------------------------

    def calculate_materials(self, areas: VesselAreas) -> float:
        if not self.scopes.materials:
            return 0.0
        return self.rates.materials_per_sf * areas.finish_sf + self.rates.materials_per_vessel

    # ------------------------------------------------------------------
    # 2. Labor
    # ------------------------------------------------------------------

    def jet_surcharge(self, vessel: Vessel) -> float:
        """Hot tubs pay a per-jet install charge for every jet above the baseline."""
        if vessel.type != VesselType.HOT_TUB:
            return 0.0
        extra_jets = vessel.jets - self.rates.jet_baseline
        if extra_jets <= 0:
            return 0.0
        return extra_jets * self.rates.per_jet_over_baseline

    def calculate_labor(self, vessel: Vessel, areas: VesselAreas) -> float:
        """
        Installation labor for one vessel.

        labor = [labor_per_sf × finish
                 + tile_turnkey_per_sf × (floor + walls)   (if turnkey)
                 + labor_per_vessel
                 + handrail_install_per_ea × handrails
                 + refrigeration line                      (cold plunge, if flagged)
                 + jet surcharge]                          (hot tub)
                × region_multiplier
        """
        if not self.scopes.labor:
            return 0.0
        r = self.rates

        labor = r.labor_per_sf * areas.finish_sf
        if r.use_tile_turnkey:
            labor += r.tile_turnkey_per_sf * (areas.floor_sf + areas.wall_sf)
        labor += r.labor_per_vessel
        labor += r.handrail_install_per_ea * vessel.handrails
        if vessel.type == VesselType.COLD_PLUNGE and vessel.refrigeration_line:
            labor += r.refrigeration_line_per_cp
        labor += self.jet_surcharge(vessel)

        return labor * r.region_multiplier

    # ------------------------------------------------------------------
    # 3. Per-vessel rollup
    # ------------------------------------------------------------------

    def calculate_vessel_cost(
        self,
        vessel: Vessel,
        catalog: Sequence[EquipmentPackage],
    ) -> VesselCostResult:
        """Areas plus materials, equipment and labor subtotals for one vessel."""
        areas = calculate_areas(vessel)

        package = resolve_package(vessel.equipment_package_key, vessel.type, catalog)
        equipment = 0.0
        if self.scopes.equipment and package is not None:
            equipment = package.total_cost

        materials = self.calculate_materials(areas)
        labor = self.calculate_labor(vessel, areas)

        return VesselCostResult(
            vessel_id=vessel.id,
            name=vessel.name,
            type=vessel.type,
            areas=areas,
            equipment_package_key=package.key if package is not None else None,
            materials_subtotal=materials,
            equipment_subtotal=equipment,
            labor_subtotal=labor,
            direct_cost=materials + equipment + labor,
        )

    def calculate_all(
        self,
        vessels: Sequence[Vessel],
        catalog: Sequence[EquipmentPackage],
    ) -> List[VesselCostResult]:
        """Direct costs for every vessel, in input order."""
        return [self.calculate_vessel_cost(v, catalog) for v in vessels]
