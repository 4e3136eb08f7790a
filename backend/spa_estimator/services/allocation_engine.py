"""
AllocationEngine — Pools project-wide costs, spreads them across vessels and
layers the markups that turn cost into a client price.

Pipeline (per project):
  1. Pool freight, design & engineering, rep fee, startup, chemical storage
     and rigging, each gated by its owning scope flag.
  2. Allocate the pool to vessels by share of direct cost.
  3. Design-development contingency on the pre-contingency base, spread by
     fresh shares of that base.
  4. Waste and OH&P as straight percentages of base + contingency.
  5. Warranty reserve, reverse-solved so it is a percentage of the client
     price itself:  client = pre_warranty / (1 - warranty_pct).
  6. Project rollup.

Conservation: the sum of every per-vessel column equals the project figure
for that column, to floating-point tolerance.
"""

from typing import List, Optional, Sequence

from spa_estimator.models.estimate_schema import (
    PooledCosts,
    ProjectCostResult,
    ProjectTotals,
    RateConfiguration,
    ScopeFlags,
    VesselAllocation,
    VesselCostResult,
)
from spa_estimator.services.errors import WarrantyRateError
from spa_estimator.services.logging_config import get_logger

logger = get_logger("allocation")


def proportional_shares(weights: Sequence[float]) -> List[float]:
    """
    Each weight's fraction of the total.

    A zero total splits evenly so that anything allocated by these shares is
    still fully distributed; an empty list has no shares.
    """
    if not weights:
        return []
    total = sum(weights)
    if total <= 0:
        return [1.0 / len(weights)] * len(weights)
    return [w / total for w in weights]


class AllocationEngine:
    """
    Cost allocation and markup engine.

    Percentages on the rate configuration are plain numbers and are divided
    by 100 here, at the point of use.
    """

    def __init__(
        self,
        rates: Optional[RateConfiguration] = None,
        scopes: Optional[ScopeFlags] = None,
    ) -> None:
        self.rates: RateConfiguration = rates or RateConfiguration()
        self.scopes: ScopeFlags = scopes or ScopeFlags()

    # ------------------------------------------------------------------
    # 1. Pooled project costs
    # ------------------------------------------------------------------

    def pool_project_costs(self, vessel_count: int) -> PooledCosts:
        """
        Project-wide costs for a project of ``vessel_count`` vessels.

        freight = (miles × $/mile + vessels × handling) × region
        design  = base × complexity multiplier
        rigging = $/vessel × vessels

        A project with no vessels pools nothing.
        """
        if vessel_count <= 0:
            return PooledCosts()
        r = self.rates
        s = self.scopes

        freight = 0.0
        if s.freight:
            freight = (
                r.distance_miles * r.freight_per_mile
                + vessel_count * r.handling_per_vessel
            ) * r.region_multiplier

        design = r.design_base * r.design_multiplier if s.design_engineering else 0.0

        return PooledCosts(
            freight_total=freight,
            design_engineering=design,
            rep_fee=r.rep_onsite_fee if s.labor else 0.0,
            startup_cost=r.startup_cost if s.labor else 0.0,
            chemical_storage_cost=r.chemical_storage_cost if s.equipment else 0.0,
            rigging_total=r.rigging_per_vessel * vessel_count if s.labor else 0.0,
        )

    # ------------------------------------------------------------------
    # 5. Warranty
    # ------------------------------------------------------------------

    def warranty_fraction(self) -> float:
        """
        Warranty as a fraction of client price; 0 when the scope is off.

        Raises WarrantyRateError at 100 % or above, where the reverse solve
        has no finite answer.
        """
        if not self.scopes.warranty:
            return 0.0
        fraction = self.rates.warranty_pct / 100.0
        if fraction >= 1.0:
            raise WarrantyRateError(self.rates.warranty_pct)
        return fraction

    @staticmethod
    def solve_client_total(pre_warranty: float, warranty_fraction: float) -> float:
        """Client total T such that T = pre_warranty + T × warranty_fraction."""
        if warranty_fraction <= 0.0:
            return pre_warranty
        return pre_warranty / (1.0 - warranty_fraction)

    # ------------------------------------------------------------------
    # 2-6. Allocation, markups and rollup
    # ------------------------------------------------------------------

    def allocate(self, vessel_costs: Sequence[VesselCostResult]) -> ProjectCostResult:
        """Allocate pooled costs and markups across ``vessel_costs``."""
        warranty_fraction = self.warranty_fraction()
        contingency_fraction = (
            self.rates.contingency_pct / 100.0 if self.scopes.design_contingency else 0.0
        )
        waste_fraction = self.rates.waste_pct / 100.0
        ohp_fraction = self.rates.ohp_pct / 100.0

        pooled = self.pool_project_costs(len(vessel_costs))
        pooled_total = pooled.total

        # Step 2: pooled costs follow direct cost
        direct = [vc.direct_cost for vc in vessel_costs]
        direct_shares = proportional_shares(direct)
        pre_cont = [d + share * pooled_total for d, share in zip(direct, direct_shares)]

        # Step 3: contingency follows the pre-contingency base, not direct cost
        contingency_total = sum(pre_cont) * contingency_fraction
        cont_shares = proportional_shares(pre_cont)
        contingency = [share * contingency_total for share in cont_shares]

        allocations: List[VesselAllocation] = []
        for idx, vc in enumerate(vessel_costs):
            base_plus_cont = pre_cont[idx] + contingency[idx]
            waste = base_plus_cont * waste_fraction
            ohp = base_plus_cont * ohp_fraction
            pre_warranty = base_plus_cont + waste + ohp
            client_total = self.solve_client_total(pre_warranty, warranty_fraction)

            allocations.append(VesselAllocation(
                vessel_id=vc.vessel_id,
                name=vc.name,
                share=direct_shares[idx],
                direct_cost=vc.direct_cost,
                allocated_pooled=pre_cont[idx] - vc.direct_cost,
                pre_contingency_base=pre_cont[idx],
                contingency=contingency[idx],
                base_plus_contingency=base_plus_cont,
                waste=waste,
                ohp=ohp,
                pre_warranty=pre_warranty,
                warranty=client_total - pre_warranty,
                client_total=client_total,
            ))

        totals = self.rollup(vessel_costs, allocations)
        logger.debug(
            f"Allocated {pooled_total:.2f} pooled across {len(allocations)} vessels; "
            f"client price {totals.client_price:.2f}"
        )
        return ProjectCostResult(
            vessel_costs=list(vessel_costs),
            pooled=pooled,
            allocations=allocations,
            totals=totals,
        )

    @staticmethod
    def rollup(
        vessel_costs: Sequence[VesselCostResult],
        allocations: Sequence[VesselAllocation],
    ) -> ProjectTotals:
        """Project totals as column sums of the per-vessel results."""
        finish_area = sum(vc.areas.finish_sf for vc in vessel_costs)
        client_price = sum(a.client_total for a in allocations)
        profit = sum(a.ohp for a in allocations)

        return ProjectTotals(
            vessel_count=len(vessel_costs),
            finish_area_sf=finish_area,
            materials=sum(vc.materials_subtotal for vc in vessel_costs),
            equipment=sum(vc.equipment_subtotal for vc in vessel_costs),
            labor=sum(vc.labor_subtotal for vc in vessel_costs),
            direct_cost=sum(a.direct_cost for a in allocations),
            pooled=sum(a.allocated_pooled for a in allocations),
            pre_contingency_base=sum(a.pre_contingency_base for a in allocations),
            contingency=sum(a.contingency for a in allocations),
            base_plus_contingency=sum(a.base_plus_contingency for a in allocations),
            waste=sum(a.waste for a in allocations),
            ohp=profit,
            pre_warranty=sum(a.pre_warranty for a in allocations),
            warranty=sum(a.warranty for a in allocations),
            client_price=client_price,
            profit=profit,
            gross_margin_pct=(profit / client_price * 100.0) if client_price > 0 else 0.0,
            effective_cost_per_sf=(client_price / finish_area) if finish_area > 0 else 0.0,
        )
