"""
test_estimate_schema.py — Input clamping, immutability and defaults of the
estimate models.
"""

import math

import pytest
from pydantic import ValidationError

from spa_estimator.config import RATE_DEFAULTS
from spa_estimator.models.estimate_schema import (
    EstimateRequest,
    PooledCosts,
    RateConfiguration,
    ScopeFlags,
    Vessel,
    VesselType,
    clamp_non_negative,
)


class TestClampNonNegative:

    @pytest.mark.parametrize("raw, expected", [
        (3.5, 3.5),
        ("2.25", 2.25),
        (0, 0.0),
        (-1.0, 0.0),
        (float("nan"), 0.0),
        (float("inf"), 0.0),
        (float("-inf"), 0.0),
        (None, 0.0),
        ("abc", 0.0),
        (10**400, 0.0),
        (-(10**400), 0.0),
    ])
    def test_values(self, raw, expected):
        assert clamp_non_negative(raw) == expected

    def test_rates_clamp(self):
        rates = RateConfiguration(labor_per_sf=-40.0, contingency_pct=float("nan"))
        assert rates.labor_per_sf == 0.0
        assert rates.contingency_pct == 0.0

    def test_huge_integer_dimension_clamps(self):
        """An int too large for a float is unusable input, not an error."""
        vessel = Vessel(type=VesselType.HOT_TUB, length_ft=10**400, width_ft=8.0, jets=10**400)
        assert vessel.length_ft == 0.0
        assert vessel.jets == 0

    def test_counts_truncate_and_clamp(self):
        vessel = Vessel(type=VesselType.HOT_TUB, jets=7.9, handrails=-2)
        assert vessel.jets == 7
        assert vessel.handrails == 0

    def test_warranty_above_100_is_accepted_by_the_model(self):
        """Rejection happens at allocation time, not at construction."""
        assert RateConfiguration(warranty_pct=120.0).warranty_pct == 120.0


class TestImmutability:

    def test_vessel_frozen(self):
        vessel = Vessel(type=VesselType.COLD_PLUNGE, length_ft=10.0)
        with pytest.raises(ValidationError):
            vessel.length_ft = 12.0

    def test_rates_frozen(self):
        with pytest.raises(ValidationError):
            RateConfiguration().ohp_pct = 50.0

    def test_unknown_vessel_type_rejected(self):
        with pytest.raises(ValidationError):
            Vessel(type="Sauna")


class TestDefaults:

    def test_vessel_ids_are_unique(self):
        a = Vessel(type=VesselType.HOT_TUB)
        b = Vessel(type=VesselType.HOT_TUB)
        assert a.id and b.id and a.id != b.id

    def test_rate_defaults(self):
        rates = RateConfiguration()
        assert rates.materials_per_sf == RATE_DEFAULTS["materials_per_sf"]
        assert rates.use_tile_turnkey is True
        assert rates.jet_baseline == 6
        assert rates.warranty_pct == 1.5

    def test_all_scopes_on_by_default(self):
        assert all(ScopeFlags().model_dump().values())

    def test_type_accepts_display_value(self):
        assert Vessel(type="Cold Plunge").type is VesselType.COLD_PLUNGE

    def test_pooled_total_is_serialized(self):
        pooled = PooledCosts(freight_total=100.0, rep_fee=50.0)
        assert pooled.total == 150.0
        assert pooled.model_dump()["total"] == 150.0

    def test_request_defaults(self):
        request = EstimateRequest.model_validate({"vessels": [{"type": "Hot Tub", "length_ft": 8}]})
        assert request.packages is None
        assert request.rates is None
        assert request.preset is None
        assert math.isclose(request.vessels[0].length_ft, 8.0)


class TestEstimateRequestPackages:

    def _package(self, key, cost):
        return {"key": key, "applies_to": ["Hot Tub"], "items": [{"label": "pump", "cost": cost}]}

    def test_duplicate_package_keys_rejected(self):
        with pytest.raises(ValidationError) as exc:
            EstimateRequest.model_validate({
                "packages": [self._package("ht-a", 100), self._package("ht-a", 200)],
            })
        assert "duplicate equipment package keys: ht-a" in str(exc.value)

    def test_unique_package_keys_accepted(self):
        request = EstimateRequest.model_validate({
            "packages": [self._package("ht-a", 100), self._package("ht-b", 200)],
        })
        assert [p.key for p in request.packages] == ["ht-a", "ht-b"]
