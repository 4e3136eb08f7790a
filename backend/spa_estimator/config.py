"""
Estimator configuration — single source of truth for default rates, presets,
the built-in equipment catalog and geometry constants.

Import from here in models and services rather than hardcoding values.
Percentages are stored as plain numbers (7.5 means 7.5 %) and divided by 100
at the point of use.
"""
from __future__ import annotations


# ── Rate defaults ──────────────────────────────────────────────────────────────

RATE_DEFAULTS: dict[str, float] = {
    # Materials: single combined rate for tile + thinset + grout + membrane
    "materials_per_sf": 16.0,
    "materials_per_vessel": 0.0,

    # Labor
    "labor_per_sf": 40.0,                  # EPS assembly + waterproofing, all finish area
    "tile_turnkey_per_sf": 60.0,           # floor + walls only
    "labor_per_vessel": 15_000.0,          # equipment & interconnect plumbing (MEP tie-ins)
    "handrail_install_per_ea": 400.0,
    "refrigeration_line_per_cp": 1_800.0,  # cold plunge only
    "per_jet_over_baseline": 100.0,        # hot tub only
    "region_multiplier": 1.0,              # adjusts labor & freight

    # Freight
    "distance_miles": 1_000.0,
    "freight_per_mile": 4.25,
    "handling_per_vessel": 1_000.0,

    # Design & engineering
    "design_base": 25_000.0,
    "design_multiplier": 1.0,

    # Flat project-level values
    "rep_onsite_fee": 4_000.0,
    "startup_cost": 3_500.0,
    "chemical_storage_cost": 0.0,
    "rigging_per_vessel": 0.0,

    # Markups (percent)
    "contingency_pct": 7.5,
    "waste_pct": 5.0,
    "ohp_pct": 10.0,
    "warranty_pct": 1.5,                   # of the client price, not of cost
}

USE_TILE_TURNKEY_DEFAULT: bool = True

# Hot tubs include this many jets before the per-jet install surcharge applies
JET_BASELINE_DEFAULT: int = 6


# ── Step auto-sizing ───────────────────────────────────────────────────────────

STEP_IDEAL_RISER_FT: float = 0.58      # ~7 in
STEP_IDEAL_TREAD_FT: float = 1.0       # 12 in
STEP_WIDTH_RUN_FRACTION: float = 0.33  # steps span a third of the wall they sit on


# ── Rate presets ───────────────────────────────────────────────────────────────
# Each preset overrides only the fields it lists; everything else is kept.

RATE_PRESETS: dict[str, dict[str, float]] = {
    "Economy": {
        "region_multiplier": 0.95,
        "freight_per_mile": 3.5,
        "handling_per_vessel": 800.0,
        "labor_per_vessel": 12_000.0,
        "labor_per_sf": 35.0,
        "tile_turnkey_per_sf": 45.0,
        "refrigeration_line_per_cp": 1_400.0,
        "startup_cost": 2_500.0,
        "design_multiplier": 0.9,
        "ohp_pct": 8.0,
    },
    "Standard": {
        "region_multiplier": 1.0,
        "freight_per_mile": 4.25,
        "handling_per_vessel": 1_000.0,
        "labor_per_vessel": 15_000.0,
        "labor_per_sf": 40.0,
        "tile_turnkey_per_sf": 60.0,
        "refrigeration_line_per_cp": 1_800.0,
        "startup_cost": 3_500.0,
        "design_multiplier": 1.0,
        "ohp_pct": 10.0,
    },
    "Premium": {
        "region_multiplier": 1.15,
        "freight_per_mile": 5.0,
        "handling_per_vessel": 1_250.0,
        "labor_per_vessel": 18_000.0,
        "labor_per_sf": 48.0,
        "tile_turnkey_per_sf": 75.0,
        "refrigeration_line_per_cp": 2_400.0,
        "startup_cost": 4_500.0,
        "design_multiplier": 1.2,
        "ohp_pct": 12.0,
    },
    "Union": {
        "region_multiplier": 1.25,
        "freight_per_mile": 5.25,
        "handling_per_vessel": 1_300.0,
        "labor_per_vessel": 20_000.0,
        "labor_per_sf": 55.0,
        "tile_turnkey_per_sf": 85.0,
        "refrigeration_line_per_cp": 2_600.0,
        "startup_cost": 5_200.0,
        "design_multiplier": 1.25,
        "ohp_pct": 15.0,
    },
}


# ── Built-in equipment catalog ─────────────────────────────────────────────────
# applies_to values match VesselType enum values.

DEFAULT_EQUIPMENT_PACKAGES: list[dict[str, object]] = [
    {
        "key": "cp-standard",
        "label": "CP Standard (1-2 person)",
        "applies_to": ["Cold Plunge"],
        "items": [
            {"label": "Chiller 1-1.5HP + controller", "cost": 5_200.0},
            {"label": "AOP / UV sanitization", "cost": 1_800.0},
            {"label": "Pump & filter (cart)", "cost": 1_500.0},
            {"label": "Valves, unions, fittings", "cost": 900.0},
            {"label": "Sensors / controls panel", "cost": 1_300.0},
        ],
    },
    {
        "key": "cp-pro",
        "label": "CP Pro (3-4 person)",
        "applies_to": ["Cold Plunge"],
        "items": [
            {"label": "Chiller 2-3HP + controller", "cost": 8_800.0},
            {"label": "AOP / UV sanitization", "cost": 2_200.0},
            {"label": "Pump & filter (cartridge)", "cost": 1_800.0},
            {"label": "Valves, unions, fittings", "cost": 1_200.0},
            {"label": "Sensors / controls panel", "cost": 1_600.0},
        ],
    },
    {
        "key": "ht-standard",
        "label": "Hot Tub Standard (6-8 jets)",
        "applies_to": ["Hot Tub"],
        "items": [
            {"label": "Gas heater (400k BTU) or equiv", "cost": 4_200.0},
            {"label": "Jet pump + air blower", "cost": 2_800.0},
            {"label": "Sanitization (AOP/UV)", "cost": 2_000.0},
            {"label": "Filter/pump", "cost": 1_600.0},
            {"label": "Valves, unions, fittings", "cost": 1_200.0},
            {"label": "Sensors / controls panel", "cost": 1_800.0},
        ],
    },
]


# ── Runtime settings (environment) ─────────────────────────────────────────────

LOG_LEVEL_DEFAULT: str = "INFO"
LOG_FORMAT_DEFAULT: str = "json"
CORS_ORIGINS_DEFAULT: str = "http://localhost:3000,http://localhost:8000"
