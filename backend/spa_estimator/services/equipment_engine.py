"""
equipment_engine.py — Resolves a vessel's equipment package against the catalog.

A vessel names its package by key. The match must also fit the vessel type;
a stale key or a type mismatch is a normal transient UI state, so it resolves
to no package and zero cost instead of an error.
"""
from typing import Iterable, List, Optional, Sequence

from spa_estimator.config import DEFAULT_EQUIPMENT_PACKAGES
from spa_estimator.models.estimate_schema import EquipmentPackage, VesselType
from spa_estimator.services.logging_config import get_logger

logger = get_logger("equipment")


def default_catalog() -> List[EquipmentPackage]:
    """Built-in catalog (CP Standard, CP Pro, Hot Tub Standard)."""
    return [EquipmentPackage.model_validate(pkg) for pkg in DEFAULT_EQUIPMENT_PACKAGES]


def resolve_package(
    key: str,
    vessel_type: VesselType,
    catalog: Iterable[EquipmentPackage],
) -> Optional[EquipmentPackage]:
    """
    First package in catalog order whose key matches and that fits the type.

    Keys are expected to be unique (EstimateRequest enforces it for API
    input); with a duplicated key the earlier entry wins.
    """
    for package in catalog:
        if package.key == key and package.fits(vessel_type):
            return package
    logger.debug(
        f"No equipment package '{key}' for {vessel_type.value}; equipment cost is 0"
    )
    return None


def resolve_equipment_cost(
    key: str,
    vessel_type: VesselType,
    catalog: Iterable[EquipmentPackage],
) -> float:
    """Sum of line-item costs of the matching package, or 0.0 if none matches."""
    package = resolve_package(key, vessel_type, catalog)
    return package.total_cost if package is not None else 0.0


def packages_for_type(
    vessel_type: VesselType,
    catalog: Sequence[EquipmentPackage],
) -> List[EquipmentPackage]:
    """Packages a vessel of this type may be assigned, in catalog order."""
    return [p for p in catalog if p.fits(vessel_type)]


def default_package_key(
    vessel_type: VesselType,
    catalog: Sequence[EquipmentPackage],
) -> Optional[str]:
    """First package in the catalog that fits the type, used for new vessels."""
    fitting = packages_for_type(vessel_type, catalog)
    return fitting[0].key if fitting else None
