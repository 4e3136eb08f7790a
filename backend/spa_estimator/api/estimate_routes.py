"""
Estimate API Routes

POST /api/estimate           — price a project snapshot
GET  /api/estimate/defaults  — default rates, scopes and equipment catalog
GET  /api/estimate/presets   — named rate presets and the fields they override
"""
from fastapi import APIRouter, HTTPException

from spa_estimator.config import RATE_PRESETS
from spa_estimator.models.estimate_schema import (
    EstimateRequest,
    ProjectCostResult,
    RateConfiguration,
    ScopeFlags,
)
from spa_estimator.services.equipment_engine import default_catalog
from spa_estimator.services.errors import EstimatorError
from spa_estimator.services.estimate_engine import apply_preset, compute_project_cost

router = APIRouter(prefix="/api/estimate", tags=["Estimate"])


@router.post("", response_model=ProjectCostResult)
def create_estimate(payload: EstimateRequest) -> ProjectCostResult:
    rates = payload.rates or RateConfiguration()
    try:
        if payload.preset:
            rates = apply_preset(rates, payload.preset)
        return compute_project_cost(
            payload.vessels,
            payload.packages,
            rates,
            payload.scopes,
        )
    except EstimatorError as e:
        raise HTTPException(status_code=422, detail=str(e))


@router.get("/defaults")
def get_defaults() -> dict:
    return {
        "rates": RateConfiguration().model_dump(),
        "scopes": ScopeFlags().model_dump(),
        "packages": [p.model_dump(mode="json") for p in default_catalog()],
    }


@router.get("/presets")
def get_presets() -> dict:
    return {"presets": RATE_PRESETS}
