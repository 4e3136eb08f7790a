"""
Spa Estimator API
FastAPI wrapper around the vessel cost & allocation engine. The engine itself
is pure; this module only wires logging, middleware and routers.
"""
import os
import time

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware

from spa_estimator.config import CORS_ORIGINS_DEFAULT, LOG_FORMAT_DEFAULT, LOG_LEVEL_DEFAULT
from spa_estimator.services.logging_config import setup_logging
from spa_estimator.services.middleware import RequestTimingMiddleware
from spa_estimator.services.perf_monitor import tracker as perf_tracker

load_dotenv()

_log_level = os.getenv("LOG_LEVEL", LOG_LEVEL_DEFAULT)
_json_logs = os.getenv("LOG_FORMAT", LOG_FORMAT_DEFAULT).lower() != "text"
logger = setup_logging(level=_log_level, json_output=_json_logs)

_PROCESS_START = time.monotonic()
VERSION = "1.0.0"

app = FastAPI(
    title="Spa Vessel Estimator API",
    version=VERSION,
    description="Cost estimation for commercial cold plunge & hot tub projects",
)


# ---------------------------------------------------------------------------
# Security Headers Middleware
# ---------------------------------------------------------------------------
class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Adds standard security headers to every response."""
    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        return response


cors_origins = [
    o.strip()
    for o in os.getenv("CORS_ORIGINS", CORS_ORIGINS_DEFAULT).split(",")
    if o.strip()
]

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type", "Accept", "X-Requested-With"],
)
app.add_middleware(SecurityHeadersMiddleware)
# Request timing + X-Request-ID must be outermost so it wraps all other middleware
app.add_middleware(RequestTimingMiddleware)

from spa_estimator.api.estimate_routes import router as estimate_router  # noqa: E402

app.include_router(estimate_router)
logger.info(f"Spa Estimator API v{VERSION} initialised (CORS origins: {len(cors_origins)})")


@app.get("/health")
async def health_check():
    return {
        "status": "active",
        "version": VERSION,
    }


@app.get("/metrics")
async def metrics():
    """Estimate throughput, stage timings and error counts from the in-process tracker."""
    return {
        "uptime_seconds": round(time.monotonic() - _PROCESS_START, 1),
        **perf_tracker.get_metrics(),
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("spa_estimator.main:app", host="0.0.0.0", port=8000, reload=True)
