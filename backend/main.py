"""
FastAPI application for the Kelly Edge calculator
Exposes the pure calculator core over HTTP
"""

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Dict
import logging
import os

from dotenv import load_dotenv

from backend.core.breakdown import build_breakdown, render_problems, summary
from backend.core.calculator import PRESETS, ValidationFailure, compute
from backend.schemas import KellyComputeRequest, KellyComputeResponse

load_dotenv()

APP_NAME = "Kelly Edge Calculator"
APP_VERSION = "1.0"

# Logging setup
logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events"""
    logger.info("Starting %s v%s", APP_NAME, APP_VERSION)
    yield
    logger.info("Shutting down %s", APP_NAME)


app = FastAPI(
    title=APP_NAME,
    description="Single-bet Kelly criterion sizing with a step-by-step breakdown",
    version=APP_VERSION,
    lifespan=lifespan,
)

# CORS (Streamlit dashboard + local front ends by default)
_cors_origins = os.getenv("CORS_ORIGINS", "http://localhost:3000,http://localhost:8501")
app.add_middleware(
    CORSMiddleware,
    allow_origins=[o.strip() for o in _cors_origins.split(",") if o.strip()],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ============================================================================
# PUBLIC ENDPOINTS
# ============================================================================

@app.get("/")
async def root():
    """Service info"""
    return {
        "app": APP_NAME,
        "version": APP_VERSION,
        "status": "operational",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "healthy"}


# ============================================================================
# CALCULATOR ENDPOINTS
# ============================================================================

@app.post("/api/kelly/compute", response_model=KellyComputeResponse)
async def compute_kelly(request: KellyComputeRequest):
    """
    Run the Kelly calculator on one set of form inputs.

    Invalid probability/odds are not an HTTP error: the response has
    ``valid=false`` and lists every problem found.
    """
    inputs = request.to_inputs()
    outcome = compute(inputs)

    if isinstance(outcome, ValidationFailure):
        logger.info("Kelly compute rejected: %d problem(s)", len(outcome.problems))
        return KellyComputeResponse.from_failure(
            outcome,
            breakdown=render_problems(outcome).split("\n"),
            summary=summary(outcome),
        )

    logger.info(
        "Kelly compute: p=%.4f b=%.4f k=%s -> f*=%.4f f_applied=%.4f",
        outcome.p, outcome.b, outcome.k, outcome.f_star_raw, outcome.f_applied,
    )
    return KellyComputeResponse.from_result(
        outcome,
        breakdown=build_breakdown(inputs, outcome),
        summary=summary(outcome),
    )


@app.get("/api/kelly/presets", response_model=Dict[str, KellyComputeRequest])
async def list_presets():
    """All named input presets (``example`` and ``reset``)."""
    return {
        name: KellyComputeRequest.from_inputs(inputs)
        for name, inputs in PRESETS.items()
    }


@app.get("/api/kelly/presets/{name}", response_model=KellyComputeRequest)
async def get_preset(name: str):
    """One named input preset."""
    inputs = PRESETS.get(name)
    if inputs is None:
        raise HTTPException(status_code=404, detail=f"Unknown preset: {name}")
    return KellyComputeRequest.from_inputs(inputs)


# ============================================================================
# ERROR HANDLERS
# ============================================================================

@app.exception_handler(Exception)
async def global_exception_handler(request, exc):
    """Catch-all exception handler"""
    logger.error(f"Unhandled exception: {exc}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content={"detail": "Internal server error", "type": type(exc).__name__}
    )


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        app,
        host=os.getenv("API_HOST", "0.0.0.0"),
        port=int(os.getenv("API_PORT", "8000")),
    )
