"""
FastAPI Backend for the Pole Attachment Clearance Analysis engine.

Provides HTTP API access to compute_analysis and the static reference
tables (cable catalog, presets, FirstEnergy requirements).
"""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import sys
import os
import logging
from logging.handlers import RotatingFileHandler
from typing import List

# Add parent directory to path for imports
parent_dir = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if parent_dir not in sys.path:
    sys.path.insert(0, parent_dir)

from backend.models.request import AnalysisRequest
from backend.models.response import AnalysisResponse, CableTypeResponse
from backend.services.analysis_service import compute_analysis
from codal_engine import CLEARANCE_PRESETS
from owner_rules import get_firstenergy_requirements
from pole_catalog import list_cable_types

# ============================================================================
# LOGGING: CONSOLE + ROTATING FILE
# ============================================================================
console_handler = logging.StreamHandler(sys.stdout)
console_handler.setLevel(logging.DEBUG)
console_handler.setFormatter(logging.Formatter(
    '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    datefmt='%H:%M:%S'
))

log_dir = os.environ.get("POLE_ATTACH_LOG_DIR") or os.path.join(parent_dir, "logs")
os.makedirs(log_dir, exist_ok=True)
log_file = os.path.join(log_dir, "backend.log")

# 10MB per file, keep 5 backups
file_handler = RotatingFileHandler(log_file, maxBytes=10*1024*1024, backupCount=5)
file_handler.setFormatter(logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s'))

root_logger = logging.getLogger()
root_logger.setLevel(logging.INFO)
root_logger.addHandler(console_handler)
root_logger.addHandler(file_handler)

logger = logging.getLogger(__name__)
logger.info("=" * 60)
logger.info("Backend API starting - Logging configured to file and console")
logger.info("=" * 60)

app = FastAPI(
    title="Pole Attachment Clearance Analysis API",
    description="NESC and utility clearance analysis for new communication attachments",
    version="1.0.0"
)

# Enable CORS for frontend access
app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://localhost:3000",
        "http://localhost:5173",
        "http://127.0.0.1:3000",
        "http://127.0.0.1:5173",
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Handle Pydantic validation errors with clear messages."""
    error_messages = []
    for error in exc.errors():
        field = " -> ".join(str(loc) for loc in error["loc"])
        error_messages.append(f"{field}: {error['msg']}")

    return JSONResponse(
        status_code=422,
        content={"detail": "; ".join(error_messages)}
    )


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": "Pole Attachment Clearance Analysis API",
        "version": "1.0.0",
        "endpoints": {
            "POST /analyze": "Run clearance analysis",
            "GET /cable-types": "Cable catalog",
            "GET /presets": "Named utility presets",
            "GET /owners/firstenergy/requirements": "FirstEnergy application checklist",
            "GET /health": "Health check"
        }
    }


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy"}


@app.get("/cable-types", response_model=List[CableTypeResponse])
async def cable_types():
    """Attachment cable catalog."""
    return list_cable_types()


@app.get("/presets")
async def presets():
    """Named utility clearance presets."""
    return {key: dict(value) for key, value in CLEARANCE_PRESETS.items()}


@app.get("/owners/firstenergy/requirements")
async def firstenergy_requirements():
    """FirstEnergy application requirements and prohibited items."""
    return get_firstenergy_requirements()


@app.post("/analyze", response_model=AnalysisResponse)
async def analyze(request: AnalysisRequest):
    """
    Run a pole attachment clearance analysis.

    Args:
        request: AnalysisRequest with pole, power and span inputs

    Returns:
        AnalysisResponse; ok=False with errors for invalid input
    """
    input_dict = request.model_dump()
    logger.info(
        f"Analyze: pole={input_dict['pole_height']} power={input_dict['existing_power_height']} "
        f"voltage={input_dict['existing_power_voltage']} span={input_dict['span_distance']}"
    )
    result = compute_analysis(input_dict)
    if not result["ok"]:
        logger.info(f"Analysis returned errors: {result['errors']}")
    return result


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        app,
        host=os.environ.get("POLE_ATTACH_HOST", "0.0.0.0"),
        port=int(os.environ.get("POLE_ATTACH_PORT", "8000")),
    )
