"""
Laser Workspace Matcher API
FastAPI service that ranks cutting-bed sizes for a workpiece and estimates
sheet usage for the chosen bed.
"""
import os
import logging
import time

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from lasermatch.api.workspace_routes import router as workspace_router
from lasermatch.services.logging_config import setup_logging
from lasermatch.services.middleware import RequestTimingMiddleware
from lasermatch.services.perf_monitor import tracker as match_tracker

load_dotenv()

_log_level = os.getenv("LOG_LEVEL", "INFO")
_json_logs = os.getenv("LOG_FORMAT", "json").lower() != "text"
setup_logging(level=_log_level, json_output=_json_logs)
logger = logging.getLogger("lasermatch.api")

_PROCESS_START = time.monotonic()

app = FastAPI(
    title="Laser Workspace Matcher API",
    version="1.0.0",
    description="Grid layout, match scoring and sheet costing for laser bed sizes",
)

# ---------------------------------------------------------------------------
# CORS: allowed origins from env
# ---------------------------------------------------------------------------
_cors_default = "http://localhost:3000,http://localhost:8000"
cors_origins = [o.strip() for o in os.getenv("CORS_ORIGINS", _cors_default).split(",") if o.strip()]

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type", "Accept", "X-Requested-With"],
)
# Request timing + X-Request-ID must be outermost so it wraps all other middleware
app.add_middleware(RequestTimingMiddleware)

app.include_router(workspace_router)


@app.get("/health")
async def health_check():
    return {
        "status": "active",
        "version": app.version,
        "uptime_seconds": round(time.monotonic() - _PROCESS_START, 1),
        "metrics": match_tracker.get_metrics(),
    }
