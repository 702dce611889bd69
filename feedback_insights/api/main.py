"""
Feedback Insights FastAPI Application
=====================================

REST API exposing the soft-skill analysis engine to the CEO dashboard.

Endpoints:
    GET  /api/health                  - Health check
    GET  /api/analytics/soft-skills   - Monthly soft-skill report
    POST /api/analytics/soft-skills   - Store + analyze a mentor comment
    PUT  /api/analytics/soft-skills   - Multi-month trends

Usage:
    uvicorn feedback_insights.api.main:app --reload --port 8000

    Or with CLI:
    python -m feedback_insights.api.main
"""

from dotenv import load_dotenv
load_dotenv()

import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .. import __version__
from ..config import AnalyzerConfig, LoggingConfig
from ..logging_config import setup_logging
from . import db
from . import softskill_routes
from .models import HealthResponse

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    log_config = LoggingConfig()
    setup_logging(log_config.level, log_config.json_output, log_config.log_file)

    logger.info("Starting Feedback Insights API...")
    softskill_routes.configure(config=AnalyzerConfig())

    yield

    db.close_pool()
    logger.info("Shutting down Feedback Insights API...")


app = FastAPI(
    title="Feedback Insights API",
    description="Soft-skill issues and sentiment from mentor feedback",
    version=__version__,
    lifespan=lifespan,
)

# In production, set CORS_ORIGINS env var (comma-separated) for dashboard domains
_default_origins = [
    "http://localhost:3000",
    "http://127.0.0.1:3000",
]
_extra_origins = os.getenv("CORS_ORIGINS", "")
if _extra_origins:
    _default_origins.extend([o.strip() for o in _extra_origins.split(",") if o.strip()])

app.add_middleware(
    CORSMiddleware,
    allow_origins=_default_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(softskill_routes.router)


@app.get("/api/health", response_model=HealthResponse)
async def health_check():
    """
    Health check endpoint.

    The database is only checked when comments are stored in PostgreSQL.
    """
    config = AnalyzerConfig()
    if config.comment_source == "database":
        database = db.check_health()["status"]
    else:
        database = "not_used"

    overall = "degraded" if database == "disconnected" else "healthy"
    return HealthResponse(
        status=overall,
        version=__version__,
        comment_source=config.comment_source,
        database=database,
    )


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "feedback_insights.api.main:app",
        host=os.getenv("API_HOST", "0.0.0.0"),
        port=int(os.getenv("API_PORT", "8000")),
        reload=False,
    )
