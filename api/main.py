"""
api/main.py — FastAPI application entry point.

Run with:
    uvicorn api.main:app --reload
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.config import settings
from app.db.session import init_db
from app.services.scoring import ScoringEngine
from api.endpoints.lead_routes import router as lead_router
from api.endpoints.offer_routes import router as offer_router
from api.endpoints.result_routes import router as result_router
from api.endpoints.score_routes import router as score_router

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


# ── Lifespan ─────────────────────────────────────────────────────────────────

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup / shutdown logic."""
    init_db()
    logger.info("Database tables ready.")
    # Tests may install their own engine before startup
    if getattr(app.state, "scoring_engine", None) is None:
        app.state.scoring_engine = ScoringEngine.from_settings(settings)
    yield
    logger.info("Application shutting down.")


# ── App ───────────────────────────────────────────────────────────────────────

app = FastAPI(
    title="Lead Scoring Engine",
    description=(
        "Scores sales leads from 0 to 100 against a product offer by combining "
        "rule-based scoring with LLM intent classification."
    ),
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ── Routers ───────────────────────────────────────────────────────────────────

app.include_router(offer_router, prefix="/api/offer", tags=["Offer"])
app.include_router(lead_router, prefix="/api/leads", tags=["Leads"])
app.include_router(score_router, prefix="/api/score", tags=["Scoring"])
app.include_router(result_router, prefix="/api/results", tags=["Results"])


# ── Health check ─────────────────────────────────────────────────────────────

@app.get("/health", tags=["System"])
def health_check():
    """Returns service liveness status."""
    return {"status": "ok", "service": "lead-scoring-engine"}


@app.get("/", tags=["System"])
def root():
    return {
        "message": "Lead Scoring Engine is running.",
        "docs": "/docs",
        "ai_provider": settings.ai_provider,
    }
