"""
api/dependencies.py — Shared FastAPI dependencies.
"""

from fastapi import Request

from app.services.scoring import ScoringEngine


def get_engine(request: Request) -> ScoringEngine:
    """The ScoringEngine built at startup (see api.main.lifespan)."""
    return request.app.state.scoring_engine
