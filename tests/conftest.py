"""
tests/conftest.py — Shared pytest configuration and fixtures.

Sets environment variables BEFORE any app module is imported, so that
pydantic-settings picks up a throwaway SQLite database and no real LLM
provider is ever configured.
"""

import os
import tempfile

import pytest

# ── Set env vars before any app module is imported ───────────────────────────
# This runs at collection time, before tests execute.
os.environ["OPENAI_API_KEY"] = ""
os.environ["OPENROUTER_API_KEY"] = ""
os.environ.setdefault("AI_PROVIDER", "openai")
os.environ.setdefault(
    "DATABASE_URL",
    f"sqlite:///{os.path.join(tempfile.gettempdir(), f'lead_scoring_test_{os.getpid()}.db')}",
)

from app.scoring.models import Lead, Offer  # noqa: E402


@pytest.fixture
def offer() -> Offer:
    return Offer(
        name="AI Outreach Automation",
        value_props=["24/7 outreach", "6x more meetings"],
        ideal_use_cases=["B2B SaaS mid-market", "Sales teams"],
    )


@pytest.fixture
def complete_lead() -> Lead:
    return Lead(
        id=1,
        name="Ava Patel",
        role="Head of Growth",
        company="FlowMetrics",
        industry="B2B SaaS",
        location="San Francisco",
        bio="Scaling outbound at a Series B startup.",
    )
