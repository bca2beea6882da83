"""
api/schemas.py — Pydantic request/response models for all API endpoints.

These are the API contract — separate from DB ORM models so we can
control exactly what data is exposed over HTTP.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from app.scoring.models import Intent


# ── Offer ─────────────────────────────────────────────────────────────────────

class OfferIn(BaseModel):
    name: str = Field(..., min_length=1, description="Product / offer name")
    value_props: list[str] = Field(..., min_length=1, description="Value propositions")
    ideal_use_cases: list[str] = Field(..., min_length=1, description="Ideal customer profiles / use cases")

    @field_validator("name")
    @classmethod
    def _strip_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Offer name is required")
        return value

    @field_validator("value_props", "ideal_use_cases")
    @classmethod
    def _strip_items(cls, value: list[str]) -> list[str]:
        items = [v.strip() for v in value if v and v.strip()]
        if not items:
            raise ValueError("At least one non-empty entry is required")
        return items


class OfferOut(BaseModel):
    id: int
    name: str
    value_props: list[str]
    ideal_use_cases: list[str]
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


# ── Lead ─────────────────────────────────────────────────────────────────────

class LeadOut(BaseModel):
    id: int
    batch_id: str
    offer_id: int
    name: str
    role: str
    company: str
    industry: str
    location: str
    linkedin_bio: Optional[str] = None
    intent: Optional[Intent] = None
    score: int = 0
    rule_score: int = 0
    ai_score: int = 0
    reasoning: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class InvalidRow(BaseModel):
    line: int
    lead: dict[str, str]


class UploadResult(BaseModel):
    batch_id: str
    offer_id: int
    leads_count: int
    invalid_count: int
    invalid_rows: list[InvalidRow] = Field(default_factory=list)
    leads: list[LeadOut]


# ── Scoring ───────────────────────────────────────────────────────────────────

class ScoreRequest(BaseModel):
    batch_id: str = Field(..., min_length=1, description="Batch returned by POST /leads/upload")


class ScoredLeadOut(BaseModel):
    id: Optional[int] = None
    name: Optional[str] = None
    role: Optional[str] = None
    company: Optional[str] = None
    industry: Optional[str] = None
    location: Optional[str] = None
    linkedin_bio: Optional[str] = None
    intent: Intent
    score: int = Field(..., ge=0, le=100)
    rule_score: int = Field(..., ge=0, le=50)
    ai_score: int = Field(..., ge=0, le=50)
    reasoning: str


class ScoreResult(BaseModel):
    batch_id: str
    leads_count: int
    leads: list[ScoredLeadOut]


# ── Results ───────────────────────────────────────────────────────────────────

class ResultOut(BaseModel):
    id: int
    batch_id: str
    name: str
    role: str
    company: str
    industry: str
    location: str
    intent: Optional[Intent] = None
    score: int
    reasoning: Optional[str] = None
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}
