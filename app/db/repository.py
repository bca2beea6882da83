"""
app/db/repository.py — All database read/write operations.

Business logic should never write raw SQL or ORM queries directly —
everything goes through this module. This keeps DB logic centralized
and easy to test/mock.
"""

import logging
import uuid
from typing import Optional, Sequence

from sqlalchemy.orm import Session

from app.db.models import Lead, Offer
from app.scoring import models as domain

logger = logging.getLogger(__name__)


# ── Mapping to scoring types ──────────────────────────────────────────────────

def offer_to_domain(offer: Offer) -> domain.Offer:
    return domain.Offer(
        name=offer.name,
        value_props=list(offer.value_props or []),
        ideal_use_cases=list(offer.ideal_use_cases or []),
    )


def lead_to_domain(lead: Lead) -> domain.Lead:
    return domain.Lead(
        id=lead.id,
        name=lead.name,
        role=lead.role,
        company=lead.company,
        industry=lead.industry,
        location=lead.location,
        bio=lead.linkedin_bio or None,
    )


# ── Offer ─────────────────────────────────────────────────────────────────────

def create_offer(db: Session, name: str, value_props: list[str], ideal_use_cases: list[str]) -> Offer:
    """Create and persist a new Offer."""
    offer = Offer(name=name, value_props=value_props, ideal_use_cases=ideal_use_cases)
    db.add(offer)
    db.flush()
    logger.info("Offer created: id=%d name=%s", offer.id, offer.name)
    return offer


def get_offer(db: Session, offer_id: int) -> Optional[Offer]:
    return db.query(Offer).filter(Offer.id == offer_id).first()


def get_latest_offer(db: Session) -> Optional[Offer]:
    """Return the most recently created offer (highest id breaks timestamp ties)."""
    return db.query(Offer).order_by(Offer.created_at.desc(), Offer.id.desc()).first()


def list_offers(db: Session) -> list[Offer]:
    return db.query(Offer).order_by(Offer.created_at.desc(), Offer.id.desc()).all()


# ── Lead ─────────────────────────────────────────────────────────────────────

def new_batch_id() -> str:
    return f"batch_{uuid.uuid4().hex[:16]}"


def create_leads(db: Session, offer: Offer, rows: Sequence[dict], batch_id: Optional[str] = None) -> tuple[str, list[Lead]]:
    """
    Persist uploaded lead rows as a new batch tied to ``offer``.

    Returns:
        (batch_id, created Lead rows in input order)
    """
    batch_id = batch_id or new_batch_id()
    leads = [
        Lead(
            offer_id=offer.id,
            batch_id=batch_id,
            name=row["name"],
            role=row["role"],
            company=row["company"],
            industry=row["industry"],
            location=row["location"],
            linkedin_bio=row.get("linkedin_bio") or None,
        )
        for row in rows
    ]
    db.add_all(leads)
    db.flush()
    logger.info("Leads uploaded: batch=%s count=%d offer=%d", batch_id, len(leads), offer.id)
    return batch_id, leads


def get_leads(db: Session) -> list[Lead]:
    """All leads, newest first."""
    return db.query(Lead).order_by(Lead.created_at.desc(), Lead.id.desc()).all()


def get_leads_by_batch(db: Session, batch_id: str) -> list[Lead]:
    """Leads of one batch in upload order."""
    return db.query(Lead).filter(Lead.batch_id == batch_id).order_by(Lead.id.asc()).all()


def save_scores(db: Session, scored_leads: Sequence[domain.ScoredLead]) -> int:
    """
    Write scoring results back onto their Lead rows (matched by lead id).

    Returns:
        Number of rows updated.
    """
    updated = 0
    for scored in scored_leads:
        if scored.lead.id is None:
            logger.error("Scored lead %s has no id, cannot persist", scored.lead.name)
            continue
        count = db.query(Lead).filter(Lead.id == scored.lead.id).update({
            "intent": scored.intent,
            "score": scored.final_score,
            "rule_score": scored.rule_score,
            "ai_score": scored.ai_score,
            "reasoning": scored.reasoning,
        })
        if count == 0:
            logger.error("Failed to update lead %d", scored.lead.id)
        updated += count
    db.flush()
    logger.info("Database updates completed: %d/%d leads", updated, len(scored_leads))
    return updated


def get_results(db: Session, batch_id: str) -> list[Lead]:
    """Leads of one batch, best score first."""
    return (
        db.query(Lead)
        .filter(Lead.batch_id == batch_id)
        .order_by(Lead.score.desc(), Lead.id.asc())
        .all()
    )


def get_all_results(db: Session) -> list[Lead]:
    """Every lead across batches, best score first."""
    return db.query(Lead).order_by(Lead.score.desc(), Lead.id.asc()).all()
