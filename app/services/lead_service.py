"""
app/services/lead_service.py — Business logic orchestrating the full
upload → scoring → DB persistence pipeline.

This is the "glue" layer that coordinates:
  - Importing an uploaded CSV as a new batch against the latest offer
  - Loading a batch and its offer from the DB
  - Running the scoring engine on the batch
  - Writing the scores back onto the lead rows
"""

import logging
from dataclasses import dataclass, field

from sqlalchemy.orm import Session

from app.db.models import Lead
from app.db.repository import (
    create_leads,
    get_latest_offer,
    get_leads_by_batch,
    get_offer,
    lead_to_domain,
    offer_to_domain,
    save_scores,
)
from app.ingestion.csv_io import CSVValidationError, parse_leads_csv, split_valid_rows
from app.scoring.models import ScoredLead
from app.services.scoring import ScoringEngine

logger = logging.getLogger(__name__)


class NotFoundError(LookupError):
    """A referenced offer or batch does not exist."""


@dataclass
class UploadSummary:
    batch_id: str
    offer_id: int
    leads: list[Lead]
    invalid: list[dict] = field(default_factory=list)


def import_leads_csv(db: Session, content: bytes) -> UploadSummary:
    """
    Parse an uploaded CSV and store its valid rows as a new batch tied to the latest offer.

    Raises:
        NotFoundError:      no offer has been created yet.
        CSVValidationError: the file is unusable or has no valid rows.
    """
    offer = get_latest_offer(db)
    if offer is None:
        raise NotFoundError("No offer found. Please create an offer first")

    rows = parse_leads_csv(content)
    valid, invalid = split_valid_rows(rows)
    if not valid:
        raise CSVValidationError("No valid leads found in CSV")

    batch_id, leads = create_leads(db, offer, valid)
    logger.info(
        "Leads uploaded: batch=%s total=%d invalid=%d offer=%d",
        batch_id, len(leads), len(invalid), offer.id,
    )
    return UploadSummary(batch_id=batch_id, offer_id=offer.id, leads=leads, invalid=invalid)


def score_batch(db: Session, batch_id: str, engine: ScoringEngine) -> list[ScoredLead]:
    """
    Score every lead of ``batch_id`` and persist the results.

    Returns:
        ScoredLeads in upload order.

    Raises:
        NotFoundError:     unknown batch, or its offer is gone.
        BatchScoringError: the engine could not score the whole batch; nothing is written.
    """
    rows = get_leads_by_batch(db, batch_id)
    if not rows:
        raise NotFoundError(f"No leads found for batch {batch_id}")

    offer_row = get_offer(db, rows[0].offer_id)
    if offer_row is None:
        raise NotFoundError("Offer not found")

    logger.info("Starting scoring process: batch=%s leads=%d", batch_id, len(rows))
    scored = engine.score_batch_sync([lead_to_domain(r) for r in rows], offer_to_domain(offer_row))

    save_scores(db, scored)
    logger.info("Scoring completed: batch=%s leads=%d", batch_id, len(scored))
    return scored
