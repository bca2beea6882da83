"""
api/endpoints/score_routes.py — Run the scoring engine on an uploaded batch.

POST /score  — Score every lead of a batch and persist the results
"""

import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.services.lead_service import NotFoundError, score_batch
from app.services.scoring import BatchScoringError, ScoringEngine
from api.dependencies import get_engine
from api.schemas import ScoredLeadOut, ScoreRequest, ScoreResult

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("", response_model=ScoreResult, summary="Score a batch of leads")
def score_leads(
    request: ScoreRequest,
    db: Session = Depends(get_db),
    engine: ScoringEngine = Depends(get_engine),
):
    """
    Score all leads of ``batch_id`` against the offer they were uploaded with.

    The batch is scored as a whole: if any lead fails, nothing is saved
    and a 500 is returned.
    """
    try:
        scored = score_batch(db, request.batch_id, engine)
    except NotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc))
    except BatchScoringError as exc:
        logger.error("Scoring failed for batch %s: %s", request.batch_id, exc)
        raise HTTPException(status_code=500, detail="Failed to score leads.")
    db.commit()

    return ScoreResult(
        batch_id=request.batch_id,
        leads_count=len(scored),
        leads=[ScoredLeadOut(**s.to_dict()) for s in scored],
    )
