"""
api/endpoints/result_routes.py — Read and export scoring results.

GET /results?batch_id=...         — Scored leads of a batch, best first
GET /results/export?batch_id=...  — Same, as a CSV download
GET /results/all                  — Scored leads across all batches
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import Response
from sqlalchemy.orm import Session

from app.db.repository import get_all_results, get_results
from app.db.session import get_db
from app.ingestion.csv_io import results_to_csv
from api.schemas import ResultOut

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("", response_model=list[ResultOut], summary="Results of a batch")
def batch_results(
    batch_id: str = Query(..., min_length=1, description="Batch to read"),
    db: Session = Depends(get_db),
):
    leads = get_results(db, batch_id)
    if not leads:
        raise HTTPException(status_code=404, detail="No results found for this batch.")
    logger.info("Results retrieved: batch=%s count=%d", batch_id, len(leads))
    return leads


@router.get("/export", summary="Export batch results as CSV")
def export_results(
    batch_id: str = Query(..., min_length=1, description="Batch to export"),
    db: Session = Depends(get_db),
):
    leads = get_results(db, batch_id)
    if not leads:
        raise HTTPException(status_code=404, detail="No results found for this batch.")

    rows = [
        {
            "name": lead.name,
            "role": lead.role,
            "company": lead.company,
            "industry": lead.industry,
            "location": lead.location,
            "intent": lead.intent.value if lead.intent else "",
            "score": lead.score,
            "reasoning": lead.reasoning or "",
        }
        for lead in leads
    ]
    logger.info("Results exported to CSV: batch=%s count=%d", batch_id, len(rows))
    return Response(
        content=results_to_csv(rows),
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="lead-results-{batch_id}.csv"'},
    )


@router.get("/all", response_model=list[ResultOut], summary="All results")
def all_results(db: Session = Depends(get_db)):
    return get_all_results(db)
