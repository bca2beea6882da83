"""
api/endpoints/lead_routes.py — Upload and list leads.

POST /leads/upload            — Upload a CSV of leads as a new batch
GET  /leads                   — List all leads, newest first
GET  /leads/batch/{batch_id}  — List the leads of one batch
"""

import logging

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile
from sqlalchemy.orm import Session

from app.config import settings
from app.db.repository import get_leads, get_leads_by_batch
from app.db.session import get_db
from app.ingestion.csv_io import CSVValidationError
from app.services.lead_service import NotFoundError, import_leads_csv
from api.schemas import InvalidRow, LeadOut, UploadResult

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/upload", response_model=UploadResult, status_code=201, summary="Upload leads CSV")
def upload_leads(file: UploadFile = File(...), db: Session = Depends(get_db)):
    """
    Import leads from a CSV file with columns
    name, role, company, industry, location, linkedin_bio.

    Rows with a blank required field are skipped and reported back.
    Files larger than MAX_UPLOAD_BYTES are rejected.
    """
    if not file.filename or not file.filename.lower().endswith(".csv"):
        raise HTTPException(status_code=400, detail="Only CSV files are allowed.")

    # read one byte past the limit so oversized files are detected without buffering them whole
    content = file.file.read(settings.max_upload_bytes + 1)
    if len(content) > settings.max_upload_bytes:
        logger.warning("Rejected upload %s: larger than %d bytes", file.filename, settings.max_upload_bytes)
        raise HTTPException(status_code=400, detail="File too large")

    try:
        summary = import_leads_csv(db, content)
    except NotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc))
    except CSVValidationError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    db.commit()

    return UploadResult(
        batch_id=summary.batch_id,
        offer_id=summary.offer_id,
        leads_count=len(summary.leads),
        invalid_count=len(summary.invalid),
        invalid_rows=[InvalidRow(**row) for row in summary.invalid],
        leads=[LeadOut.model_validate(lead) for lead in summary.leads],
    )


@router.get("", response_model=list[LeadOut], summary="List leads")
def list_leads(db: Session = Depends(get_db)):
    return get_leads(db)


@router.get("/batch/{batch_id}", response_model=list[LeadOut], summary="List leads of a batch")
def batch_leads(batch_id: str, db: Session = Depends(get_db)):
    leads = get_leads_by_batch(db, batch_id)
    if not leads:
        raise HTTPException(status_code=404, detail="No leads found for this batch.")
    return leads
