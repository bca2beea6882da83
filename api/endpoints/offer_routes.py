"""
api/endpoints/offer_routes.py — Routes for the product offer leads are scored against.

POST /offer      — Create a new offer (becomes the latest)
GET  /offer      — Get the latest offer
GET  /offer/all  — List all offers, newest first
"""

import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from app.db.repository import create_offer, get_latest_offer, list_offers
from app.db.session import get_db
from api.schemas import OfferIn, OfferOut

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("", response_model=OfferOut, status_code=201, summary="Create offer")
def post_offer(payload: OfferIn, db: Session = Depends(get_db)):
    """Save a product offer. Subsequent uploads are scored against the latest offer."""
    offer = create_offer(
        db,
        name=payload.name,
        value_props=payload.value_props,
        ideal_use_cases=payload.ideal_use_cases,
    )
    db.commit()
    db.refresh(offer)
    return offer


@router.get("", response_model=OfferOut, summary="Get latest offer")
def latest_offer(db: Session = Depends(get_db)):
    offer = get_latest_offer(db)
    if not offer:
        raise HTTPException(status_code=404, detail="No offer found.")
    return offer


@router.get("/all", response_model=list[OfferOut], summary="List offers")
def all_offers(db: Session = Depends(get_db)):
    return list_offers(db)
