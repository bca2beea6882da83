"""
app/db/models.py — SQLAlchemy ORM models for the lead scoring system.

Tables:
  - Offer → the product / ICP context leads are scored against
  - Lead  → one uploaded prospect, grouped into batches, plus its latest score
"""

from sqlalchemy import (
    JSON,
    Column,
    DateTime,
    Enum,
    ForeignKey,
    Integer,
    String,
    Text,
    func,
)
from sqlalchemy.orm import DeclarativeBase, relationship

from app.scoring.models import Intent


# ── Base ─────────────────────────────────────────────────────────────────────

class Base(DeclarativeBase):
    pass


# ── Models ───────────────────────────────────────────────────────────────────

class Offer(Base):
    __tablename__ = "offers"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    value_props = Column(JSON, nullable=False)          # list[str]
    ideal_use_cases = Column(JSON, nullable=False)      # list[str]
    created_at = Column(DateTime, server_default=func.now(), nullable=False)

    # Relationships
    leads = relationship("Lead", back_populates="offer", cascade="all, delete-orphan")

    def __repr__(self) -> str:
        return f"<Offer id={self.id} name={self.name!r}>"


class Lead(Base):
    __tablename__ = "leads"

    id = Column(Integer, primary_key=True, autoincrement=True)
    offer_id = Column(Integer, ForeignKey("offers.id", ondelete="CASCADE"), nullable=False)
    batch_id = Column(String(64), nullable=False, index=True)

    name = Column(String(255), nullable=False)
    role = Column(String(255), nullable=False)
    company = Column(String(255), nullable=False)
    industry = Column(String(255), nullable=False)
    location = Column(String(255), nullable=False)
    linkedin_bio = Column(Text, nullable=True)

    # Scoring fields, filled in by POST /score
    intent = Column(Enum(Intent, native_enum=False), nullable=True)
    score = Column(Integer, default=0, nullable=False)          # 0 – 100
    rule_score = Column(Integer, default=0, nullable=False)     # 0 – 50
    ai_score = Column(Integer, default=0, nullable=False)       # 0 – 50
    reasoning = Column(Text, nullable=True)

    created_at = Column(DateTime, server_default=func.now(), nullable=False)
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now(), nullable=False)

    # Relationships
    offer = relationship("Offer", back_populates="leads")

    def __repr__(self) -> str:
        return f"<Lead id={self.id} batch={self.batch_id} score={self.score}>"
