"""
app/scoring/rules.py — Deterministic rule layer (max 50 points).

  role relevance     → 0 / 10 / 20
  industry match     → 0 / 10 / 20
  data completeness  → 0 / 10

Nothing here raises: a missing field simply scores 0 for the rule that needs it.
"""

import logging
from typing import Optional, Sequence

from app.scoring.models import Lead, Offer, RuleScoreBreakdown

logger = logging.getLogger(__name__)


DECISION_MAKER_KEYWORDS = (
    "ceo", "cto", "cfo", "chief", "president", "director", "head",
    "founder", "owner", "vp", "vice president", "general manager",
    "managing director", "senior vice president",
)

INFLUENCER_KEYWORDS = (
    "manager", "lead", "senior", "principal", "specialist", "architect",
    "coordinator", "supervisor", "administrator",
)

ADJACENT_INDUSTRIES = ("saas", "tech", "technology", "software")

REQUIRED_FIELDS = ("name", "role", "company", "industry", "location")


def score_role_relevance(role: Optional[str]) -> int:
    """20 for decision makers, 10 for influencers, 0 otherwise."""
    if not isinstance(role, str) or not role:
        return 0

    role_lower = role.lower()
    if any(keyword in role_lower for keyword in DECISION_MAKER_KEYWORDS):
        return 20
    if any(keyword in role_lower for keyword in INFLUENCER_KEYWORDS):
        return 10
    return 0


def score_industry_match(industry: Optional[str], ideal_use_cases: Sequence[str]) -> int:
    """
    Compare the lead's industry against the offer's ideal use cases, in order.

    Each use case is checked for a direct match (either string contains the
    other, 20 pts) and then, if the lead works in an adjacent tech industry, 10 pts
    are returned before the next use case is looked at. The first use case
    that triggers either rule decides the score.
    """
    if not isinstance(industry, str) or not industry or not ideal_use_cases:
        return 0

    industry_lower = industry.lower()
    for use_case in ideal_use_cases:
        if not isinstance(use_case, str) or not use_case.strip():
            continue
        use_case_lower = use_case.lower()

        if use_case_lower in industry_lower or industry_lower in use_case_lower:
            return 20

        if any(adj in industry_lower for adj in ADJACENT_INDUSTRIES):
            return 10

    return 0


def score_data_completeness(lead: Lead) -> int:
    """10 if every required field is present and non-blank."""
    for field_name in REQUIRED_FIELDS:
        value = getattr(lead, field_name, None)
        if not isinstance(value, str) or not value.strip():
            return 0
    return 10


def evaluate(lead: Lead, offer: Offer) -> RuleScoreBreakdown:
    """Compute the full rule breakdown for one lead against one offer."""
    breakdown = RuleScoreBreakdown(
        role_score=score_role_relevance(lead.role),
        industry_score=score_industry_match(lead.industry, offer.ideal_use_cases or []),
        completeness_score=score_data_completeness(lead),
    )
    logger.debug(
        "Rule score for %s: role=%d industry=%d completeness=%d total=%d",
        lead.name, breakdown.role_score, breakdown.industry_score,
        breakdown.completeness_score, breakdown.total,
    )
    return breakdown
