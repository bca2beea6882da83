"""
app/scoring/models.py — Value types shared by the scoring engine.

  Lead, Offer          → inputs (immutable during scoring)
  RuleScoreBreakdown   → output of the rule layer (max 50)
  IntentResult         → output of the intent layer (max 50)
  ScoredLead           → combined result for one lead
"""

import enum
from dataclasses import dataclass
from typing import Optional


class Intent(str, enum.Enum):
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


# Intent → AI-layer points. Anything unrecognised scores as Medium.
INTENT_SCORES: dict[Intent, int] = {
    Intent.HIGH: 50,
    Intent.MEDIUM: 30,
    Intent.LOW: 10,
}
DEFAULT_INTENT_SCORE = 30


def intent_to_score(intent) -> int:
    """Map an intent label (enum or string) to its point value."""
    try:
        return INTENT_SCORES[Intent(intent)]
    except ValueError:
        return DEFAULT_INTENT_SCORE


@dataclass(frozen=True)
class Offer:
    name: str
    value_props: list[str]
    ideal_use_cases: list[str]


@dataclass(frozen=True)
class Lead:
    name: Optional[str]
    role: Optional[str]
    company: Optional[str]
    industry: Optional[str]
    location: Optional[str]
    bio: Optional[str] = None
    id: Optional[int] = None        # assigned by persistence; not used for scoring


@dataclass(frozen=True)
class RuleScoreBreakdown:
    role_score: int = 0             # 0 | 10 | 20
    industry_score: int = 0         # 0 | 10 | 20
    completeness_score: int = 0     # 0 | 10

    @property
    def total(self) -> int:
        return self.role_score + self.industry_score + self.completeness_score


@dataclass(frozen=True)
class IntentResult:
    intent: Intent
    reasoning: str
    source: str = "heuristic"       # "openai" | "openrouter" | "heuristic"

    @property
    def score(self) -> int:
        return intent_to_score(self.intent)


@dataclass(frozen=True)
class ScoredLead:
    lead: Lead
    breakdown: RuleScoreBreakdown
    ai_score: int
    intent: Intent
    reasoning: str
    source: str = "heuristic"

    @property
    def rule_score(self) -> int:
        return self.breakdown.total

    @property
    def final_score(self) -> int:
        return self.rule_score + self.ai_score

    def to_dict(self) -> dict:
        """Flat representation used by the API and CSV export."""
        return {
            "id": self.lead.id,
            "name": self.lead.name,
            "role": self.lead.role,
            "company": self.lead.company,
            "industry": self.lead.industry,
            "location": self.lead.location,
            "linkedin_bio": self.lead.bio,
            "intent": self.intent.value,
            "score": self.final_score,
            "rule_score": self.rule_score,
            "ai_score": self.ai_score,
            "reasoning": self.reasoning,
        }
