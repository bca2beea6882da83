"""
app/scoring/combiner.py — Merge the rule layer and the intent layer into a ScoredLead.

The intent label always comes from the intent layer; the rule layer only
contributes points and a short breakdown appended to the reasoning.
"""

from app.scoring.models import IntentResult, Lead, RuleScoreBreakdown, ScoredLead


def describe_rule_breakdown(breakdown: RuleScoreBreakdown) -> str:
    """Render the non-zero rule sub-scores, e.g. 'role relevance (20 pts), data completeness (10 pts)'."""
    parts = []
    if breakdown.role_score > 0:
        parts.append(f"role relevance ({breakdown.role_score} pts)")
    if breakdown.industry_score > 0:
        parts.append(f"industry match ({breakdown.industry_score} pts)")
    if breakdown.completeness_score > 0:
        parts.append(f"data completeness ({breakdown.completeness_score} pts)")

    return ", ".join(parts) if parts else "no rule matches"


def combine(lead: Lead, breakdown: RuleScoreBreakdown, intent_result: IntentResult) -> ScoredLead:
    reasoning = (
        f"{intent_result.reasoning} "
        f"Rule-based analysis: {describe_rule_breakdown(breakdown)}"
    )
    return ScoredLead(
        lead=lead,
        breakdown=breakdown,
        ai_score=intent_result.score,
        intent=intent_result.intent,
        reasoning=reasoning,
        source=intent_result.source,
    )
