"""
app/services/scoring.py — Batch scoring orchestration.

For each lead the rule layer and the intent layer run independently and the
combiner merges them. Leads in a batch are scored concurrently (bounded by a
semaphore) and returned in input order. A batch either fully succeeds or
raises BatchScoringError; partial results are never returned.
"""

import asyncio
import logging
from typing import Optional, Sequence

from app.ai_engine.oracle import IntentOracleAdapter, build_oracles
from app.config import Settings
from app.scoring.combiner import combine
from app.scoring.models import Lead, Offer, ScoredLead
from app.scoring.rules import evaluate

logger = logging.getLogger(__name__)

DEFAULT_MAX_CONCURRENCY = 5


class BatchScoringError(RuntimeError):
    """Raised when any lead in a batch could not be scored."""

    def __init__(self, message: str, index: Optional[int] = None, lead_name: Optional[str] = None):
        super().__init__(message)
        self.index = index
        self.lead_name = lead_name


class ScoringEngine:
    """
    Scores leads against an offer.

    Args:
        adapter:         The intent layer. Defaults to an adapter with no
                         oracle, i.e. heuristic-only intent.
        max_concurrency: Max leads scored at the same time in one batch.
    """

    def __init__(
        self,
        adapter: Optional[IntentOracleAdapter] = None,
        max_concurrency: int = DEFAULT_MAX_CONCURRENCY,
    ):
        if max_concurrency < 1:
            raise ValueError("max_concurrency must be at least 1")
        self.adapter = adapter or IntentOracleAdapter()
        self.max_concurrency = max_concurrency

    @classmethod
    def from_settings(cls, settings: Settings) -> "ScoringEngine":
        """Composition root: build oracles from configuration and inject them."""
        adapter = IntentOracleAdapter(build_oracles(settings))
        if adapter.oracle:
            logger.info("Scoring engine using %s for intent classification", adapter.oracle.name)
        else:
            logger.warning("No AI provider configured, intent will use heuristic scoring")
        return cls(adapter=adapter, max_concurrency=settings.scoring_max_concurrency)

    async def score_lead(self, lead: Lead, offer: Offer) -> ScoredLead:
        breakdown = evaluate(lead, offer)
        intent_result = await self.adapter.classify(lead, offer)
        scored = combine(lead, breakdown, intent_result)
        logger.debug(
            "Lead scored: %s final=%d intent=%s rule=%d ai=%d",
            lead.name, scored.final_score, scored.intent.value, scored.rule_score, scored.ai_score,
        )
        return scored

    async def score_batch(self, leads: Sequence[Lead], offer: Offer) -> list[ScoredLead]:
        """
        Score every lead in ``leads`` against ``offer``.

        Returns:
            One ScoredLead per input lead, in input order.

        Raises:
            BatchScoringError: if scoring any single lead fails.
        """
        if not leads:
            return []

        logger.info("Scoring %d leads against offer %r", len(leads), offer.name)
        semaphore = asyncio.Semaphore(self.max_concurrency)

        async def _score_one(index: int, lead: Lead) -> ScoredLead:
            async with semaphore:
                try:
                    return await self.score_lead(lead, offer)
                except Exception as exc:
                    logger.error("Error scoring lead %d (%s): %s", index, lead.name, exc)
                    raise BatchScoringError(
                        f"Failed to score lead {index} ({lead.name}): {exc}",
                        index=index,
                        lead_name=lead.name,
                    ) from exc

        tasks = [asyncio.ensure_future(_score_one(i, lead)) for i, lead in enumerate(leads)]
        try:
            # gather keeps input order regardless of completion order
            results = await asyncio.gather(*tasks)
        except BaseException:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise

        logger.info("Successfully scored %d leads", len(results))
        return list(results)

    def score_batch_sync(self, leads: Sequence[Lead], offer: Offer) -> list[ScoredLead]:
        """Blocking wrapper around score_batch for scripts and sync routes (needs a thread with no running loop)."""
        return asyncio.run(self.score_batch(leads, offer))
