"""
app/ai_engine/oracle.py — Intent classification via an LLM, with a local fallback.

  IntentOracle          : one configured provider (prompt | chat model)
  build_oracles()       : settings → ordered list of configured providers
  fallback_intent()     : deterministic heuristic used when no LLM answer is available
  IntentOracleAdapter   : classify(lead, offer) → IntentResult, never raises

Every failure (nothing configured, transport/auth error, odd response shape)
ends in a valid IntentResult. The cause is only visible in the logs.
"""

import logging
from typing import Optional, Sequence

from langchain_core.language_models import BaseChatModel

from app.ai_engine.prompt_templates import INTENT_CLASSIFICATION_PROMPT
from app.ai_engine.utils import (
    build_openai_llm,
    build_openrouter_llm,
    build_prompt_variables,
    parse_intent_response,
)
from app.config import Settings, is_configured
from app.scoring.models import Intent, IntentResult, Lead, Offer

logger = logging.getLogger(__name__)

HEURISTIC_SOURCE = "heuristic"
STRONG_ROLE_KEYWORDS = ("ceo", "cto", "founder", "director", "head")


# ── Providers ─────────────────────────────────────────────────────────────────

class IntentOracle:
    """A named chat model wired to the intent classification prompt."""

    def __init__(self, name: str, llm: BaseChatModel):
        self.name = name
        self.chain = INTENT_CLASSIFICATION_PROMPT | llm

    async def complete(self, lead: Lead, offer: Offer) -> str:
        """Send one prompt, return the raw reply text."""
        response = await self.chain.ainvoke(build_prompt_variables(lead, offer))
        return response.content if hasattr(response, "content") else str(response)

    def __repr__(self) -> str:
        return f"<IntentOracle name={self.name!r}>"


def build_oracles(settings: Settings) -> list[IntentOracle]:
    """
    Build the configured providers, preferred one first.

    The preferred provider is ``settings.ai_provider``; the other provider is
    appended as the alternate. Providers without a usable API key are left
    out, so the list may be empty.
    """
    builders = {
        "openai": lambda: build_openai_llm(
            api_key=settings.openai_api_key,
            model=settings.openai_model,
            temperature=settings.oracle_temperature,
            max_tokens=settings.oracle_max_tokens,
        ),
        "openrouter": lambda: build_openrouter_llm(
            api_key=settings.openrouter_api_key,
            model=settings.openrouter_model,
            temperature=settings.oracle_temperature,
            max_tokens=settings.oracle_max_tokens,
        ),
    }
    keys = {
        "openai": settings.openai_api_key,
        "openrouter": settings.openrouter_api_key,
    }

    order = [settings.ai_provider] + [p for p in builders if p != settings.ai_provider]
    oracles = []
    for provider in order:
        if not is_configured(keys[provider]):
            logger.warning("%s API key not configured or invalid", provider)
            continue
        oracles.append(IntentOracle(provider, builders[provider]()))
        logger.info("%s client initialized", provider)

    return oracles


# ── Heuristic fallback ────────────────────────────────────────────────────────

def fallback_intent(lead: Lead, offer: Offer) -> IntentResult:
    """
    Classify intent from the lead's role and industry alone.

    Strong role + industry found in an ideal use case → High, one of the
    two → Medium, neither → Low.
    """
    role = lead.role.lower() if isinstance(lead.role, str) else ""
    industry = lead.industry.lower() if isinstance(lead.industry, str) else ""

    has_strong_role = any(keyword in role for keyword in STRONG_ROLE_KEYWORDS)
    has_relevant_industry = bool(industry.strip()) and any(
        industry in use_case.lower()
        for use_case in (offer.ideal_use_cases or [])
        if isinstance(use_case, str)
    )

    if has_strong_role and has_relevant_industry:
        return IntentResult(
            intent=Intent.HIGH,
            reasoning="Heuristic: strong indicators: relevant role and industry match.",
            source=HEURISTIC_SOURCE,
        )
    if has_strong_role or has_relevant_industry:
        return IntentResult(
            intent=Intent.MEDIUM,
            reasoning="Heuristic: moderate indicators present.",
            source=HEURISTIC_SOURCE,
        )
    return IntentResult(
        intent=Intent.LOW,
        reasoning="Heuristic: limited indicators of strong fit.",
        source=HEURISTIC_SOURCE,
    )


# ── Adapter ───────────────────────────────────────────────────────────────────

class IntentOracleAdapter:
    """
    Classify a lead's buying intent with the first configured oracle.

    The oracle handle is shared by all in-flight calls of a batch; LangChain
    chat models are safe for concurrent ``ainvoke``.
    """

    def __init__(self, oracles: Sequence[IntentOracle] = ()):
        self.oracles = list(oracles)

    @property
    def oracle(self) -> Optional[IntentOracle]:
        return self.oracles[0] if self.oracles else None

    async def classify(self, lead: Lead, offer: Offer) -> IntentResult:
        oracle = self.oracle
        if oracle is None:
            logger.info("No AI provider configured, using fallback scoring for %s", lead.name)
            return fallback_intent(lead, offer)

        try:
            raw_text = await oracle.complete(lead, offer)
            parsed = parse_intent_response(raw_text)
        except Exception as exc:
            logger.error("%s intent classification failed for %s: %s", oracle.name, lead.name, exc)
            logger.info("Using fallback scoring due to AI error")
            return fallback_intent(lead, offer)

        if not parsed.parsed:
            logger.warning(
                "Unparseable %s response for %s, defaulting to %s: %s",
                oracle.name, lead.name, parsed.intent.value, (raw_text or "")[:200],
            )

        result = IntentResult(intent=parsed.intent, reasoning=parsed.reasoning, source=oracle.name)
        logger.debug(
            "%s intent for %s: %s (%d pts): %s",
            oracle.name, lead.name, result.intent.value, result.score, result.reasoning[:100],
        )
        return result
