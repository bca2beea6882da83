"""
app/ai_engine/utils.py — Shared AI helper utilities.

Provides:
  - build_openai_llm()       : LangChain chat model for the OpenAI API
  - build_openrouter_llm()   : LangChain chat model pointed at OpenRouter
  - build_prompt_variables() : offer + lead → prompt template variables
  - parse_intent_response()  : "INTENT: / REASONING:" extraction from LLM text
"""

import logging
import re
from dataclasses import dataclass

from langchain_openai import ChatOpenAI

from app.scoring.models import Intent, Lead, Offer

logger = logging.getLogger(__name__)

# OpenRouter's base URL (drop-in OpenAI-compatible API)
OPENROUTER_BASE_URL = "https://openrouter.ai/api/v1"

DEFAULT_REASONING = "AI analysis completed"
MISSING_BIO = "Not provided"

_INTENT_RE = re.compile(r"INTENT:\s*(High|Medium|Low)", re.IGNORECASE)
_REASONING_RE = re.compile(r"REASONING:\s*(.+?)(?:\n|$)", re.IGNORECASE)


def build_openai_llm(
    api_key: str,
    model: str,
    temperature: float = 0.3,
    max_tokens: int = 150,
) -> ChatOpenAI:
    """
    Build a LangChain ChatOpenAI client for the OpenAI API.

    Retries are disabled: the scoring engine makes exactly one attempt per
    lead and falls back to the local heuristic on any failure.
    """
    return ChatOpenAI(
        model=model,
        api_key=api_key,
        temperature=temperature,
        max_tokens=max_tokens,
        max_retries=0,
    )


def build_openrouter_llm(
    api_key: str,
    model: str,
    temperature: float = 0.3,
    max_tokens: int = 150,
) -> ChatOpenAI:
    """
    Build a LangChain ChatOpenAI client pointed at OpenRouter.

    Args:
        api_key:     OpenRouter API key.
        model:       OpenRouter model identifier, e.g. "openai/gpt-4o-mini".
        temperature: Keep low (0.1–0.3) so the INTENT/REASONING format is stable.
        max_tokens:  Upper bound on the reply length.

    Returns:
        A LangChain-compatible LLM instance.
    """
    return ChatOpenAI(
        model=model,
        api_key=api_key,
        base_url=OPENROUTER_BASE_URL,
        temperature=temperature,
        max_tokens=max_tokens,
        max_retries=0,
        # OpenRouter attribution headers
        default_headers={
            "X-Title": "Lead Scoring Engine",
        },
    )


def build_prompt_variables(lead: Lead, offer: Offer) -> dict[str, str]:
    """Flatten an offer and a lead into INTENT_CLASSIFICATION_PROMPT variables."""
    return {
        "offer_name": offer.name,
        "value_props": ", ".join(offer.value_props),
        "ideal_use_cases": ", ".join(offer.ideal_use_cases),
        "name": lead.name or "",
        "role": lead.role or "",
        "company": lead.company or "",
        "industry": lead.industry or "",
        "location": lead.location or "",
        "bio": lead.bio or MISSING_BIO,
    }


@dataclass(frozen=True)
class ParsedIntent:
    intent: Intent
    reasoning: str
    parsed: bool        # False when neither INTENT: nor REASONING: was found


def parse_intent_response(text: str) -> ParsedIntent:
    """
    Extract the intent label and reasoning from an oracle reply.

    Expected shape:
        INTENT: High
        REASONING: Founder of a SaaS company matching the ICP.

    A missing intent defaults to Medium and a missing reasoning to a generic
    placeholder. When neither marker is present the reply is reported as
    unparseable via ``parsed=False``; the defaults still apply.
    """
    if not text:
        return ParsedIntent(intent=Intent.MEDIUM, reasoning=DEFAULT_REASONING, parsed=False)

    intent_match = _INTENT_RE.search(text)
    reasoning_match = _REASONING_RE.search(text)

    intent = Intent(intent_match.group(1).title()) if intent_match else Intent.MEDIUM
    reasoning = reasoning_match.group(1).strip() if reasoning_match else ""

    return ParsedIntent(
        intent=intent,
        reasoning=reasoning or DEFAULT_REASONING,
        parsed=bool(intent_match or reasoning_match),
    )
