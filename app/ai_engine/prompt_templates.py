"""
app/ai_engine/prompt_templates.py — LangChain prompt template for intent classification.

  INTENT_CLASSIFICATION_PROMPT — offer + prospect profile → "INTENT: ... / REASONING: ..."
"""

from langchain_core.prompts import ChatPromptTemplate


SYSTEM_PROMPT = (
    "You are an expert B2B sales intelligence assistant that evaluates lead "
    "quality and buying intent based on prospect data and product offerings."
)


INTENT_CLASSIFICATION_PROMPT = ChatPromptTemplate.from_messages([
    ("system", SYSTEM_PROMPT),
    (
        "human",
        """Analyze this lead for the following product offering:

PRODUCT: {offer_name}
VALUE PROPOSITIONS: {value_props}
IDEAL USE CASES: {ideal_use_cases}

LEAD INFORMATION:
- Name: {name}
- Role: {role}
- Company: {company}
- Industry: {industry}
- Location: {location}
- LinkedIn Bio: {bio}

Task: Classify the buying intent as High, Medium, or Low and provide a brief reasoning (1-2 sentences).

Respond in this exact format:
INTENT: [High/Medium/Low]
REASONING: [your brief explanation]
""",
    ),
])
