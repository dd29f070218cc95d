from __future__ import annotations

from typing import Any

from legal_intent.config import settings
from legal_intent.errors import InvalidBudgetError
from legal_intent.logging import get_logger
from legal_intent.models.adapter import ChatMessage, CompletionService, get_openai
from legal_intent.utils.json_extract import extract_json_object

from .rules import classify_quick
from .sanitizer import sanitize
from .types import (
    COURT_LEVELS,
    DEFAULT_DOMAINS,
    DEFAULT_SECTIONS,
    DESIRED_OUTPUTS,
    GENERAL_SEARCH,
    KNOWN_DOMAINS,
    PROCEDURE_CODES,
    Intent,
    ReasoningBudget,
    SectionType,
)

logger = get_logger(__name__)

_SYSTEM_PROMPT = (
    "Ти експерт з класифікації юридичних запитів. Проаналізуй запит та визнач:\n"
    "1. Intent (наприклад: consumer_penalty_delay, tax_dispute, labor_dispute, "
    "parliament_search, registry_search)\n"
    f"2. Домени ({', '.join(KNOWN_DOMAINS)})\n"
    "3. Необхідні сутності (law_article, seller, consumer, etc.)\n"
    f"4. Типи секцій ({', '.join(s.value for s in SectionType)})\n"
    "5. Часовий діапазон (якщо вказано) у форматі {\"from\": \"YYYY-MM-DD\", \"to\": \"YYYY-MM-DD\"}\n"
    "\n"
    "Додатково (якщо можливо витягнути з тексту):\n"
    "6. Task-based intent для судів/процесу: supreme_court_position | procedural_deadlines | "
    "admissibility_and_formal_requirements | jurisdiction_and_competence | "
    "evidence_and_standards | interim_measures | amounts_and_costs | two_sided_practice\n"
    "7. Слоти (optional):\n"
    f"   - procedure_code: {'|'.join(PROCEDURE_CODES)}\n"
    f"   - court_level: {'|'.join(COURT_LEVELS)}\n"
    "   - case_category (строка)\n"
    "   - law_article (строка)\n"
    "   - section_focus (масив секцій)\n"
    "   - money_terms: {penalty,inflation,three_percent,legal_fees}\n"
    f"   - desired_output: {'|'.join(DESIRED_OUTPUTS)}\n"
    "\n"
    "Поверни ТІЛЬКИ валідний JSON без додаткового тексту з полями: intent, confidence, "
    "domains, required_entities, sections, time_range (опціонально), reasoning_budget, "
    "slots (опціонально)."
)


def _build_messages(question: str) -> list[ChatMessage]:
    return [
        ChatMessage(role="system", content=_SYSTEM_PROMPT),
        ChatMessage(role="user", content=question),
    ]


def _with_defaults(payload: dict[str, Any], budget: ReasoningBudget) -> dict[str, Any]:
    filled = dict(payload)
    filled["intent"] = payload.get("intent") or GENERAL_SEARCH
    if payload.get("confidence") is None:
        filled["confidence"] = settings.MODEL_CONFIDENCE
    filled["domains"] = payload.get("domains") or list(DEFAULT_DOMAINS)
    filled["required_entities"] = payload.get("required_entities") or []
    filled["sections"] = payload.get("sections") or [s.value for s in DEFAULT_SECTIONS]
    filled["reasoning_budget"] = budget
    return filled


async def classify_deep(
    question: str,
    budget: ReasoningBudget | str = ReasoningBudget.STANDARD,
    service: CompletionService | None = None,
) -> Intent:
    """Model-assisted classification with a keyword fallback on any failure."""
    tier = ReasoningBudget.parse(budget)
    if tier is ReasoningBudget.QUICK:
        raise InvalidBudgetError(budget)

    try:
        client = service or get_openai()
        raw = await client.complete(
            _build_messages(question or ""),
            "json_object",
            budget=tier.value,
            max_tokens=settings.CLASSIFIER_MAX_TOKENS,
        )
    except Exception as e:
        logger.warning(f"Intent classification call failed, using keywords: {e!r}")
        return classify_quick(question)

    payload = extract_json_object(raw)
    if payload is None:
        logger.warning("Intent classification returned no JSON object, using keywords")
        return classify_quick(question)

    intent = sanitize(_with_defaults(payload, tier))
    logger.debug(f"Model classified query as {intent.intent} ({intent.confidence:.2f})")
    return intent
