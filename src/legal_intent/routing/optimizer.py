"""Keyword compression of natural-language questions for full-text search."""

from __future__ import annotations

from legal_intent.config import settings
from legal_intent.intent.types import Intent, ReasoningBudget
from legal_intent.logging import get_logger
from legal_intent.models.adapter import ChatMessage, CompletionService, get_openai
from legal_intent.utils.json_extract import extract_json_object

logger = get_logger(__name__)

_QUOTES = "\"'`«»„“”‘’"

_SYSTEM_PROMPT = (
    "Ти перетворюєш юридичні питання на короткі пошукові запити для "
    "повнотекстового пошуку по базі судових рішень і законодавства. "
    "Прибери питальні слова, ввічливі звороти та слова-паразити, залиш "
    "лише ключові юридичні терміни, номери статей і назви кодексів. "
    "Не більше {max_keywords} слів. "
    'Поверни JSON: {{"search_query": "..."}}'
)

_EXAMPLES: tuple[tuple[str, str], ...] = (
    (
        "Підкажіть, будь ласка, чи можна стягнути з продавця пеню за затримку доставки товару?",
        "стягнення пені продавець прострочення доставки товару споживач",
    ),
    (
        "Яка практика Верховного Суду щодо застосування статті 625 ЦК при стягненні інфляційних втрат?",
        "стаття 625 ЦК інфляційні втрати три відсотки річних стягнення",
    ),
    (
        "Що робити, якщо пропущено строк на апеляційне оскарження рішення суду першої інстанції?",
        "поновлення строку апеляційне оскарження поважні причини пропуску",
    ),
)


def _build_messages(user_query: str, intent: Intent) -> list[ChatMessage]:
    messages = [
        ChatMessage(
            role="system",
            content=_SYSTEM_PROMPT.format(max_keywords=settings.OPTIMIZER_MAX_KEYWORDS),
        )
    ]
    for question, keywords in _EXAMPLES:
        messages.append(ChatMessage(role="user", content=question))
        messages.append(
            ChatMessage(role="assistant", content=f'{{"search_query": "{keywords}"}}')
        )
    hint = f"Intent: {intent.intent}; domains: {', '.join(intent.domains)}"
    messages.append(ChatMessage(role="user", content=f"{user_query}\n\n({hint})"))
    return messages


def _clean(text: str) -> str:
    words = text.strip().strip(_QUOTES).strip().split()
    return " ".join(words[: settings.OPTIMIZER_MAX_KEYWORDS])


async def optimize_search_query(
    user_query: str,
    intent: Intent,
    budget: ReasoningBudget | str = ReasoningBudget.STANDARD,
    service: CompletionService | None = None,
) -> str:
    """
    Compress ``user_query`` into a short keyword query.

    The quick budget returns the query untouched without calling the model.
    Any failure or empty answer also yields the original query.
    """
    tier = ReasoningBudget.parse(budget)
    if tier is ReasoningBudget.QUICK:
        return user_query

    try:
        client = service or get_openai()
        raw = await client.complete(
            _build_messages(user_query, intent),
            "json_object",
            budget=tier.value,
            max_tokens=settings.OPTIMIZER_MAX_TOKENS,
            temperature=settings.OPTIMIZER_TEMPERATURE,
        )
        payload = extract_json_object(raw)
        if payload is not None:
            candidate = payload.get("search_query")
            text = candidate if isinstance(candidate, str) else ""
        else:
            text = raw if isinstance(raw, str) else ""
        optimized = _clean(text)
    except Exception as e:
        logger.warning(f"Search query optimization failed, keeping original: {e!r}")
        return user_query

    if not optimized:
        return user_query
    logger.debug(f"Optimized search query: {optimized!r}")
    return optimized
