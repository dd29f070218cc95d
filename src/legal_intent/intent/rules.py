from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Callable

from legal_intent.config import settings
from legal_intent.logging import get_logger

from .sanitizer import sanitize
from .slots import detect_court_level
from .types import (
    DEFAULT_DOMAINS,
    DEFAULT_SECTIONS,
    GENERAL_SEARCH,
    Intent,
    ReasoningBudget,
    SectionType,
)

logger = get_logger(__name__)

_PROCEDURE_CODE_PATTERNS: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"\bцпк\b"), "ЦПК"),
    (re.compile(r"\bгпк\b"), "ГПК"),
    (re.compile(r"\bкас\b(?!\s+вс)"), "КАС"),
    (re.compile(r"\bкпк\b"), "КПК"),
)

_DESIRED_OUTPUT_MARKERS: tuple[tuple[tuple[str, ...], str], ...] = (
    (("теза", "тези"), "thesis"),
    (("чеклист", "чек-лист"), "checklist"),
    (("таблиц",), "table"),
    (("порівня",), "comparison"),
    (("підбірк",), "collection"),
)

_LAW_ARTICLE = re.compile(
    r"(?:\bст\.|\bстатт\w*|\bстатья\w*)\s*(\d+(?:[-.]\d+)?)"
    r"(?:\s+(цк|цпк|гк|гпк|кас|кк|кпк|кзпп|пку)\b)?"
)

_PARLIAMENT_BODY = re.compile(r"верховн\w*\s+рад\w*")


def _has_any(text: str, *markers: str) -> bool:
    return any(marker in text for marker in markers)


def _without_parliament(text: str) -> str:
    return _PARLIAMENT_BODY.sub(" ", text)


def _is_supreme_court_position(q: str) -> bool:
    return (
        _has_any(q, "позиці", "позиция", "правов", "правовой")
        or ("вс" in q and "виснов" in q)
        or "верховн" in _without_parliament(q)
    )


def _is_procedural_deadline(q: str) -> bool:
    return _has_any(q, "строк", "поновлен", "пропуск")


def _is_admissibility(q: str) -> bool:
    return _has_any(q, "без рух", "повернен", "без розгляд", "закритт")


def _is_jurisdiction(q: str) -> bool:
    return _has_any(q, "підсудн", "юрисдикц", "підвідомч")


def _is_evidence(q: str) -> bool:
    return _has_any(
        q, "доказ", "належн", "допустим", "тягар доказ", "експертиз", "електронн"
    )


def _is_interim_measures(q: str) -> bool:
    return "забезпечен" in q and _has_any(q, "позов", "доказ")


def _is_amounts_and_costs(q: str) -> bool:
    return _has_any(q, "пеня", "інфляц", "3%") or ("судов" in q and "витрат" in q)


def _is_two_sided_practice(q: str) -> bool:
    return _has_any(q, "за/проти", "дві ліні", "две лини", "неоднорід")


def _is_parliament(q: str) -> bool:
    return _has_any(
        q,
        "депутат",
        "законопроєкт",
        "законопроект",
        "голосуван",
        "фракці",
        "пленарн",
    ) or bool(_PARLIAMENT_BODY.search(q))


def _is_registry(q: str) -> bool:
    return _has_any(
        q,
        "єдрпоу",
        "едрпоу",
        "edrpou",
        "бенефіціар",
        "бенефициар",
        "засновник",
        "кінцевий власник",
        "нотаріус",
        "арбітражн керуюч",
        "арбітражного керуюч",
    )


def _is_consumer_delay(q: str) -> bool:
    return _has_any(q, "споживач", "затримка", "доставка")


def _is_tax(q: str) -> bool:
    return _has_any(q, "податк", "налог")


def _is_labor(q: str) -> bool:
    return _has_any(q, "прац", "трудов")


@dataclass(frozen=True)
class HeuristicRule:
    name: str
    predicate: Callable[[str], bool]
    domains: tuple[str, ...]
    sections: tuple[SectionType, ...] = DEFAULT_SECTIONS


# Evaluated top to bottom; the first matching rule decides the intent.
RULES: tuple[HeuristicRule, ...] = (
    HeuristicRule(
        "supreme_court_position",
        _is_supreme_court_position,
        ("court",),
        (SectionType.COURT_REASONING,),
    ),
    HeuristicRule(
        "procedural_deadlines",
        _is_procedural_deadline,
        ("court", "npa"),
        (
            SectionType.COURT_REASONING,
            SectionType.DECISION,
            SectionType.LAW_REFERENCES,
        ),
    ),
    HeuristicRule(
        "admissibility_and_formal_requirements",
        _is_admissibility,
        ("court", "npa"),
        (
            SectionType.COURT_REASONING,
            SectionType.DECISION,
            SectionType.LAW_REFERENCES,
        ),
    ),
    HeuristicRule(
        "jurisdiction_and_competence",
        _is_jurisdiction,
        ("court", "npa"),
        (SectionType.COURT_REASONING, SectionType.LAW_REFERENCES),
    ),
    HeuristicRule(
        "evidence_and_standards",
        _is_evidence,
        ("court", "npa"),
        (SectionType.FACTS, SectionType.COURT_REASONING),
    ),
    HeuristicRule(
        "interim_measures",
        _is_interim_measures,
        ("court", "npa"),
        (SectionType.COURT_REASONING, SectionType.LAW_REFERENCES),
    ),
    HeuristicRule(
        "amounts_and_costs",
        _is_amounts_and_costs,
        ("court", "npa"),
        (SectionType.AMOUNTS, SectionType.COURT_REASONING),
    ),
    HeuristicRule(
        "two_sided_practice",
        _is_two_sided_practice,
        ("court",),
        (SectionType.COURT_REASONING, SectionType.DECISION),
    ),
    HeuristicRule(
        "parliament_search",
        _is_parliament,
        ("parliament",),
        (SectionType.LAW_REFERENCES,),
    ),
    HeuristicRule(
        "registry_search",
        _is_registry,
        ("registry",),
        (SectionType.FACTS,),
    ),
    HeuristicRule("consumer_penalty_delay", _is_consumer_delay, ("court", "npa")),
    HeuristicRule("tax_dispute", _is_tax, ("court", "npa")),
    HeuristicRule("labor_dispute", _is_labor, ("court", "echr")),
)


def match_rule(question: str) -> HeuristicRule | None:
    q = (question or "").lower()
    for rule in RULES:
        if rule.predicate(q):
            return rule
    return None


def _extract_procedure_code(q: str) -> str | None:
    code = None
    for pattern, value in _PROCEDURE_CODE_PATTERNS:
        if pattern.search(q):
            code = value
    return code


def _extract_desired_output(q: str) -> str | None:
    desired = None
    for markers, value in _DESIRED_OUTPUT_MARKERS:
        if _has_any(q, *markers):
            desired = value
    return desired


def _extract_money_terms(q: str) -> dict[str, bool]:
    terms: dict[str, bool] = {}
    if _has_any(q, "пеня", "пені", "штраф"):
        terms["penalty"] = True
    if "інфляц" in q:
        terms["inflation"] = True
    if _has_any(q, "3%", "три відсотк", "три проц"):
        terms["three_percent"] = True
    if "судов" in q and "витрат" in q:
        terms["legal_fees"] = True
    return terms


def _extract_law_article(q: str) -> str | None:
    match = _LAW_ARTICLE.search(q)
    if not match:
        return None
    number, code = match.group(1), match.group(2)
    return f"{number} {code.upper()}" if code else number


def extract_slots(question: str) -> dict[str, Any]:
    q = (question or "").lower()
    slots: dict[str, Any] = {}

    procedure_code = _extract_procedure_code(q)
    if procedure_code:
        slots["procedure_code"] = procedure_code
    court_level = detect_court_level(_without_parliament(q))
    if court_level:
        slots["court_level"] = court_level
    desired_output = _extract_desired_output(q)
    if desired_output:
        slots["desired_output"] = desired_output
    money_terms = _extract_money_terms(q)
    if money_terms:
        slots["money_terms"] = money_terms
    law_article = _extract_law_article(q)
    if law_article:
        slots["law_article"] = law_article
    return slots


def classify_quick(question: str) -> Intent:
    """Keyword classification; never touches the network and never fails."""
    slots = extract_slots(question)
    rule = match_rule(question)

    payload: dict[str, Any] = {
        "intent": rule.name if rule else GENERAL_SEARCH,
        "confidence": settings.HEURISTIC_CONFIDENCE,
        "domains": list(rule.domains if rule else DEFAULT_DOMAINS),
        "required_entities": [],
        "sections": list(rule.sections if rule else DEFAULT_SECTIONS),
        "reasoning_budget": ReasoningBudget.QUICK,
    }
    if slots:
        payload["slots"] = slots
    logger.debug(f"Keyword rules classified query as {payload['intent']}")
    return sanitize(payload)
