"""Coerce classifier output into a well-formed ``Intent``.

Model output is treated as an untyped bag; this module is the only place
where enum membership and the Intent invariants are enforced. ``sanitize``
is total and idempotent: ``sanitize(sanitize(x)) == sanitize(x)``.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from dataclasses import fields
from datetime import date, datetime
from typing import Any

from .slots import (
    normalize_court_level,
    normalize_desired_output,
    normalize_money_terms,
    normalize_procedure_code,
    normalize_sections,
    normalize_text_slot,
)
from .types import (
    DEFAULT_DOMAINS,
    DEFAULT_SECTIONS,
    GENERAL_SEARCH,
    Intent,
    IntentSlots,
    ReasoningBudget,
    TimeRange,
)

_RELATIVE_RANGE = re.compile(r"last\s+(\d+)\s+(year|month)s?")


def _dedup(seq: Iterable[str]) -> list[str]:
    seen: set[str] = set()
    out: list[str] = []
    for item in seq:
        if item in seen:
            continue
        seen.add(item)
        out.append(item)
    return out


def _coerce_strings(values: Any) -> list[str]:
    if isinstance(values, str):
        values = [values]
    if not isinstance(values, Iterable) or isinstance(values, Mapping):
        return []
    out: list[str] = []
    for item in values:
        if item is None or isinstance(item, (dict, list, tuple)):
            continue
        text = str(item).strip()
        if text:
            out.append(text)
    return out


def _clamp(value: Any) -> float:
    if isinstance(value, bool):
        return 0.0
    try:
        return max(0.0, min(1.0, float(value)))
    except (TypeError, ValueError):
        return 0.0


def _parse_date(value: Any) -> date | None:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return None
    try:
        return date.fromisoformat(value.strip()[:10])
    except ValueError:
        return None


def _shift_months(day: date, months: int) -> date:
    month_index = day.year * 12 + (day.month - 1) - months
    year, month = divmod(month_index, 12)
    month += 1
    # clamp the day for short months
    for candidate in (day.day, 30, 29, 28):
        try:
            return date(year, month, candidate)
        except ValueError:
            continue
    return date(year, month, 28)


def _coerce_time_range(value: Any, today: date | None = None) -> TimeRange | None:
    if isinstance(value, TimeRange):
        value = value.to_dict()
    if isinstance(value, Mapping):
        start = _parse_date(value.get("from", value.get("date_from")))
        end = _parse_date(value.get("to", value.get("date_to")))
        if start is None or end is None:
            return None
        return TimeRange(date_from=start, date_to=end)
    if isinstance(value, str):
        match = _RELATIVE_RANGE.search(value.strip().lower())
        if not match:
            return None
        amount = int(match.group(1))
        months = amount * 12 if match.group(2) == "year" else amount
        end = today or date.today()
        return TimeRange(date_from=_shift_months(end, months), date_to=end)
    return None


def _coerce_budget(value: Any) -> ReasoningBudget:
    try:
        return ReasoningBudget.parse(value)
    except ValueError:
        return ReasoningBudget.STANDARD


def sanitize_slots(raw: Any) -> IntentSlots | None:
    """Normalize a slot bag; an empty result is reported as ``None``."""
    if isinstance(raw, IntentSlots):
        # attribute values may be unvalidated, so skip to_dict()
        raw = {f.name: getattr(raw, f.name) for f in fields(raw)}
    if not isinstance(raw, Mapping):
        return None

    section_focus = normalize_sections(raw.get("section_focus"))
    slots = IntentSlots(
        procedure_code=normalize_procedure_code(raw.get("procedure_code")),
        court_level=normalize_court_level(raw.get("court_level")),
        case_category=normalize_text_slot(raw.get("case_category")),
        law_article=normalize_text_slot(raw.get("law_article")),
        section_focus=section_focus or None,
        money_terms=normalize_money_terms(raw.get("money_terms")),
        desired_output=normalize_desired_output(raw.get("desired_output")),
    )
    return None if slots.is_empty() else slots


def sanitize(raw: Mapping[str, Any] | Intent) -> Intent:
    """Return a well-formed Intent built from classifier output."""
    payload: Mapping[str, Any]
    if isinstance(raw, Intent):
        payload = {f.name: getattr(raw, f.name) for f in fields(raw)}
    elif isinstance(raw, Mapping):
        payload = raw
    else:
        payload = {}

    intent_name = normalize_text_slot(payload.get("intent")) or GENERAL_SEARCH

    sections = normalize_sections(payload.get("sections"))
    if not sections:
        sections = DEFAULT_SECTIONS

    domains = tuple(_dedup(d.lower() for d in _coerce_strings(payload.get("domains"))))
    if not domains:
        domains = DEFAULT_DOMAINS

    return Intent(
        intent=intent_name,
        confidence=_clamp(payload.get("confidence", 0.0)),
        domains=domains,
        required_entities=tuple(_coerce_strings(payload.get("required_entities"))),
        sections=sections,
        time_range=_coerce_time_range(payload.get("time_range")),
        reasoning_budget=_coerce_budget(payload.get("reasoning_budget")),
        slots=sanitize_slots(payload.get("slots")),
    )
