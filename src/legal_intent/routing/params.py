"""
Query parameters for the court-decision / legislation search APIs.

Lowers an Intent into the ``where`` / ``meta`` / paging shape those APIs
accept: time range filters on ``date_publ``, entity hints, full-text search
and a fixed newest-first ordering.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Any

from legal_intent.config import settings
from legal_intent.intent.slots import justice_kind
from legal_intent.intent.types import Intent, SectionType

DATE_FIELD = "date_publ"

_ANSWER_SECTIONS: tuple[SectionType, ...] = (
    SectionType.COURT_REASONING,
    SectionType.DECISION,
    SectionType.LAW_REFERENCES,
)


@dataclass
class QueryParams:
    where: list[dict[str, Any]] = field(default_factory=list)
    meta: dict[str, Any] = field(default_factory=dict)
    limit: int = 50
    offset: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "where": [dict(clause) for clause in self.where],
            "meta": dict(self.meta),
            "limit": self.limit,
            "offset": self.offset,
        }


def _iso(value: date | str) -> str:
    return value.isoformat() if isinstance(value, date) else str(value)


def build_query_params(intent: Intent, search_text: str | None = None) -> QueryParams:
    where: list[dict[str, Any]] = []
    meta: dict[str, Any] = {}

    if search_text:
        meta["search"] = search_text

    if intent.time_range is not None:
        where.append(
            {
                "field": DATE_FIELD,
                "operator": "$gte",
                "value": _iso(intent.time_range.date_from),
            }
        )
        where.append(
            {
                "field": DATE_FIELD,
                "operator": "$lte",
                "value": _iso(intent.time_range.date_to),
            }
        )

    if intent.required_entities:
        meta["search_entities"] = list(intent.required_entities)

    meta["order"] = {DATE_FIELD: "desc"}

    return QueryParams(where=where, meta=meta, limit=settings.DEFAULT_LIMIT, offset=0)


def court_level_filters(intent: Intent) -> list[dict[str, Any]]:
    """Restrict to cassation-instance documents when the Supreme Court is asked for.

    Chamber names are not appended to the search text: the full-text mode ANDs
    all terms and documents rarely mention every chamber.
    """
    level = intent.slots.court_level if intent.slots else None
    if level in ("SC", "GrandChamber"):
        return [{"field": "instance_code", "operator": "=", "value": 1}]
    return []


def procedure_filters(intent: Intent) -> list[dict[str, Any]]:
    kind = justice_kind(intent.slots.procedure_code) if intent.slots else None
    if kind is None:
        return []
    return [{"field": "justice_kind", "operator": "=", "value": kind}]


def pick_section_types(intent: Intent) -> list[SectionType]:
    """Sections to render for an answer: slot focus, then intent sections."""
    if intent.slots and intent.slots.section_focus:
        return list(intent.slots.section_focus)
    if intent.sections:
        return list(intent.sections)
    return list(_ANSWER_SECTIONS)
