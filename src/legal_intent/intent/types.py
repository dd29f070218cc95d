from __future__ import annotations

from dataclasses import dataclass, fields
from datetime import date
from enum import Enum
from typing import Any

from legal_intent.errors import InvalidBudgetError


class SectionType(str, Enum):
    FACTS = "FACTS"
    CLAIMS = "CLAIMS"
    LAW_REFERENCES = "LAW_REFERENCES"
    COURT_REASONING = "COURT_REASONING"
    DECISION = "DECISION"
    AMOUNTS = "AMOUNTS"


DEFAULT_SECTIONS: tuple[SectionType, ...] = (
    SectionType.COURT_REASONING,
    SectionType.DECISION,
)


class ReasoningBudget(str, Enum):
    QUICK = "quick"
    STANDARD = "standard"
    DEEP = "deep"

    @classmethod
    def parse(cls, value: Any) -> ReasoningBudget:
        """Return the budget for ``value`` or raise ``InvalidBudgetError``."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        raise InvalidBudgetError(value)


COURT_LEVELS: tuple[str, ...] = (
    "first_instance",
    "appeal",
    "cassation",
    "SC",
    "GrandChamber",
)

PROCEDURE_CODES: tuple[str, ...] = ("ЦПК", "ГПК", "КАС", "КПК")

DESIRED_OUTPUTS: tuple[str, ...] = (
    "thesis",
    "checklist",
    "table",
    "collection",
    "comparison",
)

KNOWN_DOMAINS: tuple[str, ...] = ("court", "npa", "echr", "parliament", "registry")

DEFAULT_DOMAINS: tuple[str, ...] = ("court",)

GENERAL_SEARCH = "general_search"


def _as_iso(value: date | str) -> str:
    if isinstance(value, date):
        return value.isoformat()
    return str(value)


@dataclass(frozen=True)
class TimeRange:
    date_from: date
    date_to: date

    def to_dict(self) -> dict[str, str]:
        return {"from": _as_iso(self.date_from), "to": _as_iso(self.date_to)}


@dataclass(frozen=True)
class MoneyTerms:
    """Monetary claims mentioned in a query; a flag is set only when asserted."""

    penalty: bool = False
    inflation: bool = False
    three_percent: bool = False
    legal_fees: bool = False

    def is_empty(self) -> bool:
        return not any(getattr(self, f.name) for f in fields(self))

    def to_dict(self) -> dict[str, bool]:
        return {f.name: True for f in fields(self) if getattr(self, f.name)}


@dataclass(frozen=True)
class IntentSlots:
    procedure_code: str | None = None
    court_level: str | None = None
    case_category: str | None = None
    law_article: str | None = None
    section_focus: tuple[SectionType, ...] | None = None
    money_terms: MoneyTerms | None = None
    desired_output: str | None = None

    def is_empty(self) -> bool:
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, MoneyTerms):
                if not value.is_empty():
                    return False
            elif value not in (None, (), ""):
                return False
        return True

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if value in (None, (), ""):
                continue
            if f.name == "section_focus":
                out[f.name] = [section.value for section in value]
            elif f.name == "money_terms":
                if not value.is_empty():
                    out[f.name] = value.to_dict()
            else:
                out[f.name] = value
        return out


@dataclass(frozen=True)
class Intent:
    intent: str = GENERAL_SEARCH
    confidence: float = 0.0  # 0..1
    domains: tuple[str, ...] = DEFAULT_DOMAINS
    required_entities: tuple[str, ...] = ()
    sections: tuple[SectionType, ...] = DEFAULT_SECTIONS
    time_range: TimeRange | None = None
    reasoning_budget: ReasoningBudget = ReasoningBudget.QUICK
    slots: IntentSlots | None = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "intent": self.intent,
            "confidence": self.confidence,
            "domains": list(self.domains),
            "required_entities": list(self.required_entities),
            "sections": [SectionType(s).value for s in self.sections],
            "reasoning_budget": ReasoningBudget(self.reasoning_budget).value,
        }
        if self.time_range is not None:
            out["time_range"] = self.time_range.to_dict()
        if self.slots is not None:
            out["slots"] = self.slots.to_dict()
        return out
