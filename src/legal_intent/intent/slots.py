"""Canonicalization of free-form slot values into the closed vocabularies.

Every function here is pure and returns ``None`` (or an empty result) for
values it does not recognize, so callers can drop them instead of failing.
The same court-level marker table serves the keyword classifier, which scans
the raw question, and the sanitizer, which cleans model output.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from dataclasses import fields
from types import MappingProxyType
from typing import Any

from .types import COURT_LEVELS, MoneyTerms, SectionType

# Ordered: the first matching tier wins.
_COURT_LEVEL_MARKERS: tuple[tuple[str, re.Pattern[str]], ...] = (
    (
        "GrandChamber",
        re.compile(r"велик\w*\s+палат|\bвп\s*вс\b|grand[\s_]*chamber"),
    ),
    (
        "SC",
        re.compile(
            r"верховн\w*(?!\w|\s+рад)"
            r"|\bвс\b|\bsc\b|supreme"
            r"|\b(?:кцс|кгс|ккс)\b|\bкас\s+вс\b"
            r"|касаційн\w*\s+(?:цивільн|господарськ|адміністративн|кримінальн)\w*\s+суд"
            r"|cassation\s+(?:civil|commercial|administrative|criminal)\s+court"
        ),
    ),
    ("cassation", re.compile(r"касаці|cassation")),
    ("appeal", re.compile(r"апеляці|appeal|appellate")),
    (
        "first_instance",
        re.compile(r"перш\w*\s+інстанц|first[\s_]*instance"),
    ),
)

_PROCEDURE_CODE_ALIASES: Mapping[str, str] = MappingProxyType(
    {
        "цпк": "ЦПК",
        "cpc": "ЦПК",
        "гпк": "ГПК",
        "gpc": "ГПК",
        "epc": "ГПК",
        "кас": "КАС",
        "cac": "КАС",
        "кпк": "КПК",
        "crpc": "КПК",
    }
)

_PROCEDURE_CODE_SHORT: Mapping[str, str] = MappingProxyType(
    {"ЦПК": "cpc", "ГПК": "gpc", "КАС": "cac", "КПК": "crpc"}
)

# justice_kind values of the court-decisions API
_JUSTICE_KIND: Mapping[str, int] = MappingProxyType(
    {"ЦПК": 1, "КПК": 2, "ГПК": 3, "КАС": 4}
)

_DESIRED_OUTPUT_ALIASES: Mapping[str, str] = MappingProxyType(
    {
        "теза": "thesis",
        "тези": "thesis",
        "thesis": "thesis",
        "чеклист": "checklist",
        "чек-лист": "checklist",
        "checklist": "checklist",
        "таблиця": "table",
        "таблиці": "table",
        "table": "table",
        "підбірка": "collection",
        "підбірку": "collection",
        "collection": "collection",
        "порівняння": "comparison",
        "comparison": "comparison",
    }
)

_TRUTHY_STRINGS = frozenset({"true", "yes", "1"})


def normalize_section(value: Any) -> SectionType | None:
    if isinstance(value, SectionType):
        return value
    if not isinstance(value, str):
        return None
    key = value.strip().upper()
    if key in SectionType.__members__:
        return SectionType[key]
    return None


def normalize_sections(values: Any) -> tuple[SectionType, ...]:
    """Keep the recognized section names of ``values`` in order."""
    if isinstance(values, (str, SectionType)):
        values = [values]
    if not isinstance(values, Iterable):
        return ()
    out: list[SectionType] = []
    for item in values:
        section = normalize_section(item)
        if section is not None:
            out.append(section)
    return tuple(out)


def detect_court_level(text: str) -> str | None:
    """Return the highest-priority court tier mentioned anywhere in ``text``."""
    lowered = (text or "").lower()
    for level, pattern in _COURT_LEVEL_MARKERS:
        if pattern.search(lowered):
            return level
    return None


def normalize_court_level(value: Any) -> str | None:
    if not isinstance(value, str):
        return None
    text = value.strip()
    if text in COURT_LEVELS:
        return text
    return detect_court_level(text)


def normalize_procedure_code(value: Any) -> str | None:
    if not isinstance(value, str):
        return None
    return _PROCEDURE_CODE_ALIASES.get(value.strip().lower())


def procedure_code_short(code: str | None) -> str | None:
    """Latin short form (cpc|gpc|cac|crpc) of a procedure code."""
    canonical = normalize_procedure_code(code)
    return _PROCEDURE_CODE_SHORT.get(canonical) if canonical else None


def justice_kind(code: str | None) -> int | None:
    canonical = normalize_procedure_code(code)
    return _JUSTICE_KIND.get(canonical) if canonical else None


def normalize_desired_output(value: Any) -> str | None:
    if not isinstance(value, str):
        return None
    return _DESIRED_OUTPUT_ALIASES.get(value.strip().lower())


def _asserted(value: Any) -> bool:
    if value is True:
        return True
    return isinstance(value, str) and value.strip().lower() in _TRUTHY_STRINGS


def normalize_money_terms(value: Any) -> MoneyTerms | None:
    """Accept a flag mapping or a list of flag names; ``None`` when nothing is set."""
    if isinstance(value, MoneyTerms):
        value = {f.name: getattr(value, f.name) for f in fields(value)}
    if isinstance(value, Mapping):
        terms = MoneyTerms(
            penalty=_asserted(value.get("penalty")),
            inflation=_asserted(value.get("inflation")),
            three_percent=_asserted(value.get("three_percent")),
            legal_fees=_asserted(value.get("legal_fees")),
        )
    elif isinstance(value, (list, tuple)):
        names = {str(item).strip().lower() for item in value}
        terms = MoneyTerms(
            penalty="penalty" in names,
            inflation="inflation" in names,
            three_percent="three_percent" in names,
            legal_fees="legal_fees" in names,
        )
    else:
        return None
    return None if terms.is_empty() else terms


def normalize_text_slot(value: Any) -> str | None:
    if value is None or isinstance(value, (bool, dict, list, tuple)):
        return None
    text = re.sub(r"\s+", " ", str(value)).strip()
    return text or None
