from datetime import date

from legal_intent.intent.types import Intent, IntentSlots, SectionType, TimeRange
from legal_intent.routing.params import (
    build_query_params,
    court_level_filters,
    pick_section_types,
    procedure_filters,
)


def _intent_with_time_range(start: str, end: str) -> Intent:
    return Intent(
        time_range=TimeRange(date.fromisoformat(start), date.fromisoformat(end))
    )


def test_time_range_lowers_to_two_date_clauses() -> None:
    params = build_query_params(_intent_with_time_range("2023-01-01", "2023-12-31"))

    assert params.where == [
        {"field": "date_publ", "operator": "$gte", "value": "2023-01-01"},
        {"field": "date_publ", "operator": "$lte", "value": "2023-12-31"},
    ]
    assert params.meta == {"order": {"date_publ": "desc"}}
    assert "search" not in params.meta


def test_search_text_and_entities() -> None:
    intent = Intent(required_entities=("seller", "consumer"))

    params = build_query_params(intent, "пеня прострочення доставки")

    assert params.where == []
    assert params.meta["search"] == "пеня прострочення доставки"
    assert params.meta["search_entities"] == ["seller", "consumer"]
    assert params.meta["order"] == {"date_publ": "desc"}
    assert params.limit == 50
    assert params.offset == 0


def test_paging_is_overridable_after_build() -> None:
    params = build_query_params(Intent())
    params.limit, params.offset = 10, 20

    assert params.to_dict()["limit"] == 10
    assert params.to_dict()["offset"] == 20


def test_supreme_court_levels_filter_on_instance_code() -> None:
    for level in ("SC", "GrandChamber"):
        intent = Intent(slots=IntentSlots(court_level=level))
        assert court_level_filters(intent) == [
            {"field": "instance_code", "operator": "=", "value": 1}
        ]

    assert court_level_filters(Intent(slots=IntentSlots(court_level="appeal"))) == []
    assert court_level_filters(Intent()) == []


def test_procedure_code_filters_on_justice_kind() -> None:
    intent = Intent(slots=IntentSlots(procedure_code="ГПК"))

    assert procedure_filters(intent) == [
        {"field": "justice_kind", "operator": "=", "value": 3}
    ]
    assert procedure_filters(Intent()) == []


def test_section_focus_takes_priority_for_rendering() -> None:
    intent = Intent(
        sections=(SectionType.FACTS,),
        slots=IntentSlots(section_focus=(SectionType.AMOUNTS,)),
    )

    assert pick_section_types(intent) == [SectionType.AMOUNTS]
    assert pick_section_types(Intent(sections=(SectionType.FACTS,))) == [SectionType.FACTS]
