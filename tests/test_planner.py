import pytest
from legal_intent.errors import InvalidBudgetError
from legal_intent.intent.rules import classify_quick
from legal_intent.planner import QueryPlanner

SC_QUESTION = "Яка позиція Верховного Суду щодо поновлення строку на апеляційне оскарження?"


@pytest.mark.asyncio
async def test_quick_plan_is_offline(fake_service) -> None:
    service = fake_service(reply="{}")
    planner = QueryPlanner(service=service)

    plan = await planner.plan(SC_QUESTION, "quick")

    assert service.call_count == 0
    assert plan.intent == classify_quick(SC_QUESTION)
    assert plan.search_query == SC_QUESTION
    assert plan.endpoints == ["court"]
    court = plan.requests[0].params
    assert court.meta["search"] == SC_QUESTION
    assert {"field": "instance_code", "operator": "=", "value": 1} in court.where


@pytest.mark.asyncio
async def test_standard_plan_uses_model_for_both_steps(fake_service) -> None:
    service = fake_service(
        reply='{"intent": "tax_dispute", "domains": ["court", "npa"],'
        ' "slots": {"procedure_code": "КАС"}, "search_query": "донарахування ПДВ"}'
    )
    planner = QueryPlanner(service=service)

    plan = await planner.plan("Спір з податковою щодо донарахування ПДВ", "standard")

    assert service.call_count == 2
    assert plan.intent.intent == "tax_dispute"
    assert plan.search_query == "донарахування ПДВ"
    assert plan.endpoints == ["court", "npa"]
    court, npa = plan.requests
    assert {"field": "justice_kind", "operator": "=", "value": 4} in court.params.where
    assert npa.params.where == []
    assert npa.params.meta["search"] == "донарахування ПДВ"


@pytest.mark.asyncio
async def test_failing_model_degrades_to_keywords(failing_service) -> None:
    planner = QueryPlanner(service=failing_service)

    plan = await planner.plan(SC_QUESTION, "deep")

    assert plan.intent == classify_quick(SC_QUESTION)
    assert plan.search_query == SC_QUESTION
    assert failing_service.call_count == 2


@pytest.mark.asyncio
async def test_explicit_search_text_skips_optimizer(fake_service) -> None:
    service = fake_service(reply='{"intent": "general_search"}')
    planner = QueryPlanner(service=service)

    plan = await planner.plan("Розірвання договору оренди", "standard", search_text="оренда")

    assert service.call_count == 1
    assert plan.endpoints == ["court", "npa", "echr"]
    assert all(r.params.meta["search"] == "оренда" for r in plan.requests)


@pytest.mark.asyncio
async def test_unknown_budget_is_a_caller_error(fake_service) -> None:
    planner = QueryPlanner(service=fake_service())

    with pytest.raises(InvalidBudgetError):
        await planner.plan(SC_QUESTION, "ultra")
    with pytest.raises(InvalidBudgetError):
        await planner.classify_intent(SC_QUESTION, "ultra")


@pytest.mark.asyncio
async def test_empty_budget_is_not_replaced_by_default(fake_service) -> None:
    service = fake_service()
    planner = QueryPlanner(service=service)

    with pytest.raises(InvalidBudgetError):
        await planner.plan(SC_QUESTION, "")
    with pytest.raises(InvalidBudgetError):
        await planner.optimize_search_query(SC_QUESTION, classify_quick(SC_QUESTION), "")
    assert service.call_count == 0
