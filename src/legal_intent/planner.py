"""
Query planning facade: classify, route and lower a legal question.

``QueryPlanner.plan`` runs the whole pipeline and returns the ordered
``(endpoint, params)`` requests a tool handler dispatches to the domain
adapters.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from legal_intent.config import Settings, settings
from legal_intent.intent.llm import classify_deep
from legal_intent.intent.rules import classify_quick
from legal_intent.intent.types import Intent, ReasoningBudget
from legal_intent.logging import get_logger
from legal_intent.models.adapter import CompletionService
from legal_intent.routing.optimizer import optimize_search_query
from legal_intent.routing.params import (
    QueryParams,
    build_query_params,
    court_level_filters,
    procedure_filters,
)
from legal_intent.routing.router import select_endpoints

logger = get_logger(__name__)


@dataclass
class DispatchRequest:
    endpoint: str
    params: QueryParams


@dataclass
class DispatchPlan:
    intent: Intent
    search_query: str
    requests: list[DispatchRequest] = field(default_factory=list)

    @property
    def endpoints(self) -> list[str]:
        return [r.endpoint for r in self.requests]


class QueryPlanner:
    def __init__(
        self,
        service: CompletionService | None = None,
        config: Settings | None = None,
    ):
        self.service = service
        self.settings = config or settings

    async def classify_intent(
        self, query: str, budget: ReasoningBudget | str | None = None
    ) -> Intent:
        tier = ReasoningBudget.parse(
            self.settings.DEFAULT_BUDGET if budget is None else budget
        )
        if tier is ReasoningBudget.QUICK:
            return classify_quick(query)
        return await classify_deep(query, tier, self.service)

    def select_endpoints(self, intent: Intent) -> list[str]:
        return select_endpoints(intent)

    def build_query_params(
        self, intent: Intent, search_text: str | None = None
    ) -> QueryParams:
        return build_query_params(intent, search_text)

    async def optimize_search_query(
        self,
        query: str,
        intent: Intent,
        budget: ReasoningBudget | str | None = None,
    ) -> str:
        tier = ReasoningBudget.parse(
            self.settings.DEFAULT_BUDGET if budget is None else budget
        )
        return await optimize_search_query(query, intent, tier, self.service)

    async def plan(
        self,
        query: str,
        budget: ReasoningBudget | str | None = None,
        search_text: str | None = None,
    ) -> DispatchPlan:
        tier = ReasoningBudget.parse(
            self.settings.DEFAULT_BUDGET if budget is None else budget
        )
        intent = await self.classify_intent(query, tier)
        if search_text is None:
            search_text = await self.optimize_search_query(query, intent, tier)

        requests: list[DispatchRequest] = []
        for endpoint in self.select_endpoints(intent):
            params = self.build_query_params(intent, search_text)
            if endpoint == "court":
                params.where.extend(court_level_filters(intent))
                params.where.extend(procedure_filters(intent))
            requests.append(DispatchRequest(endpoint=endpoint, params=params))

        logger.info(
            f"Planned {intent.intent} ({tier.value}) -> {[r.endpoint for r in requests]}"
        )
        return DispatchPlan(intent=intent, search_query=search_text, requests=requests)
