from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType

from legal_intent.intent.types import Intent

INTENT_ENDPOINTS: Mapping[str, tuple[str, ...]] = MappingProxyType(
    {
        "consumer_penalty_delay": ("court", "npa"),
        "tax_dispute": ("court", "npa"),
        "labor_dispute": ("court", "echr"),
        "property_dispute": ("court",),
        "general_search": ("court", "npa", "echr"),
        # Task-based intents for court/procedure questions
        "supreme_court_position": ("court",),
        "procedural_deadlines": ("court", "npa"),
        "admissibility_and_formal_requirements": ("court", "npa"),
        "jurisdiction_and_competence": ("court", "npa"),
        "evidence_and_standards": ("court", "npa"),
        "interim_measures": ("court", "npa"),
        "amounts_and_costs": ("court", "npa"),
        "two_sided_practice": ("court",),
        "parliament_search": ("parliament",),
        "registry_search": ("registry",),
    }
)

DOMAIN_ENDPOINTS: Mapping[str, str] = MappingProxyType(
    {
        "court": "court",
        "npa": "npa",
        "legislation": "npa",
        "echr": "echr",
        "parliament": "parliament",
        "registry": "registry",
    }
)

DEFAULT_ENDPOINTS: tuple[str, ...] = ("court",)


def select_endpoints(intent: Intent) -> list[str]:
    """Ordered endpoints to query; the intent table wins over ``intent.domains``."""
    mapped = INTENT_ENDPOINTS.get(intent.intent)
    if mapped:
        return list(mapped)

    endpoints: list[str] = []
    for domain in intent.domains:
        endpoint = DOMAIN_ENDPOINTS.get(str(domain).strip().lower())
        if endpoint and endpoint not in endpoints:
            endpoints.append(endpoint)
    return endpoints or list(DEFAULT_ENDPOINTS)
