"""Completion-service contract and its OpenAI implementation."""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Protocol, runtime_checkable

from openai import AsyncOpenAI

from legal_intent.config import Settings, settings
from legal_intent.errors import CompletionError
from legal_intent.intent.types import ReasoningBudget
from legal_intent.logging import get_logger

logger = get_logger(__name__)

_JSON_MODE_PREFIXES: tuple[str, ...] = (
    "gpt-4o",
    "gpt-4.1",
    "gpt-4-turbo",
    "gpt-4-1106",
    "gpt-4-0125",
    "gpt-3.5-turbo-1106",
    "gpt-3.5-turbo-0125",
    "gpt-5",
)


@dataclass
class ChatMessage:
    role: str  # system | user | assistant
    content: str

    def to_dict(self) -> dict[str, str]:
        return {"role": self.role, "content": self.content}


@runtime_checkable
class CompletionService(Protocol):
    """The only outbound dependency of the intent core.

    Implementations own retries, key rotation, timeouts and cost accounting;
    any exception they raise is treated by callers as an upstream failure.
    """

    async def complete(
        self,
        messages: list[ChatMessage],
        response_format: str | None = None,
        *,
        budget: str = "standard",
        max_tokens: int | None = None,
        temperature: float | None = None,
    ) -> str: ...


def select_model(budget: str, config: Settings | None = None) -> str:
    """Pick the chat model for a reasoning budget; ``LLM_MODEL`` overrides all."""
    cfg = config or settings
    if cfg.LLM_MODEL:
        return cfg.LLM_MODEL
    models = {
        ReasoningBudget.QUICK: cfg.LLM_MODEL_QUICK,
        ReasoningBudget.STANDARD: cfg.LLM_MODEL_STANDARD,
        ReasoningBudget.DEEP: cfg.LLM_MODEL_DEEP,
    }
    return models[ReasoningBudget.parse(budget)]


def supports_json_mode(model: str) -> bool:
    return model.startswith(_JSON_MODE_PREFIXES)


class OpenAICompletionService:
    def __init__(self, config: Settings | None = None, client: AsyncOpenAI | None = None):
        self.settings = config or settings
        self.client = client or AsyncOpenAI(
            api_key=self.settings.OPENAI_API_KEY,
            base_url=self.settings.OPENAI_BASE_URL,
            organization=self.settings.OPENAI_ORG,
            max_retries=self.settings.LLM_MAX_RETRIES,
            timeout=self.settings.LLM_TIMEOUT,
        )

    async def complete(
        self,
        messages: list[ChatMessage],
        response_format: str | None = None,
        *,
        budget: str = "standard",
        max_tokens: int | None = None,
        temperature: float | None = None,
    ) -> str:
        model = select_model(budget, self.settings)
        kwargs: dict[str, Any] = {
            "model": model,
            "messages": [m.to_dict() for m in messages],
            "temperature": (
                self.settings.TEMPERATURE if temperature is None else temperature
            ),
        }
        if max_tokens is not None:
            kwargs["max_tokens"] = max_tokens
        if response_format == "json_object" and supports_json_mode(model):
            kwargs["response_format"] = {"type": "json_object"}

        logger.debug(f"Requesting completion from {model} (budget={budget})")
        resp = await self.client.chat.completions.create(**kwargs)
        if not resp.choices:
            raise CompletionError(f"{model} returned no choices")
        content = resp.choices[0].message.content
        if not content:
            raise CompletionError(f"{model} returned an empty message")
        return content


@lru_cache(maxsize=1)
def get_openai() -> OpenAICompletionService:
    return OpenAICompletionService()
