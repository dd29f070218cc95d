from types import SimpleNamespace
from typing import Any

import pytest
from legal_intent.config import Settings
from legal_intent.errors import CompletionError, InvalidBudgetError
from legal_intent.models.adapter import (
    ChatMessage,
    CompletionService,
    OpenAICompletionService,
    select_model,
    supports_json_mode,
)


class _FakeCompletions:
    def __init__(self, content: str | None):
        self.content = content
        self.kwargs: dict[str, Any] = {}

    async def create(self, **kwargs: Any) -> SimpleNamespace:
        self.kwargs = kwargs
        message = SimpleNamespace(content=self.content)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


def _client(content: str | None) -> SimpleNamespace:
    return SimpleNamespace(chat=SimpleNamespace(completions=_FakeCompletions(content)))


def _settings(**overrides: Any) -> Settings:
    values = {"LLM_MODEL": None, **overrides}
    return Settings(_env_file=None, **values)


def test_model_follows_budget() -> None:
    config = _settings()

    assert select_model("quick", config) == config.LLM_MODEL_QUICK
    assert select_model("deep", config) == config.LLM_MODEL_DEEP


def test_single_model_override() -> None:
    assert select_model("deep", _settings(LLM_MODEL="gpt-4.1")) == "gpt-4.1"


def test_unknown_budget_is_rejected() -> None:
    with pytest.raises(InvalidBudgetError):
        select_model("huge", _settings())


def test_json_mode_support() -> None:
    assert supports_json_mode("gpt-4o-mini")
    assert not supports_json_mode("gpt-4")


@pytest.mark.asyncio
async def test_complete_sends_json_mode_and_returns_content() -> None:
    client = _client('{"intent": "tax_dispute"}')
    service = OpenAICompletionService(_settings(), client=client)  # type: ignore[arg-type]

    text = await service.complete(
        [ChatMessage(role="user", content="ПДВ")],
        "json_object",
        budget="deep",
        max_tokens=100,
    )

    sent = client.chat.completions.kwargs
    assert text == '{"intent": "tax_dispute"}'
    assert sent["model"] == "gpt-4o"
    assert sent["response_format"] == {"type": "json_object"}
    assert sent["max_tokens"] == 100
    assert sent["messages"] == [{"role": "user", "content": "ПДВ"}]
    assert isinstance(service, CompletionService)


@pytest.mark.asyncio
async def test_empty_message_raises() -> None:
    service = OpenAICompletionService(_settings(), client=_client(None))  # type: ignore[arg-type]

    with pytest.raises(CompletionError):
        await service.complete([ChatMessage(role="user", content="x")])
