from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Literal, Optional, Tuple

ProviderId = Literal["openai", "anthropic", "openrouter"]
ProviderSelector = Literal["auto", "openai", "anthropic", "openrouter"]

PROVIDER_IDS: Tuple[ProviderId, ...] = ("openai", "anthropic", "openrouter")

ANTHROPIC_VERSION = "2023-06-01"
PROBE_PROMPT = "ping"

# Any of these on a provider response means usage limits are visible to the key.
RATE_LIMIT_HINT_HEADERS: Tuple[str, ...] = (
    "x-ratelimit-limit-requests",
    "x-ratelimit-remaining-requests",
    "x-ratelimit-limit-tokens",
    "anthropic-ratelimit-requests-limit",
    "anthropic-ratelimit-tokens-limit",
)


@dataclass(frozen=True)
class StrictProbeAttempt:
    name: str
    url: str
    build_body: Callable[[str], Dict[str, Any]]


@dataclass(frozen=True)
class Adapter:
    provider_id: ProviderId
    label: str
    catalog_url: str
    build_headers: Callable[[str], Dict[str, str]]
    strict_probes: Tuple[StrictProbeAttempt, ...]


def _bearer_headers(api_key: str) -> Dict[str, str]:
    return {"Authorization": f"Bearer {api_key}"}


def _anthropic_headers(api_key: str) -> Dict[str, str]:
    return {"x-api-key": api_key, "anthropic-version": ANTHROPIC_VERSION}


def _chat_completion_body(model: str) -> Dict[str, Any]:
    return {
        "model": model,
        "messages": [{"role": "user", "content": PROBE_PROMPT}],
        "max_tokens": 1,
    }


def _responses_body(model: str) -> Dict[str, Any]:
    # The responses API rejects output budgets below 16 tokens.
    return {"model": model, "input": PROBE_PROMPT, "max_output_tokens": 16}


def _anthropic_message_body(model: str) -> Dict[str, Any]:
    return {
        "model": model,
        "max_tokens": 1,
        "messages": [{"role": "user", "content": PROBE_PROMPT}],
    }


_ADAPTERS: Dict[str, Adapter] = {
    "openai": Adapter(
        provider_id="openai",
        label="OpenAI",
        catalog_url="https://api.openai.com/v1/models",
        build_headers=_bearer_headers,
        strict_probes=(
            StrictProbeAttempt(
                name="chat_completions",
                url="https://api.openai.com/v1/chat/completions",
                build_body=_chat_completion_body,
            ),
            StrictProbeAttempt(
                name="responses",
                url="https://api.openai.com/v1/responses",
                build_body=_responses_body,
            ),
        ),
    ),
    "anthropic": Adapter(
        provider_id="anthropic",
        label="Anthropic",
        catalog_url="https://api.anthropic.com/v1/models",
        build_headers=_anthropic_headers,
        strict_probes=(
            StrictProbeAttempt(
                name="messages",
                url="https://api.anthropic.com/v1/messages",
                build_body=_anthropic_message_body,
            ),
        ),
    ),
    "openrouter": Adapter(
        provider_id="openrouter",
        label="OpenRouter",
        catalog_url="https://openrouter.ai/api/v1/models",
        build_headers=_bearer_headers,
        strict_probes=(
            StrictProbeAttempt(
                name="chat_completions",
                url="https://openrouter.ai/api/v1/chat/completions",
                build_body=_chat_completion_body,
            ),
            StrictProbeAttempt(
                name="responses",
                url="https://openrouter.ai/api/v1/responses",
                build_body=_responses_body,
            ),
        ),
    ),
}


def list_adapters() -> List[Adapter]:
    return list(_ADAPTERS.values())


def get_adapter(provider_id: str) -> Optional[Adapter]:
    key = (provider_id or "").strip().lower()
    return _ADAPTERS.get(key)


__all__ = [
    "Adapter",
    "PROVIDER_IDS",
    "ProviderId",
    "ProviderSelector",
    "RATE_LIMIT_HINT_HEADERS",
    "StrictProbeAttempt",
    "get_adapter",
    "list_adapters",
]
