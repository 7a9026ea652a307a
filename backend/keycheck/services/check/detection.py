"""Guess which provider issued a key from the shape of its prefix."""

from __future__ import annotations

from typing import List, Tuple

from .registry import ProviderId, ProviderSelector

# Ordered most specific first; the first matching rule wins. A bare "sk-" key
# is shared by OpenRouter and legacy OpenAI keys, so both are tried.
_PREFIX_RULES: Tuple[Tuple[Tuple[str, ...], Tuple[ProviderId, ...]], ...] = (
    (("sk-ant-",), ("anthropic",)),
    (("sk-or-v1-", "sk-or-"), ("openrouter",)),
    (("sk-proj-", "sk-live-"), ("openai",)),
    (("sk-",), ("openrouter", "openai")),
)


def detect_provider_candidates(api_key: str) -> List[ProviderId]:
    normalized = (api_key or "").strip()
    for prefixes, candidates in _PREFIX_RULES:
        if normalized.startswith(prefixes):
            return list(candidates)
    return []


def resolve_candidates(provider: ProviderSelector | str, api_key: str) -> List[ProviderId]:
    """Return the providers to try, in order, for a selector.

    An explicit provider is always a single forced candidate; ``auto`` defers
    to prefix detection.
    """

    if provider == "auto":
        return detect_provider_candidates(api_key)
    return [provider]  # type: ignore[list-item]


__all__ = ["detect_provider_candidates", "resolve_candidates"]
