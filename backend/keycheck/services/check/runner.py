from __future__ import annotations

import logging
from typing import Optional

from keycheck.core.redact import mask_api_key

from .catalog import run_catalog_probe
from .detection import resolve_candidates
from .errors import (
    AUTH_FAILED,
    MISSING_TARGET_MODEL,
    PROVIDER_NOT_DETECTED,
    TARGET_MODEL_UNAVAILABLE,
    build_check_error,
)
from .registry import ProviderSelector, get_adapter
from .results import DEFAULT_MODEL_LIMIT, CheckMode, ProviderRunResult, unavailable_result
from .strict import run_strict_probe
from .transport import DEFAULT_TIMEOUT_SECONDS, HttpTransport

logger = logging.getLogger(__name__)


def _not_detected(provider: str, *, mode: CheckMode, target_model: Optional[str]) -> ProviderRunResult:
    return unavailable_result(
        provider,
        build_check_error(
            error_code=PROVIDER_NOT_DETECTED,
            category="validation",
            message="Could not detect the provider automatically; select a provider and retry.",
            provider_status="unsupported_provider",
            retry_advice="Choose OpenRouter, OpenAI or Anthropic explicitly and run the check again.",
        ),
        mode=mode,
        target_model=target_model,
    )


def _missing_target_model(provider: str) -> ProviderRunResult:
    return unavailable_result(
        provider,
        build_check_error(
            error_code=MISSING_TARGET_MODEL,
            category="validation",
            message="Strict mode needs a target model to invoke.",
            provider_status="missing_target_model",
            retry_advice="Enter the model id you want to verify, or turn off strict mode.",
        ),
        mode="strict_target",
        target_model=None,
    )


async def run_provider_check(
    provider: ProviderSelector | str,
    api_key: str,
    *,
    strict_mode: bool = False,
    target_model: Optional[str] = None,
    transport: HttpTransport | None = None,
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
    model_limit: int = DEFAULT_MODEL_LIMIT,
) -> ProviderRunResult:
    """Verify a key against its candidate providers, one at a time.

    The first available verdict wins. An auth rejection (or, in strict mode,
    an unentitled model) only says the guess was wrong, so the next candidate
    is tried; any other failure is returned as-is. When every candidate fails
    the most specific evidence is surfaced: auth failure, then strict
    unavailability, then the first failure seen.
    """

    key = (api_key or "").strip()
    mode: CheckMode = "strict_target" if strict_mode else "catalog"
    target = ((target_model or "").strip() or None) if strict_mode else None
    candidates = resolve_candidates(provider, key)

    if strict_mode and target is None:
        return _missing_target_model(candidates[0] if candidates else "unknown")

    if not candidates:
        return _not_detected("unknown", mode=mode, target_model=target)

    first_failure: Optional[ProviderRunResult] = None
    auth_failure: Optional[ProviderRunResult] = None
    strict_unavailable: Optional[ProviderRunResult] = None

    for candidate in candidates:
        adapter = get_adapter(candidate)
        if adapter is None:
            return _not_detected(candidate, mode=mode, target_model=target)

        if target is not None:
            result = await run_strict_probe(
                adapter,
                key,
                target,
                transport=transport,
                timeout_seconds=timeout_seconds,
            )
        else:
            result = await run_catalog_probe(
                adapter,
                key,
                transport=transport,
                timeout_seconds=timeout_seconds,
                model_limit=model_limit,
            )

        logger.info(
            "Provider candidate checked.",
            extra={
                "extra": {
                    "provider": candidate,
                    "mode": mode,
                    "key": mask_api_key(key),
                    "availability": result.availability,
                    "error_codes": [e.error_code for e in result.errors],
                }
            },
        )

        if result.available:
            return result

        if first_failure is None:
            first_failure = result

        if result.has_error(AUTH_FAILED):
            auth_failure = result
            continue

        if target is not None and result.has_error(TARGET_MODEL_UNAVAILABLE):
            strict_unavailable = result
            continue

        return result

    if auth_failure is not None:
        return auth_failure
    if strict_unavailable is not None:
        return strict_unavailable
    assert first_failure is not None
    return first_failure


__all__ = ["run_provider_check"]
