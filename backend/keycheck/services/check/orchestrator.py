from __future__ import annotations

import time
from dataclasses import asdict
from datetime import UTC, datetime

from keycheck.core.config import Settings, get_settings
from keycheck.schemas.check import (
    CheckErrorRead,
    CheckRequest,
    CheckResultMeta,
    NormalizedCheckResult,
)

from .next_actions import build_next_actions
from .runner import run_provider_check
from .score import calculate_health_score
from .transport import HttpTransport


def _iso_now() -> str:
    return datetime.now(UTC).isoformat().replace("+00:00", "Z")


async def run_check_orchestration(
    check_request: CheckRequest,
    *,
    request_id: str,
    transport: HttpTransport | None = None,
    settings: Settings | None = None,
) -> NormalizedCheckResult:
    """Run one key check and derive the externally visible verdict."""

    cfg = settings or get_settings()
    started = time.perf_counter()

    result = await run_provider_check(
        check_request.provider,
        check_request.api_key,
        strict_mode=check_request.strict_mode,
        target_model=check_request.target_model if check_request.strict_mode else None,
        transport=transport,
        timeout_seconds=cfg.probe_timeout_seconds,
        model_limit=cfg.catalog_model_limit,
    )

    health_score = calculate_health_score(
        availability=result.availability,
        models=result.models,
        quota_status=result.quota_status,
        errors=result.errors,
    )
    next_actions = build_next_actions(
        availability=result.availability,
        models=result.models,
        quota_status=result.quota_status,
        errors=result.errors,
    )

    return NormalizedCheckResult(
        provider=result.provider,
        availability=result.availability,
        models=list(result.models),
        quota_status=result.quota_status,
        errors=[CheckErrorRead(**asdict(e)) for e in result.errors],
        health_score=health_score,
        next_actions=next_actions,
        meta=CheckResultMeta(
            request_id=request_id,
            checked_at=_iso_now(),
            duration_ms=int((time.perf_counter() - started) * 1000),
            strict_mode=result.mode == "strict_target",
            target_model=result.target_model,
        ),
    )


__all__ = ["run_check_orchestration"]
