from __future__ import annotations

import logging
from typing import List
from uuid import uuid4

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from keycheck.core.config import Settings, get_settings
from keycheck.core.logging import log_with_correlation
from keycheck.core.rate_limit import check_simple_rate_limit
from keycheck.core.redact import mask_api_key, redact_text
from keycheck.schemas.check import (
    CheckApiFailure,
    CheckApiMeta,
    CheckApiSuccess,
    CheckErrorRead,
    CheckRequest,
    ProviderDescriptor,
)
from keycheck.services.check import list_adapters, run_check_orchestration
from keycheck.services.check.errors import (
    INTERNAL_ERROR,
    INVALID_INPUT,
    RATE_LIMITED,
    CheckError,
    build_check_error,
)

# ruff: noqa: B008  # FastAPI dependency injection pattern

router = APIRouter()
logger = logging.getLogger(__name__)

_NO_STORE = {"Cache-Control": "no-store"}


def _request_id(request: Request) -> str:
    return getattr(request.state, "correlation_id", None) or uuid4().hex


def _client_identity(request: Request, settings: Settings) -> str:
    if settings.trust_forwarded_for:
        forwarded = request.headers.get("x-forwarded-for") or ""
        first = forwarded.split(",")[0].strip()
        if first:
            return first
    if request.client is not None and request.client.host:
        return request.client.host
    return "unknown"


def _failure(status_code: int, error: CheckError, request_id: str) -> JSONResponse:
    body = CheckApiFailure(
        error=CheckErrorRead(
            error_code=error.error_code,
            category=error.category,
            message=error.message,
            retry_advice=error.retry_advice,
            provider_status=error.provider_status,
        ),
        meta=CheckApiMeta(request_id=request_id),
    )
    return JSONResponse(status_code=status_code, content=body.model_dump(), headers=_NO_STORE)


@router.get("/providers", response_model=List[ProviderDescriptor])
def list_check_providers() -> List[ProviderDescriptor]:
    return [
        ProviderDescriptor(
            id=a.provider_id,
            label=a.label,
            catalog_url=a.catalog_url,
            strict_probes=[p.name for p in a.strict_probes],
        )
        for a in list_adapters()
    ]


@router.post("")
async def check_api_key(
    request: Request,
    settings: Settings = Depends(get_settings),
) -> JSONResponse:
    request_id = _request_id(request)
    identity = _client_identity(request, settings)

    decision = check_simple_rate_limit(
        identity,
        max_requests=settings.rate_limit_max_requests,
        window_seconds=settings.rate_limit_window_seconds,
    )
    if not decision.allowed:
        log_with_correlation(logger, request, logging.WARNING, "Check rate limited.", client=identity)
        return _failure(
            429,
            build_check_error(
                error_code=RATE_LIMITED,
                category="provider",
                message="Too many requests; please try again later.",
                provider_status="rate_limited",
                retry_advice="Wait about a minute before retrying.",
            ),
            request_id,
        )

    try:
        payload = await request.json()
        check_request = CheckRequest.model_validate(payload)
    except (ValueError, ValidationError):
        return _failure(
            400,
            build_check_error(
                error_code=INVALID_INPUT,
                category="validation",
                message="The input is malformed; check the provider and API key.",
                provider_status="invalid_input",
                retry_advice="Make sure a provider is selected and the full API key is pasted, then retry.",
            ),
            request_id,
        )

    try:
        result = await run_check_orchestration(
            check_request,
            request_id=request_id,
            settings=settings,
        )
    except Exception as exc:
        logger.error(
            "Check failed unexpectedly.",
            extra={"extra": {"correlation_id": request_id, "error": redact_text(str(exc))}},
        )
        return _failure(
            500,
            build_check_error(
                error_code=INTERNAL_ERROR,
                category="unknown",
                message="The service is temporarily unavailable; please retry later.",
                provider_status="internal_error",
                retry_advice="Retry later; if it keeps failing, check the deployment logs.",
            ),
            request_id,
        )

    log_with_correlation(
        logger,
        request,
        logging.INFO,
        "Check completed.",
        provider=result.provider,
        key=mask_api_key(check_request.api_key),
        availability=result.availability,
        health_score=result.health_score,
        duration_ms=result.meta.duration_ms,
    )

    body = CheckApiSuccess(data=result, meta=CheckApiMeta(request_id=request_id))
    return JSONResponse(status_code=200, content=body.model_dump(), headers=_NO_STORE)


__all__ = ["router"]
