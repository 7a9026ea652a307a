"""Prove a key can invoke one named model with a minimal real request.

Providers expose different invocation surfaces per account and tier, so each
adapter lists several probe shapes. A 400/404/422 only says that one shape did
not fit; any other answer settles the verdict.
"""

from __future__ import annotations

import logging
from typing import Optional

from keycheck.core.redact import mask_api_key, redact_text

from .errors import (
    STRICT_PROBE_FAILED,
    TARGET_MODEL_UNAVAILABLE,
    CheckError,
    build_check_error,
    classify_http_error,
    classify_transport_error,
)
from .registry import Adapter
from .results import (
    ProviderRunResult,
    quota_advisories,
    resolve_quota_status,
    unavailable_result,
)
from .transport import DEFAULT_TIMEOUT_SECONDS, HttpTransport, ProbeResponse, send_request

logger = logging.getLogger(__name__)

INCONCLUSIVE_STATUSES = frozenset({400, 404, 422})

_AUTH_ADVICE = "Confirm the key is valid and entitled to call the target model."
_THROTTLE_ADVICE = "The provider throttled or failed the invocation; retry the strict check later."
_TRANSPORT_ADVICE = "The invocation probe did not complete; check the network and retry the strict check."
_UNAVAILABLE_ADVICE = (
    "Check the model id spelling and whether this account or tier is entitled to the model."
)
_PROBE_FAILED_ADVICE = "Retry later; if it keeps failing, run a catalog check to confirm the key itself works."


def _success(adapter: Adapter, target_model: str, resp: ProbeResponse) -> ProviderRunResult:
    quota_status = resolve_quota_status(resp)
    return ProviderRunResult(
        provider=adapter.provider_id,
        availability="available",
        models=(target_model,),
        quota_status=quota_status,
        errors=quota_advisories(quota_status),
        mode="strict_target",
        target_model=target_model,
    )


def _failure(adapter: Adapter, target_model: str, error: CheckError) -> ProviderRunResult:
    return unavailable_result(
        adapter.provider_id,
        error,
        mode="strict_target",
        target_model=target_model,
    )


def _terminal_http_failure(adapter: Adapter, target_model: str, status: int) -> ProviderRunResult:
    if status in {401, 403}:
        error = classify_http_error(
            status=status,
            provider_name=adapter.label,
            retry_advice=_AUTH_ADVICE,
        )
    elif status == 429 or status >= 500:
        error = classify_http_error(
            status=status,
            provider_name=adapter.label,
            retry_advice=_THROTTLE_ADVICE,
        )
    else:
        error = build_check_error(
            error_code=STRICT_PROBE_FAILED,
            category="provider",
            message=f"{adapter.label} rejected the invocation probe for {target_model} ({status}).",
            provider_status=f"http_{status}",
            retry_advice=_PROBE_FAILED_ADVICE,
        )
    return _failure(adapter, target_model, error)


async def run_strict_probe(
    adapter: Adapter,
    api_key: str,
    target_model: str,
    *,
    transport: HttpTransport | None = None,
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
) -> ProviderRunResult:
    call = transport or send_request
    headers = {"Content-Type": "application/json", **adapter.build_headers(api_key)}
    last_inconclusive: Optional[int] = None

    for probe in adapter.strict_probes:
        try:
            resp = await call(
                probe.url,
                method="POST",
                headers=headers,
                body=probe.build_body(target_model),
                timeout_seconds=timeout_seconds,
            )
        except Exception as exc:
            logger.warning(
                "Strict probe transport failure.",
                extra={
                    "extra": {
                        "provider": adapter.provider_id,
                        "probe": probe.name,
                        "key": mask_api_key(api_key),
                        "error": redact_text(str(exc)),
                    }
                },
            )
            return _failure(
                adapter,
                target_model,
                classify_transport_error(exc, retry_advice=_TRANSPORT_ADVICE),
            )

        if resp.ok:
            return _success(adapter, target_model, resp)

        if resp.status_code in INCONCLUSIVE_STATUSES:
            logger.info(
                "Strict probe shape inconclusive.",
                extra={
                    "extra": {
                        "provider": adapter.provider_id,
                        "probe": probe.name,
                        "status_code": resp.status_code,
                    }
                },
            )
            last_inconclusive = resp.status_code
            continue

        return _terminal_http_failure(adapter, target_model, resp.status_code)

    provider_status = (
        f"http_{last_inconclusive}" if last_inconclusive is not None else "target_model_unavailable"
    )
    return _failure(
        adapter,
        target_model,
        build_check_error(
            error_code=TARGET_MODEL_UNAVAILABLE,
            category="provider",
            message=f"{adapter.label} could not invoke model {target_model} with this key.",
            provider_status=provider_status,
            retry_advice=_UNAVAILABLE_ADVICE,
        ),
    )


__all__ = ["INCONCLUSIVE_STATUSES", "run_strict_probe"]
