from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

import httpx

ErrorCategory = Literal["validation", "auth", "network", "provider", "quota", "unknown"]

# Validation
PROVIDER_NOT_DETECTED = "PROVIDER_NOT_DETECTED"
MISSING_TARGET_MODEL = "MISSING_TARGET_MODEL"
INVALID_INPUT = "INVALID_INPUT"
# Auth
AUTH_FAILED = "AUTH_FAILED"
# Network
PROVIDER_TIMEOUT = "PROVIDER_TIMEOUT"
NETWORK_ERROR = "NETWORK_ERROR"
# Provider
RATE_LIMITED = "RATE_LIMITED"
PROVIDER_UNAVAILABLE = "PROVIDER_UNAVAILABLE"
PROVIDER_ERROR = "PROVIDER_ERROR"
STRICT_PROBE_FAILED = "STRICT_PROBE_FAILED"
TARGET_MODEL_UNAVAILABLE = "TARGET_MODEL_UNAVAILABLE"
# Quota (advisory only)
QUOTA_UNAVAILABLE = "QUOTA_UNAVAILABLE"
# Outer layer
INTERNAL_ERROR = "INTERNAL_ERROR"


@dataclass(frozen=True)
class CheckError:
    error_code: str
    category: ErrorCategory
    message: str
    retry_advice: str
    provider_status: str


def _default_retry_advice(category: ErrorCategory, error_code: str) -> str:
    if category == "validation":
        return "Check the input format and try again."
    if category == "auth":
        return "Confirm the API key is correct and has access to the target model."
    if category == "network":
        return "Check your network connection and try again."
    if error_code == QUOTA_UNAVAILABLE:
        return "The quota endpoint may not be exposed; check live usage in the provider console."
    return "Try again later; if it keeps failing, check the provider status and account permissions."


def build_check_error(
    *,
    error_code: str,
    category: ErrorCategory,
    message: str,
    provider_status: str | None = None,
    retry_advice: str | None = None,
) -> CheckError:
    return CheckError(
        error_code=error_code,
        category=category,
        message=message,
        retry_advice=(
            retry_advice
            if retry_advice is not None
            else _default_retry_advice(category, error_code)
        ),
        provider_status=provider_status or "unknown",
    )


def classify_http_error(
    *,
    status: int,
    provider_name: str,
    retry_advice: str | None = None,
) -> CheckError:
    """Map a non-2xx provider status to a check error.

    ``retry_advice`` replaces the per-kind default so callers can phrase the
    advice for their own context.
    """

    if status in {401, 403}:
        return build_check_error(
            error_code=AUTH_FAILED,
            category="auth",
            message=f"{provider_name} rejected the credentials; the API key may be invalid or lack permissions.",
            provider_status=f"http_{status}",
            retry_advice=retry_advice
            or "Check that the key is correct, not expired and allowed to use the model.",
        )

    if status == 429:
        return build_check_error(
            error_code=RATE_LIMITED,
            category="provider",
            message=f"{provider_name} returned a rate limit response.",
            provider_status="rate_limited",
            retry_advice=retry_advice
            or "Retry later, or review rate limit and quota policy in the provider console.",
        )

    if status >= 500:
        return build_check_error(
            error_code=PROVIDER_UNAVAILABLE,
            category="provider",
            message=f"{provider_name} is having service problems ({status}).",
            provider_status="degraded",
            retry_advice=retry_advice
            or "Retry later and watch the provider status page for incidents.",
        )

    return build_check_error(
        error_code=PROVIDER_ERROR,
        category="provider",
        message=f"{provider_name} returned an unexpected status code ({status}).",
        provider_status=f"http_{status}",
        retry_advice=retry_advice
        or "Retry later; if it keeps failing, check the provider API docs and account status.",
    )


def is_timeout_error(exc: BaseException) -> bool:
    return isinstance(exc, (httpx.TimeoutException, TimeoutError))


def classify_transport_error(
    exc: BaseException,
    *,
    retry_advice: str | None = None,
) -> CheckError:
    if is_timeout_error(exc):
        return build_check_error(
            error_code=PROVIDER_TIMEOUT,
            category="network",
            message="The check timed out; please try again later.",
            provider_status="timeout",
            retry_advice=retry_advice
            or "Retry later; if it keeps timing out, switch networks or check off-peak.",
        )

    return build_check_error(
        error_code=NETWORK_ERROR,
        category="network",
        message="The request to the provider API failed; check your network and retry.",
        provider_status="network_error",
        retry_advice=retry_advice
        or "Check the network connection and retry; see the provider status page if needed.",
    )


__all__ = [
    "AUTH_FAILED",
    "CheckError",
    "ErrorCategory",
    "INTERNAL_ERROR",
    "INVALID_INPUT",
    "MISSING_TARGET_MODEL",
    "NETWORK_ERROR",
    "PROVIDER_ERROR",
    "PROVIDER_NOT_DETECTED",
    "PROVIDER_TIMEOUT",
    "PROVIDER_UNAVAILABLE",
    "QUOTA_UNAVAILABLE",
    "RATE_LIMITED",
    "STRICT_PROBE_FAILED",
    "TARGET_MODEL_UNAVAILABLE",
    "build_check_error",
    "classify_http_error",
    "classify_transport_error",
    "is_timeout_error",
]
