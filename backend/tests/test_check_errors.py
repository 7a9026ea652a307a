from __future__ import annotations

import httpx
import pytest

from keycheck.services.check.errors import (
    build_check_error,
    classify_http_error,
    classify_transport_error,
)


@pytest.mark.parametrize(
    "status,code,category,provider_status",
    [
        (401, "AUTH_FAILED", "auth", "http_401"),
        (403, "AUTH_FAILED", "auth", "http_403"),
        (429, "RATE_LIMITED", "provider", "rate_limited"),
        (500, "PROVIDER_UNAVAILABLE", "provider", "degraded"),
        (503, "PROVIDER_UNAVAILABLE", "provider", "degraded"),
        (404, "PROVIDER_ERROR", "provider", "http_404"),
        (418, "PROVIDER_ERROR", "provider", "http_418"),
    ],
)
def test_classify_http_error(status: int, code: str, category: str, provider_status: str) -> None:
    err = classify_http_error(status=status, provider_name="OpenAI")
    assert err.error_code == code
    assert err.category == category
    assert err.provider_status == provider_status
    assert "OpenAI" in err.message
    assert err.retry_advice


def test_classify_http_error_accepts_retry_advice_override() -> None:
    err = classify_http_error(status=429, provider_name="Anthropic", retry_advice="custom advice")
    assert err.error_code == "RATE_LIMITED"
    assert err.retry_advice == "custom advice"


def test_classify_transport_timeouts() -> None:
    for exc in (httpx.ReadTimeout("slow"), httpx.ConnectTimeout("slow"), TimeoutError()):
        err = classify_transport_error(exc)
        assert err.error_code == "PROVIDER_TIMEOUT"
        assert err.category == "network"
        assert err.provider_status == "timeout"


def test_classify_other_transport_failures_as_network_error() -> None:
    for exc in (httpx.ConnectError("refused"), RuntimeError("boom"), ValueError("bad json")):
        err = classify_transport_error(exc)
        assert err.error_code == "NETWORK_ERROR"
        assert err.category == "network"
        assert err.provider_status == "network_error"


def test_build_check_error_fills_defaults() -> None:
    err = build_check_error(error_code="X", category="validation", message="m")
    assert err.provider_status == "unknown"
    assert err.retry_advice

    quota = build_check_error(error_code="QUOTA_UNAVAILABLE", category="quota", message="m")
    assert "console" in quota.retry_advice


def test_check_error_is_immutable() -> None:
    err = build_check_error(error_code="X", category="auth", message="m")
    with pytest.raises(AttributeError):
        err.message = "changed"  # type: ignore[misc]
