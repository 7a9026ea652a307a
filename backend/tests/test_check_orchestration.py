from __future__ import annotations

import asyncio

from keycheck.core.config import Settings
from keycheck.schemas.check import CheckRequest
from keycheck.services.check.orchestrator import run_check_orchestration
from keycheck.services.check.transport import ProbeResponse


class RoutedTransport:
    def __init__(self, routes: dict) -> None:
        self._routes = routes
        self.timeouts: list[float] = []

    async def __call__(self, url, *, method, headers, body=None, timeout_seconds=8.0):  # noqa: ANN001
        self.timeouts.append(timeout_seconds)
        return self._routes[url]


ROUTES = {
    "https://openrouter.ai/api/v1/models": ProbeResponse(401),
    "https://api.openai.com/v1/models": ProbeResponse(
        200, json_body={"data": [{"id": "gpt-4o"}, {"id": "gpt-4o-mini"}]}
    ),
}


def _orchestrate(req: CheckRequest, transport: RoutedTransport, settings: Settings | None = None):
    return asyncio.run(
        run_check_orchestration(req, request_id="req-1", transport=transport, settings=settings)
    )


def test_orchestration_builds_normalized_result() -> None:
    req = CheckRequest(api_key="sk-1234567890abcdef")
    out = _orchestrate(req, RoutedTransport(ROUTES))

    assert out.provider == "openai"
    assert out.availability == "available"
    assert out.models == ["gpt-4o", "gpt-4o-mini"]
    assert out.quota_status == "unknown"
    assert [e.error_code for e in out.errors] == ["QUOTA_UNAVAILABLE"]
    assert out.health_score == 88
    assert out.next_actions[0] == "Try model first: gpt-4o"
    assert out.meta.request_id == "req-1"
    assert out.meta.strict_mode is False


def test_orchestration_is_repeatable_apart_from_timing() -> None:
    req = CheckRequest(api_key="sk-1234567890abcdef")
    first = _orchestrate(req, RoutedTransport(ROUTES)).model_dump()
    second = _orchestrate(req, RoutedTransport(ROUTES)).model_dump()

    for out in (first, second):
        out["meta"].pop("checked_at")
        out["meta"].pop("duration_ms")
    assert first == second


def test_orchestration_uses_configured_timeout() -> None:
    transport = RoutedTransport(ROUTES)
    _orchestrate(
        CheckRequest(api_key="sk-proj-1234567890"),
        transport,
        settings=Settings(probe_timeout_seconds=3.0),
    )
    assert transport.timeouts == [3.0]


def test_orchestration_drops_target_model_outside_strict_mode() -> None:
    req = CheckRequest(api_key="sk-proj-1234567890", target_model="gpt-4o")
    out = _orchestrate(req, RoutedTransport(ROUTES))
    assert out.meta.target_model is None
    assert out.meta.strict_mode is False
