from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Protocol, Tuple

import httpx

DEFAULT_TIMEOUT_SECONDS = 8.0


@dataclass(frozen=True)
class ProbeResponse:
    status_code: int
    headers: Dict[str, str] = field(default_factory=dict)
    json_body: Any = None
    # False when the body could not be decoded as JSON.
    body_parsed: bool = True

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "headers", {str(k).lower(): str(v) for k, v in self.headers.items()}
        )

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300

    def has_header(self, name: str) -> bool:
        return name.lower() in self.headers


class HttpTransport(Protocol):
    async def __call__(
        self,
        url: str,
        *,
        method: str,
        headers: Mapping[str, str],
        body: Optional[Dict[str, Any]] = None,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> ProbeResponse: ...


def _parse_json(resp: httpx.Response) -> Tuple[Any, bool]:
    try:
        return resp.json(), True
    except ValueError:
        return None, False


async def send_request(
    url: str,
    *,
    method: str,
    headers: Mapping[str, str],
    body: Optional[Dict[str, Any]] = None,
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
) -> ProbeResponse:
    """Perform one provider call that is abandoned once the deadline elapses.

    Raises ``TimeoutError``/``httpx.TimeoutException`` on deadline expiry and
    other ``httpx`` errors on transport failure. The client (and its pooled
    connection) is closed on every exit path.
    """

    async with httpx.AsyncClient(timeout=timeout_seconds, follow_redirects=True) as client:
        async with asyncio.timeout(timeout_seconds):
            resp = await client.request(method, url, headers=dict(headers), json=body)
            payload, parsed = _parse_json(resp)

    return ProbeResponse(
        status_code=resp.status_code,
        headers=dict(resp.headers.items()),
        json_body=payload,
        body_parsed=parsed,
    )


__all__ = ["DEFAULT_TIMEOUT_SECONDS", "HttpTransport", "ProbeResponse", "send_request"]
