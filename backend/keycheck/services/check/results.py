from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Literal, Optional, Tuple

from .errors import QUOTA_UNAVAILABLE, CheckError, build_check_error
from .registry import RATE_LIMIT_HINT_HEADERS
from .transport import ProbeResponse

Availability = Literal["available", "unavailable"]
QuotaStatus = Literal["available", "unavailable", "unknown"]
CheckMode = Literal["catalog", "strict_target"]

DEFAULT_MODEL_LIMIT = 50


@dataclass(frozen=True)
class ProviderRunResult:
    provider: str  # ProviderId | "unknown"
    availability: Availability
    models: Tuple[str, ...] = ()
    quota_status: QuotaStatus = "unknown"
    errors: Tuple[CheckError, ...] = ()
    mode: CheckMode = "catalog"
    target_model: Optional[str] = None

    @property
    def available(self) -> bool:
        return self.availability == "available"

    def has_error(self, error_code: str) -> bool:
        return any(e.error_code == error_code for e in self.errors)


def unavailable_result(
    provider: str,
    error: CheckError,
    *,
    mode: CheckMode = "catalog",
    target_model: Optional[str] = None,
) -> ProviderRunResult:
    return ProviderRunResult(
        provider=provider,
        availability="unavailable",
        models=(),
        quota_status="unknown",
        errors=(error,),
        mode=mode,
        target_model=target_model,
    )


def extract_model_ids(payload: Any, *, limit: int = DEFAULT_MODEL_LIMIT) -> List[str]:
    """Collect string ids from a ``{"data": [{"id": ...}, ...]}`` catalog body."""

    data = payload.get("data") if isinstance(payload, dict) else None
    if not isinstance(data, list):
        return []

    out: List[str] = []
    for row in data:
        if len(out) >= limit:
            break
        if not isinstance(row, dict):
            continue
        mid = row.get("id")
        if isinstance(mid, str) and mid:
            out.append(mid)
    return out


def resolve_quota_status(resp: ProbeResponse) -> QuotaStatus:
    if any(resp.has_header(name) for name in RATE_LIMIT_HINT_HEADERS):
        return "available"
    return "unknown"


def quota_advisories(quota_status: QuotaStatus) -> Tuple[CheckError, ...]:
    if quota_status == "available":
        return ()
    return (
        build_check_error(
            error_code=QUOTA_UNAVAILABLE,
            category="quota",
            message=(
                "Quota information is not available (the provider may not expose it "
                "or this key lacks permission)."
            ),
            provider_status="quota_unknown",
            retry_advice=(
                "The availability check completed; retry later or check live usage "
                "in the provider console."
            ),
        ),
    )


__all__ = [
    "Availability",
    "CheckMode",
    "DEFAULT_MODEL_LIMIT",
    "ProviderRunResult",
    "QuotaStatus",
    "extract_model_ids",
    "quota_advisories",
    "resolve_quota_status",
    "unavailable_result",
]
