from __future__ import annotations

from typing import Sequence

from .errors import PROVIDER_TIMEOUT, CheckError
from .results import Availability, QuotaStatus

AUTH_SCORE_CAP = 20
TIMEOUT_PENALTY = 10


def calculate_health_score(
    *,
    availability: Availability,
    models: Sequence[str],
    quota_status: QuotaStatus,
    errors: Sequence[CheckError],
) -> int:
    score = 0

    if availability == "available":
        score += 50

    if len(models) > 0:
        score += 30

    if quota_status == "available":
        score += 20
    elif quota_status == "unknown":
        score += 8

    # An auth failure never reads as healthy, whatever else was observed.
    if any(e.category == "auth" for e in errors):
        score = min(score, AUTH_SCORE_CAP)

    if any(e.error_code == PROVIDER_TIMEOUT for e in errors):
        score = max(score - TIMEOUT_PENALTY, 0)

    return max(0, min(100, score))


__all__ = ["calculate_health_score"]
