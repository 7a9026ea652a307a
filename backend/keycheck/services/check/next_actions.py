from __future__ import annotations

from typing import List, Sequence

from .errors import CheckError
from .results import Availability, QuotaStatus

MAX_NEXT_ACTIONS = 5

QUOTA_LOOKUP_ACTION = "Quota information is not available; check live usage in the provider console."
READY_ACTION = "Check passed; you can use this API key in your application."


def build_next_actions(
    *,
    availability: Availability,
    models: Sequence[str],
    quota_status: QuotaStatus,
    errors: Sequence[CheckError],
) -> List[str]:
    actions: List[str] = []

    if availability == "available" and len(models) > 0:
        actions.append(f"Try model first: {models[0]}")

    if quota_status != "available":
        actions.append(QUOTA_LOOKUP_ACTION)

    retry_advice = next((e.retry_advice for e in errors if e.retry_advice), None)
    if retry_advice:
        actions.append(retry_advice)

    if not actions:
        actions.append(READY_ACTION)

    return list(dict.fromkeys(actions))[:MAX_NEXT_ACTIONS]


__all__ = ["MAX_NEXT_ACTIONS", "build_next_actions"]
