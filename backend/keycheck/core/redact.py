from __future__ import annotations

import re

_API_KEY_LIKE_RE = re.compile(r"sk-[A-Za-z0-9\-_]{8,}")


def mask_api_key(value: str) -> str:
    v = value or ""
    if not v:
        return ""
    if len(v) <= 8:
        return "****"
    return "*" * max(len(v) - 4, 4) + v[-4:]


def redact_text(text: str) -> str:
    """Replace anything that looks like a provider secret key with a placeholder."""

    return _API_KEY_LIKE_RE.sub("sk-****", text or "")


__all__ = ["mask_api_key", "redact_text"]
