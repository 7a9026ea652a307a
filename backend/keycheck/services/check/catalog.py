from __future__ import annotations

import logging

from keycheck.core.redact import mask_api_key, redact_text

from .errors import classify_http_error, classify_transport_error
from .registry import Adapter
from .results import (
    DEFAULT_MODEL_LIMIT,
    ProviderRunResult,
    extract_model_ids,
    quota_advisories,
    resolve_quota_status,
    unavailable_result,
)
from .transport import DEFAULT_TIMEOUT_SECONDS, HttpTransport, send_request

logger = logging.getLogger(__name__)


async def run_catalog_probe(
    adapter: Adapter,
    api_key: str,
    *,
    transport: HttpTransport | None = None,
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
    model_limit: int = DEFAULT_MODEL_LIMIT,
) -> ProviderRunResult:
    """List the provider's models with the key; a 2xx means the key authenticates."""

    call = transport or send_request
    try:
        resp = await call(
            adapter.catalog_url,
            method="GET",
            headers=adapter.build_headers(api_key),
            timeout_seconds=timeout_seconds,
        )
        if resp.ok and not resp.body_parsed:
            raise ValueError("catalog response body is not JSON")
    except Exception as exc:
        logger.warning(
            "Catalog probe failed before a usable response.",
            extra={
                "extra": {
                    "provider": adapter.provider_id,
                    "key": mask_api_key(api_key),
                    "error": redact_text(str(exc)),
                }
            },
        )
        return unavailable_result(adapter.provider_id, classify_transport_error(exc))

    if not resp.ok:
        return unavailable_result(
            adapter.provider_id,
            classify_http_error(status=resp.status_code, provider_name=adapter.label),
        )

    quota_status = resolve_quota_status(resp)
    return ProviderRunResult(
        provider=adapter.provider_id,
        availability="available",
        models=tuple(extract_model_ids(resp.json_body, limit=model_limit)),
        quota_status=quota_status,
        errors=quota_advisories(quota_status),
        mode="catalog",
    )


__all__ = ["run_catalog_probe"]
