from __future__ import annotations

from typing import Annotated, List, Literal, Optional

from pydantic import BaseModel, Field, StringConstraints, field_validator

ProviderSelectorField = Literal["auto", "openai", "anthropic", "openrouter"]
AvailabilityField = Literal["available", "unavailable"]
QuotaStatusField = Literal["available", "unavailable", "unknown"]
ErrorCategoryField = Literal["validation", "auth", "network", "provider", "quota", "unknown"]


class CheckRequest(BaseModel):
    provider: ProviderSelectorField = "auto"
    api_key: Annotated[
        str,
        StringConstraints(strip_whitespace=True, min_length=8, max_length=256),
    ]
    strict_mode: bool = False
    target_model: Optional[str] = Field(default=None, max_length=256)

    @field_validator("target_model")
    @classmethod
    def _strip_target_model(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        return v.strip() or None


class CheckErrorRead(BaseModel):
    error_code: str
    category: ErrorCategoryField
    message: str
    retry_advice: str
    provider_status: str


class CheckResultMeta(BaseModel):
    request_id: str
    checked_at: str
    duration_ms: int = Field(ge=0)
    strict_mode: bool = False
    target_model: Optional[str] = None


class NormalizedCheckResult(BaseModel):
    provider: str
    availability: AvailabilityField
    models: List[str] = Field(default_factory=list)
    quota_status: QuotaStatusField
    errors: List[CheckErrorRead] = Field(default_factory=list)
    health_score: int = Field(ge=0, le=100)
    next_actions: List[str] = Field(default_factory=list)
    meta: CheckResultMeta


class CheckApiMeta(BaseModel):
    request_id: str


class CheckApiSuccess(BaseModel):
    ok: Literal[True] = True
    data: NormalizedCheckResult
    meta: CheckApiMeta


class CheckApiFailure(BaseModel):
    ok: Literal[False] = False
    error: CheckErrorRead
    meta: CheckApiMeta


class ProviderDescriptor(BaseModel):
    id: str
    label: str
    catalog_url: str
    strict_probes: List[str] = Field(default_factory=list)


__all__ = [
    "CheckApiFailure",
    "CheckApiMeta",
    "CheckApiSuccess",
    "CheckErrorRead",
    "CheckRequest",
    "CheckResultMeta",
    "NormalizedCheckResult",
    "ProviderDescriptor",
]
