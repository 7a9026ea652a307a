from .check import (
    CheckApiFailure,
    CheckApiMeta,
    CheckApiSuccess,
    CheckErrorRead,
    CheckRequest,
    CheckResultMeta,
    NormalizedCheckResult,
    ProviderDescriptor,
)

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
