"""Provider detection and API key verification.

The entry points are ``run_provider_check`` (the verdict for one key) and
``run_check_orchestration`` (verdict plus health score, next actions and
request metadata).
"""

from .detection import detect_provider_candidates, resolve_candidates
from .errors import CheckError, classify_http_error, classify_transport_error
from .orchestrator import run_check_orchestration
from .registry import Adapter, StrictProbeAttempt, get_adapter, list_adapters
from .results import ProviderRunResult
from .runner import run_provider_check
from .transport import HttpTransport, ProbeResponse, send_request

__all__ = [
    "Adapter",
    "CheckError",
    "HttpTransport",
    "ProbeResponse",
    "ProviderRunResult",
    "StrictProbeAttempt",
    "classify_http_error",
    "classify_transport_error",
    "detect_provider_candidates",
    "get_adapter",
    "list_adapters",
    "resolve_candidates",
    "run_check_orchestration",
    "run_provider_check",
    "send_request",
]
