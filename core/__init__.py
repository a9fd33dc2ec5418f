"""
CORS Scanner Core Module
Probe client, result sink, worker pool, and shared types.
"""

from .errors import (
    ConfigurationError,
    NetworkError,
    ScannerError,
    SinkClosedError,
    TargetParseError,
)
from .http_client import USER_AGENTS, HTTPResponse, ProbeClient, cookie_header, parse_cookie_string
from .models import (
    CORSHeaderSet,
    OriginCandidate,
    RandomSource,
    ScanResult,
    Severity,
    Strategy,
)
from .output import (
    error,
    info,
    severity_style,
    success,
    warn,
)
from .progress import ScanProgress
from .sink import MemorySink, ResultSink
from .worker_pool import WorkerPool

__all__ = [
    # Errors
    "ScannerError",
    "ConfigurationError",
    "TargetParseError",
    "NetworkError",
    "SinkClosedError",
    # HTTP Client
    "ProbeClient",
    "HTTPResponse",
    "USER_AGENTS",
    "cookie_header",
    "parse_cookie_string",
    # Models
    "CORSHeaderSet",
    "OriginCandidate",
    "RandomSource",
    "ScanResult",
    "Severity",
    "Strategy",
    # Sink
    "ResultSink",
    "MemorySink",
    # Worker Pool
    "WorkerPool",
    # Output
    "info",
    "success",
    "warn",
    "error",
    "severity_style",
    # Progress
    "ScanProgress",
]
