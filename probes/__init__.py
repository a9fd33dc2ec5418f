"""CORS Scanner Probe Modules"""

from .classifier import CORS_HEADERS, classify, extract_cors_headers, has_any
from .origins import (
    HANDLERS,
    RandomSource,
    build_origin,
    origin_candidates,
    random_label,
)
from .severity import FLAG_INFO, Flag, FlagInfo, analyze, highest_severity, is_reflected

__all__ = [
    # Origin mutation
    "HANDLERS",
    "RandomSource",
    "build_origin",
    "origin_candidates",
    "random_label",
    # Classification
    "CORS_HEADERS",
    "classify",
    "extract_cors_headers",
    "has_any",
    # Severity
    "Flag",
    "FlagInfo",
    "FLAG_INFO",
    "analyze",
    "highest_severity",
    "is_reflected",
]
