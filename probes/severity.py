"""
Severity Analyzer
Turns a recorded CORS configuration into risk flags for reporting.
"""

from dataclasses import dataclass
from enum import Enum

from core.models import ScanResult, Severity, Strategy


class Flag(Enum):
    """Risk flags derived from a ScanResult; not mutually exclusive"""
    WILDCARD_ORIGIN = "wildcard-origin"
    NULL_ORIGIN_ACCEPTED = "null-origin-accepted"
    ORIGIN_REFLECTED = "origin-reflected"
    CRITICAL_WILDCARD_WITH_CREDENTIALS = "critical-wildcard-with-credentials"


@dataclass(frozen=True)
class FlagInfo:
    severity: Severity
    message: str


FLAG_INFO = {
    Flag.WILDCARD_ORIGIN: FlagInfo(
        Severity.MEDIUM, "Wildcard origin allows any domain"
    ),
    Flag.NULL_ORIGIN_ACCEPTED: FlagInfo(
        Severity.HIGH, "Null origin accepted - potential security risk"
    ),
    Flag.ORIGIN_REFLECTED: FlagInfo(
        Severity.INFO, "Origin reflection detected"
    ),
    Flag.CRITICAL_WILDCARD_WITH_CREDENTIALS: FlagInfo(
        Severity.CRITICAL, "Wildcard origin with credentials - major security flaw"
    ),
}


def is_reflected(result: ScanResult) -> bool:
    """
    True when the allowed origin is something other than the server's own
    host echoed back on the baseline probe.

    The comparison is an exact string match against the Origin value that
    was sent; no case folding or trailing-dot normalization.
    """
    acao = result.headers.acao
    if not acao or acao == "*":
        return False
    if acao != result.origin:
        return True
    return result.strategy is not Strategy.EXISTING_POLICY


def analyze(result: ScanResult) -> list[Flag]:
    """Return every flag that applies to the result"""
    acao = result.headers.acao
    acac = result.headers.acac
    flags = []

    if acao == "*":
        flags.append(Flag.WILDCARD_ORIGIN)
    if acao == "null":
        flags.append(Flag.NULL_ORIGIN_ACCEPTED)
    if is_reflected(result):
        flags.append(Flag.ORIGIN_REFLECTED)
    if acao == "*" and acac == "true":
        flags.append(Flag.CRITICAL_WILDCARD_WITH_CREDENTIALS)

    return flags


def highest_severity(flags: list[Flag]) -> Severity | None:
    """Most severe level among the flags, or None when there are none"""
    if not flags:
        return None
    return max((FLAG_INFO[f].severity for f in flags), key=lambda s: s.score)
