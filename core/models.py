"""
Scan Models - Core value types passed between the probe engine and reporting.
"""

from collections.abc import Sequence
from dataclasses import dataclass, fields
from enum import Enum
from typing import Protocol, TypeVar

T = TypeVar("T")


class Severity(Enum):
    """Risk severity levels"""
    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"
    INFO = "info"

    @property
    def score(self) -> int:
        """Get numeric score for severity"""
        return {
            Severity.CRITICAL: 10,
            Severity.HIGH: 8,
            Severity.MEDIUM: 5,
            Severity.LOW: 2,
            Severity.INFO: 0,
        }[self]


class Strategy(Enum):
    """Origin mutation strategies, in execution order"""
    EXISTING_POLICY = "existing-policy"
    NULL_ORIGIN = "null-origin"
    REFLECTED_ORIGIN = "reflected-origin"
    SCHEME_ORIGIN = "scheme-origin"
    MANGLED_FRONT_ORIGIN = "mangled-front-origin"
    MANGLED_REAR_ORIGIN = "mangled-rear-origin"


@dataclass(frozen=True)
class OriginCandidate:
    """A single Origin header value produced for one target"""
    strategy: Strategy
    origin: str


@dataclass(frozen=True)
class CORSHeaderSet:
    """
    The six CORS response headers of one probe.

    A field is None when the header was missing or empty. Commas are
    stored as semicolons.
    """
    acao: str | None = None  # Access-Control-Allow-Origin
    acac: str | None = None  # Access-Control-Allow-Credentials
    acam: str | None = None  # Access-Control-Allow-Methods
    acah: str | None = None  # Access-Control-Allow-Headers
    acma: str | None = None  # Access-Control-Max-Age
    aceh: str | None = None  # Access-Control-Expose-Headers

    def has_any(self) -> bool:
        return any(getattr(self, f.name) for f in fields(self))

    def as_row(self) -> list[str]:
        """Header values in CSV column order, empty string for missing"""
        return [getattr(self, f.name) or "" for f in fields(self)]


@dataclass(frozen=True)
class ScanResult:
    """A probe whose response carried at least one CORS header"""
    url: str
    origin: str
    headers: CORSHeaderSet
    strategy: Strategy | None = None


class RandomSource(Protocol):
    """Anything that can pick an element from a sequence; random.Random fits"""

    def choice(self, seq: Sequence[T]) -> T:
        ...
