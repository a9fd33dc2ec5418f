"""
Result Sink - Thread-safe, append-only store for scan results.
"""

import threading
from collections.abc import Callable, Iterator
from typing import Protocol, runtime_checkable

from .errors import SinkClosedError
from .models import ScanResult


@runtime_checkable
class ResultSink(Protocol):
    """Anything the dispatcher can append results to"""

    def append(self, result: ScanResult) -> None:
        ...


class MemorySink:
    """
    In-memory result sink owned by the caller.

    Appends from concurrent workers are serialized by a lock. Once frozen
    the sink is read-only and further appends raise SinkClosedError.
    """

    def __init__(self, on_append: Callable[[ScanResult], None] | None = None):
        self._results: list[ScanResult] = []
        self._lock = threading.Lock()
        self._frozen = False
        self._on_append = on_append

    def append(self, result: ScanResult) -> None:
        with self._lock:
            if self._frozen:
                raise SinkClosedError("result sink is frozen")
            self._results.append(result)
        if self._on_append:
            self._on_append(result)

    def freeze(self) -> tuple[ScanResult, ...]:
        """Stop accepting results and return them"""
        with self._lock:
            self._frozen = True
            return tuple(self._results)

    @property
    def frozen(self) -> bool:
        return self._frozen

    @property
    def results(self) -> tuple[ScanResult, ...]:
        with self._lock:
            return tuple(self._results)

    def __len__(self) -> int:
        with self._lock:
            return len(self._results)

    def __iter__(self) -> Iterator[ScanResult]:
        return iter(self.results)
