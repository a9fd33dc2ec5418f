"""
Scan Dispatcher
Fans targets out to a fixed pool of workers and runs every origin probe.
"""

import asyncio
import random
import time
from collections.abc import Callable, Sequence
from enum import Enum

from config import ScanConfig
from probes.classifier import classify
from probes.origins import origin_candidates
from utils.logger import get_logger, log_scan_complete, log_scan_start

from .errors import ConfigurationError, NetworkError, ScannerError
from .http_client import ProbeClient
from .models import RandomSource, ScanResult
from .sink import MemorySink, ResultSink
from .worker_pool import WorkerPool

logger = get_logger(__name__)


class ScanState(Enum):
    IDLE = "idle"
    RUNNING = "running"
    DONE = "done"


class ScanDispatcher:
    """
    Runs all origin strategies against every target.

    Each target is handled by one worker, which sends its probes one after
    another. Results with at least one CORS header go to the sink.
    """

    def __init__(
        self,
        config: ScanConfig,
        sink: ResultSink,
        client: ProbeClient | None = None,
        rng: RandomSource | None = None,
        on_target_done: Callable[[str], None] | None = None,
    ):
        self.config = config
        self.sink = sink
        self.rng = rng or random.Random()
        self.client = client or ProbeClient(config, rng=self.rng)
        self.on_target_done = on_target_done
        self.state = ScanState.IDLE
        self.probes_sent = 0
        self.probes_failed = 0

    async def scan_target(self, target: str) -> None:
        """Send every origin probe for one target, in order"""
        for candidate in origin_candidates(target, self.rng):
            probe_logger = get_logger(__name__, target=target, strategy=candidate.strategy.value)
            self.probes_sent += 1
            try:
                response = await self.client.probe(target, candidate.origin)
            except NetworkError as e:
                self.probes_failed += 1
                probe_logger.debug(f"{candidate.strategy.value}: {e}")
                continue

            probe_logger.debug(
                f"{candidate.strategy.value}: HTTP {response.status_code} "
                f"in {response.elapsed:.2f}s"
            )

            result = classify(target, candidate, response.headers)
            if result is not None:
                self.sink.append(result)

        if self.on_target_done:
            self.on_target_done(target)

    async def run(
        self,
        targets: Sequence[str],
        cancel: asyncio.Event | None = None,
    ) -> None:
        """
        Scan every target and return once all workers have finished.

        Raises:
            ConfigurationError: if there are no targets
            ScannerError: if the dispatcher has already been started
        """
        if self.state is not ScanState.IDLE:
            raise ScannerError(f"dispatcher already {self.state.value}")
        if not targets:
            raise ConfigurationError("no targets to scan")

        self.state = ScanState.RUNNING
        log_scan_start(logger, len(targets), self.config.threads)
        start = time.time()

        pool = WorkerPool(self.config.threads, self.scan_target)
        try:
            async with self.client:
                await pool.run(targets, cancel)
        finally:
            self.state = ScanState.DONE

        log_scan_complete(
            logger,
            time.time() - start,
            len(self.sink) if hasattr(self.sink, "__len__") else 0,
            cancelled=bool(cancel and cancel.is_set()),
        )


async def scan_async(
    targets: Sequence[str],
    config: ScanConfig,
    sink: MemorySink | None = None,
    cancel: asyncio.Event | None = None,
    **kwargs,
) -> tuple[ScanResult, ...]:
    """Run a complete scan and return the frozen results"""
    sink = sink if sink is not None else MemorySink()
    dispatcher = ScanDispatcher(config, sink, **kwargs)
    try:
        await dispatcher.run(targets, cancel)
    finally:
        results = sink.freeze()
    return results


def scan(
    targets: Sequence[str],
    config: ScanConfig,
    sink: MemorySink | None = None,
    **kwargs,
) -> tuple[ScanResult, ...]:
    """Synchronous wrapper around scan_async"""
    return asyncio.run(scan_async(targets, config, sink, **kwargs))
