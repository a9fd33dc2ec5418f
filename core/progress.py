"""
Progress Bar - Thread-safe per-target progress tracking.
"""

import threading
from typing import Any

from rich.console import Console
from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    SpinnerColumn,
    TextColumn,
    TimeElapsedColumn,
)


class ScanProgress:
    """
    Progress bar advanced once per scanned target.

    Features:
    - Atomic increment, safe to call from any worker
    - Current target display
    - Can be disabled, e.g. in verbose mode
    """

    def __init__(
        self,
        total: int,
        message: str = "Scanning",
        console: Console | None = None,
        enabled: bool = True,
    ):
        self.total = total
        self.message = message
        self.enabled = enabled
        self._current = 0
        self._last_item = ""
        self._lock = threading.Lock()
        self._console = console or Console(stderr=True)

        self._progress = Progress(
            SpinnerColumn(),
            TextColumn("[bold blue]{task.description}"),
            BarColumn(bar_width=30),
            MofNCompleteColumn(),
            TextColumn("{task.fields[item]}"),
            TimeElapsedColumn(),
            console=self._console,
            transient=True,
        )
        self._task_id: Any = None
        self._started = False

    def start(self) -> None:
        """Start the progress display"""
        if not self.enabled:
            return
        if not self._started:
            self._progress.start()
            self._task_id = self._progress.add_task(
                self.message,
                total=self.total,
                item="",
            )
            self._started = True

    def increment(self, item: str = "") -> None:
        """Increment progress by 1"""
        with self._lock:
            self._current += 1
            if item:
                self._last_item = item

            if not self._started:
                return

            self._progress.update(
                self._task_id,
                completed=self._current,
                item=self._truncate_item(self._last_item),
            )

    def done(self) -> None:
        """Complete and clean up progress display"""
        if self._started:
            self._progress.stop()
            self._started = False

    def _truncate_item(self, item: str, max_len: int = 30) -> str:
        """Truncate item display"""
        if len(item) > max_len:
            return item[:max_len - 3] + "..."
        return item

    def __enter__(self) -> "ScanProgress":
        self.start()
        return self

    def __exit__(self, *args) -> None:
        self.done()
