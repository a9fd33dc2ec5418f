"""CSV Export - Appends scan results to a CSV file"""

import csv
from collections.abc import Sequence
from datetime import datetime
from pathlib import Path

from core.models import ScanResult
from utils.logger import get_logger

logger = get_logger(__name__)

CSV_COLUMNS = ["URL", "Origin", "ACAO", "ACAC", "ACAM", "ACAH", "ACMA", "ACEH"]


def default_csv_name(now: datetime | None = None) -> str:
    """CORS_Results-<DDMonYYYYHHMMSS>.csv"""
    now = now or datetime.now()
    return f"CORS_Results-{now.strftime('%d%b%Y%H%M%S')}.csv"


class CSVWriter:
    """
    Write results to a CSV file.

    Existing files are appended to; the header row is only written when the
    file is created.
    """

    def __init__(self, path: str | Path | None = None):
        self.path = Path(path) if path else Path(default_csv_name())

    def write(self, results: Sequence[ScanResult]) -> bool:
        """
        Append results to the file.

        Returns:
            True if the file was newly created, False if it was appended to

        Raises:
            OSError: if the file cannot be opened or written
        """
        is_new = not self.path.exists()
        if self.path.parent != Path("."):
            self.path.parent.mkdir(parents=True, exist_ok=True)

        with open(self.path, "a", newline="", encoding="utf-8") as csvfile:
            writer = csv.writer(csvfile)
            if is_new:
                writer.writerow(CSV_COLUMNS)
            for result in results:
                writer.writerow([result.url, result.origin, *result.headers.as_row()])

        logger.info(f"Wrote {len(results)} rows to {self.path}")
        return is_new
