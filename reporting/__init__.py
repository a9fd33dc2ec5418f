"""
CORS Scanner Reporting Module
Console rendering and CSV export of scan results.
"""

from .console import display_results, print_result
from .csv_writer import CSV_COLUMNS, CSVWriter, default_csv_name

__all__ = [
    "display_results",
    "print_result",
    "CSVWriter",
    "CSV_COLUMNS",
    "default_csv_name",
]
