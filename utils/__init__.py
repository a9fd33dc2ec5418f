"""
CORS Scanner Utilities Module
Logging setup and target list loading.
"""

from .logger import get_logger, setup_logging
from .targets import load_targets, read_url_file

__all__ = [
    "get_logger",
    "setup_logging",
    "load_targets",
    "read_url_file",
]
