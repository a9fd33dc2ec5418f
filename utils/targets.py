"""
Target Loader
Builds the target URL list from a single URL or a line-delimited file.
"""

from pathlib import Path

from core.errors import ConfigurationError

from .logger import get_logger

logger = get_logger(__name__)


def read_url_file(path: str | Path) -> list[str]:
    """Read one URL per line, trimming whitespace and skipping blank lines"""
    try:
        with open(path, "r", encoding="utf-8") as f:
            urls = [line.strip() for line in f]
    except OSError as e:
        raise ConfigurationError(f"cannot open file: {e}") from e

    urls = [url for url in urls if url]
    logger.debug(f"Loaded {len(urls)} targets from {path}")
    return urls


def load_targets(url: str | None = None, url_file: str | Path | None = None) -> list[str]:
    """
    Resolve the scan targets from exactly one source.

    Args:
        url: A single target URL (must include the protocol)
        url_file: Path to a file containing one URL per line

    Returns:
        Non-empty list of trimmed target URLs

    Raises:
        ConfigurationError: when no source, both sources, or no usable URL is given
    """
    if not url and not url_file:
        raise ConfigurationError(
            "please specify a URL (-u) or an input file containing URLs (--url-file)"
        )
    if url and url_file:
        raise ConfigurationError("please specify either a URL or a file, not both")

    if url_file:
        urls = read_url_file(url_file)
        if not urls:
            raise ConfigurationError(f"no URLs found in {url_file}")
        return urls

    url = url.strip()
    if not url.startswith("http"):
        raise ConfigurationError("please specify a URL in the format proto://address:port")
    return [url]
