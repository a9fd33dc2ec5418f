"""
Tests for target loading and logging setup
"""

import json
import logging

import pytest

from core.errors import ConfigurationError


class TestLoadTargets:
    """Tests for the URL source"""

    def test_single_url(self):
        from utils.targets import load_targets
        assert load_targets(url="  https://example.com  ") == ["https://example.com"]

    def test_single_url_needs_protocol(self):
        from utils.targets import load_targets
        with pytest.raises(ConfigurationError, match="proto://"):
            load_targets(url="example.com")

    def test_no_source(self):
        from utils.targets import load_targets
        with pytest.raises(ConfigurationError):
            load_targets()

    def test_both_sources(self, tmp_path):
        from utils.targets import load_targets
        path = tmp_path / "urls.txt"
        path.write_text("https://a.com\n")

        with pytest.raises(ConfigurationError, match="not both"):
            load_targets(url="https://example.com", url_file=path)

    def test_url_file_trims_and_skips_blanks(self, tmp_path):
        from utils.targets import load_targets
        path = tmp_path / "urls.txt"
        path.write_text("https://a.com\n\n   \n  http://b.org:8080/x  \nnot-a-url\n")

        assert load_targets(url_file=path) == [
            "https://a.com", "http://b.org:8080/x", "not-a-url"
        ]

    def test_missing_file(self, tmp_path):
        from utils.targets import load_targets
        with pytest.raises(ConfigurationError, match="cannot open file"):
            load_targets(url_file=tmp_path / "missing.txt")

    def test_empty_file(self, tmp_path):
        from utils.targets import load_targets
        path = tmp_path / "urls.txt"
        path.write_text("\n\n")

        with pytest.raises(ConfigurationError):
            load_targets(url_file=path)


class TestLogger:
    """Tests for logging helpers"""

    def test_structured_formatter_carries_context(self):
        from utils.logger import StructuredFormatter
        record = logging.LogRecord("probe", logging.DEBUG, __file__, 1, "failed", None, None)
        record.target = "https://example.com"
        record.strategy = "null-origin"

        data = json.loads(StructuredFormatter().format(record))

        assert data["message"] == "failed"
        assert data["target"] == "https://example.com"
        assert data["strategy"] == "null-origin"

    def test_get_logger_adapter(self):
        from utils.logger import ScanLoggerAdapter, get_logger
        log = get_logger("probe", target="https://example.com")

        assert isinstance(log, ScanLoggerAdapter)
        assert log.extra == {"target": "https://example.com"}

    def test_setup_logging_file(self, tmp_path):
        from utils.logger import setup_logging
        log_file = tmp_path / "logs" / "scan.log"

        setup_logging(level="DEBUG", log_file=log_file, console=False)
        logging.getLogger("test").debug("hello")
        for handler in logging.getLogger().handlers:
            handler.flush()

        assert "hello" in log_file.read_text()
        for handler in list(logging.getLogger().handlers):
            handler.close()
            logging.getLogger().removeHandler(handler)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
