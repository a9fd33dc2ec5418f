"""
Scanner Errors
Exception hierarchy shared by the scan engine and its collaborators.
"""


class ScannerError(Exception):
    """Base class for all scanner errors"""


class ConfigurationError(ScannerError):
    """Invalid or missing configuration; raised before any scanning starts"""


class TargetParseError(ScannerError):
    """Target URL could not be parsed into a host"""

    def __init__(self, target: str, reason: str = "no host"):
        self.target = target
        self.reason = reason
        super().__init__(f"cannot parse target {target!r}: {reason}")


class NetworkError(ScannerError):
    """A single probe failed at the transport level"""

    def __init__(self, url: str, origin: str, cause: Exception | str):
        self.url = url
        self.origin = origin
        self.cause = cause
        super().__init__(f"request to {url} (Origin: {origin}) failed: {cause}")


class SinkClosedError(ScannerError):
    """Append attempted on a sink that has already been frozen"""
