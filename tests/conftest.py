"""Shared fixtures for the CORS scanner tests"""

import httpx
import pytest

from config import ScanConfig


class FixedRandom:
    """Random source that always picks the first element"""

    def choice(self, seq):
        return seq[0]


class CyclingRandom:
    """Random source that walks through a fixed string, then wraps"""

    def __init__(self, letters: str):
        self.letters = letters
        self.index = 0

    def choice(self, seq):
        letter = self.letters[self.index % len(self.letters)]
        self.index += 1
        return letter if letter in seq else seq[0]


def echo_handler(request: httpx.Request) -> httpx.Response:
    """Reflect the request Origin and allow credentials"""
    return httpx.Response(
        200,
        headers={
            "Access-Control-Allow-Origin": request.headers["Origin"],
            "Access-Control-Allow-Credentials": "true",
        },
    )


@pytest.fixture
def fixed_rng():
    return FixedRandom()


@pytest.fixture
def scan_config():
    """Small, fast scan configuration"""
    return ScanConfig(threads=4, timeout=5)


@pytest.fixture
def echo_transport():
    return httpx.MockTransport(echo_handler)


@pytest.fixture
def sample_targets():
    return [f"https://host{i}.example.com/path" for i in range(100)]
