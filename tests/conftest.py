"""Pytest fixtures for all tests."""

import io

import pytest
from httpx import AsyncClient, ASGITransport

import ids.default
import internal.logging
from api.app import create_app
from config import Config
from ids.codec import SafeIntId
from internal.logging import LogLevel, StructuredLogger


class FakeClock:
    """Manually driven Unix-millisecond clock."""

    def __init__(self, now):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, millis=1):
        self.now += millis


class FixedRandom:
    """Random source that always draws the same value."""

    def __init__(self, value):
        self.value = value

    def randrange(self, n):
        return self.value % n


@pytest.fixture
def clock():
    """Clock frozen 5 seconds into 2023."""
    return FakeClock(SafeIntId().epoch_millis + 5000)


@pytest.fixture
def codec(clock):
    """Default-sized codec on the fake clock."""
    return SafeIntId(clock=clock)


@pytest.fixture
def log_stream():
    """Capture structured log output for the duration of a test."""
    stream = io.StringIO()
    StructuredLogger.configure(LogLevel.DEBUG, stream=stream)
    yield stream
    internal.logging._logger = None


@pytest.fixture
def reset_default():
    """Drop the process default generator before and after a test."""
    ids.default._default = None
    yield
    ids.default._default = None


@pytest.fixture
async def app():
    """Create test FastAPI app."""
    return create_app(Config())


@pytest.fixture
async def client(app):
    """Create async test client."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
