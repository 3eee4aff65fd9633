import sys
from pathlib import Path
from typing import Callable, List

import httpx
import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from tsdr.client import TsdrClient
from tsdr.config import Settings
from tsdr.trademarks import TrademarkDispatcher

TEST_API_KEY = "test-api-key-1234567890"


class RecordingTransport(httpx.MockTransport):
    """MockTransport that remembers every request it served."""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]):
        self.requests: List[httpx.Request] = []

        def _record(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return handler(request)

        super().__init__(_record)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep the developer's real USPTO settings out of the tests."""
    for name in ("USPTO_API_KEY", "USPTO_TSDR_BASE_URL", "USPTO_TIMEOUT_SECONDS", "PORT", "HOST", "LOG_LEVEL", "NODE_ENV"):
        monkeypatch.delenv(name, raising=False)
    yield


@pytest.fixture
def settings() -> Settings:
    return Settings(api_key=TEST_API_KEY)


@pytest.fixture
def make_dispatcher():
    """Build a dispatcher whose TSDR client is served by `handler`."""

    def _make(handler, settings: Settings = None):
        settings = settings or Settings(api_key=TEST_API_KEY)
        transport = RecordingTransport(handler)
        dispatcher = TrademarkDispatcher(settings, client=TsdrClient(settings, transport=transport))
        return dispatcher, transport

    return _make


def never_called(request: httpx.Request) -> httpx.Response:
    raise AssertionError(f"unexpected upstream call: {request.method} {request.url}")
