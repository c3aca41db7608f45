import asyncio
import sys
from pathlib import Path

import pytest

# Ensure pytest-asyncio plugin is loaded so @pytest.mark.asyncio works with pytest>=9.
pytest_plugins = ["pytest_asyncio"]


# Ensure project root is on sys.path for local test runs without installation.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from poke.models import HttpResponse  # noqa: E402
from poke.store import RequestStore  # noqa: E402

SAMPLE_HTTP = """\
@baseUrl = https://api.example.com
@token = secret123

### List users
GET {{baseUrl}}/users
Authorization: Bearer {{token}}

### Create user
POST {{baseUrl}}/users
Content-Type: application/json

{"name": "Ada"}
"""


@pytest.fixture
def sample_store():
    return RequestStore.from_text(SAMPLE_HTTP)


@pytest.fixture
def http_file(tmp_path):
    path = tmp_path / "requests.http"
    path.write_text(SAMPLE_HTTP, encoding="utf-8")
    return path


class _FakeResponse:
    def __init__(self, status_code: int = 200, text: str = "{}") -> None:
        self.status_code = status_code
        self.text = text
        self.reason_phrase = "OK"
        self.headers = {"content-type": "application/json"}


class FakeHttpxClient:
    def __init__(self, response: _FakeResponse | None = None) -> None:
        self.requests: list[tuple[str, str, bytes | None, list[tuple[str, str]]]] = []
        self.response = response or _FakeResponse()
        self.error: Exception | None = None

    async def request(self, method: str, url: str, content=None, headers=None):
        self.requests.append((method, url, content, list(headers or [])))
        if self.error is not None:
            raise self.error
        return self.response


@pytest.fixture
def fake_httpx_client():
    return FakeHttpxClient()


@pytest.fixture
def fake_client_factory(fake_httpx_client):
    async def factory():
        return fake_httpx_client

    return factory


class FakeExecutor:
    """Executor whose replies are released by the test."""

    def __init__(self) -> None:
        self.sent = []
        self.gate = asyncio.Event()
        self.reply: object = HttpResponse(status=200, text="ok", duration_ms=1.0, reason="OK")
        self.error: Exception | None = None

    async def send(self, request):
        self.sent.append(request)
        await self.gate.wait()
        if self.error is not None:
            raise self.error
        return self.reply


@pytest.fixture
def fake_executor():
    return FakeExecutor()


class OutcomeInbox:
    """Stands in for the UI message queue."""

    def __init__(self) -> None:
        self.outcomes = []

    def __call__(self, outcome) -> None:
        self.outcomes.append(outcome)


@pytest.fixture
def inbox():
    return OutcomeInbox()
