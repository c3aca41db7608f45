# ruff: noqa: S101
import httpx
import pytest

from poke.errors import ExecutionError
from poke.http_client import HttpExecutor, _validate_url, perform_http_request
from poke.models import Method, Request


@pytest.mark.asyncio
async def test_perform_http_request_with_client_factory(fake_client_factory, fake_httpx_client):
    fake_httpx_client.response.status_code = 201
    fake_httpx_client.response.text = "created"
    request = Request(
        method=Method.POST,
        url="https://api.example.com/users",
        headers=(("A", "b"), ("A", "c")),
        body='{"x":1}',
    )

    resp = await perform_http_request(request, client_factory=fake_client_factory)

    assert resp.status == 201
    assert resp.text == "created"
    assert resp.reason == "OK"
    assert resp.headers == (("content-type", "application/json"),)
    method, url, body, headers = fake_httpx_client.requests[0]
    assert method == "POST"
    assert url == "https://api.example.com/users"
    assert body == b'{"x":1}'
    assert headers[:2] == [("A", "b"), ("A", "c")]


@pytest.mark.asyncio
async def test_no_body_sends_no_content(fake_client_factory, fake_httpx_client):
    await perform_http_request(Request(method=Method.GET, url="http://x.test/"), client_factory=fake_client_factory)
    assert fake_httpx_client.requests[0][2] is None


@pytest.mark.asyncio
async def test_user_agent_added_unless_present(fake_client_factory, fake_httpx_client):
    await perform_http_request(Request(method=Method.GET, url="http://x.test/"), client_factory=fake_client_factory)
    await perform_http_request(
        Request(method=Method.GET, url="http://x.test/", headers=(("user-agent", "me"),)),
        client_factory=fake_client_factory,
    )
    first, second = (entry[3] for entry in fake_httpx_client.requests)
    assert [k for k, _ in first] == ["User-Agent"]
    assert second == [("user-agent", "me")]


@pytest.mark.asyncio
async def test_timeout_becomes_execution_error(fake_client_factory, fake_httpx_client):
    fake_httpx_client.error = httpx.ReadTimeout("slow")
    with pytest.raises(ExecutionError, match="timed out after 5s"):
        await perform_http_request(
            Request(method=Method.GET, url="https://x.test/"), timeout=5, client_factory=fake_client_factory
        )


@pytest.mark.asyncio
async def test_transport_error_becomes_execution_error(fake_client_factory, fake_httpx_client):
    fake_httpx_client.error = httpx.ConnectError("refused")
    with pytest.raises(ExecutionError, match="Request failed: refused"):
        await perform_http_request(Request(method=Method.GET, url="https://x.test/"), client_factory=fake_client_factory)


@pytest.mark.asyncio
async def test_unresolved_placeholder_url_fails_cleanly(fake_client_factory, fake_httpx_client):
    with pytest.raises(ExecutionError, match="Unsupported URL scheme"):
        await perform_http_request(
            Request(method=Method.GET, url="{{baseUrl}}/users"), client_factory=fake_client_factory
        )
    assert fake_httpx_client.requests == []


@pytest.mark.asyncio
async def test_executor_passes_settings(fake_client_factory, fake_httpx_client):
    executor = HttpExecutor(timeout=3, verify_tls=False, client_factory=fake_client_factory)
    resp = await executor.send(Request(method=Method.DELETE, url="https://x.test/1"))
    assert resp.status == 200
    assert fake_httpx_client.requests[0][0] == "DELETE"


def test_validate_url_rejects_invalid_scheme():
    with pytest.raises(ValueError, match="Unsupported URL scheme"):
        _validate_url("ftp://example.com")


def test_validate_url_requires_host():
    with pytest.raises(ValueError, match="Missing host"):
        _validate_url("http:///path")
