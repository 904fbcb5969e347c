import httpx
import pytest

from recipebox.errors import FetchFailed
from recipebox.fetch import HtmlSource, ImageFetcher, browser_headers


def client_for(handler):
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


def test_browser_headers():
    headers = browser_headers("TestAgent/1.0")
    assert headers["User-Agent"] == "TestAgent/1.0"
    assert headers["Accept"].startswith("text/html")
    assert headers["Accept-Language"] == "en-US,en;q=0.9"


@pytest.mark.asyncio
async def test_html_source_sends_browser_headers():
    seen = {}

    def handler(request):
        seen.update(request.headers)
        return httpx.Response(200, text="<html>ok</html>")

    async with client_for(handler) as client:
        html = await HtmlSource(client=client, user_agent="TestAgent/1.0").fetch("https://example.com/r")

    assert html == "<html>ok</html>"
    assert seen["user-agent"] == "TestAgent/1.0"
    assert "text/html" in seen["accept"]


@pytest.mark.asyncio
async def test_html_source_follows_redirects():
    def handler(request):
        if request.url.path == "/old":
            return httpx.Response(301, headers={"Location": "https://example.com/new"})
        return httpx.Response(200, text="moved here")

    async with client_for(handler) as client:
        assert await HtmlSource(client=client).fetch("https://example.com/old") == "moved here"


@pytest.mark.asyncio
async def test_html_source_error_status():
    async with client_for(lambda request: httpx.Response(403)) as client:
        with pytest.raises(FetchFailed) as excinfo:
            await HtmlSource(client=client).fetch("https://example.com/r")
    assert excinfo.value.reason == "HTTP 403"


@pytest.mark.asyncio
async def test_html_source_transport_error():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    async with client_for(handler) as client:
        with pytest.raises(FetchFailed) as excinfo:
            await HtmlSource(client=client).fetch("https://example.com/r")
    assert "connection refused" in excinfo.value.user_message


@pytest.mark.asyncio
async def test_image_fetcher_returns_bytes():
    async with client_for(lambda request: httpx.Response(200, content=b"\xff\xd8jpeg")) as client:
        assert await ImageFetcher(client=client).fetch("https://cdn.example.com/a.jpg") == b"\xff\xd8jpeg"


@pytest.mark.asyncio
async def test_image_fetcher_failures_give_none():
    async with client_for(lambda request: httpx.Response(404)) as client:
        fetcher = ImageFetcher(client=client)
        assert await fetcher.fetch("https://cdn.example.com/missing.jpg") is None
        assert await fetcher.fetch(None) is None
        assert await fetcher.fetch("") is None

    async with client_for(lambda request: httpx.Response(200, content=b"")) as client:
        assert await ImageFetcher(client=client).fetch("https://cdn.example.com/empty.jpg") is None
