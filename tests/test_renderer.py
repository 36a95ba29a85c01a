from __future__ import annotations

import json

import httpx
import pytest

from quotecord.core.config import RenderSettings
from quotecord.core.exceptions import RenderServiceError
from quotecord.core.models import RenderedDocument
from quotecord.services.renderer import RenderServiceClient

SERVICE_URL = "http://renderer.test/render"


def _document() -> RenderedDocument:
    return RenderedDocument(html="<p>hi</p>", options={"type": "png", "width": 700})


@pytest.mark.asyncio
async def test_render_posts_html_and_options(settings: RenderSettings) -> None:
    requests: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(200, content=b"\x89PNG")

    client = RenderServiceClient(settings, transport=httpx.MockTransport(handler))
    try:
        image = await client.render(_document())
    finally:
        await client.aclose()

    assert image == b"\x89PNG"
    assert len(requests) == 1
    assert str(requests[0].url) == SERVICE_URL
    assert json.loads(requests[0].content) == {
        "type": "png",
        "width": 700,
        "html": "<p>hi</p>",
    }


@pytest.mark.asyncio
async def test_render_uses_explicit_url(settings: RenderSettings) -> None:
    seen: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(str(request.url))
        return httpx.Response(200, content=b"img")

    client = RenderServiceClient(settings, transport=httpx.MockTransport(handler))
    try:
        await client.render(_document(), url="http://other.test/render")
    finally:
        await client.aclose()

    assert seen == ["http://other.test/render"]


@pytest.mark.asyncio
async def test_error_status_raises_with_reason(settings: RenderSettings) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(500, text="browser crashed")

    client = RenderServiceClient(settings, transport=httpx.MockTransport(handler))
    try:
        with pytest.raises(RenderServiceError) as exc_info:
            await client.render(_document())
    finally:
        await client.aclose()

    assert exc_info.value.status_code == 500
    assert exc_info.value.reason == "browser crashed"
    assert exc_info.value.url == SERVICE_URL
    assert "HTTP 500" in str(exc_info.value)


@pytest.mark.asyncio
async def test_long_error_body_is_truncated(settings: RenderSettings) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(502, text="x" * 500)

    client = RenderServiceClient(settings, transport=httpx.MockTransport(handler))
    try:
        with pytest.raises(RenderServiceError) as exc_info:
            await client.render(_document())
    finally:
        await client.aclose()

    assert len(exc_info.value.reason) == 200
    assert exc_info.value.reason.endswith("...")


@pytest.mark.asyncio
async def test_transport_failure_is_wrapped(settings: RenderSettings) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        message = "connection refused"
        raise httpx.ConnectError(message, request=request)

    client = RenderServiceClient(settings, transport=httpx.MockTransport(handler))
    try:
        with pytest.raises(RenderServiceError) as exc_info:
            await client.render(_document())
    finally:
        await client.aclose()

    assert exc_info.value.status_code is None
    assert exc_info.value.reason == "connection refused"
    assert isinstance(exc_info.value.__cause__, httpx.ConnectError)


@pytest.mark.asyncio
async def test_client_is_reused_and_closed(settings: RenderSettings) -> None:
    client = RenderServiceClient(
        settings,
        transport=httpx.MockTransport(lambda request: httpx.Response(200)),
    )

    first = client.http_client
    assert client.http_client is first

    await client.aclose()

    assert first.is_closed
    assert client.http_client is not first
    await client.aclose()


@pytest.mark.asyncio
async def test_client_uses_settings_timeout_and_headers() -> None:
    client = RenderServiceClient(
        RenderSettings(request_timeout=4),
        transport=httpx.MockTransport(lambda request: httpx.Response(200)),
    )

    http_client = client.http_client
    await client.aclose()

    assert http_client.timeout.read == 4
    assert http_client.timeout.connect == 4
    assert http_client.headers["User-Agent"].startswith("quotecord/")


@pytest.mark.asyncio
async def test_request_timeout_override_applies_to_one_request() -> None:
    timeouts: list[dict[str, float | None]] = []

    def handler(request: httpx.Request) -> httpx.Response:
        timeouts.append(request.extensions["timeout"])
        return httpx.Response(200, content=b"img")

    client = RenderServiceClient(
        RenderSettings(request_timeout=4),
        transport=httpx.MockTransport(handler),
    )
    try:
        await client.render(_document(), timeout=1.5)
        await client.render(_document())
    finally:
        await client.aclose()

    assert timeouts[0]["read"] == 1.5
    assert timeouts[1]["read"] == 4
