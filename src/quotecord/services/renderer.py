"""Client for the external html-to-image rendering service."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import httpx

from quotecord.core.config import (
    HttpxClientOptions,
    RenderSettings,
    get_or_create_httpx_client,
)
from quotecord.core.error_handling import log_exception
from quotecord.core.exceptions import RenderServiceError

if TYPE_CHECKING:
    from quotecord.core.models import RenderedDocument

logger = logging.getLogger(__name__)

_ERROR_BODY_LIMIT = 200


def _response_reason(response: httpx.Response) -> str:
    text = response.text.strip()
    if len(text) > _ERROR_BODY_LIMIT:
        text = text[: _ERROR_BODY_LIMIT - 3] + "..."
    return text or response.reason_phrase or "empty response"


class RenderServiceClient:
    """Sends documents to the rendering service and returns image bytes.

    One request per document; retries and timeouts beyond the HTTP client
    timeout are the caller's concern.
    """

    def __init__(
        self,
        settings: RenderSettings | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the client; the HTTP client is created on first use."""
        self.settings = settings or RenderSettings()
        self._transport = transport
        self._client_holder: list[httpx.AsyncClient] = []

    @property
    def http_client(self) -> httpx.AsyncClient:
        """Shared HTTP client, created lazily."""
        return get_or_create_httpx_client(
            self._client_holder,
            options=HttpxClientOptions.for_settings(
                self.settings,
                transport=self._transport,
            ),
        )

    async def render(
        self,
        document: RenderedDocument,
        *,
        url: str | None = None,
        timeout: float | None = None,
    ) -> bytes:
        """Rasterize ``document``, posting to ``url`` when given.

        ``timeout`` replaces the client timeout for this request only.

        Raises:
            RenderServiceError: the request failed or the service answered
                with a non-success status. The original reason is preserved.

        """
        url = url or self.settings.render_service_url
        payload = {**document.options, "html": document.html}

        try:
            response = await self.http_client.post(
                url,
                json=payload,
                timeout=(
                    httpx.USE_CLIENT_DEFAULT if timeout is None else timeout
                ),
            )
        except httpx.HTTPError as exc:
            log_exception(
                logger=logger,
                message="Render service request failed",
                error=exc,
                context={"url": url},
            )
            raise RenderServiceError(str(exc) or type(exc).__name__, url=url) from exc

        if response.is_error:
            reason = _response_reason(response)
            logger.error(
                "Render service returned HTTP %s | url=%r, reason=%r",
                response.status_code,
                url,
                reason,
            )
            raise RenderServiceError(reason, status_code=response.status_code, url=url)

        logger.info(
            "Rendered document (%s bytes of HTML) into %s bytes",
            len(document.html),
            len(response.content),
        )
        return response.content

    async def aclose(self) -> None:
        """Close the underlying HTTP client if it was created."""
        client = self._client_holder[0] if self._client_holder else None
        if client is not None and not client.is_closed:
            await client.aclose()
