"""HTTP client settings for the rendering service."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import httpx

from quotecord.core.config.constants import RENDER_REQUEST_TIMEOUT

if TYPE_CHECKING:
    from quotecord.core.config.settings import RenderSettings

DEFAULT_USER_AGENT = "quotecord/0.1 (html-to-image client)"

DEFAULT_HEADERS = {
    "User-Agent": DEFAULT_USER_AGENT,
    "Accept": "image/png,image/jpeg,image/webp,*/*;q=0.8",
}
MAX_CONNECT_TIMEOUT = 10.0


@dataclass(frozen=True, slots=True)
class HttpxClientOptions:
    """Options for the rendering service's httpx.AsyncClient."""

    timeout: float = RENDER_REQUEST_TIMEOUT
    connect_timeout: float = MAX_CONNECT_TIMEOUT
    max_connections: int = 4
    max_keepalive: int = 2
    headers: dict[str, str] = field(default_factory=dict)
    transport: httpx.AsyncBaseTransport | None = None

    @classmethod
    def for_settings(
        cls,
        settings: RenderSettings,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> HttpxClientOptions:
        """Derive client options from render settings."""
        return cls(
            timeout=settings.request_timeout,
            connect_timeout=min(MAX_CONNECT_TIMEOUT, settings.request_timeout),
            transport=transport,
        )

    def build_client(self) -> httpx.AsyncClient:
        """Create a new client configured with these options."""
        return httpx.AsyncClient(
            timeout=httpx.Timeout(self.timeout, connect=self.connect_timeout),
            limits=httpx.Limits(
                max_connections=self.max_connections,
                max_keepalive_connections=self.max_keepalive,
            ),
            headers={**DEFAULT_HEADERS, **self.headers},
            transport=self.transport,
        )


def get_or_create_httpx_client(
    client_holder: list[httpx.AsyncClient],
    *,
    options: HttpxClientOptions | None = None,
) -> httpx.AsyncClient:
    """Return the client kept in ``client_holder``, creating it when needed.

    ``client_holder`` is a one-slot list owned by the caller; a closed client
    is replaced on the next call.
    """
    current = client_holder[0] if client_holder else None
    if current is not None and not current.is_closed:
        return current

    client = (options or HttpxClientOptions()).build_client()
    client_holder[:] = [client]
    return client
