"""End-to-end rendering: Discord message in, image bytes out."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import datetime
from typing import TYPE_CHECKING, Any

from quotecord.core.config import RenderSettings, get_config
from quotecord.core.exceptions import MissingMessageError
from quotecord.discord.adapter import (
    build_mention_lookup,
    resolve_referenced_message,
    snapshot_message,
)
from quotecord.logic.document import build_document, ensure_renderable
from quotecord.services.renderer import RenderServiceClient

if TYPE_CHECKING:
    import discord

    from quotecord.core.models import ManualMessage, RenderedDocument

logger = logging.getLogger(__name__)


class QuoteRenderer:
    """Turns messages into images through the rendering service."""

    def __init__(
        self,
        settings: RenderSettings | None = None,
        *,
        client: RenderServiceClient | None = None,
    ) -> None:
        """Initialize with settings and an optional preconfigured client."""
        self.settings = settings or RenderSettings()
        self.client = client or RenderServiceClient(self.settings)

    @classmethod
    def from_config(cls, filename: str = "config.yaml") -> QuoteRenderer:
        """Create a renderer from the ``renderer`` section of a YAML config."""
        return cls(RenderSettings.from_config(get_config(filename)))

    async def build_document(
        self,
        message: discord.Message | None,
        *,
        options: Mapping[str, Any] | None = None,
        now: datetime | None = None,
    ) -> RenderedDocument:
        """Snapshot ``message`` and its reply, then assemble the document.

        Raises:
            MissingMessageError: ``message`` is None.
            EmptyMessageError: the message has nothing to render; raised
                before the replied-to message is fetched.

        """
        if message is None:
            raise MissingMessageError
        settings = self.settings.merged(options)
        snapshot = ensure_renderable(snapshot_message(message))

        referenced_message = await resolve_referenced_message(message)
        referenced = (
            snapshot_message(referenced_message)
            if referenced_message is not None
            else None
        )
        lookup = build_mention_lookup(message, extra=(referenced_message,))

        return build_document(
            snapshot,
            referenced=referenced,
            lookup=lookup,
            settings=settings,
            now=now,
        )

    async def render(
        self,
        message: discord.Message | None,
        *,
        options: Mapping[str, Any] | None = None,
    ) -> bytes:
        """Render a Discord message to image bytes.

        ``options`` may override ``render_service_url`` and ``request_timeout``
        for this call; other keys are forwarded to the rendering service.
        """
        document = await self.build_document(message, options=options)
        settings = self.settings.merged(options)
        logger.info("Rendering message %s", getattr(message, "id", None))
        return await self.client.render(
            document,
            url=settings.render_service_url,
            timeout=settings.request_timeout,
        )

    async def render_manual(
        self,
        message: ManualMessage | None,
        *,
        options: Mapping[str, Any] | None = None,
    ) -> bytes:
        """Render a hand-built message to image bytes."""
        settings = self.settings.merged(options)
        document = build_document(message, settings=settings)
        return await self.client.render(
            document,
            url=settings.render_service_url,
            timeout=settings.request_timeout,
        )

    async def aclose(self) -> None:
        """Release the rendering service client."""
        await self.client.aclose()
