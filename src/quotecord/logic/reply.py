"""Compact previews of replied-to messages."""

from __future__ import annotations

import logging
from datetime import datetime

from quotecord.core.config import (
    REPLY_ELLIPSIS,
    REPLY_EMPTY_PLACEHOLDER,
    REPLY_PREVIEW_LIMIT,
    RenderSettings,
)
from quotecord.core.models import Message, MentionLookup, ReplyPreview
from quotecord.logic.identity import resolve_reply_identity
from quotecord.logic.richtext import LINE_BREAK, TextMode, render_rich_text
from quotecord.logic.timestamps import format_timestamp

logger = logging.getLogger(__name__)


def build_reply_preview(
    referenced: Message | None,
    *,
    lookup: MentionLookup | None = None,
    settings: RenderSettings | None = None,
    now: datetime | None = None,
) -> ReplyPreview | None:
    """Build a one-line preview of ``referenced``.

    Returns None when there is nothing to preview: no referenced message, or
    a platform message whose author is unavailable.
    """
    if referenced is None:
        return None
    if referenced.kind != "platform":
        logger.debug("Replies to manual messages are not previewed")
        return None
    if referenced.author is None:
        logger.debug("Referenced message has no author; omitting reply block")
        return None

    effective = settings or RenderSettings()
    identity = resolve_reply_identity(
        referenced.author,
        referenced.member,
        settings=effective,
    )

    original = referenced.content or REPLY_EMPTY_PLACEHOLDER
    rendered = render_rich_text(
        original[:REPLY_PREVIEW_LIMIT],
        mode=TextMode.REPLY,
        lookup=lookup,
        settings=effective,
    ).replace(LINE_BREAK, " ").replace("\n", " ")
    if len(original) > REPLY_PREVIEW_LIMIT:
        rendered += REPLY_ELLIPSIS

    return ReplyPreview(
        author_name=identity.name,
        color=identity.color,
        avatar_url=identity.avatar_url,
        content_html=rendered,
        timestamp=format_timestamp(
            referenced.created_at,
            now=now,
            include_today_prefix=False,
        ),
    )
