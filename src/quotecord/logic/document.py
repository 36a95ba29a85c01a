"""Assemble a complete message document."""

from __future__ import annotations

import html
import logging
from datetime import datetime
from typing import TYPE_CHECKING

from quotecord.core.config import RenderSettings
from quotecord.core.exceptions import EmptyMessageError, MissingMessageError
from quotecord.core.models import AuthorIdentity, MentionLookup, RenderedDocument
from quotecord.logic.attachments import render_attachment_grid
from quotecord.logic.identity import resolve_author_identity
from quotecord.logic.reply import build_reply_preview
from quotecord.logic.richtext import TextMode, render_rich_text
from quotecord.logic.styles import STYLESHEET
from quotecord.logic.timestamps import format_timestamp

if TYPE_CHECKING:
    from collections.abc import Sequence

    from quotecord.core.models import Message, ReplyPreview, Sticker

logger = logging.getLogger(__name__)


def _attr(value: str) -> str:
    return html.escape(value, quote=True)


def ensure_renderable(message: Message | None) -> Message:
    """Refuse messages that have nothing to draw.

    A message is refused only when text, embeds, attachments and stickers
    are all absent.
    """
    if message is None:
        raise MissingMessageError
    embed_count = message.embed_count if message.kind == "platform" else 0
    if (
        not message.content
        and not embed_count
        and not message.attachments
        and not message.stickers
    ):
        message_id = message.id if message.kind == "platform" else None
        raise EmptyMessageError(message_id=message_id)
    return message


def _identity_for(message: Message, settings: RenderSettings) -> AuthorIdentity:
    if message.kind == "manual":
        return AuthorIdentity(
            name=message.username,
            color=settings.author_default_color,
            avatar_url=message.avatar_url or settings.default_avatar_url,
        )
    return resolve_author_identity(message.author, message.member, settings=settings)


def render_reply_block(preview: ReplyPreview) -> str:
    """Render the reply preview bar shown above the message header."""
    timestamp = (
        f'<span class="reply-timestamp">{_attr(preview.timestamp)}</span>'
        if preview.timestamp
        else ""
    )
    return (
        '<div class="reply">'
        f'<img class="reply-avatar" src="{_attr(preview.avatar_url)}" alt="">'
        f'<span class="reply-username" style="color: {_attr(preview.color)}">'
        f"{_attr(preview.author_name)}</span>"
        f'<span class="reply-content">{preview.content_html}</span>'
        f"{timestamp}</div>"
    )


def render_sticker_tiles(stickers: Sequence[Sticker], settings: RenderSettings) -> str:
    """Render stickers as plain image tiles."""
    if not stickers:
        return ""
    base = settings.sticker_cdn_url.rstrip("/")
    tiles = "".join(
        f'<img class="sticker" src="{_attr(f"{base}/{sticker.id}.png?size=160")}" '
        f'alt="{_attr(sticker.name)}" title="{_attr(sticker.name)}">'
        for sticker in stickers
    )
    return f'<div class="stickers">{tiles}</div>'


def _render_header(identity: AuthorIdentity, timestamp: str) -> str:
    role_icon = (
        f'<img class="role-icon" src="{_attr(identity.role_icon_url)}" alt="">'
        if identity.role_icon_url
        else ""
    )
    return (
        '<div class="header">'
        f'<span class="username" style="color: {_attr(identity.color)}">'
        f"{_attr(identity.name)}</span>{role_icon}"
        f'<span class="timestamp">{_attr(timestamp)}</span></div>'
    )


def build_document(
    message: Message | None,
    *,
    referenced: Message | None = None,
    lookup: MentionLookup | None = None,
    settings: RenderSettings | None = None,
    now: datetime | None = None,
) -> RenderedDocument:
    """Compose the full HTML document for ``message``.

    Raises:
        MissingMessageError: no message was supplied.
        EmptyMessageError: the message has nothing to render.

    """
    message = ensure_renderable(message)
    effective = settings or RenderSettings()
    effective_lookup = lookup or MentionLookup()
    logger.debug("Building document for message content: %r", message.content)

    identity = _identity_for(message, effective)
    created_at = message.created_at or now or datetime.now().astimezone()
    timestamp = format_timestamp(created_at, now=now)

    preview = build_reply_preview(
        referenced,
        lookup=effective_lookup,
        settings=effective,
        now=now,
    )
    content = render_rich_text(
        message.content,
        mode=TextMode.FULL,
        lookup=effective_lookup,
        settings=effective,
    )

    reply_block = render_reply_block(preview) if preview else ""
    content_block = f'<div class="content">{content}</div>' if content else ""
    grid = render_attachment_grid(message.attachments)
    stickers = render_sticker_tiles(message.stickers, effective)
    container_class = "discord-message has-reply" if preview else "discord-message"

    body = (
        f'<div class="{container_class}">{reply_block}'
        '<div class="message-container">'
        f'<img class="avatar" src="{_attr(identity.avatar_url)}" alt="avatar">'
        '<div class="content-wrapper">'
        f"{_render_header(identity, timestamp)}{content_block}{grid}{stickers}"
        "</div></div></div>"
    )
    document = (
        '<!DOCTYPE html><html><head><meta charset="utf-8">'
        f"<style>{STYLESHEET}</style></head>"
        f"<body>{body}</body></html>"
    )
    return RenderedDocument(html=document, options=effective.options)
