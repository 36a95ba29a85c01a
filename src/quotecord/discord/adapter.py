"""Snapshot discord.py messages into quotecord's data model."""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING, Any

import discord

from quotecord.core.error_handling import log_recovered
from quotecord.core.models import (
    Attachment,
    Author,
    Member,
    MentionLookup,
    PlatformMessage,
    Role,
    Sticker,
)

if TYPE_CHECKING:
    from collections.abc import Iterable

logger = logging.getLogger(__name__)

_USER_MENTION_RE = re.compile(r"<@!?(\d+)>")
_CHANNEL_MENTION_RE = re.compile(r"<#(\d+)>")
_ROLE_MENTION_RE = re.compile(r"<@&(\d+)>")

FETCH_ERRORS = (discord.NotFound, discord.Forbidden, discord.HTTPException)


def _asset_url(asset: Any) -> str | None:
    if asset is None:
        return None
    url = getattr(asset, "url", None)
    return str(url) if url else None


def snapshot_role(role: Any) -> Role:
    """Copy the fields of a discord.py role that affect rendering."""
    color = getattr(role, "color", 0)
    return Role(
        id=role.id,
        name=role.name,
        color=int(getattr(color, "value", color) or 0),
        icon_url=_asset_url(getattr(role, "icon", None)),
        position=role.position,
        is_default=bool(role.is_default()),
    )


def snapshot_author(user: Any) -> Author:
    """Copy a discord.py user or member into an ``Author``."""
    return Author(
        id=user.id,
        username=user.name,
        display_name=getattr(user, "global_name", None),
        avatar_url=_asset_url(getattr(user, "avatar", None)),
    )


def snapshot_member(user: Any) -> Member | None:
    """Copy server identity when ``user`` is a guild member."""
    roles = getattr(user, "roles", None)
    if roles is None:
        return None
    return Member(
        nickname=getattr(user, "nick", None),
        roles=tuple(snapshot_role(role) for role in roles),
    )


def snapshot_message(message: discord.Message) -> PlatformMessage:
    """Take an immutable snapshot of ``message`` for one render call.

    The creation time is converted to the local timezone once here.
    """
    author = message.author
    reference = message.reference
    return PlatformMessage(
        id=message.id,
        content=message.content or "",
        created_at=message.created_at.astimezone(),
        author=snapshot_author(author) if author is not None else None,
        member=snapshot_member(author) if author is not None else None,
        attachments=tuple(
            Attachment(
                url=item.url,
                filename=item.filename,
                content_type=item.content_type,
                size=item.size,
            )
            for item in message.attachments
        ),
        stickers=tuple(
            Sticker(id=item.id, name=item.name) for item in message.stickers
        ),
        embed_count=len(message.embeds),
        reference_id=getattr(reference, "message_id", None),
    )


async def resolve_referenced_message(
    message: discord.Message,
) -> discord.Message | None:
    """Return the message ``message`` replies to, or None.

    Uses the resolved or cached reference before fetching. Fetch failures are
    logged and treated as "no reply".
    """
    reference = message.reference
    if reference is None or reference.message_id is None:
        return None

    resolved = getattr(reference, "resolved", None)
    if isinstance(resolved, discord.Message):
        return resolved
    cached = getattr(reference, "cached_message", None)
    if cached is not None:
        return cached

    fetch_message = getattr(message.channel, "fetch_message", None)
    if not callable(fetch_message):
        return None
    try:
        return await fetch_message(reference.message_id)
    except FETCH_ERRORS as exc:
        log_recovered(
            logger=logger,
            message="Could not fetch referenced message; omitting reply block",
            error=exc,
            context={
                "message_id": message.id,
                "reference_id": reference.message_id,
            },
        )
        return None


def _ids(pattern: re.Pattern[str], texts: Iterable[str]) -> set[int]:
    return {int(found) for text in texts for found in pattern.findall(text)}


def build_mention_lookup(
    message: discord.Message,
    *,
    extra: Iterable[discord.Message | None] = (),
) -> MentionLookup:
    """Collect display names for mentions in ``message`` and ``extra`` messages.

    Mentions parsed by Discord come first; ids that only appear in the raw
    text are looked up in the guild cache.
    """
    messages = [message, *(item for item in extra if item is not None)]
    users: dict[int, str] = {}
    channels: dict[int, str] = {}
    roles: dict[int, str] = {}

    for item in messages:
        for user in item.mentions:
            users.setdefault(user.id, user.display_name)
        for role in item.role_mentions:
            roles.setdefault(role.id, role.name)
        for channel in item.channel_mentions:
            channels.setdefault(channel.id, channel.name)

    guild = message.guild
    if guild is not None:
        texts = [item.content or "" for item in messages]
        for user_id in _ids(_USER_MENTION_RE, texts) - users.keys():
            member = guild.get_member(user_id)
            if member is not None:
                users[user_id] = member.display_name
        for channel_id in _ids(_CHANNEL_MENTION_RE, texts) - channels.keys():
            channel = guild.get_channel(channel_id)
            if channel is not None:
                channels[channel_id] = channel.name
        for role_id in _ids(_ROLE_MENTION_RE, texts) - roles.keys():
            role = guild.get_role(role_id)
            if role is not None:
                roles[role_id] = role.name

    return MentionLookup(users=users, channels=channels, roles=roles)
