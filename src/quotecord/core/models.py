"""Data models for quotecord.

Messages arrive in one of two shapes, discriminated by ``kind``:
``PlatformMessage`` is a snapshot of a Discord message with its author,
member and roles; ``ManualMessage`` is built by hand from a username and an
avatar URL.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from types import MappingProxyType
from typing import Any, Literal


def _empty_lookup() -> Mapping[int, str]:
    return MappingProxyType({})


@dataclass(frozen=True, slots=True)
class Role:
    """A server role that may carry a color and an icon."""

    id: int
    name: str
    color: int = 0
    icon_url: str | None = None
    position: int = 0
    is_default: bool = False


@dataclass(frozen=True, slots=True)
class Author:
    """The user who sent a message."""

    id: int
    username: str
    display_name: str | None = None
    avatar_url: str | None = None


@dataclass(frozen=True, slots=True)
class Member:
    """Server-specific identity of an author."""

    nickname: str | None = None
    roles: tuple[Role, ...] = ()


@dataclass(frozen=True, slots=True)
class Attachment:
    """A file attached to a message."""

    url: str
    filename: str
    content_type: str | None = None
    size: int = 0


@dataclass(frozen=True, slots=True)
class Sticker:
    """A static image sticker."""

    id: int
    name: str


@dataclass(frozen=True, slots=True)
class MentionLookup:
    """Display names used to resolve user, channel and role mentions."""

    users: Mapping[int, str] = field(default_factory=_empty_lookup)
    channels: Mapping[int, str] = field(default_factory=_empty_lookup)
    roles: Mapping[int, str] = field(default_factory=_empty_lookup)


@dataclass(frozen=True, slots=True)
class PlatformMessage:
    """Snapshot of a chat-platform message taken for one render call."""

    content: str
    created_at: datetime
    author: Author | None = None
    member: Member | None = None
    attachments: tuple[Attachment, ...] = ()
    stickers: tuple[Sticker, ...] = ()
    embed_count: int = 0
    reference_id: int | None = None
    id: int | None = None
    kind: Literal["platform"] = "platform"


@dataclass(frozen=True, slots=True)
class ManualMessage:
    """A message assembled by hand rather than fetched from the platform."""

    content: str
    username: str
    avatar_url: str | None = None
    created_at: datetime | None = None
    attachments: tuple[Attachment, ...] = ()
    stickers: tuple[Sticker, ...] = ()
    kind: Literal["manual"] = "manual"


Message = PlatformMessage | ManualMessage


@dataclass(frozen=True, slots=True)
class AuthorIdentity:
    """Resolved presentation of a message author."""

    name: str
    color: str
    avatar_url: str
    role_icon_url: str | None = None


@dataclass(frozen=True, slots=True)
class ReplyIdentity:
    """Resolved presentation of a replied-to message's author."""

    name: str
    color: str
    avatar_url: str


@dataclass(frozen=True, slots=True)
class ReplyPreview:
    """Compact one-line preview of a replied-to message."""

    author_name: str
    color: str
    avatar_url: str
    content_html: str
    timestamp: str | None = None


@dataclass(frozen=True, slots=True)
class RenderedDocument:
    """A self-contained HTML document ready for the rendering service."""

    html: str
    options: Mapping[str, Any] = field(
        default_factory=lambda: MappingProxyType({}),
    )
