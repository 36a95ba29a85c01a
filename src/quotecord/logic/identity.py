"""Resolve author names, accent colors and role icons."""

from __future__ import annotations

from typing import TYPE_CHECKING

from quotecord.core.config import UNKNOWN_USER_NAME, RenderSettings
from quotecord.core.models import AuthorIdentity, ReplyIdentity

if TYPE_CHECKING:
    from collections.abc import Iterable

    from quotecord.core.models import Author, Member, Role


def format_color(value: int) -> str:
    """Format a numeric color as lower-case ``#rrggbb``."""
    return f"#{value & 0xFFFFFF:06x}"


def select_accent_role(roles: Iterable[Role]) -> Role | None:
    """Pick the highest-positioned colored role, ignoring @everyone."""
    colored = [role for role in roles if role.color and not role.is_default]
    if not colored:
        return None
    return max(colored, key=lambda role: role.position)


def _member_color(member: Member | None, default: str) -> tuple[str, Role | None]:
    role = select_accent_role(member.roles) if member is not None else None
    if role is None:
        return default, None
    return format_color(role.color), role


def _display_name(author: Author, member: Member | None) -> str:
    if member is not None and member.nickname:
        return member.nickname
    return author.display_name or author.username


def resolve_author_identity(
    author: Author | None,
    member: Member | None = None,
    *,
    settings: RenderSettings | None = None,
) -> AuthorIdentity:
    """Resolve how the primary message author is displayed."""
    effective = settings or RenderSettings()
    color, role = _member_color(member, effective.author_default_color)

    if author is None:
        return AuthorIdentity(
            name=UNKNOWN_USER_NAME,
            color=color,
            avatar_url=effective.default_avatar_url,
            role_icon_url=role.icon_url if role else None,
        )

    return AuthorIdentity(
        name=_display_name(author, member),
        color=color,
        avatar_url=author.avatar_url or effective.default_avatar_url,
        role_icon_url=role.icon_url if role else None,
    )


def resolve_reply_identity(
    author: Author,
    member: Member | None = None,
    *,
    settings: RenderSettings | None = None,
) -> ReplyIdentity:
    """Resolve how the author of a replied-to message is displayed."""
    effective = settings or RenderSettings()
    color, _ = _member_color(member, effective.reply_default_color)
    return ReplyIdentity(
        name=_display_name(author, member),
        color=color,
        avatar_url=author.avatar_url or effective.default_avatar_url,
    )
