from __future__ import annotations

from datetime import UTC, datetime, timedelta

from quotecord.core.config import RenderSettings
from quotecord.core.models import (
    Author,
    ManualMessage,
    Member,
    PlatformMessage,
    Role,
)
from quotecord.logic.reply import build_reply_preview


def _message(content: str, *, created_at: datetime, **kwargs) -> PlatformMessage:
    kwargs.setdefault("author", Author(id=2, username="bob"))
    return PlatformMessage(content=content, created_at=created_at, **kwargs)


def test_no_referenced_message(now: datetime) -> None:
    assert build_reply_preview(None, now=now) is None


def test_missing_author_omits_preview(now: datetime) -> None:
    message = PlatformMessage(content="hi", created_at=now, author=None)

    assert build_reply_preview(message, now=now) is None


def test_manual_messages_are_not_previewed(now: datetime) -> None:
    message = ManualMessage(content="hi", username="carol", created_at=now)

    assert build_reply_preview(message, now=now) is None


def test_long_content_is_truncated(now: datetime) -> None:
    preview = build_reply_preview(_message("a" * 150, created_at=now), now=now)

    assert preview is not None
    assert preview.content_html == "a" * 100 + "..."


def test_short_content_is_kept(now: datetime) -> None:
    preview = build_reply_preview(_message("b" * 50, created_at=now), now=now)

    assert preview is not None
    assert preview.content_html == "b" * 50


def test_exactly_limit_has_no_ellipsis(now: datetime) -> None:
    preview = build_reply_preview(_message("c" * 100, created_at=now), now=now)

    assert preview is not None
    assert not preview.content_html.endswith("...")


def test_empty_content_uses_placeholder(now: datetime) -> None:
    preview = build_reply_preview(_message("", created_at=now), now=now)

    assert preview is not None
    assert preview.content_html == "Click to see attachment"


def test_line_breaks_are_collapsed(now: datetime) -> None:
    preview = build_reply_preview(_message("one\ntwo", created_at=now), now=now)

    assert preview is not None
    assert preview.content_html == "one two"
    assert "<br>" not in preview.content_html


def test_reply_formatting_is_kept(now: datetime) -> None:
    preview = build_reply_preview(_message("**bold**", created_at=now), now=now)

    assert preview is not None
    assert preview.content_html == "<strong>bold</strong>"


def test_identity_and_default_color(now: datetime) -> None:
    preview = build_reply_preview(
        _message(
            "hi",
            created_at=now,
            author=Author(id=2, username="bob", avatar_url="https://cdn.test/b.png"),
        ),
        now=now,
    )

    assert preview is not None
    assert preview.author_name == "bob"
    assert preview.color == "#b5bac1"
    assert preview.avatar_url == "https://cdn.test/b.png"


def test_role_color_and_nickname(now: datetime) -> None:
    member = Member(
        nickname="Bobby",
        roles=(Role(id=9, name="mod", color=0xFF0000, position=3),),
    )

    preview = build_reply_preview(
        _message("hi", created_at=now, member=member),
        now=now,
    )

    assert preview is not None
    assert preview.author_name == "Bobby"
    assert preview.color == "#ff0000"


def test_settings_change_default_color(now: datetime) -> None:
    preview = build_reply_preview(
        _message("hi", created_at=now),
        settings=RenderSettings(reply_default_color="#123456"),
        now=now,
    )

    assert preview is not None
    assert preview.color == "#123456"


def test_timestamp_is_short_for_today(now: datetime) -> None:
    preview = build_reply_preview(
        _message("hi", created_at=now - timedelta(hours=2)),
        now=now,
    )

    assert preview is not None
    assert preview.timestamp == "13:30"


def test_timestamp_for_older_messages(now: datetime) -> None:
    created_at = datetime(2024, 5, 9, 8, 5, tzinfo=UTC)

    preview = build_reply_preview(_message("hi", created_at=created_at), now=now)

    assert preview is not None
    assert preview.timestamp == "Yesterday at 08:05"
