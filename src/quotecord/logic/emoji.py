"""Unicode and custom emoji detection."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

import emoji

if TYPE_CHECKING:
    from collections.abc import Iterator

ZWJ = "\u200d"
VARIATION_SELECTOR = "\ufe0f"

# Custom emoji markers after HTML escaping: &lt;:name:id&gt; / &lt;a:name:id&gt;
ESCAPED_CUSTOM_EMOJI_RE = re.compile(r"&lt;(a?):(\w+):(\d+)&gt;")


def find_unicode_emoji(text: str) -> Iterator[tuple[int, int, str]]:
    """Yield ``(start, end, sequence)`` for every emoji sequence in ``text``.

    Flags, keycaps, skin tones and ZWJ-joined sequences come back as one
    sequence each.
    """
    for found in emoji.emoji_list(text):
        yield found["match_start"], found["match_end"], found["emoji"]


def is_emoji_only(escaped_text: str) -> bool:
    """Return True when the text holds nothing but emoji and whitespace.

    Custom emoji markers are disregarded, so a message made only of custom
    emoji also counts.
    """
    stripped = ESCAPED_CUSTOM_EMOJI_RE.sub("", escaped_text)
    has_custom = len(stripped) != len(escaped_text)
    stripped = "".join(stripped.split())
    if emoji.replace_emoji(stripped, replace=""):
        return False
    return has_custom or bool(stripped)


def twemoji_codepoint(sequence: str) -> str:
    """Build the Twemoji asset name for an emoji sequence.

    The variation selector is dropped unless the sequence is ZWJ-joined,
    matching Twemoji's file naming.
    """
    if ZWJ not in sequence:
        sequence = sequence.replace(VARIATION_SELECTOR, "")
    return "-".join(f"{ord(char):x}" for char in sequence)
