"""Discord-flavoured rich text to HTML.

The transformer is a fixed, ordered pipeline of stages. Text travels between
stages as a tuple of immutable :class:`Span` objects: free text that later
stages may still rewrite, or claimed markup that they must leave alone.

Two kinds of stage exist:

* token stages (links, emoji, line breaks, mentions) rewrite matches found
  inside free-text spans into claimed leaf markup;
* wrapping stages (code, subtext, headings, emphasis) match against a masked
  view of the whole text in which every claimed character is replaced by
  ``MASK``. Claimed markup can therefore sit inside a wrapped region but can
  never act as a delimiter, and a match is only accepted when the markup it
  encloses is balanced.
"""

from __future__ import annotations

import html
import re
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING
from urllib.parse import SplitResult, urlsplit

from quotecord.core.config import (
    UNKNOWN_CHANNEL_MENTION,
    UNKNOWN_ROLE_MENTION,
    UNKNOWN_USER_MENTION,
    RenderSettings,
)
from quotecord.core.models import MentionLookup
from quotecord.logic.emoji import (
    ESCAPED_CUSTOM_EMOJI_RE,
    find_unicode_emoji,
    is_emoji_only,
    twemoji_codepoint,
)

if TYPE_CHECKING:
    from collections.abc import Iterator

MASK = "\x00"
LINE_BREAK = "<br>"
LANGUAGE_TAG_MAX_LENGTH = 20


class TextMode(Enum):
    """How much room the rendered text gets."""

    FULL = "full"
    REPLY = "reply"


class SpanKind(Enum):
    """Role of a span in the working text."""

    TEXT = "text"
    MARKUP = "markup"
    OPEN = "open"
    CLOSE = "close"


@dataclass(frozen=True, slots=True)
class Span:
    """A piece of the working text."""

    text: str
    kind: SpanKind = SpanKind.TEXT

    @property
    def claimed(self) -> bool:
        """Whether later stages must leave this span untouched."""
        return self.kind is not SpanKind.TEXT


Spans = tuple[Span, ...]


@dataclass(frozen=True, slots=True)
class TransformContext:
    """Per-call inputs shared by every stage."""

    mode: TextMode
    lookup: MentionLookup
    settings: RenderSettings
    emoji_only: bool = False

    @property
    def emoji_class(self) -> str:
        """CSS class for inline emoji images."""
        if self.mode is TextMode.REPLY:
            return "emoji emoji-small"
        if self.emoji_only:
            return "emoji emoji-jumbo"
        return "emoji"


Stage = Callable[[Spans, TransformContext], Spans]


def _markup(text: str) -> Span:
    return Span(text, SpanKind.MARKUP)


def _join(spans: Iterable[Span]) -> str:
    return "".join(span.text for span in spans)


def _masked(spans: Iterable[Span]) -> str:
    return "".join(
        MASK * len(span.text) if span.claimed else span.text for span in spans
    )


def _slice(spans: Spans, start: int, end: int) -> list[Span]:
    """Return the spans covering ``[start, end)`` of the joined text."""
    sliced: list[Span] = []
    offset = 0
    for span in spans:
        span_end = offset + len(span.text)
        low, high = max(start, offset), min(end, span_end)
        if low < high:
            if low == offset and high == span_end:
                sliced.append(span)
            else:
                sliced.append(Span(span.text[low - offset : high - offset], span.kind))
        offset = span_end
        if offset >= end:
            break
    return sliced


def _balanced(spans: Iterable[Span]) -> bool:
    depth = 0
    for span in spans:
        if span.kind is SpanKind.OPEN:
            depth += 1
        elif span.kind is SpanKind.CLOSE:
            depth -= 1
            if depth < 0:
                return False
    return depth == 0


Finder = Callable[[str], Iterable[tuple[int, int, str | None]]]


def _rewrite(spans: Spans, find: Finder) -> Spans:
    """Replace found regions of free-text spans with claimed markup.

    ``find`` yields ``(start, end, markup)`` in order; a None markup leaves
    the region as free text.
    """
    result: list[Span] = []
    for span in spans:
        if span.claimed:
            result.append(span)
            continue
        cursor = 0
        for start, end, rendered in find(span.text):
            if rendered is None:
                continue
            if start > cursor:
                result.append(Span(span.text[cursor:start]))
            result.append(_markup(rendered))
            cursor = end
        if cursor < len(span.text):
            result.append(Span(span.text[cursor:]))
    return tuple(result)


def _substitute(
    spans: Spans,
    pattern: re.Pattern[str],
    render: Callable[[re.Match[str]], str | None],
) -> Spans:
    """Replace regex matches inside free-text spans with claimed markup."""
    return _rewrite(
        spans,
        lambda text: (
            (match.start(), match.end(), render(match))
            for match in pattern.finditer(text)
        ),
    )


WrapBuilder = Callable[[re.Match[str], str, list[Span]], Sequence[Span]]


def _wrap(spans: Spans, pattern: re.Pattern[str], build: WrapBuilder) -> Spans:
    """Rewrite delimited regions matched against the masked view.

    ``pattern`` must expose the wrapped content as group 1. ``build`` gets
    the match, the joined text and the inner spans and returns the spans
    that replace the whole match.
    """
    text = _join(spans)
    masked = _masked(spans)
    result: list[Span] = []
    cursor = 0
    position = 0
    while position < len(masked):
        match = pattern.search(masked, position)
        if match is None:
            break
        inner = _slice(spans, match.start(1), match.end(1))
        if not _balanced(inner):
            position = match.start() + 1
            continue
        result.extend(_slice(spans, cursor, match.start()))
        result.extend(build(match, text, inner))
        cursor = position = match.end()
    result.extend(_slice(spans, cursor, len(text)))
    return tuple(result)


def _enclose(open_tag: str, close_tag: str) -> WrapBuilder:
    def build(
        _match: re.Match[str],
        _text: str,
        inner: list[Span],
    ) -> Sequence[Span]:
        return (Span(open_tag, SpanKind.OPEN), *inner, Span(close_tag, SpanKind.CLOSE))

    return build


def escape_text(text: str) -> str:
    """Escape ``& < > " '`` and normalise line endings."""
    return html.escape(text.replace("\r\n", "\n"), quote=True)


def escape_stage(spans: Spans, _context: TransformContext) -> Spans:
    """Escape every free-text span. Runs before any markup exists."""
    return tuple(
        span if span.claimed else Span(escape_text(span.text)) for span in spans
    )


# Stops before escaped angle brackets and quotes; _trim_url handles the tail.
URL_RE = re.compile(r"https?://(?:(?!&(?:lt|gt|quot|#x27);)[^\s])+")
TRAILING_PUNCTUATION = ".,:;!?"
EMPHASIS_DELIMITERS = "*_~"
ESCAPED_AMPERSAND = "&amp;"
MEDIA_EXTENSIONS = (".png", ".jpg", ".jpeg", ".gif", ".webp")


def _trim_url(url: str) -> str:
    """Drop characters that end the sentence rather than the URL.

    Sentence punctuation and a dangling ``&amp;`` always go. A closing paren
    goes when it has no opening partner, and a trailing run of emphasis
    delimiters goes when the rest of the URL holds fewer of that delimiter
    than the run.
    """
    while url:
        last = url[-1]
        if url.endswith(ESCAPED_AMPERSAND):
            url = url[: -len(ESCAPED_AMPERSAND)]
        elif last in TRAILING_PUNCTUATION:
            url = url[:-1]
        elif last == ")" and url.count(")") > url.count("("):
            url = url[:-1]
        elif last in EMPHASIS_DELIMITERS:
            body = url.rstrip(last)
            if body.count(last) >= len(url) - len(body):
                return url
            url = body
        else:
            return url
    return url


def _find_urls(text: str) -> Iterator[tuple[int, int, str]]:
    for match in URL_RE.finditer(text):
        url = _trim_url(match.group(0))
        if url.partition("://")[2]:
            yield match.start(), match.start() + len(url), url


def _substitute_urls(spans: Spans, render: Callable[[str], str | None]) -> Spans:
    return _rewrite(
        spans,
        lambda text: (
            (start, end, render(url)) for start, end, url in _find_urls(text)
        ),
    )


def _split_url(escaped_url: str) -> SplitResult | None:
    try:
        return urlsplit(html.unescape(escaped_url))
    except ValueError:
        return None


def media_url_stage(spans: Spans, _context: TransformContext) -> Spans:
    """Turn direct image URLs into inline images.

    Claimed URLs are skipped by the GIF, link and emoji stages.
    """

    def render(url: str) -> str | None:
        parts = _split_url(url)
        if parts is None or not parts.path.lower().endswith(MEDIA_EXTENSIONS):
            return None
        return f'<img class="inline-media" src="{url}" alt="">'

    return _substitute_urls(spans, render)


@dataclass(frozen=True, slots=True)
class GifProvider:
    """A GIF host whose page links can be mapped to a direct media URL."""

    name: str
    hosts: frozenset[str]
    path_re: re.Pattern[str]
    direct_url: Callable[[SplitResult, re.Match[str]], str]


GIF_PROVIDERS: tuple[GifProvider, ...] = (
    GifProvider(
        name="tenor",
        hosts=frozenset({"tenor.com", "www.tenor.com"}),
        path_re=re.compile(r"/(?:[a-z]{2}(?:-[A-Za-z]{2})?/)?view/[\w%-]*?-?\d+"),
        direct_url=lambda parts, _m: f"https://tenor.com{parts.path}.gif",
    ),
    GifProvider(
        name="giphy",
        hosts=frozenset({"giphy.com", "www.giphy.com"}),
        path_re=re.compile(r"/gifs/(?:[\w-]*-)?([A-Za-z0-9]+)/?"),
        direct_url=lambda _p, m: f"https://media.giphy.com/media/{m.group(1)}/giphy.gif",
    ),
    GifProvider(
        name="imgur",
        hosts=frozenset({"imgur.com", "www.imgur.com", "i.imgur.com"}),
        # Media ids mix in capitals or digits; site pages are lower-case words.
        path_re=re.compile(
            r"/(?=[a-z]*[A-Z0-9])([A-Za-z0-9]{5,10})(?:\.(?:gifv|mp4))?",
        ),
        direct_url=lambda _p, m: f"https://i.imgur.com/{m.group(1)}.gif",
    ),
)


def _gif_renderer(provider: GifProvider) -> Callable[[str], str | None]:
    def render(url: str) -> str | None:
        parts = _split_url(url)
        if parts is None or (parts.hostname or "").lower() not in provider.hosts:
            return None
        path_match = provider.path_re.fullmatch(parts.path)
        if path_match is None:
            return None
        direct = html.escape(provider.direct_url(parts, path_match), quote=True)
        return (
            f'<object class="inline-media gif" data="{direct}" type="image/gif">'
            f'<a class="link" href="{url}">{url}</a></object>'
        )

    return render


def gif_link_stage(spans: Spans, _context: TransformContext) -> Spans:
    """Rewrite GIF-host page links, one provider at a time in precedence order.

    The ``<object>`` body is shown as a plain link when the media fails to
    load. A URL claimed by an earlier provider is never seen by a later one.
    """
    for provider in GIF_PROVIDERS:
        spans = _substitute_urls(spans, _gif_renderer(provider))
    return spans


def link_stage(spans: Spans, _context: TransformContext) -> Spans:
    """Turn every remaining bare URL into a link."""
    return _substitute_urls(
        spans,
        lambda url: f'<a class="link" href="{url}">{url}</a>',
    )


def custom_emoji_stage(spans: Spans, context: TransformContext) -> Spans:
    """Resolve ``<:name:id>`` and ``<a:name:id>`` markers to CDN images."""
    base = context.settings.custom_emoji_cdn_url.rstrip("/")

    def render(match: re.Match[str]) -> str:
        animated, name, emoji_id = match.groups()
        extension = "gif" if animated else "png"
        src = html.escape(f"{base}/{emoji_id}.{extension}", quote=True)
        return (
            f'<img class="{context.emoji_class}" src="{src}" '
            f'alt=":{name}:" draggable="false">'
        )

    return _substitute(spans, ESCAPED_CUSTOM_EMOJI_RE, render)


def unicode_emoji_stage(spans: Spans, context: TransformContext) -> Spans:
    """Replace Unicode emoji with Twemoji images."""
    base = context.settings.emoji_cdn_url.rstrip("/")

    def render(sequence: str) -> str:
        src = html.escape(f"{base}/{twemoji_codepoint(sequence)}.svg", quote=True)
        return (
            f'<img class="{context.emoji_class}" src="{src}" '
            f'alt="{sequence}" draggable="false">'
        )

    return _rewrite(
        spans,
        lambda text: (
            (start, end, render(sequence))
            for start, end, sequence in find_unicode_emoji(text)
        ),
    )


CODE_BLOCK_RE = re.compile(r"```(.+?)```", re.DOTALL)
INLINE_CODE_RE = re.compile(r"`([^`\n]+)`")


def _language_tag(masked_body: str) -> str | None:
    first_line, newline, rest = masked_body.partition("\n")
    if not newline or not rest or not first_line:
        return None
    if len(first_line) >= LANGUAGE_TAG_MAX_LENGTH or MASK in first_line:
        return None
    if any(char.isspace() for char in first_line):
        return None
    return first_line


def _build_code_block(
    match: re.Match[str],
    text: str,
    _inner: list[Span],
) -> Sequence[Span]:
    body = text[match.start(1) : match.end(1)]
    language = _language_tag(match.group(1))
    if language is None:
        body = body.removeprefix("\n").removesuffix("\n")
        return (_markup(f'<pre class="code-block"><code>{body}</code></pre>'),)
    body = body[len(language) + 1 :].removesuffix("\n")
    return (
        _markup(
            f'<pre class="code-block" data-language="{language}">'
            f'<code class="language-{language}">{body}</code></pre>',
        ),
    )


def code_block_stage(spans: Spans, _context: TransformContext) -> Spans:
    """Render paired triple-backtick fences; the body becomes claimed.

    An unterminated fence has no closing delimiter and stays literal.
    """
    return _wrap(spans, CODE_BLOCK_RE, _build_code_block)


def _build_inline_code(
    match: re.Match[str],
    text: str,
    _inner: list[Span],
) -> Sequence[Span]:
    body = text[match.start(1) : match.end(1)]
    return (_markup(f'<code class="inline-code">{body}</code>'),)


def inline_code_stage(spans: Spans, _context: TransformContext) -> Spans:
    """Render single-backtick spans that do not cross a newline."""
    return _wrap(spans, INLINE_CODE_RE, _build_inline_code)


SUBTEXT_RE = re.compile(r"^-# (.+?)[ \t]*$", re.MULTILINE)
HEADING_PATTERNS: tuple[tuple[int, re.Pattern[str]], ...] = tuple(
    (level, re.compile(rf"^{'#' * level} (.+?)[ \t]*(?:\n|\Z)", re.MULTILINE))
    for level in (3, 2, 1)
)
EMPHASIS_PATTERNS: tuple[tuple[str, re.Pattern[str]], ...] = (
    ("strong", re.compile(r"\*\*(.+?)\*\*(?!\*)")),
    ("strong", re.compile(r"__(.+?)__(?!_)")),
    ("em", re.compile(r"\*(?![\s*])(.+?)(?<!\s)\*")),
    ("em", re.compile(r"(?<![\w_])_(?!_)(.+?)_(?![\w_])")),
    ("s", re.compile(r"~~(.+?)~~")),
)


def subtext_stage(spans: Spans, _context: TransformContext) -> Spans:
    """Render a leading ``-#`` line as subtext."""
    return _wrap(spans, SUBTEXT_RE, _enclose('<span class="subtext">', "</span>"))


def heading_stage(spans: Spans, _context: TransformContext) -> Spans:
    """Render ``###``, ``##`` and ``#`` lines, most specific marker first.

    The newline ending a heading line is consumed by the heading element.
    """
    for level, pattern in HEADING_PATTERNS:
        spans = _wrap(spans, pattern, _enclose(f"<h{level}>", f"</h{level}>"))
    return spans


def emphasis_stage(spans: Spans, _context: TransformContext) -> Spans:
    """Render bold, then italic, then strikethrough."""
    for tag, pattern in EMPHASIS_PATTERNS:
        spans = _wrap(spans, pattern, _enclose(f"<{tag}>", f"</{tag}>"))
    return spans


NEWLINE_RE = re.compile(r"\n")
MENTION_RE = re.compile(r"&lt;(@!?|@&amp;|#)(\d+)&gt;")


def line_break_stage(spans: Spans, _context: TransformContext) -> Spans:
    """Turn free-text newlines into ``<br>``; code block bodies keep theirs."""
    return _substitute(spans, NEWLINE_RE, lambda _match: LINE_BREAK)


def mention_stage(spans: Spans, context: TransformContext) -> Spans:
    """Resolve user, channel and role mentions, with placeholders for unknown ids."""

    def render(match: re.Match[str]) -> str:
        marker, raw_id = match.groups()
        mention_id = int(raw_id)
        if marker == "#":
            name = context.lookup.channels.get(mention_id)
            label = f"#{name}" if name else UNKNOWN_CHANNEL_MENTION
            css = "mention channel-mention"
        elif marker == "@&amp;":
            name = context.lookup.roles.get(mention_id)
            label = f"@{name}" if name else UNKNOWN_ROLE_MENTION
            css = "mention role-mention"
        else:
            name = context.lookup.users.get(mention_id)
            label = f"@{name}" if name else UNKNOWN_USER_MENTION
            css = "mention"
        return f'<span class="{css}">{html.escape(label, quote=True)}</span>'

    return _substitute(spans, MENTION_RE, render)


PIPELINE: tuple[tuple[str, Stage], ...] = (
    ("escape", escape_stage),
    ("media_urls", media_url_stage),
    ("gif_links", gif_link_stage),
    ("links", link_stage),
    ("custom_emoji", custom_emoji_stage),
    ("unicode_emoji", unicode_emoji_stage),
    ("code_blocks", code_block_stage),
    ("inline_code", inline_code_stage),
    ("subtext", subtext_stage),
    ("headings", heading_stage),
    ("emphasis", emphasis_stage),
    ("line_breaks", line_break_stage),
    ("mentions", mention_stage),
)


def build_context(
    text: str,
    *,
    mode: TextMode = TextMode.FULL,
    lookup: MentionLookup | None = None,
    settings: RenderSettings | None = None,
) -> TransformContext:
    """Build the stage context; emoji-only is decided here, on escaped text."""
    return TransformContext(
        mode=mode,
        lookup=lookup or MentionLookup(),
        settings=settings or RenderSettings(),
        emoji_only=is_emoji_only(escape_text(text)),
    )


def run_stages(
    spans: Spans,
    context: TransformContext,
    stages: Iterable[tuple[str, Stage]] = PIPELINE,
) -> Spans:
    """Run ``stages`` in order over ``spans``."""
    for _name, stage in stages:
        spans = stage(spans, context)
    return spans


def render_rich_text(
    text: str | None,
    *,
    mode: TextMode = TextMode.FULL,
    lookup: MentionLookup | None = None,
    settings: RenderSettings | None = None,
) -> str:
    """Render raw message text to an HTML fragment.

    Never raises on malformed input: unmatched delimiters stay literal and
    unknown mentions render as placeholders.
    """
    source = text or ""
    context = build_context(source, mode=mode, lookup=lookup, settings=settings)
    spans = run_stages((Span(source),) if source else (), context)
    return _join(spans)
