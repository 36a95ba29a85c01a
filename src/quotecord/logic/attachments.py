"""Attachment grid layout.

The grid shape depends only on how many attachments a message carries. Each
count maps to one hand-specified case in ``GRID_CASES``; content types only
change how an individual tile is drawn.
"""

from __future__ import annotations

import html
from dataclasses import dataclass
from typing import TYPE_CHECKING, Literal

if TYPE_CHECKING:
    from collections.abc import Sequence

    from quotecord.core.models import Attachment

FILE_SIZE_UNITS = ("Bytes", "KB", "MB", "GB")
MAX_VISIBLE_TILES = 9


@dataclass(frozen=True, slots=True)
class GridCase:
    """One layout of the attachment grid.

    ``groups`` lists how many tiles go in each row (``direction="rows"``) or
    each column (``direction="columns"``).
    """

    name: str
    direction: Literal["rows", "columns"]
    groups: tuple[int, ...]
    overflow: bool = False

    @property
    def tile_count(self) -> int:
        """Number of tiles drawn for this case."""
        return sum(self.groups)


GRID_CASES: dict[int, GridCase] = {
    1: GridCase("single", "rows", (1,)),
    2: GridCase("pair", "rows", (2,)),
    3: GridCase("feature", "columns", (1, 2)),
    4: GridCase("quad", "columns", (2, 2)),
    5: GridCase("two-three", "rows", (2, 3)),
    6: GridCase("three-three", "rows", (3, 3)),
    7: GridCase("one-three-three", "rows", (1, 3, 3)),
    8: GridCase("two-three-three", "rows", (2, 3, 3)),
    9: GridCase("three-by-three", "rows", (3, 3, 3)),
    10: GridCase("one-three-by-three", "rows", (1, 3, 3, 3)),
}
OVERFLOW_CASE = GridCase("overflow", "rows", (3, 3, 3), overflow=True)


def select_grid_case(count: int) -> GridCase | None:
    """Return the grid case for ``count`` attachments, or None for zero."""
    if count <= 0:
        return None
    return GRID_CASES.get(count, OVERFLOW_CASE)


def format_file_size(size: int) -> str:
    """Format a byte count with binary prefixes, e.g. ``1536 -> "1.5 KB"``."""
    if size <= 0:
        return "0 Bytes"
    value = float(size)
    unit = 0
    while value >= 1024 and unit < len(FILE_SIZE_UNITS) - 1:
        value /= 1024
        unit += 1
    number = f"{value:.2f}".rstrip("0").rstrip(".")
    return f"{number} {FILE_SIZE_UNITS[unit]}"


def render_attachment_tile(attachment: Attachment) -> str:
    """Render one attachment as an image, video or generic file tile."""
    url = html.escape(attachment.url, quote=True)
    name = html.escape(attachment.filename, quote=True)
    content_type = (attachment.content_type or "").lower()

    if content_type.startswith("image/"):
        return (
            f'<div class="tile tile-image"><img src="{url}" alt="{name}"></div>'
        )
    if content_type.startswith("video/"):
        source_type = html.escape(content_type, quote=True)
        return (
            '<div class="tile tile-video"><video controls preload="metadata">'
            f'<source src="{url}" type="{source_type}"></video>'
            '<div class="play-button"></div></div>'
        )
    return (
        '<div class="tile tile-file"><div class="file-icon"></div>'
        f'<div class="file-info"><a class="file-name" href="{url}">{name}</a>'
        f'<span class="file-size">{format_file_size(attachment.size)}</span>'
        "</div></div>"
    )


def _overflow_tile(tile: str, hidden: int) -> str:
    return (
        f'<div class="tile-overflow">{tile}'
        f'<div class="more-badge">+{hidden}</div></div>'
    )


def render_attachment_grid(attachments: Sequence[Attachment]) -> str:
    """Render attachments into the grid case selected by their count."""
    case = select_grid_case(len(attachments))
    if case is None:
        return ""

    tiles = [render_attachment_tile(item) for item in attachments[: case.tile_count]]
    if case.overflow:
        hidden = len(attachments) - MAX_VISIBLE_TILES
        tiles[-1] = _overflow_tile(tiles[-1], hidden)

    group_class = "grid-row" if case.direction == "rows" else "grid-column"
    groups: list[str] = []
    start = 0
    for size in case.groups:
        chunk = "".join(tiles[start : start + size])
        groups.append(f'<div class="{group_class} size-{size}">{chunk}</div>')
        start += size

    return (
        f'<div class="attachment-grid grid-{case.name} grid-{case.direction}" '
        f'data-count="{len(attachments)}">{"".join(groups)}</div>'
    )
