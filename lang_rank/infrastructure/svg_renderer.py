"""SVG chart rendering for ranked language usage."""

import logging
import os
from dataclasses import dataclass
from typing import List, Sequence
from xml.sax.saxutils import escape

from lang_rank.domain.colors import color_for_language
from lang_rank.domain.errors import NoLanguageDataError
from lang_rank.domain.repository import LanguageStat

logger = logging.getLogger(__name__)

WIDTH = 640
HEIGHT = 320
CARD_PADDING = 28

HEADER_HEIGHT = 24
HEADER_GAP = 18
BAR_HEIGHT = 14
BAR_GAP = 22
TILE_HEIGHT = 72
TILE_GAP = 16
FOOTER_HEIGHT = 28
MAX_COLUMNS = 3

FONT_FAMILY = "Poppins, 'Segoe UI', Arial, sans-serif"

_ENTITIES = {'"': "&quot;", "'": "&apos;"}


@dataclass(frozen=True)
class BarSegment:
    x: int
    width: int
    color: str


def escape_text(text: str) -> str:
    """Escape &, <, >, double and single quotes for embedding in SVG."""
    return escape(text, _ENTITIES)


def total_bytes(ranked: Sequence[LanguageStat]) -> int:
    return sum(item.bytes for item in ranked)


def bar_segments(ranked: Sequence[LanguageStat], bar_x: int, bar_width: int) -> List[BarSegment]:
    """
    Split the bar into one segment per entry, proportional to its bytes.

    Widths are rounded down; entries that round to zero get no segment. The last
    drawn segment takes whatever is left, so the widths always add up to
    ``bar_width``.
    """
    total = total_bytes(ranked)
    if total <= 0:
        raise NoLanguageDataError()

    widths = []
    for i, item in enumerate(ranked):
        width = bar_width * item.bytes // total
        if width > 0:
            widths.append([width, color_for_language(item.language, i)])

    # Only possible with more entries than bar pixels.
    if not widths:
        widths.append([0, color_for_language(ranked[0].language, 0)])

    widths[-1][0] = bar_width - sum(width for width, _ in widths[:-1])

    segments: List[BarSegment] = []
    x = bar_x
    for width, color in widths:
        segments.append(BarSegment(x=x, width=width, color=color))
        x += width
    return segments


def grid_shape(count: int) -> tuple[int, int]:
    """Return (columns, rows) of the tile grid for ``count`` entries."""
    cols = min(MAX_COLUMNS, count)
    rows = (count + cols - 1) // cols
    return cols, rows


def _text(x: int, y: int, size: int, fill: str, content: str) -> str:
    return (
        f'<text x="{x}" y="{y}" font-family="{FONT_FAMILY}" font-size="{size}" '
        f'fill="{fill}">{content}</text>'
    )


def render_svg(ranked: Sequence[LanguageStat], owner: str, excluded: Sequence[str]) -> str:
    """
    Lay out the ranked languages as a 640x320 SVG card.

    Args:
        ranked: Final ranked (and possibly bucketed) entries
        owner: Owner the chart was built for
        excluded: Language names removed before ranking, shown as a footnote

    Returns:
        The SVG document

    Raises:
        NoLanguageDataError: If there are no entries or they sum to zero bytes
    """
    if not ranked:
        raise NoLanguageDataError()
    total = total_bytes(ranked)
    if total == 0:
        raise NoLanguageDataError()

    cols, rows = grid_shape(len(ranked))
    footer_height = FOOTER_HEIGHT if excluded else 0
    grid_height = rows * TILE_HEIGHT + (rows - 1) * TILE_GAP
    content_height = HEADER_HEIGHT + HEADER_GAP + BAR_HEIGHT + BAR_GAP + grid_height + footer_height
    top_offset = max((HEIGHT - content_height) // 2, CARD_PADDING)

    lines = [
        '<?xml version="1.0" encoding="UTF-8"?>',
        f'<svg xmlns="http://www.w3.org/2000/svg" width="{WIDTH}" height="{HEIGHT}">',
        '<rect width="100%" height="100%" rx="14" fill="#202a2f" stroke="#324047" stroke-width="2"/>',
        _text(CARD_PADDING, top_offset + 18, 20, "#9be36a", "Most Used Languages"),
    ]

    bar_x = CARD_PADDING
    bar_y = top_offset + HEADER_HEIGHT + HEADER_GAP
    bar_width = WIDTH - CARD_PADDING * 2
    lines.append(f'<rect x="{bar_x}" y="{bar_y}" width="{bar_width}" height="{BAR_HEIGHT}" rx="7" fill="#1b2328"/>')
    lines.append(
        f'<clipPath id="barClip"><rect x="{bar_x}" y="{bar_y}" width="{bar_width}" '
        f'height="{BAR_HEIGHT}" rx="7"/></clipPath>'
    )
    for segment in bar_segments(ranked, bar_x, bar_width):
        lines.append(
            f'<rect x="{segment.x}" y="{bar_y}" width="{segment.width}" height="{BAR_HEIGHT}" '
            f'fill="{segment.color}" clip-path="url(#barClip)"/>'
        )

    grid_top = bar_y + BAR_HEIGHT + BAR_GAP
    grid_width = WIDTH - CARD_PADDING * 2
    tile_width = (grid_width - (cols - 1) * TILE_GAP) // cols

    for i, item in enumerate(ranked):
        row, col = divmod(i, cols)
        x = CARD_PADDING + col * (tile_width + TILE_GAP)
        y = grid_top + row * (TILE_HEIGHT + TILE_GAP)
        color = color_for_language(item.language, i)
        percent = item.bytes / total * 100

        lines.append(
            f'<rect x="{x}" y="{y}" width="{tile_width}" height="{TILE_HEIGHT}" rx="12" '
            f'fill="#1b2328" stroke="#2c3a42" stroke-width="1"/>'
        )
        lines.append(f'<rect x="{x + 12}" y="{y + 10}" width="6" height="{TILE_HEIGHT - 20}" rx="3" fill="{color}"/>')
        lines.append(_text(x + 28, y + 28, 16, "#d3dde3", escape_text(item.language)))
        lines.append(_text(x + 28, y + 48, 13, "#93a4ac", f"{percent:.2f}%"))
        lines.append(_text(x + 28, y + 64, 12, "#6f848e", f"{item.bytes} bytes"))

    if excluded:
        note = f"Excluded: {', '.join(excluded)}"
        note_y = min(grid_top + grid_height + 20, HEIGHT - 18)
        lines.append(_text(CARD_PADDING, note_y, 12, "#93a4ac", escape_text(note)))

    lines.append("</svg>")
    logger.debug(f"Rendered {len(ranked)} languages for {owner} in a {cols}x{rows} grid")
    return "\n".join(lines) + "\n"


def write_svg(path: str, ranked: Sequence[LanguageStat], owner: str, excluded: Sequence[str]):
    """Render the chart and write it to ``path``, creating parent directories."""
    svg = render_svg(ranked, owner, excluded)

    output_dir = os.path.dirname(path)
    if output_dir:
        os.makedirs(output_dir, exist_ok=True)

    with open(path, "w", encoding="utf-8") as f:
        f.write(svg)

    logger.info(f"Wrote chart for {owner} to {path}")
