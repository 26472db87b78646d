# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""SVG serialization of a computed Layout."""

from __future__ import annotations

import math
from xml.sax.saxutils import escape

from .layout import BarRow, Layout, LegendRow, Ring

DEFAULT_TITLE = "TECH STACK OVERVIEW"

_XML_ENTITIES = {"'": "&apos;", '"': "&quot;"}


def escape_xml(value: object) -> str:
    """Escape ``< > & ' "`` for use in SVG text and attribute values."""
    return escape(str(value), _XML_ENTITIES)


def _num(value: float) -> str:
    """Compact, finite number formatting for coordinates."""
    if not math.isfinite(value):
        value = 0.0
    text = f"{value:.3f}".rstrip("0").rstrip(".")
    return "0" if text in ("-0", "") else text


def render_svg(layout: Layout, *, title: str = DEFAULT_TITLE, author: str | None = None) -> str:
    """Render ``layout`` into a standalone SVG document.

    Every string that originates from catalog or repository data is escaped;
    geometry is taken from the layout as-is.
    """
    style = layout.style
    width = layout.width
    height = layout.height

    parts: list[str] = [
        f'<svg width="{width}" height="{_num(height)}" viewBox="0 0 {width} {_num(height)}" xmlns="http://www.w3.org/2000/svg">',
        _stylesheet(layout),
        f'<rect width="100%" height="100%" fill="{escape_xml(style.background)}" rx="16" />',
        f'<text x="{style.padding}" y="55" class="title">{escape_xml(title)}</text>',
    ]
    if author:
        parts.append(
            f'<text x="{width - style.padding}" y="{_num(height - style.padding)}" text-anchor="end" class="author">'
            f"{escape_xml(author.upper())}</text>"
        )

    parts.extend(_bar(row, layout) for row in layout.bars)
    parts.extend(_ring(layout.ring, layout))
    parts.extend(_legend_row(row) for row in layout.legend)
    parts.append("</svg>")
    return "\n".join(parts) + "\n"


def _stylesheet(layout: Layout) -> str:
    style = layout.style
    return f"""<style>
  text {{ fill: {style.text_color}; font-family: {style.font_sans}; }}
  .title {{ font-family: {style.font_impact}; font-size: 28px; fill: {style.title_color}; letter-spacing: 1px; }}
  .author {{ font-family: {style.font_impact}; font-size: 12px; fill: {style.muted_color}; letter-spacing: 1px; }}
  .label {{ font-family: {style.font_impact}; font-size: 14px; letter-spacing: 0.05em; }}
  .legend-name {{ font-family: {style.font_impact}; font-size: 14px; letter-spacing: 0.5px; }}
  .font-data {{ font-family: {style.font_mono}; font-weight: 700; }}
  .total-val {{ font-size: 44px; }}
  .total-label {{ font-size: 12px; fill: {style.muted_color}; letter-spacing: 0.1em; font-weight: 900; }}
  .count-badge {{ font-size: 16px; }}
  .percent-val {{ font-size: 15px; }}
  .tooltip {{ cursor: pointer; }}
</style>"""


def _tooltip(row_stat_name: str, count: int, repos: tuple[str, ...]) -> str:
    text = f"{row_stat_name}: {count}"
    if repos:
        text += f" ({', '.join(repos)})"
    return f"<title>{escape_xml(text)}</title>"


def _bar(row: BarRow, layout: Layout) -> str:
    style = layout.style
    stat = row.stat
    duration = _num(style.animation_duration)
    text_y = _num(row.y + style.bar_height - 4)
    return "\n".join(
        [
            '<g class="tooltip">',
            f"  {_tooltip(stat.name, stat.count, stat.repo_names)}",
            f'  <text x="{style.padding}" y="{text_y}" class="label">{escape_xml(stat.name.upper())}</text>',
            f'  <rect x="{_num(row.x)}" y="{_num(row.y)}" width="{_num(row.track_width)}" height="{style.bar_height}" '
            f'fill="{escape_xml(style.track_color)}" rx="4" />',
            f'  <rect x="{_num(row.x)}" y="{_num(row.y)}" width="{_num(row.width)}" height="{style.bar_height}" '
            f'fill="{escape_xml(stat.color)}" rx="4">',
            f'    <animate attributeName="width" from="0" to="{_num(row.width)}" dur="{duration}s" fill="freeze" />',
            "  </rect>",
            f'  <text x="{_num(row.x + row.track_width + 12)}" y="{text_y}" class="font-data count-badge">{stat.count}</text>',
            "</g>",
        ]
    )


def _ring(ring: Ring, layout: Layout) -> list[str]:
    style = layout.style
    duration = _num(style.animation_duration)
    cx, cy = _num(ring.center_x), _num(ring.center_y)
    circumference = _num(ring.circumference)
    parts: list[str] = []

    # The whole ring is rotated once so the first segment starts at the top.
    parts.append(f'<g transform="rotate(-90 {cx} {cy})">')
    for segment in ring.segments:
        stat = segment.stat
        parts.append(
            "\n".join(
                [
                    '  <g class="tooltip">',
                    f"    {_tooltip(stat.name, stat.count, stat.repo_names)}",
                    f'    <circle cx="{cx}" cy="{cy}" r="{_num(ring.radius)}" fill="transparent" '
                    f'stroke="{escape_xml(stat.color)}" stroke-width="{_num(ring.stroke_width)}" '
                    f'stroke-dasharray="0 {circumference}" stroke-linecap="butt">',
                    f'      <animate attributeName="stroke-dasharray" from="0 {circumference}" '
                    f'to="{_num(segment.arc_length)} {circumference}" dur="{duration}s" fill="freeze" />',
                    f'      <animate attributeName="stroke-dashoffset" from="0" to="{_num(segment.offset)}" '
                    f'dur="{duration}s" fill="freeze" />',
                    "    </circle>",
                    "  </g>",
                ]
            )
        )
    parts.append("</g>")

    parts.append(f'<circle cx="{cx}" cy="{cy}" r="{_num(ring.hole_radius)}" fill="{escape_xml(style.background)}" />')
    parts.append(
        f'<text x="{cx}" y="{_num(ring.center_y + 12)}" text-anchor="middle" class="font-data total-val">{layout.total_count}</text>'
    )
    parts.append(f'<text x="{cx}" y="{_num(ring.center_y + 38)}" text-anchor="middle" class="total-label">TOTAL USES</text>')
    return parts


def _legend_row(row: LegendRow) -> str:
    stat = row.stat
    return "\n".join(
        [
            "<g>",
            f'  <rect x="{_num(row.x)}" y="{_num(row.y)}" width="16" height="16" fill="{escape_xml(stat.color)}" rx="3" />',
            f'  <text x="{_num(row.x + 28)}" y="{_num(row.y + 14)}" class="legend-name">{escape_xml(stat.name.upper())}</text>',
            f'  <text x="{_num(row.x + 165)}" y="{_num(row.y + 14)}" text-anchor="end" class="font-data percent-val">{row.percentage}%</text>',
            "</g>",
        ]
    )


__all__ = ["DEFAULT_TITLE", "escape_xml", "render_svg"]
