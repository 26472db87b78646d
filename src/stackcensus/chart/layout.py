# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Chart geometry: bar rows, donut segments, legend rows and canvas size."""

from __future__ import annotations

import math
from dataclasses import dataclass

from ..errors import NothingToRenderError
from ..models import AggregateResult, Stat


@dataclass(frozen=True)
class ChartStyle:
    """Fixed visual constants for the stats card."""

    width: int = 800
    padding: int = 30
    bar_height: int = 23
    bar_gap: int = 18
    legend_row_height: int = 32
    outer_radius: float = 100
    inner_radius: float = 65
    min_content_height: int = 300
    header_space: int = 100
    bottom_margin: int = 50
    label_area_width: int = 120
    max_bar_width: float = 180
    ring_center_x: float = 480
    legend_x: float = 600
    segment_gap: float = 2
    animation_duration: float = 0.8

    background: str = "#0d1117"
    text_color: str = "#ffffff"
    track_color: str = "#30363d"
    title_color: str = "#80FF00"
    muted_color: str = "#8b949e"
    font_sans: str = "-apple-system, BlinkMacSystemFont, 'Segoe UI', Helvetica, Arial, sans-serif"
    font_impact: str = "Impact, 'Arial Black', sans-serif"
    font_mono: str = "ui-monospace, SFMono-Regular, SF Mono, Menlo, Consolas, Liberation Mono, monospace"

    @property
    def row_height(self) -> int:
        return self.bar_height + self.bar_gap

    @property
    def ring_radius(self) -> float:
        return (self.outer_radius + self.inner_radius) / 2

    @property
    def ring_stroke_width(self) -> float:
        return self.outer_radius - self.inner_radius


@dataclass(frozen=True)
class BarRow:
    stat: Stat
    x: float
    y: float
    width: float
    track_width: float


@dataclass(frozen=True)
class RingSegment:
    stat: Stat
    share: float
    arc_length: float
    offset: float


@dataclass(frozen=True)
class Ring:
    center_x: float
    center_y: float
    radius: float
    hole_radius: float
    stroke_width: float
    circumference: float
    gap_length: float
    segments: tuple[RingSegment, ...]


@dataclass(frozen=True)
class LegendRow:
    stat: Stat
    x: float
    y: float
    percentage: int


@dataclass(frozen=True)
class Layout:
    width: int
    height: float
    center_y: float
    total_count: int
    bars: tuple[BarRow, ...]
    ring: Ring
    legend: tuple[LegendRow, ...]
    style: ChartStyle


def compute_layout(result: AggregateResult, style: ChartStyle | None = None) -> Layout:
    """Lay out bars, ring and legend around one shared horizontal centerline.

    Raises NothingToRenderError when ``result`` has no stats.
    """
    style = style or ChartStyle()
    stats = result.stats
    if not stats or result.total_count <= 0:
        raise NothingToRenderError("No framework stats to render")

    total_bar_height = len(stats) * style.row_height - style.bar_gap
    total_legend_height = len(stats) * style.legend_row_height
    content_height = max(total_bar_height, style.outer_radius * 2, style.min_content_height)
    height = style.header_space + content_height + style.bottom_margin
    center_y = style.header_space + content_height / 2

    return Layout(
        width=style.width,
        height=height,
        center_y=center_y,
        total_count=result.total_count,
        bars=_layout_bars(stats, style, center_y - total_bar_height / 2),
        ring=_layout_ring(result, style, center_y),
        legend=_layout_legend(result, style, center_y - total_legend_height / 2),
        style=style,
    )


def _layout_bars(stats: tuple[Stat, ...], style: ChartStyle, top: float) -> tuple[BarRow, ...]:
    # Stats arrive sorted, so the first one is the longest bar.
    max_count = stats[0].count
    rows = []
    for index, stat in enumerate(stats):
        width = (stat.count / max_count) * style.max_bar_width if max_count else 0.0
        rows.append(
            BarRow(
                stat=stat,
                x=style.label_area_width,
                y=top + index * style.row_height,
                width=width,
                track_width=style.max_bar_width,
            )
        )
    return tuple(rows)


def _layout_ring(result: AggregateResult, style: ChartStyle, center_y: float) -> Ring:
    radius = style.ring_radius
    circumference = 2 * math.pi * radius
    # The pixel gap expressed as an arc length at the ring radius.
    gap_length = (style.segment_gap / circumference) * circumference

    segments = []
    accumulated = 0.0
    for stat in result.stats:
        share = result.share(stat)
        segments.append(
            RingSegment(
                stat=stat,
                share=share,
                arc_length=max(0.0, share * circumference - gap_length),
                offset=-accumulated * circumference,
            )
        )
        accumulated += share

    return Ring(
        center_x=style.ring_center_x,
        center_y=center_y,
        radius=radius,
        hole_radius=style.inner_radius,
        stroke_width=style.ring_stroke_width,
        circumference=circumference,
        gap_length=gap_length,
        segments=tuple(segments),
    )


def _layout_legend(result: AggregateResult, style: ChartStyle, top: float) -> tuple[LegendRow, ...]:
    return tuple(
        LegendRow(stat=stat, x=style.legend_x, y=top + index * style.legend_row_height, percentage=result.percentage(stat))
        for index, stat in enumerate(result.stats)
    )


__all__ = ["BarRow", "ChartStyle", "Layout", "LegendRow", "Ring", "RingSegment", "compute_layout"]
