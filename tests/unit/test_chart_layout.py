# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import math

import pytest

from stackcensus.aggregate import aggregate
from stackcensus.chart.layout import ChartStyle, compute_layout
from stackcensus.errors import NothingToRenderError
from stackcensus.models import AggregateResult, RepoDetection, Stat


def det(name, *ids):
    return RepoDetection(repo_name=name, framework_ids=frozenset(ids))


def stats_result(*counts):
    stats = tuple(Stat(name=f"f{i}", count=c, repo_names=(), color="#000") for i, c in enumerate(counts))
    return AggregateResult(stats=stats, total_count=sum(counts))


def test_zero_stats_signal_nothing_to_render():
    with pytest.raises(NothingToRenderError):
        compute_layout(AggregateResult())


def test_end_to_end_ring_share():
    layout = compute_layout(aggregate([det("a", "react"), det("b", "react", "vue")]))
    ring = layout.ring
    react = ring.segments[0]
    assert react.stat.name == "react"
    assert react.share == pytest.approx(2 / 3)
    assert react.arc_length == pytest.approx(2 / 3 * ring.circumference - ring.gap_length)
    assert layout.total_count == 3


def test_ring_geometry_from_radii():
    style = ChartStyle()
    layout = compute_layout(stats_result(1))
    assert layout.ring.radius == (style.outer_radius + style.inner_radius) / 2
    assert layout.ring.stroke_width == style.outer_radius - style.inner_radius
    assert layout.ring.circumference == pytest.approx(2 * math.pi * layout.ring.radius)
    assert layout.ring.gap_length == pytest.approx(style.segment_gap)


def test_arc_lengths_plus_gaps_cover_the_circumference():
    layout = compute_layout(stats_result(5, 3, 2, 1))
    ring = layout.ring
    total = sum(segment.arc_length + ring.gap_length for segment in ring.segments)
    assert total == pytest.approx(ring.circumference)


def test_tiny_share_arc_is_floored_at_zero():
    layout = compute_layout(stats_result(1000, 1))
    ring = layout.ring
    tiny = ring.segments[1]
    assert tiny.share * ring.circumference < ring.gap_length
    assert tiny.arc_length == 0


def test_offsets_accumulate_in_sorted_order():
    layout = compute_layout(stats_result(3, 2, 1))
    ring = layout.ring
    c = ring.circumference
    assert [s.offset for s in ring.segments] == pytest.approx([0.0, -(3 / 6) * c, -(5 / 6) * c])


def test_bar_widths_are_relative_to_the_largest_count():
    style = ChartStyle()
    layout = compute_layout(stats_result(4, 2, 1))
    assert [bar.width for bar in layout.bars] == pytest.approx(
        [style.max_bar_width, style.max_bar_width / 2, style.max_bar_width / 4]
    )
    assert all(bar.x == style.label_area_width for bar in layout.bars)


@pytest.mark.parametrize("count", [1, 3, 12])
def test_bars_and_legend_are_centered_on_the_ring(count):
    style = ChartStyle()
    layout = compute_layout(stats_result(*([1] * count)))

    bars_top = layout.bars[0].y
    bars_bottom = layout.bars[-1].y + style.bar_height
    assert (bars_top + bars_bottom) / 2 == pytest.approx(layout.center_y)

    legend_top = layout.legend[0].y
    legend_bottom = layout.legend[-1].y + style.legend_row_height
    assert (legend_top + legend_bottom) / 2 == pytest.approx(layout.center_y)

    assert layout.ring.center_y == layout.center_y
    assert layout.bars[1 % count].y - layout.bars[0].y in (0, style.row_height)


def test_canvas_height_uses_minimum_content_height_for_few_stats():
    layout = compute_layout(stats_result(2, 1))
    assert layout.height == 100 + 300 + 50
    assert layout.center_y == 100 + 150
    assert layout.width == 800


def test_canvas_height_grows_with_many_stats():
    layout = compute_layout(stats_result(*([1] * 10)))
    assert layout.height == 100 + (10 * 41 - 18) + 50


def test_legend_rows_carry_independent_percentages():
    layout = compute_layout(stats_result(1, 1, 1))
    assert [row.percentage for row in layout.legend] == [33, 33, 33]
    assert all(row.x == ChartStyle().legend_x for row in layout.legend)
