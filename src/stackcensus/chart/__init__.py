# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Chart layout and SVG rendering exports."""

from .layout import BarRow, ChartStyle, Layout, LegendRow, Ring, RingSegment, compute_layout
from .svg import DEFAULT_TITLE, escape_xml, render_svg

__all__ = [
    "DEFAULT_TITLE",
    "BarRow",
    "ChartStyle",
    "Layout",
    "LegendRow",
    "Ring",
    "RingSegment",
    "compute_layout",
    "escape_xml",
    "render_svg",
]
