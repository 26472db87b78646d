# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Artifact helpers: the JSON record list and the SVG chart."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from pathlib import Path

from ..chart import DEFAULT_TITLE, ChartStyle, compute_layout, render_svg
from ..errors import NothingToRenderError
from ..models import AggregateResult, RepoDetection

logger = logging.getLogger(__name__)


def detections_to_records(detections: Iterable[RepoDetection]) -> list[dict]:
    """Records for every detection that found at least one framework."""
    return [detection.to_dict() for detection in detections if detection.framework_ids]


def write_results(detections: Iterable[RepoDetection], path: Path) -> int:
    records = detections_to_records(detections)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(records, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")
    logger.info("Wrote %d records to %s", len(records), path)
    return len(records)


def load_results(path: Path) -> list[RepoDetection]:
    """Read a record list written by :func:`write_results`.

    Raises ValueError when the file is not a JSON list of records.
    """
    data = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(data, list):
        raise ValueError(f"{path} must contain a JSON list")
    return [RepoDetection.from_mapping(item) for item in data if isinstance(item, dict)]


def build_chart(
    result: AggregateResult,
    *,
    style: ChartStyle | None = None,
    title: str = DEFAULT_TITLE,
    author: str | None = None,
) -> str | None:
    """Return the SVG document, or None when there is nothing to render."""
    try:
        layout = compute_layout(result, style)
    except NothingToRenderError:
        logger.info("No frameworks detected; skipping chart rendering")
        return None
    return render_svg(layout, title=title, author=author)


def write_chart(svg: str, path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(svg, encoding="utf-8")
    logger.info("Wrote chart to %s", path)


def remove_stale_chart(path: Path) -> bool:
    """Delete a chart left by an earlier run; returns True when one was removed."""
    if not path.exists():
        return False
    path.unlink()
    logger.info("Removed stale chart %s; there is nothing to render", path)
    return True


__all__ = [
    "build_chart",
    "detections_to_records",
    "load_results",
    "remove_stale_chart",
    "write_chart",
    "write_results",
]
