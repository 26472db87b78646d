# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Fold per-repository detections into sorted, colored stats."""

from __future__ import annotations

from collections.abc import Iterable

from .catalog import DEFAULT_CATALOG, FrameworkCatalog
from .models import AggregateResult, RepoDetection, Stat


def aggregate(detections: Iterable[RepoDetection], catalog: FrameworkCatalog | None = None) -> AggregateResult:
    """Count each (repository, framework) pair once and sort by count, descending.

    Ids inside a detection are visited in sorted order and the final sort is
    stable, so ties keep a reproducible order for a fixed input sequence.
    """
    catalog = catalog or DEFAULT_CATALOG
    counts: dict[str, int] = {}
    repos: dict[str, list[str]] = {}
    total = 0

    for detection in detections:
        for framework_id in sorted(detection.framework_ids):
            counts[framework_id] = counts.get(framework_id, 0) + 1
            members = repos.setdefault(framework_id, [])
            if detection.repo_name not in members:
                members.append(detection.repo_name)
            total += 1

    stats = [
        Stat(name=framework_id, count=count, repo_names=tuple(repos[framework_id]), color=catalog.color_for(framework_id))
        for framework_id, count in counts.items()
    ]
    stats.sort(key=lambda stat: stat.count, reverse=True)
    return AggregateResult(stats=tuple(stats), total_count=total)


__all__ = ["aggregate"]
