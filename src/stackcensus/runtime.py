# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""High-level StackCensus facade for scan, aggregate and render workflows."""

from __future__ import annotations

import time
from collections.abc import Callable, Iterable
from contextlib import suppress
from dataclasses import dataclass
from pathlib import Path

from .aggregate import aggregate
from .catalog import DEFAULT_CATALOG, FrameworkCatalog
from .chart import DEFAULT_TITLE, ChartStyle
from .config import HttpSettings, ScanSettings, load_http_settings, load_scan_settings
from .framework_detection import DependencyClassifier, RepositoryWalker
from .github import GitHubRepositorySource, RepositorySource
from .http.client import HttpClient
from .models import AggregateResult, RepoDetection
from .scan import ScanEngine, ScanSummary, build_chart, remove_stale_chart, write_chart, write_results


@dataclass
class RunResult:
    summary: ScanSummary
    aggregate: AggregateResult
    result_file: Path
    chart_file: Path | None


class StackCensus:
    """
    Convenience wrapper that wires one repository source through scanning,
    aggregation and rendering.

    The catalog and chart style are injected so tests and alternative
    catalogs never depend on module-level lookups.
    """

    def __init__(
        self,
        source: RepositorySource | None = None,
        *,
        http_client: HttpClient | None = None,
        http_settings: HttpSettings | None = None,
        scan_settings: ScanSettings | None = None,
        catalog: FrameworkCatalog | None = None,
        style: ChartStyle | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.scan_settings = scan_settings or load_scan_settings()
        self.catalog = catalog or DEFAULT_CATALOG
        self.style = style or ChartStyle()
        if source is None:
            source = GitHubRepositorySource(
                http_client,
                settings=http_settings or load_http_settings(),
                username=self.scan_settings.username,
            )
        self.source = source
        self.walker = RepositoryWalker(
            self.source,
            DependencyClassifier(self.catalog),
            ignore_dirs=self.scan_settings.ignore_dirs,
        )
        self.scan_engine = ScanEngine(self.source, self.walker, settings=self.scan_settings, sleep=sleep)

    def scan(self) -> ScanSummary:
        return self.scan_engine.run()

    def aggregate(self, detections: Iterable[RepoDetection]) -> AggregateResult:
        return aggregate(detections, self.catalog)

    def render(self, result: AggregateResult, *, title: str = DEFAULT_TITLE) -> str | None:
        return build_chart(result, style=self.style, title=title, author=self.scan_settings.username)

    def run(self) -> RunResult:
        """Scan everything, then write both artifacts.

        Nothing is written until every repository has been processed, so an
        aborted scan leaves no partial artifacts behind. A chart from an earlier
        run is removed when there is nothing to render.
        """
        summary = self.scan()
        result = self.aggregate(summary.detections)
        svg = self.render(result)

        write_results(summary.detections, self.scan_settings.result_file)
        chart_file = None
        if svg is not None:
            write_chart(svg, self.scan_settings.chart_file)
            chart_file = self.scan_settings.chart_file
        else:
            remove_stale_chart(self.scan_settings.chart_file)
        return RunResult(summary=summary, aggregate=result, result_file=self.scan_settings.result_file, chart_file=chart_file)

    def close(self) -> None:
        with suppress(Exception):
            if hasattr(self.source, "close"):
                self.source.close()

    def __enter__(self) -> StackCensus:
        return self

    def __exit__(self, _exc_type, _exc, _tb) -> None:  # noqa: ANN001
        self.close()
