# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Scan engine: list repositories, filter by language, walk each one in turn."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field

from ..config import ScanSettings
from ..errors import SourceError
from ..framework_detection import RepositoryWalker, WalkResult
from ..github.source import RepositorySource
from ..models import RepoDetection, RepositoryDescriptor

logger = logging.getLogger(__name__)


def is_web_repository(languages: Mapping[str, int], web_languages: Iterable[str]) -> bool:
    """True when any web language appears in the repository's language breakdown."""
    wanted = set(web_languages)
    return any(name in wanted for name in languages)


@dataclass
class ScanSummary:
    """Everything one scan produced, in repository listing order."""

    detections: list[RepoDetection] = field(default_factory=list)
    walked: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)
    walk_results: dict[str, WalkResult] = field(default_factory=dict)

    @property
    def failure_count(self) -> int:
        return sum(len(result.failures) for result in self.walk_results.values())


class ScanEngine:
    """Runs the sequential repository scan.

    One repository is walked completely before the next begins, and a fixed
    pause is inserted between consecutive repositories.
    """

    def __init__(
        self,
        source: RepositorySource,
        walker: RepositoryWalker | None = None,
        *,
        settings: ScanSettings | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.settings = settings or ScanSettings()
        self.source = source
        self.walker = walker or RepositoryWalker(source, ignore_dirs=self.settings.ignore_dirs)
        self._sleep = sleep

    def run(self) -> ScanSummary:
        # Listing failures (RepositoryListingError) propagate and abort the scan.
        repositories = self.source.list_owned_repositories(self.settings.page_size)
        summary = ScanSummary()

        for index, repo in enumerate(repositories):
            if index and self.settings.repo_delay > 0:
                self._sleep(self.settings.repo_delay)
            self._scan_repository(repo, summary)

        logger.info(
            "Scan finished: %d walked, %d skipped, %d with frameworks, %d fetch failures",
            len(summary.walked),
            len(summary.skipped),
            len(summary.detections),
            summary.failure_count,
        )
        return summary

    def _scan_repository(self, repo: RepositoryDescriptor, summary: ScanSummary) -> None:
        try:
            languages = self.source.list_languages(repo)
        except SourceError as exc:
            logger.warning("Skipping %s: language lookup failed (%s): %s", repo.full_name, exc.category.value, exc)
            summary.skipped.append(repo.name)
            return

        if not is_web_repository(languages, self.settings.web_languages):
            logger.debug("Skipping %s: no web languages in %s", repo.full_name, sorted(languages))
            summary.skipped.append(repo.name)
            return

        logger.info("Scanning %s", repo.full_name)
        result = self.walker.walk(repo)
        summary.walked.append(repo.name)
        summary.walk_results[repo.name] = result
        if result.framework_ids:
            detection = RepoDetection(repo_name=repo.name, framework_ids=result.framework_ids, url=repo.url)
            summary.detections.append(detection)
            logger.info("%s: %s", repo.full_name, ", ".join(detection.frameworks))
        else:
            logger.info("%s: no target frameworks found", repo.full_name)


__all__ = ["ScanEngine", "ScanSummary", "is_web_repository"]
