# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Repository tree traversal with per-node failure isolation."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Literal

from ..config import DEFAULT_IGNORE_DIRS
from ..errors import ErrorCategory, SourceError, categorize_exception
from ..github.source import RepositorySource
from ..models import RepositoryDescriptor
from .classifier import MANIFEST_FILENAME, DependencyClassifier

logger = logging.getLogger(__name__)

OutcomeKind = Literal["findings", "failure"]


@dataclass(frozen=True)
class NodeOutcome:
    """Result of visiting one directory listing or manifest fetch."""

    path: str
    kind: OutcomeKind
    framework_ids: frozenset[str] = frozenset()
    reason: str | None = None
    category: ErrorCategory = ErrorCategory.NONE

    @property
    def failed(self) -> bool:
        return self.kind == "failure"


@dataclass(frozen=True)
class WalkResult:
    repo_name: str
    framework_ids: frozenset[str] = frozenset()
    outcomes: tuple[NodeOutcome, ...] = field(default_factory=tuple)

    @property
    def failures(self) -> tuple[NodeOutcome, ...]:
        return tuple(outcome for outcome in self.outcomes if outcome.failed)


class RepositoryWalker:
    """Depth-first walk over a repository tree that classifies every manifest it finds.

    Directories named in ``ignore_dirs`` are skipped at any depth. A failed
    directory listing or file fetch is recorded as a failure outcome for that
    node only; the rest of the tree is still visited.
    """

    def __init__(
        self,
        source: RepositorySource,
        classifier: DependencyClassifier | None = None,
        *,
        ignore_dirs: Iterable[str] = DEFAULT_IGNORE_DIRS,
        manifest_filename: str = MANIFEST_FILENAME,
    ):
        self.source = source
        self.classifier = classifier or DependencyClassifier()
        self.ignore_dirs = frozenset(ignore_dirs)
        self.manifest_filename = manifest_filename

    def walk(self, repo: RepositoryDescriptor, start_path: str = "") -> WalkResult:
        found: set[str] = set()
        outcomes: list[NodeOutcome] = []
        visited: set[str] = set()
        stack: list[str] = [start_path.strip("/")]

        while stack:
            path = stack.pop()
            if path in visited:
                logger.debug("Skipping already visited path %s:%s", repo.full_name, path or "/")
                continue
            visited.add(path)

            try:
                entries = self.source.list_directory(repo, path)
            except Exception as exc:  # noqa: BLE001
                outcomes.append(self._failure(repo, path, exc))
                continue

            subdirectories: list[str] = []
            for entry in entries:
                if entry.is_dir:
                    if entry.name in self.ignore_dirs:
                        logger.debug("Ignoring %s:%s", repo.full_name, entry.path)
                        continue
                    subdirectories.append(entry.path)
                elif entry.name == self.manifest_filename:
                    outcome = self._classify_manifest(repo, entry.path)
                    outcomes.append(outcome)
                    found |= outcome.framework_ids

            # Reverse so siblings are visited in listing order.
            stack.extend(reversed(subdirectories))

        return WalkResult(repo_name=repo.name, framework_ids=frozenset(found), outcomes=tuple(outcomes))

    def _classify_manifest(self, repo: RepositoryDescriptor, path: str) -> NodeOutcome:
        try:
            content = self.source.get_file_content(repo, path)
        except Exception as exc:  # noqa: BLE001
            return self._failure(repo, path, exc)
        framework_ids = self.classifier.classify(content, source=f"{repo.full_name}:{path}")
        if framework_ids:
            logger.debug("%s:%s -> %s", repo.full_name, path, ", ".join(sorted(framework_ids)))
        return NodeOutcome(path=path, kind="findings", framework_ids=framework_ids)

    @staticmethod
    def _failure(repo: RepositoryDescriptor, path: str, exc: Exception) -> NodeOutcome:
        category = exc.category if isinstance(exc, SourceError) else categorize_exception(exc)
        logger.warning("Fetch failed at %s:%s (%s): %s", repo.full_name, path or "/", category.value, exc)
        return NodeOutcome(path=path, kind="failure", reason=str(exc) or type(exc).__name__, category=category)


__all__ = ["NodeOutcome", "RepositoryWalker", "WalkResult"]
