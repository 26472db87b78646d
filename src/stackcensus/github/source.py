# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Repository source abstraction and an in-memory implementation."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Protocol

from ..errors import ErrorCategory, SourceError
from ..models import RepositoryDescriptor, TreeEntry


class RepositorySource(Protocol):
    """Operations the scan needs from a repository hosting service."""

    def list_owned_repositories(self, page_size: int = 100) -> list[RepositoryDescriptor]: ...

    def list_languages(self, repo: RepositoryDescriptor) -> dict[str, int]: ...

    def list_directory(self, repo: RepositoryDescriptor, path: str = "") -> list[TreeEntry]: ...

    def get_file_content(self, repo: RepositoryDescriptor, path: str) -> str: ...


class InMemoryRepositorySource(RepositorySource):
    """Deterministic source backed by nested dicts, for tests and offline runs.

    Each repository tree is a mapping where a ``str`` value is a file body and a
    mapping value is a subdirectory. Paths listed in ``failing_paths`` raise
    SourceError when listed or read.
    """

    def __init__(
        self,
        trees: Mapping[str, Mapping[str, object]],
        *,
        languages: Mapping[str, Mapping[str, int]] | None = None,
        failing_paths: Mapping[str, set[str]] | None = None,
        owner: str = "octocat",
    ):
        self._trees = trees
        self._languages = languages or {}
        self._failing = failing_paths or {}
        self.owner = owner
        self.calls: list[tuple[str, str, str]] = []

    def list_owned_repositories(self, page_size: int = 100) -> list[RepositoryDescriptor]:
        self.calls.append(("list_owned_repositories", "", ""))
        return [
            RepositoryDescriptor(
                name=name,
                full_name=f"{self.owner}/{name}",
                url=f"https://github.com/{self.owner}/{name}",
                owner=self.owner,
            )
            for name in self._trees
        ]

    def list_languages(self, repo: RepositoryDescriptor) -> dict[str, int]:
        self.calls.append(("list_languages", repo.name, ""))
        return dict(self._languages.get(repo.name, {"JavaScript": 1}))

    def list_directory(self, repo: RepositoryDescriptor, path: str = "") -> list[TreeEntry]:
        self.calls.append(("list_directory", repo.name, path))
        node = self._resolve(repo, path)
        if not isinstance(node, Mapping):
            raise SourceError(f"{path!r} is not a directory", category=ErrorCategory.NOT_FOUND, status_code=404)
        entries = []
        for name, child in node.items():
            child_path = f"{path}/{name}" if path else name
            entries.append(TreeEntry(name=name, path=child_path, type="dir" if isinstance(child, Mapping) else "file"))
        return entries

    def get_file_content(self, repo: RepositoryDescriptor, path: str) -> str:
        self.calls.append(("get_file_content", repo.name, path))
        node = self._resolve(repo, path)
        if not isinstance(node, str):
            raise SourceError(f"{path!r} is not a file", category=ErrorCategory.NOT_FOUND, status_code=404)
        return node

    def _resolve(self, repo: RepositoryDescriptor, path: str) -> object:
        if path in self._failing.get(repo.name, set()):
            raise SourceError(f"Simulated failure at {repo.name}:{path}", category=ErrorCategory.CONNECTION_ERROR)
        node: object = self._trees.get(repo.name)
        if node is None:
            raise SourceError(f"Unknown repository {repo.name}", category=ErrorCategory.NOT_FOUND, status_code=404)
        for part in [segment for segment in path.split("/") if segment]:
            if not isinstance(node, Mapping) or part not in node:
                raise SourceError(f"{path!r} not found in {repo.name}", category=ErrorCategory.NOT_FOUND, status_code=404)
            node = node[part]
        return node
