# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Repository source models."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Literal

EntryType = Literal["file", "dir"]


@dataclass(frozen=True)
class RepositoryDescriptor:
    """One repository as reported by the source listing."""

    name: str
    full_name: str
    url: str
    owner: str = ""
    fork: bool = False
    archived: bool = False
    default_branch: str | None = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> RepositoryDescriptor:
        """Build a descriptor from a GitHub ``/user/repos`` item."""
        name = str(data.get("name") or "")
        owner_data = data.get("owner")
        owner = str(owner_data.get("login") or "") if isinstance(owner_data, Mapping) else ""
        full_name = str(data.get("full_name") or (f"{owner}/{name}" if owner else name))
        return cls(
            name=name,
            full_name=full_name,
            url=str(data.get("html_url") or ""),
            owner=owner,
            fork=bool(data.get("fork")),
            archived=bool(data.get("archived")),
            default_branch=data.get("default_branch"),
        )


@dataclass(frozen=True)
class TreeEntry:
    """A single directory listing entry."""

    name: str
    path: str
    type: EntryType

    @property
    def is_dir(self) -> bool:
        return self.type == "dir"

    @property
    def is_file(self) -> bool:
        return self.type == "file"

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> TreeEntry:
        """Build an entry from a GitHub contents API item.

        Symlinks and submodules are reported as files; they are never descended into.
        """
        entry_type: EntryType = "dir" if data.get("type") == "dir" else "file"
        return cls(name=str(data.get("name") or ""), path=str(data.get("path") or ""), type=entry_type)
