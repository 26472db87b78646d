# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Detection and aggregate models."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class RepoDetection:
    """Frameworks found in one successfully scanned repository."""

    repo_name: str
    framework_ids: frozenset[str] = field(default_factory=frozenset)
    url: str = ""

    def __post_init__(self) -> None:
        if not isinstance(self.framework_ids, frozenset):
            object.__setattr__(self, "framework_ids", frozenset(self.framework_ids))

    @property
    def frameworks(self) -> list[str]:
        """Framework ids in a stable, sorted order."""
        return sorted(self.framework_ids)

    def to_dict(self) -> dict[str, Any]:
        return {"repoName": self.repo_name, "frameworks": self.frameworks, "url": self.url}

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> RepoDetection:
        raw_frameworks = data.get("frameworks") or []
        if isinstance(raw_frameworks, str) or not isinstance(raw_frameworks, Iterable):
            raise ValueError(f"frameworks must be a list, got {type(raw_frameworks).__name__}")
        return cls(
            repo_name=str(data.get("repoName") or ""),
            framework_ids=frozenset(str(item) for item in raw_frameworks),
            url=str(data.get("url") or ""),
        )


@dataclass(frozen=True)
class Stat:
    """Render-ready aggregate for one framework id."""

    name: str
    count: int
    repo_names: tuple[str, ...]
    color: str

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "count": self.count, "repos": list(self.repo_names), "color": self.color}


@dataclass(frozen=True)
class AggregateResult:
    """Sorted stats plus the total number of (repository, framework) pairs."""

    stats: tuple[Stat, ...] = ()
    total_count: int = 0

    @property
    def is_empty(self) -> bool:
        return not self.stats

    def share(self, stat: Stat) -> float:
        return stat.count / self.total_count if self.total_count else 0.0

    def percentage(self, stat: Stat) -> int:
        """Integer percentage, rounded per stat; rows need not sum to 100."""
        return round_half_up(self.share(stat) * 100)

    def to_dict(self) -> dict[str, Any]:
        return {"total": self.total_count, "stats": [stat.to_dict() for stat in self.stats]}


def round_half_up(value: float) -> int:
    """Round halves away from zero; ``round(2.5)`` would give 2."""
    return int(value + 0.5) if value >= 0 else -int(-value + 0.5)
