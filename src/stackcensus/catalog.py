# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Framework catalog: which packages imply which framework, and how they render."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

DEFAULT_COLOR = "#888888"


@dataclass(frozen=True)
class FrameworkDefinition:
    id: str
    package_names: frozenset[str]

    def matches(self, dependency_names: Iterable[str]) -> bool:
        return not self.package_names.isdisjoint(dependency_names)


@dataclass(frozen=True)
class SupersedeRule:
    """If ``superior`` and ``inferior`` are both detected in one manifest, drop ``inferior``."""

    superior: str
    inferior: str


@dataclass(frozen=True)
class FrameworkCatalog:
    """Injected lookup table consumed by the classifier, aggregator and renderer."""

    definitions: tuple[FrameworkDefinition, ...]
    supersedes: tuple[SupersedeRule, ...] = ()
    colors: Mapping[str, str] = field(default_factory=dict)
    default_color: str = DEFAULT_COLOR

    def __post_init__(self) -> None:
        ids = [definition.id for definition in self.definitions]
        duplicates = sorted({item for item in ids if ids.count(item) > 1})
        if duplicates:
            raise ValueError(f"Duplicate framework ids in catalog: {', '.join(duplicates)}")
        known = set(ids)
        for rule in self.supersedes:
            if rule.superior == rule.inferior:
                raise ValueError(f"Framework {rule.superior!r} cannot supersede itself")
            unknown = {rule.superior, rule.inferior} - known
            if unknown:
                raise ValueError(f"Supersede rule references unknown framework ids: {', '.join(sorted(unknown))}")
        cycle = _find_supersede_cycle(self.supersedes)
        if cycle:
            raise ValueError(f"Supersede rules form a cycle: {' -> '.join(cycle)}")
        object.__setattr__(self, "colors", MappingProxyType(dict(self.colors)))

    @property
    def ids(self) -> tuple[str, ...]:
        return tuple(definition.id for definition in self.definitions)

    def color_for(self, framework_id: str) -> str:
        if framework_id in self.colors:
            return self.colors[framework_id]
        return self.default_color


def _find_supersede_cycle(rules: Iterable[SupersedeRule]) -> list[str]:
    edges: dict[str, list[str]] = {}
    for rule in rules:
        edges.setdefault(rule.superior, []).append(rule.inferior)

    done: set[str] = set()
    for start in sorted(edges):
        if start in done:
            continue
        path: list[str] = []
        on_path: set[str] = set()
        stack: list[tuple[str, int]] = [(start, 0)]
        while stack:
            node, index = stack.pop()
            if index == 0:
                if node in on_path:
                    return path[path.index(node):] + [node]
                if node in done:
                    continue
                path.append(node)
                on_path.add(node)
            children = edges.get(node, [])
            if index < len(children):
                stack.append((node, index + 1))
                stack.append((children[index], 0))
            else:
                path.pop()
                on_path.discard(node)
                done.add(node)
    return []


def _definition(framework_id: str, *packages: str) -> FrameworkDefinition:
    return FrameworkDefinition(id=framework_id, package_names=frozenset(packages))


DEFAULT_CATALOG = FrameworkCatalog(
    definitions=(
        _definition("react", "react", "react-dom"),
        _definition("next", "next"),
        _definition("vue", "vue", "@vue/runtime-core"),
        _definition("nuxt", "nuxt", "nuxt3"),
        _definition("svelte", "svelte", "@sveltejs/kit"),
        _definition("nitro", "nitropack", "nitro", "h3"),
        _definition("hono", "hono"),
        _definition("astro", "astro"),
        _definition("solid", "solid-js", "solid-start"),
        _definition("htmx", "htmx.org", "htmx"),
        _definition("alpine", "alpinejs", "alpine"),
    ),
    supersedes=(
        SupersedeRule(superior="next", inferior="react"),
        SupersedeRule(superior="nuxt", inferior="vue"),
    ),
    colors={
        "next": "#ffffff",
        "react": "#61DAFB",
        "vue": "#4FC08D",
        "nuxt": "#00C58E",
        "svelte": "#FF3E00",
        "hono": "#E36002",
        "astro": "#BC52EE",
        "solid": "#446b9e",
        "nitro": "#F4D03F",
        "htmx": "#336699",
        "alpine": "#8BC0D0",
    },
)

__all__ = [
    "DEFAULT_CATALOG",
    "DEFAULT_COLOR",
    "FrameworkCatalog",
    "FrameworkDefinition",
    "SupersedeRule",
]
