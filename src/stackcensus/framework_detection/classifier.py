# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Manifest classification: dependency names to framework ids."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from typing import Any

from ..catalog import DEFAULT_CATALOG, FrameworkCatalog
from ..errors import ManifestParseError

logger = logging.getLogger(__name__)

MANIFEST_FILENAME = "package.json"

# Runtime and development groups are collapsed together.
DEPENDENCY_GROUPS = (
    "dependencies",
    "devDependencies",
    "peerDependencies",
    "optionalDependencies",
)


def parse_dependency_names(content: str) -> frozenset[str]:
    """Return the merged dependency names declared in a ``package.json`` body.

    Raises ManifestParseError when the content is not a JSON object.
    """
    try:
        data: Any = json.loads(content)
    except (TypeError, ValueError) as exc:
        raise ManifestParseError(f"Invalid JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise ManifestParseError(f"Expected a JSON object, got {type(data).__name__}")

    names: set[str] = set()
    for group in DEPENDENCY_GROUPS:
        declared = data.get(group)
        if isinstance(declared, dict):
            names.update(str(name) for name in declared)
    return frozenset(names)


class DependencyClassifier:
    """Maps a manifest's dependency names to the framework ids they imply."""

    def __init__(self, catalog: FrameworkCatalog | None = None):
        self.catalog = catalog or DEFAULT_CATALOG

    def classify_names(self, dependency_names: Iterable[str]) -> frozenset[str]:
        names = frozenset(dependency_names)
        detected = {definition.id for definition in self.catalog.definitions if definition.matches(names)}
        return frozenset(self._resolve_supersedes(detected))

    def classify(self, content: str, *, source: str = MANIFEST_FILENAME) -> frozenset[str]:
        """Classify raw manifest content; unparseable manifests yield no frameworks."""
        try:
            names = parse_dependency_names(content)
        except ManifestParseError as exc:
            logger.warning("Skipping unparseable manifest %s: %s", source, exc)
            return frozenset()
        return self.classify_names(names)

    def _resolve_supersedes(self, detected: set[str]) -> set[str]:
        # Every dominated id is removed in the same pass.
        while True:
            dominated = {
                rule.inferior
                for rule in self.catalog.supersedes
                if rule.superior in detected and rule.inferior in detected
            }
            if not dominated:
                return detected
            detected -= dominated


__all__ = ["DEPENDENCY_GROUPS", "MANIFEST_FILENAME", "DependencyClassifier", "parse_dependency_names"]
