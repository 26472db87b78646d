# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Framework detection exports."""

from .classifier import MANIFEST_FILENAME, DependencyClassifier, parse_dependency_names
from .walker import NodeOutcome, RepositoryWalker, WalkResult

__all__ = [
    "MANIFEST_FILENAME",
    "DependencyClassifier",
    "NodeOutcome",
    "RepositoryWalker",
    "WalkResult",
    "parse_dependency_names",
]
