# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Repository source exports."""

from .client import GitHubRepositorySource, decode_content
from .source import InMemoryRepositorySource, RepositorySource

__all__ = [
    "GitHubRepositorySource",
    "InMemoryRepositorySource",
    "RepositorySource",
    "decode_content",
]
