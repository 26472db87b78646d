# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Dataclass exports for StackCensus."""

from ..http.models import Headers, HttpRequest, HttpResponse, RetryConfig
from .repository import RepositoryDescriptor, TreeEntry
from .stats import AggregateResult, RepoDetection, Stat

__all__ = [
    "AggregateResult",
    "Headers",
    "HttpRequest",
    "HttpResponse",
    "RepoDetection",
    "RepositoryDescriptor",
    "RetryConfig",
    "Stat",
    "TreeEntry",
]
