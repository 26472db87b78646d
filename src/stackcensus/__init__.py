# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
StackCensus package entrypoint.

This package detects front-end frameworks across a user's GitHub repositories
by reading their package.json manifests, aggregates the findings and renders
them as an SVG stats card. Repository access is abstracted behind an
injectable source, HTTP behavior behind an injectable client, and domain
objects are modeled with typed dataclasses.
"""

from .aggregate import aggregate
from .catalog import DEFAULT_CATALOG, FrameworkCatalog, FrameworkDefinition, SupersedeRule
from .chart import ChartStyle, compute_layout, escape_xml, render_svg
from .config import HttpSettings, ScanSettings, load_http_settings, load_scan_settings
from .errors import ErrorCategory, NothingToRenderError, RepositoryListingError, SourceError
from .framework_detection import DependencyClassifier, RepositoryWalker
from .github import GitHubRepositorySource, InMemoryRepositorySource, RepositorySource
from .http import HttpClient, HttpRequest, HttpResponse, HttpxClient, RetryConfig, create_default_http_client
from .log import setup_logging
from .models import AggregateResult, RepoDetection, Stat
from .runtime import StackCensus
from .scan import ScanEngine
from .version import __version__

__all__ = [
    "DEFAULT_CATALOG",
    "AggregateResult",
    "ChartStyle",
    "DependencyClassifier",
    "ErrorCategory",
    "FrameworkCatalog",
    "FrameworkDefinition",
    "GitHubRepositorySource",
    "HttpClient",
    "HttpRequest",
    "HttpResponse",
    "HttpSettings",
    "HttpxClient",
    "InMemoryRepositorySource",
    "NothingToRenderError",
    "RepoDetection",
    "RepositoryListingError",
    "RepositorySource",
    "RepositoryWalker",
    "RetryConfig",
    "ScanEngine",
    "ScanSettings",
    "SourceError",
    "StackCensus",
    "Stat",
    "SupersedeRule",
    "aggregate",
    "compute_layout",
    "create_default_http_client",
    "escape_xml",
    "load_http_settings",
    "load_scan_settings",
    "render_svg",
    "setup_logging",
    "__version__",
]
