# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Error taxonomy and exception helpers."""

from __future__ import annotations

from enum import Enum


class ErrorCategory(str, Enum):
    TIMEOUT = "TIMEOUT"
    RATE_LIMITED = "RATE_LIMITED"
    AUTH_ERROR = "AUTH_ERROR"
    NOT_FOUND = "NOT_FOUND"
    SSL_ERROR = "SSL_ERROR"
    CONNECTION_ERROR = "CONNECTION_ERROR"
    DNS_ERROR = "DNS_ERROR"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"
    NONE = "NONE"


class StackCensusError(Exception):
    """Base class for StackCensus failures."""


class SourceError(StackCensusError):
    """A repository source call (listing, tree or content fetch) failed."""

    def __init__(self, message: str, *, category: ErrorCategory = ErrorCategory.UNKNOWN_ERROR, status_code: int | None = None):
        super().__init__(message)
        self.category = category
        self.status_code = status_code


class RepositoryListingError(SourceError):
    """The owned-repository listing failed; the run cannot continue."""


class ManifestParseError(StackCensusError):
    """A manifest is not a JSON object."""


class NothingToRenderError(StackCensusError):
    """No stats were aggregated, so there is no chart to lay out."""


def categorize_exception(exc: Exception) -> ErrorCategory:
    """
    Map Python/httpx exceptions to ErrorCategory.
    """
    import socket
    import ssl as ssl_module

    import httpx

    if isinstance(exc, httpx.TimeoutException):
        return ErrorCategory.TIMEOUT

    if isinstance(exc, (httpx.ConnectError, httpx.RemoteProtocolError, httpx.NetworkError, httpx.ProxyError)):
        return ErrorCategory.CONNECTION_ERROR

    if isinstance(exc, (ssl_module.SSLError, ssl_module.CertificateError)):
        return ErrorCategory.SSL_ERROR

    if isinstance(exc, (socket.gaierror, socket.herror)):
        return ErrorCategory.DNS_ERROR

    if isinstance(exc, (ConnectionError, ConnectionRefusedError, ConnectionResetError)):
        return ErrorCategory.CONNECTION_ERROR

    if getattr(exc, "response", None) is not None:
        status = getattr(exc.response, "status_code", None)
        if status is not None:
            return categorize_status(status)

    return ErrorCategory.UNKNOWN_ERROR


def categorize_status(status_code: int | None) -> ErrorCategory:
    """Map a GitHub API status code to ErrorCategory."""
    if status_code is None:
        return ErrorCategory.UNKNOWN_ERROR
    if 200 <= status_code < 300:
        return ErrorCategory.NONE
    if status_code in (403, 429):
        return ErrorCategory.RATE_LIMITED
    if status_code == 401:
        return ErrorCategory.AUTH_ERROR
    if status_code == 404:
        return ErrorCategory.NOT_FOUND
    return ErrorCategory.UNKNOWN_ERROR


def error_category_to_reason(category: ErrorCategory | None) -> str:
    """User-facing reason string."""
    mapping = {
        ErrorCategory.TIMEOUT: "Network timeout while contacting GitHub",
        ErrorCategory.RATE_LIMITED: "GitHub rate limit or access restriction",
        ErrorCategory.AUTH_ERROR: "GitHub rejected the token",
        ErrorCategory.NOT_FOUND: "Path or repository not found",
        ErrorCategory.SSL_ERROR: "TLS/certificate issue",
        ErrorCategory.CONNECTION_ERROR: "Network connectivity issue",
        ErrorCategory.DNS_ERROR: "DNS resolution failure",
        ErrorCategory.UNKNOWN_ERROR: "Unexpected error from GitHub",
        ErrorCategory.NONE: "",
        None: "",
    }
    return mapping.get(category, "Request failed")
