# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""GitHub REST API implementation of RepositorySource."""

from __future__ import annotations

import base64
import binascii
import logging
from typing import Any
from urllib.parse import quote

from ..config import HttpSettings, load_http_settings
from ..errors import ErrorCategory, RepositoryListingError, SourceError, categorize_exception, categorize_status
from ..http import (
    HttpClient,
    HttpRequest,
    HttpResponse,
    RetryConfig,
    create_default_http_client,
    github_api_headers,
    send_with_retries,
)
from ..models import RepositoryDescriptor, TreeEntry
from .source import RepositorySource

logger = logging.getLogger(__name__)


class GitHubRepositorySource(RepositorySource):
    """Lists and reads repositories through the GitHub REST API.

    With a token, ``/user/repos?affiliation=owner`` is paged. Without one, the
    public repositories of ``username`` are listed instead.
    """

    def __init__(
        self,
        http_client: HttpClient | None = None,
        *,
        settings: HttpSettings | None = None,
        username: str | None = None,
        retry_config: RetryConfig | None = None,
    ):
        self.settings = settings or load_http_settings()
        self.http_client = http_client or create_default_http_client(self.settings)
        self.username = username
        self.retry_config = retry_config or RetryConfig.from_settings(self.settings)

    def list_owned_repositories(self, page_size: int = 100) -> list[RepositoryDescriptor]:
        if self.settings.token:
            url = self._url("/user/repos")
            base_params: dict[str, Any] = {"affiliation": "owner"}
        elif self.username:
            url = self._url(f"/users/{quote(self.username, safe='')}/repos")
            base_params = {"type": "owner"}
        else:
            raise RepositoryListingError(
                "Set GITHUB_TOKEN or GITHUB_USERNAME to list repositories",
                category=ErrorCategory.AUTH_ERROR,
            )

        repositories: list[RepositoryDescriptor] = []
        page = 1
        while True:
            params = {**base_params, "per_page": page_size, "page": page}
            try:
                data = self._get_json(url, params=params)
            except SourceError as exc:
                raise RepositoryListingError(
                    f"Listing repositories failed on page {page}: {exc}",
                    category=exc.category,
                    status_code=exc.status_code,
                ) from exc
            if not isinstance(data, list):
                raise RepositoryListingError(f"Unexpected repository listing payload on page {page}")
            if not data:
                break
            repositories.extend(RepositoryDescriptor.from_mapping(item) for item in data if isinstance(item, dict))
            logger.debug("Fetched repository page %d (%d items)", page, len(data))
            page += 1
        logger.info("Found %d owned repositories", len(repositories))
        return repositories

    def list_languages(self, repo: RepositoryDescriptor) -> dict[str, int]:
        data = self._get_json(self._repo_url(repo, "/languages"))
        if not isinstance(data, dict):
            raise SourceError(f"Unexpected languages payload for {repo.full_name}")
        return {str(name): int(size) for name, size in data.items() if isinstance(size, (int, float))}

    def list_directory(self, repo: RepositoryDescriptor, path: str = "") -> list[TreeEntry]:
        data = self._get_json(self._contents_url(repo, path))
        if not isinstance(data, list):
            raise SourceError(f"{repo.full_name}:{path or '/'} is not a directory", category=ErrorCategory.NOT_FOUND)
        return [TreeEntry.from_mapping(item) for item in data if isinstance(item, dict)]

    def get_file_content(self, repo: RepositoryDescriptor, path: str) -> str:
        data = self._get_json(self._contents_url(repo, path))
        if not isinstance(data, dict) or data.get("type") != "file":
            raise SourceError(f"{repo.full_name}:{path} is not a file", category=ErrorCategory.NOT_FOUND)
        return decode_content(data.get("content"), data.get("encoding"))

    def close(self) -> None:
        if hasattr(self.http_client, "close"):
            self.http_client.close()

    def _url(self, path: str) -> str:
        return f"{self.settings.api_url}{path}"

    def _repo_url(self, repo: RepositoryDescriptor, suffix: str) -> str:
        owner, _, name = repo.full_name.partition("/")
        return self._url(f"/repos/{quote(owner, safe='')}/{quote(name, safe='')}{suffix}")

    def _contents_url(self, repo: RepositoryDescriptor, path: str) -> str:
        suffix = f"/contents/{quote(path.strip('/'))}" if path.strip("/") else "/contents"
        return self._repo_url(repo, suffix)

    def _get_json(self, url: str, *, params: dict[str, Any] | None = None) -> Any:
        request = HttpRequest(url=url, headers=github_api_headers(self.settings), params=params)
        response = send_with_retries(self.http_client, request, retry_config=self.retry_config)
        _raise_for_response(url, response)
        try:
            return response.json()
        except ValueError as exc:
            raise SourceError(f"Malformed JSON from {url}: {exc}") from exc


def _raise_for_response(url: str, response: HttpResponse) -> None:
    if response.is_success:
        return
    if not response.ok:
        exc = response.meta.get("exception")
        category = categorize_exception(exc) if isinstance(exc, Exception) else ErrorCategory.UNKNOWN_ERROR
        raise SourceError(
            f"Request to {url} failed: {response.error_message or 'transport error'}",
            category=category,
        )
    raise SourceError(
        f"Request to {url} returned HTTP {response.status_code}",
        category=categorize_status(response.status_code),
        status_code=response.status_code,
    )


def decode_content(content: Any, encoding: Any) -> str:
    """Decode a contents API ``content`` field; base64 bodies arrive line-wrapped."""
    if content is None:
        return ""
    text = str(content)
    if encoding in (None, "", "utf-8"):
        return text
    if encoding != "base64":
        raise SourceError(f"Unsupported content encoding {encoding!r}")
    try:
        raw = base64.b64decode("".join(text.split()), validate=True)
    except (binascii.Error, ValueError) as exc:
        raise SourceError(f"Invalid base64 content: {exc}") from exc
    return raw.decode("utf-8", errors="replace")
