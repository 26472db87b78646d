# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Transport protocol, GitHub request defaults and the default client factory."""

from typing import Protocol

from ..config import HttpSettings, load_http_settings
from .models import Headers, HttpRequest, HttpResponse

GITHUB_API_VERSION = "2022-11-28"
GITHUB_MEDIA_TYPE = "application/vnd.github+json"


class HttpClient(Protocol):
    """Anything that can turn an HttpRequest into an HttpResponse.

    Transport failures are reported as ``HttpResponse(ok=False)``; the GitHub
    source decides what a non-2xx status means.
    """

    def request(self, request: HttpRequest) -> HttpResponse: ...

    def close(self) -> None: ...


def github_api_headers(settings: HttpSettings) -> Headers:
    """Headers sent with every GitHub REST call; the token is optional."""
    headers = {
        "Accept": GITHUB_MEDIA_TYPE,
        "X-GitHub-Api-Version": GITHUB_API_VERSION,
        "User-Agent": settings.user_agent,
    }
    if settings.token:
        headers["Authorization"] = f"Bearer {settings.token}"
    return headers


def create_default_http_client(settings: HttpSettings | None = None) -> HttpClient:
    from .httpx_client import HttpxClient

    return HttpxClient(settings or load_http_settings())
