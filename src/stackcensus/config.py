# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Configuration helpers for StackCensus."""

import os
from dataclasses import dataclass
from pathlib import Path

from .version import __version__

DEFAULT_USER_AGENT = f"StackCensus/{__version__} (+https://github.com/stackcensus/stackcensus)"
DEFAULT_API_URL = "https://api.github.com"

# Directory names never descended into, matched exactly at any depth.
DEFAULT_IGNORE_DIRS: tuple[str, ...] = ("node_modules", ".git", "dist", ".next", "build")

# A repository is only walked when its language breakdown mentions one of these.
WEB_LANGUAGES: tuple[str, ...] = (
    "TypeScript",
    "JavaScript",
    "Vue",
    "Svelte",
    "Astro",
    "HTML",
    "CSS",
    "SCSS",
)


def _float_env(name: str, default: float) -> float:
    try:
        value = os.getenv(name)
        return float(value) if value is not None else default
    except ValueError:
        return default


def _int_env(name: str, default: int) -> int:
    try:
        value = os.getenv(name)
        return int(value) if value is not None else default
    except ValueError:
        return default


def _bool_env(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _list_env(name: str, default: tuple[str, ...]) -> tuple[str, ...]:
    value = os.getenv(name)
    if value is None:
        return default
    items = tuple(item.strip() for item in value.split(",") if item.strip())
    return items or default


@dataclass
class HttpSettings:
    """HTTP client defaults for talking to the GitHub REST API."""

    timeout: float = 10.0
    max_retries: int = 2
    backoff_factor: float = 2.0
    initial_delay: float = 1.0
    user_agent: str = DEFAULT_USER_AGENT
    allow_redirects: bool = True
    verify_ssl: bool = True
    api_url: str = DEFAULT_API_URL
    token: str | None = None

    @classmethod
    def from_env(cls) -> "HttpSettings":
        """Create settings from environment variables (evaluated at call time)."""
        return cls(
            timeout=_float_env("STACKCENSUS_HTTP_TIMEOUT", cls.timeout),
            max_retries=_int_env("STACKCENSUS_HTTP_RETRIES", cls.max_retries),
            backoff_factor=_float_env("STACKCENSUS_HTTP_BACKOFF", cls.backoff_factor),
            initial_delay=_float_env("STACKCENSUS_HTTP_INITIAL_DELAY", cls.initial_delay),
            user_agent=os.getenv("STACKCENSUS_USER_AGENT", cls.user_agent),
            allow_redirects=_bool_env("STACKCENSUS_HTTP_REDIRECTS", cls.allow_redirects),
            verify_ssl=_bool_env("STACKCENSUS_HTTP_VERIFY_SSL", cls.verify_ssl),
            api_url=os.getenv("STACKCENSUS_GITHUB_API_URL", cls.api_url).rstrip("/"),
            token=os.getenv("GITHUB_TOKEN") or None,
        )


@dataclass
class ScanSettings:
    """Repository scan and artifact settings."""

    username: str | None = None
    repo_delay: float = 1.0
    page_size: int = 100
    ignore_dirs: tuple[str, ...] = DEFAULT_IGNORE_DIRS
    web_languages: tuple[str, ...] = WEB_LANGUAGES
    result_file: Path = Path("result.json")
    chart_file: Path = Path("stats-chart.svg")
    audit_log: Path | None = Path("stackcensus.log")

    @classmethod
    def from_env(cls) -> "ScanSettings":
        """Create settings from environment variables (evaluated at call time)."""
        page_size = _int_env("STACKCENSUS_PAGE_SIZE", cls.page_size)
        if page_size <= 0 or page_size > 100:
            page_size = cls.page_size
        repo_delay = _float_env("STACKCENSUS_REPO_DELAY", cls.repo_delay)
        if repo_delay < 0:
            repo_delay = cls.repo_delay
        audit_log = os.getenv("STACKCENSUS_AUDIT_LOG")
        return cls(
            username=os.getenv("GITHUB_USERNAME") or None,
            repo_delay=repo_delay,
            page_size=page_size,
            ignore_dirs=_list_env("STACKCENSUS_IGNORE_DIRS", cls.ignore_dirs),
            web_languages=_list_env("STACKCENSUS_WEB_LANGUAGES", cls.web_languages),
            result_file=Path(os.getenv("STACKCENSUS_RESULT_FILE", str(cls.result_file))),
            chart_file=Path(os.getenv("STACKCENSUS_CHART_FILE", str(cls.chart_file))),
            audit_log=Path(audit_log) if audit_log else cls.audit_log,
        )


def load_http_settings() -> HttpSettings:
    """Load HTTP settings from environment with sensible defaults."""
    return HttpSettings.from_env()


def load_scan_settings() -> ScanSettings:
    """Load scan settings from environment with sensible defaults."""
    return ScanSettings.from_env()
