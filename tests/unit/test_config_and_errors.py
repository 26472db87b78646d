# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import logging
import socket
import ssl
from pathlib import Path

import httpx

from stackcensus import config
from stackcensus.config import DEFAULT_IGNORE_DIRS, DEFAULT_USER_AGENT
from stackcensus.errors import ErrorCategory, categorize_exception, categorize_status, error_category_to_reason
from stackcensus.log import setup_logging


def test_http_settings_env_overrides(monkeypatch):
    monkeypatch.setenv("STACKCENSUS_HTTP_TIMEOUT", "5.5")
    monkeypatch.setenv("STACKCENSUS_HTTP_RETRIES", "0")
    monkeypatch.setenv("STACKCENSUS_HTTP_BACKOFF", "1.5")
    monkeypatch.setenv("STACKCENSUS_HTTP_INITIAL_DELAY", "0.1")
    monkeypatch.setenv("STACKCENSUS_USER_AGENT", "CustomAgent/1.0")
    monkeypatch.setenv("STACKCENSUS_HTTP_VERIFY_SSL", "0")
    monkeypatch.setenv("STACKCENSUS_GITHUB_API_URL", "https://ghe.example.com/api/v3/")
    monkeypatch.setenv("GITHUB_TOKEN", "secret")

    settings = config.load_http_settings()

    assert settings.timeout == 5.5
    assert settings.max_retries == 0  # retry config clamps later
    assert settings.backoff_factor == 1.5
    assert settings.initial_delay == 0.1
    assert settings.user_agent == "CustomAgent/1.0"
    assert settings.verify_ssl is False
    assert settings.api_url == "https://ghe.example.com/api/v3"
    assert settings.token == "secret"


def test_http_settings_invalid_env_fall_back(monkeypatch):
    monkeypatch.setenv("STACKCENSUS_HTTP_TIMEOUT", "not-a-number")
    monkeypatch.setenv("STACKCENSUS_HTTP_RETRIES", "ten")
    monkeypatch.delenv("STACKCENSUS_USER_AGENT", raising=False)
    monkeypatch.setenv("GITHUB_TOKEN", "")

    settings = config.load_http_settings()

    assert settings.timeout == config.HttpSettings.timeout
    assert settings.max_retries == config.HttpSettings.max_retries
    assert DEFAULT_USER_AGENT in settings.user_agent
    assert settings.token is None


def test_scan_settings_env_overrides(monkeypatch):
    monkeypatch.setenv("GITHUB_USERNAME", "octocat")
    monkeypatch.setenv("STACKCENSUS_REPO_DELAY", "0.25")
    monkeypatch.setenv("STACKCENSUS_PAGE_SIZE", "50")
    monkeypatch.setenv("STACKCENSUS_IGNORE_DIRS", "node_modules, vendor ,,")
    monkeypatch.setenv("STACKCENSUS_RESULT_FILE", "out/result.json")
    monkeypatch.setenv("STACKCENSUS_AUDIT_LOG", "logs/run.log")

    settings = config.load_scan_settings()

    assert settings.username == "octocat"
    assert settings.repo_delay == 0.25
    assert settings.page_size == 50
    assert settings.ignore_dirs == ("node_modules", "vendor")
    assert settings.result_file == Path("out/result.json")
    assert settings.chart_file == Path("stats-chart.svg")
    assert settings.audit_log == Path("logs/run.log")


def test_scan_settings_out_of_range_values_fall_back(monkeypatch):
    monkeypatch.setenv("STACKCENSUS_PAGE_SIZE", "500")
    monkeypatch.setenv("STACKCENSUS_REPO_DELAY", "-3")
    monkeypatch.setenv("STACKCENSUS_IGNORE_DIRS", " , ")
    monkeypatch.delenv("GITHUB_USERNAME", raising=False)

    settings = config.load_scan_settings()

    assert settings.page_size == 100
    assert settings.repo_delay == 1.0
    assert settings.ignore_dirs == DEFAULT_IGNORE_DIRS
    assert settings.username is None


def test_categorize_status():
    assert categorize_status(200) == ErrorCategory.NONE
    assert categorize_status(401) == ErrorCategory.AUTH_ERROR
    assert categorize_status(403) == ErrorCategory.RATE_LIMITED
    assert categorize_status(429) == ErrorCategory.RATE_LIMITED
    assert categorize_status(404) == ErrorCategory.NOT_FOUND
    assert categorize_status(502) == ErrorCategory.UNKNOWN_ERROR
    assert categorize_status(None) == ErrorCategory.UNKNOWN_ERROR


def test_categorize_exception():
    request = httpx.Request("GET", "https://api.github.com")
    assert categorize_exception(httpx.ReadTimeout("slow", request=request)) == ErrorCategory.TIMEOUT
    assert categorize_exception(httpx.ConnectError("refused", request=request)) == ErrorCategory.CONNECTION_ERROR
    assert categorize_exception(ssl.SSLError("bad cert")) == ErrorCategory.SSL_ERROR
    assert categorize_exception(socket.gaierror("no host")) == ErrorCategory.DNS_ERROR
    assert categorize_exception(ConnectionResetError()) == ErrorCategory.CONNECTION_ERROR
    assert categorize_exception(RuntimeError("?")) == ErrorCategory.UNKNOWN_ERROR

    response = httpx.Response(404, request=request)
    status_error = httpx.HTTPStatusError("missing", request=request, response=response)
    assert categorize_exception(status_error) == ErrorCategory.NOT_FOUND


def test_error_category_reasons():
    assert "rate limit" in error_category_to_reason(ErrorCategory.RATE_LIMITED)
    assert error_category_to_reason(ErrorCategory.NONE) == ""
    assert error_category_to_reason(None) == ""


def test_audit_log_appends_across_runs(tmp_path):
    audit = tmp_path / "logs" / "audit.log"
    logger = logging.getLogger("stackcensus.scan.engine")
    try:
        setup_logging("INFO", audit_log=audit)
        logger.info("first run")
        setup_logging("INFO", audit_log=audit)
        logger.info("second run")
        logger.debug("filtered by level")
    finally:
        setup_logging("INFO", audit_log=None)

    lines = audit.read_text(encoding="utf-8").splitlines()
    assert len(lines) == 2
    assert lines[0].endswith("INFO stackcensus.scan.engine: first run")
    assert lines[1].endswith("second run")
    audit_handlers = [h for h in logging.getLogger("stackcensus").handlers if getattr(h, "_stackcensus_audit", False)]
    assert audit_handlers == []
