# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Scan orchestration and artifact helpers."""

from .engine import ScanEngine, ScanSummary, is_web_repository
from .report import build_chart, load_results, remove_stale_chart, write_chart, write_results

__all__ = [
    "ScanEngine",
    "ScanSummary",
    "build_chart",
    "is_web_repository",
    "load_results",
    "remove_stale_chart",
    "write_chart",
    "write_results",
]
