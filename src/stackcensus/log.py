# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Logging helpers for StackCensus."""

from __future__ import annotations

import logging
import os
from pathlib import Path

DEFAULT_LOG_LEVEL = os.getenv("STACKCENSUS_LOG_LEVEL", "INFO").upper()
AUDIT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

_LOGGER_NAME = "stackcensus"


def setup_logging(level: str | None = None, *, audit_log: Path | None = None) -> None:
    """Configure standard logging for CLI/library use.

    When ``audit_log`` is given, every event is also appended to that file as one
    timestamped line. The file is opened in append mode so earlier runs stay
    readable after an aborted scan.
    """
    effective_level = (level or DEFAULT_LOG_LEVEL).upper()
    numeric_level = getattr(logging, effective_level, logging.INFO)
    logging.basicConfig(
        level=numeric_level,
        format="%(levelname)s %(name)s: %(message)s",
    )

    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(numeric_level)
    for handler in list(logger.handlers):
        if getattr(handler, "_stackcensus_audit", False):
            logger.removeHandler(handler)
            handler.close()

    if audit_log is not None:
        audit_log.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(audit_log, mode="a", encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(AUDIT_FORMAT))
        file_handler._stackcensus_audit = True  # type: ignore[attr-defined]
        logger.addHandler(file_handler)


__all__ = ["setup_logging"]
