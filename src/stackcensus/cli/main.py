# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""StackCensus CLI."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

from ..aggregate import aggregate
from ..config import ScanSettings, load_http_settings, load_scan_settings
from ..errors import RepositoryListingError, error_category_to_reason
from ..log import setup_logging
from ..models import AggregateResult
from ..runtime import StackCensus
from ..scan import build_chart, load_results, remove_stale_chart, write_chart

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="stackcensus",
        description="Detect front-end frameworks across your GitHub repositories and chart them as SVG",
    )
    parser.add_argument("--log-level", help="Logging level (default: STACKCENSUS_LOG_LEVEL or INFO)")
    parser.add_argument("--audit-log", type=Path, help="Append timestamped events to this file")
    subparsers = parser.add_subparsers(dest="command", required=True)

    scan = subparsers.add_parser("scan", help="Scan owned repositories and write result.json and the SVG chart")
    scan.add_argument("--username", help="GitHub username (default: GITHUB_USERNAME)")
    scan.add_argument("--delay", type=float, help="Seconds to pause between repositories")
    scan.add_argument("--result-file", type=Path, help="Where to write the JSON record list")
    scan.add_argument("--chart-file", type=Path, help="Where to write the SVG chart")
    scan.add_argument(
        "--ignore-dir",
        action="append",
        dest="ignore_dirs",
        metavar="NAME",
        help="Directory name to skip at any depth (repeatable; replaces the defaults)",
    )
    scan.add_argument(
        "--ignore-ssl-errors",
        action="store_true",
        help="Skip TLS verification (useful for self-hosted GitHub Enterprise)",
    )

    render = subparsers.add_parser("render", help="Render the SVG chart from an existing result file")
    render.add_argument("--result-file", type=Path, help="JSON record list to read")
    render.add_argument("--chart-file", type=Path, help="Where to write the SVG chart")
    render.add_argument("--author", help="Name printed in the chart footer")

    summary = subparsers.add_parser("summary", help="Print the aggregated framework usage from a result file")
    summary.add_argument("--result-file", type=Path, help="JSON record list to read")
    summary.add_argument("--json", action="store_true", help="Output JSON instead of a table")
    return parser


def _apply_scan_overrides(settings: ScanSettings, args: argparse.Namespace) -> ScanSettings:
    overrides: dict[str, Any] = {}
    if getattr(args, "username", None):
        overrides["username"] = args.username
    if getattr(args, "delay", None) is not None:
        overrides["repo_delay"] = max(0.0, args.delay)
    if getattr(args, "result_file", None):
        overrides["result_file"] = args.result_file
    if getattr(args, "chart_file", None):
        overrides["chart_file"] = args.chart_file
    if getattr(args, "ignore_dirs", None):
        overrides["ignore_dirs"] = tuple(args.ignore_dirs)
    if args.audit_log:
        overrides["audit_log"] = args.audit_log
    return replace(settings, **overrides) if overrides else settings


def _print_summary(result: AggregateResult) -> None:
    if result.is_empty:
        print("No frameworks detected.")
        return
    width = max(len(stat.name) for stat in result.stats)
    print(f"Total uses: {result.total_count}")
    for stat in result.stats:
        print(f"  {stat.name.ljust(width)}  {stat.count:>3}  {result.percentage(stat):>3}%  {', '.join(stat.repo_names)}")


def _run_scan(args: argparse.Namespace, settings: ScanSettings) -> int:
    http_settings = load_http_settings()
    if args.ignore_ssl_errors:
        http_settings.verify_ssl = False

    try:
        with StackCensus(http_settings=http_settings, scan_settings=settings) as census:
            run = census.run()
    except RepositoryListingError as exc:
        logger.error("Repository listing failed: %s", exc)
        reason = error_category_to_reason(exc.category)
        print(f"[StackCensus] Scan aborted: {reason or exc}", file=sys.stderr)
        return 1

    print(f"[StackCensus] {len(run.summary.detections)} repositories with frameworks, {run.aggregate.total_count} total uses")
    print(f"Results: {run.result_file}")
    print(f"Chart: {run.chart_file if run.chart_file else 'skipped (nothing to render)'}")
    return 0


def _run_render(args: argparse.Namespace, settings: ScanSettings) -> int:
    detections = load_results(settings.result_file)
    result = aggregate(detections)
    svg = build_chart(result, author=args.author or settings.username)
    if svg is None:
        remove_stale_chart(settings.chart_file)
        print("[StackCensus] Nothing to render")
        return 0
    write_chart(svg, settings.chart_file)
    print(f"Chart: {settings.chart_file}")
    return 0


def _run_summary(args: argparse.Namespace, settings: ScanSettings) -> int:
    result = aggregate(load_results(settings.result_file))
    if args.json:
        json.dump(result.to_dict(), sys.stdout, indent=2, sort_keys=True)
        sys.stdout.write("\n")
    else:
        _print_summary(result)
    return 0


def main(argv: list[str] | None = None) -> int:
    load_dotenv(Path.cwd() / ".env")
    parser = build_parser()
    args = parser.parse_args(argv)

    settings = _apply_scan_overrides(load_scan_settings(), args)
    setup_logging(args.log_level, audit_log=settings.audit_log if args.command == "scan" or args.audit_log else None)

    if args.command == "scan":
        return _run_scan(args, settings)
    try:
        if args.command == "render":
            return _run_render(args, settings)
        return _run_summary(args, settings)
    except (OSError, ValueError) as exc:
        print(f"[StackCensus] Cannot read {settings.result_file}: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
