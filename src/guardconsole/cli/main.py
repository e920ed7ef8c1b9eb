# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""GuardConsole CLI."""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from typing import Any

from ..config import ConsoleSettings, load_settings
from ..core.display import COMMAND_DISCLAIMER, status_text
from ..core.drilldown import detail
from ..core.index import SCAN_SUMMARY_COLUMNS, ResultIndex
from ..errors import ApiError, SelectionError
from ..http import create_default_http_client
from ..log import setup_logging
from ..models import ScanSnapshot
from ..runtime import GuardConsole

CLI_TEXT_TRUNCATION_BYTES = 4096
RECORD_COLUMNS = ("service", "region", "findings", "resource_cost", "summary")
SUMMARY_COLUMNS = ("scan", "scan_id", "service_count", "region_count", "status", "resource_cost", "created")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="GuardConsole cloud security scan client")
    parser.add_argument("--log-level", default=None, help="Logging level (default: GUARDCONSOLE_LOG_LEVEL or WARNING)")
    parser.add_argument(
        "--ignore-ssl-errors",
        action="store_true",
        help="Skip TLS verification (useful for self-hosted APIs with self-signed certificates)",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    start = sub.add_parser("start", help="Start a new scan")
    start.add_argument("team")
    start.add_argument("project")
    start.add_argument("-s", "--service", action="append", default=[], help="Service code (repeatable)")
    start.add_argument("-r", "--region", action="append", default=[], help="Region code (repeatable)")
    start.add_argument("--json", action="store_true", help="Output JSON")

    scan = sub.add_parser("scan", help="Show scan results")
    scan.add_argument("team")
    scan.add_argument("project")
    scan.add_argument("scan_id")
    scan.add_argument("--watch", action="store_true", help="Poll until the scan completes")
    scan.add_argument("--interval-ms", type=int, default=None, help="Poll interval in milliseconds")
    scan.add_argument("--search", default="", help="Filter by service or region")
    scan.add_argument("--sort", default=None, help="Sort column, optionally suffixed with :desc")
    scan.add_argument("--page", type=int, default=1, help="1-based page number")
    scan.add_argument("--page-size", type=int, default=None)
    scan.add_argument("--detail", type=int, default=None, help="Show drill-down for the N-th row (1-based) of the page")
    scan.add_argument("--json", action="store_true", help="Output JSON")

    project = sub.add_parser("project", help="List scans of a project")
    project.add_argument("team")
    project.add_argument("project")
    project.add_argument("--json", action="store_true", help="Output JSON")
    return parser


def parse_sort(value: str | None) -> tuple[str, str] | None:
    if not value:
        return None
    column, _, direction = value.partition(":")
    return column, (direction or "asc").lower()


def _truncate_text_bytes(text: str, max_bytes: int) -> str:
    raw = text.encode("utf-8")
    if len(raw) <= max_bytes:
        return text
    suffix = "...[truncated]"
    keep = max_bytes - len(suffix.encode("utf-8"))
    if keep <= 0:
        return suffix.encode("utf-8")[:max_bytes].decode("utf-8", errors="ignore")
    return raw[:keep].decode("utf-8", errors="ignore") + suffix


def _truncate_for_cli(value: Any, *, max_bytes: int) -> Any:
    if isinstance(value, str):
        return _truncate_text_bytes(value, max_bytes)
    if isinstance(value, dict):
        return {k: _truncate_for_cli(v, max_bytes=max_bytes) for k, v in value.items()}
    if isinstance(value, list):
        return [_truncate_for_cli(v, max_bytes=max_bytes) for v in value]
    return value


def _print_json(data: Any) -> None:
    payload = data.to_dict() if hasattr(data, "to_dict") else data
    json.dump(_truncate_for_cli(payload, max_bytes=CLI_TEXT_TRUNCATION_BYTES), sys.stdout, indent=2, sort_keys=True)
    sys.stdout.write("\n")


def _print_table(rows: list[dict[str, str]], columns: tuple[str, ...], *, max_width: int = 60) -> None:
    if not rows:
        print("No results.")
        return
    cells = [[(row.get(col) or "")[:max_width] for col in columns] for row in rows]
    widths = [max(len(col), *(len(r[i]) for r in cells)) for i, col in enumerate(columns)]
    print("  ".join(col.upper().ljust(widths[i]) for i, col in enumerate(columns)))
    for r in cells:
        print("  ".join(value.ljust(widths[i]) for i, value in enumerate(r)))


def _print_detail(record_detail) -> None:  # noqa: ANN001
    print(f"{record_detail.service} / {record_detail.region}")
    if record_detail.summary:
        print(record_detail.summary)
    if record_detail.is_empty:
        print("No remediation entries.")
        return
    for entry in record_detail.entries:
        print()
        print(f"## {entry.title}")
        if entry.summary:
            print(entry.summary)
        print("Action Items:")
        print(entry.remedy or "-")
        if entry.has_commands:
            for command in entry.commands:
                print(f"  $ {command}")
            print(COMMAND_DISCLAIMER)


def render_scan(snapshot: ScanSnapshot, args: argparse.Namespace, page_size: int) -> int:
    index = ResultIndex(snapshot.items)
    sort = parse_sort(args.sort)
    if sort:
        index.sort_by(*sort)
    index.search(args.search)
    rows = index.paginate(args.page - 1, page_size)

    if args.detail is not None:
        if not 1 <= args.detail <= len(rows):
            print(f"No row {args.detail} on page {args.page}", file=sys.stderr)
            return 2
        record_detail = detail(rows[args.detail - 1])
        if args.json:
            _print_json(record_detail)
        else:
            _print_detail(record_detail)
        return 0

    if args.json:
        _print_json(
            {
                "scan_id": snapshot.scan_id,
                "completed": snapshot.completed,
                "service_count": snapshot.service_count,
                "region_count": snapshot.region_count,
                "resource_cost": snapshot.resource_cost,
                "page": args.page,
                "page_count": index.page_count(page_size),
                "items": [row.to_dict() for row in rows],
            }
        )
        return 0

    print(f"[GuardConsole] {status_text(snapshot.completed)} ({snapshot.service_count} services, {snapshot.region_count} regions)")
    _print_table([index.render(row) for row in rows], RECORD_COLUMNS)
    print(f"Page {args.page} of {max(1, index.page_count(page_size))}")
    return 0


async def _watch_scan(console: GuardConsole, args: argparse.Namespace) -> ScanSnapshot | None:
    controller = console.watch_scan(args.team, args.project, args.scan_id, interval_ms=args.interval_ms)

    def report(snapshot: ScanSnapshot) -> None:
        if not args.json:
            print(f"[GuardConsole] {status_text(snapshot.completed)} ({len(snapshot.items)} findings)", file=sys.stderr)

    def report_error(exc: BaseException) -> None:
        print(f"[GuardConsole] fetch failed, retrying: {exc}", file=sys.stderr)

    subscription = controller.subscribe(report, report_error)
    try:
        return await controller.wait_settled()
    finally:
        subscription.unsubscribe()
        controller.stop()
        await console.aclose()


def _run_scan(console: GuardConsole, args: argparse.Namespace, settings: ConsoleSettings) -> int:
    page_size = args.page_size or settings.page_size
    if args.watch:
        snapshot = asyncio.run(_watch_scan(console, args))
    else:
        snapshot = console.scan(args.team, args.project, args.scan_id)
    if snapshot is None:
        return 1
    return render_scan(snapshot, args, page_size)


def _run_project(console: GuardConsole, args: argparse.Namespace) -> int:
    overview = console.project(args.team, args.project)
    if args.json:
        _print_json(overview)
        return 0
    index = ResultIndex(overview.scans, columns=SCAN_SUMMARY_COLUMNS, search_columns=("scan_id",))
    index.sort_by("created", "desc")
    print(f"[GuardConsole] {overview.project_name or overview.project_slug}")
    _print_table([index.render(row) for row in index.rows], SUMMARY_COLUMNS)
    return 0


def _run_start(console: GuardConsole, args: argparse.Namespace) -> int:
    scan_id = console.start_scan(args.team, args.project, args.service, args.region)
    if args.json:
        _print_json({"scan_id": scan_id})
    else:
        print(scan_id)
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.log_level)

    settings: ConsoleSettings = load_settings()
    if args.ignore_ssl_errors:
        settings.verify_ssl = False

    http_client = create_default_http_client(settings)

    try:
        with GuardConsole(http_client=http_client, settings=settings) as console:
            if args.command == "start":
                return _run_start(console, args)
            if args.command == "scan":
                return _run_scan(console, args, settings)
            return _run_project(console, args)
    except SelectionError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2
    except ValueError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2
    except ApiError as exc:
        print(f"error: {exc.reason}: {exc}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        return 130


if __name__ == "__main__":
    raise SystemExit(main())
