#!/usr/bin/env python3
"""Print the current Victory emission snapshot and weekly schedule."""

from __future__ import annotations

import argparse
import json
import logging
import sys
import time
import warnings
from dataclasses import replace
from datetime import UTC, datetime
from pathlib import Path
from typing import Sequence

PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from emissions import config as cfg
from emissions import formatting
from emissions import schedule_table
from emissions.allocations import next_phase_transition, phase_name
from emissions.export_utils import write_table
from emissions.schedule import InvalidInput, ScheduleParameters
from emissions.snapshot import TokenomicsSnapshot, compute_snapshot
from emissions.validation import InvariantViolation, ReconciliationWarning, check_snapshot

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(levelname)s - %(message)s",
    datefmt="%H:%M:%S",
)
LOGGER = logging.getLogger(__name__)


def parse_args(
    argv: Sequence[str] | None = None, dashboard: cfg.DashboardConfig | None = None
) -> argparse.Namespace:
    dashboard = dashboard or cfg.load_dashboard_config()
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--start-ts",
        type=int,
        default=dashboard.emission_start_timestamp,
        help="Emission start timestamp in seconds (default: $EMISSION_START_TIMESTAMP or 0).",
    )
    parser.add_argument(
        "--now-ts",
        type=int,
        help="Evaluate the schedule at this timestamp instead of the current UTC time.",
    )
    parser.add_argument(
        "--period-seconds",
        type=int,
        help="Override the week length in seconds (default: $EMISSION_PERIOD_SECONDS or 604800).",
    )
    parser.add_argument("--page", type=int, default=1, help="Schedule table page (default: 1).")
    parser.add_argument(
        "--page-size",
        type=int,
        default=10,
        help="Weeks per schedule page (default: 10).",
    )
    parser.add_argument(
        "--export",
        type=Path,
        help=(
            "Write the full schedule table to a .parquet or .csv file "
            "(relative paths resolve under $OUT_DIR, default: out/)."
        ),
    )
    parser.add_argument("--json", action="store_true", help="Print the snapshot as JSON.")
    parser.add_argument(
        "--watch",
        type=int,
        nargs="?",
        const=dashboard.poll_interval_seconds,
        help="Re-derive the snapshot every N seconds (default interval: 30).",
    )
    args = parser.parse_args(argv)
    if args.watch is not None and args.watch < 1:
        parser.error(f"--watch interval must be at least 1 second, got {args.watch}")
    if args.export is not None and not args.export.is_absolute():
        args.export = dashboard.out_dir / args.export
    return args


def _now_ts() -> int:
    return int(datetime.now(UTC).timestamp())


def _print_snapshot(snapshot: TokenomicsSnapshot, params: ScheduleParameters) -> None:
    decimals = params.token_decimals
    print(
        f"Week {snapshot.current_period}/{params.total_periods} "
        f"({phase_name(snapshot.current_phase)}) - {snapshot.period_progress_percent}% of week elapsed, "
        f"{formatting.format_duration(snapshot.period_remaining_seconds)} remaining"
    )
    print(
        f"  Rate: {formatting.format_rate(snapshot.current_period_rate, token_decimals=decimals)} Victory/sec, "
        f"week total {formatting.format_token_amount(snapshot.current_period_total, token_decimals=decimals)}"
    )
    print(
        f"  Emitted: {formatting.format_token_amount(snapshot.total_emitted_so_far, token_decimals=decimals)} / "
        f"{formatting.format_token_amount(snapshot.total_schedule_emissions, token_decimals=decimals)} "
        f"({snapshot.emission_progress_percent:.2f}%)"
    )
    print(
        f"  Remaining: {formatting.format_token_amount(snapshot.total_remaining, token_decimals=decimals)} "
        f"over {formatting.format_duration(snapshot.schedule_remaining_seconds)}"
    )
    transition = next_phase_transition(params, snapshot.current_period)
    if transition is not None:
        print(
            f"  Next phase: {phase_name(transition.next_phase)} at week {transition.at_period} "
            f"({transition.periods_until} weeks)"
        )


def report_once(args: argparse.Namespace, params: ScheduleParameters) -> int:
    now_ts = args.now_ts if args.now_ts is not None else _now_ts()
    snapshot = compute_snapshot(params, args.start_ts, now_ts)

    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always", ReconciliationWarning)
        try:
            check_snapshot(snapshot, params)
        except InvariantViolation as exc:
            print(f"[emission-report] Snapshot rejected: {exc}", file=sys.stderr)
            return 2

    if args.json:
        print(json.dumps(snapshot.to_dict(), indent=2))
    else:
        _print_snapshot(snapshot, params)
    for warning in caught:
        print(f"  Advisory: {warning.message}")

    page = schedule_table.paginate_schedule(
        params,
        args.start_ts,
        now_ts,
        page=args.page,
        page_size=args.page_size,
    )
    print(f"\nSchedule page {page.page}/{page.total_pages}")
    print(
        page.frame[
            ["period", "phase_name", "rate_per_second", "period_total", "is_active", "is_completed"]
        ].to_string(index=False)
    )

    if args.export:
        full = schedule_table.build_schedule_table(params, args.start_ts, now_ts)
        write_table(args.export, full)
        LOGGER.info("Wrote %s schedule rows to %s", len(full), args.export)
    return 0


def main(argv: Sequence[str] | None = None) -> None:
    dashboard = cfg.load_dashboard_config()
    args = parse_args(argv, dashboard)
    params = dashboard.schedule
    try:
        if args.period_seconds is not None:
            params = replace(params, period_length_seconds=args.period_seconds)
        if args.watch is None:
            sys.exit(report_once(args, params))
        while True:
            status = report_once(args, params)
            if status:
                sys.exit(status)
            time.sleep(args.watch)
    except InvalidInput as exc:
        print(f"[emission-report] Invalid input: {exc}", file=sys.stderr)
        sys.exit(1)
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    main()
