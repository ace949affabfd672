"""Tabular views of the weekly emission schedule for dashboards and exports."""

from __future__ import annotations

import math
from dataclasses import dataclass

import pandas as pd

from . import emission_constants as const
from .allocations import allocation_rates, phase_name
from .schedule import (
    InvalidInput,
    ScheduleParameters,
    cumulative_emissions,
    period_rate,
    require_non_negative_int,
)
from .snapshot import period_emission

SCHEDULE_COLUMNS: tuple[str, ...] = (
    "period",
    "phase",
    "phase_name",
    "rate_per_second",
    "period_total",
    "lp_rate",
    "single_rate",
    "victory_staking_rate",
    "dev_rate",
    "start_timestamp",
    "end_timestamp",
    "start_date",
    "end_date",
    "is_active",
    "is_completed",
    "emitted_so_far",
    "cumulative_total",
)


@dataclass(frozen=True)
class SchedulePage:
    frame: pd.DataFrame
    page: int
    total_pages: int
    total_periods: int


def _to_datetime(ts: int | None) -> pd.Timestamp:
    if ts is None:
        return pd.NaT
    return pd.Timestamp(ts, unit="s", tz="UTC")


def build_schedule_table(
    params: ScheduleParameters,
    start_ts: int,
    now_ts: int,
    *,
    start_period: int = 1,
    end_period: int | None = None,
) -> pd.DataFrame:
    """Build one row per week with rates, allocations, dates and progress.

    Args:
        params: Schedule parameters
        start_ts: Emission start timestamp (0 when not initialised)
        now_ts: Timestamp used for the active/completed flags
        start_period: First week to include (1-based)
        end_period: Last week to include, defaults to the final week

    Returns:
        DataFrame with ``SCHEDULE_COLUMNS``; token columns are int64 microVictory,
        ``cumulative_total`` is the full-week total through each row's week.
    """
    last = params.total_periods if end_period is None else end_period
    first = require_non_negative_int(start_period, "start_period")
    last = require_non_negative_int(last, "end_period")
    if first < 1 or last < first or last > params.total_periods:
        raise InvalidInput(
            f"Week range {first}-{last} outside 1-{params.total_periods}"
        )

    running_total = cumulative_emissions(params, first - 1)
    records = []
    for period in range(first, last + 1):
        detail = period_emission(params, period, start_ts, now_ts)
        rates = allocation_rates(params, period)
        running_total += detail.total_for_period
        records.append(
            {
                "period": period,
                "phase": detail.phase.value,
                "phase_name": phase_name(detail.phase),
                "rate_per_second": detail.rate_per_second,
                "period_total": detail.total_for_period,
                "lp_rate": rates.lp,
                "single_rate": rates.single,
                "victory_staking_rate": rates.victory_staking,
                "dev_rate": rates.dev,
                "start_timestamp": detail.start_timestamp,
                "end_timestamp": detail.end_timestamp,
                "start_date": _to_datetime(detail.start_timestamp),
                "end_date": _to_datetime(detail.end_timestamp),
                "is_active": detail.is_active,
                "is_completed": detail.is_completed,
                "emitted_so_far": detail.emitted_so_far,
                "cumulative_total": running_total,
            }
        )

    df = pd.DataFrame.from_records(records, columns=list(SCHEDULE_COLUMNS))
    for column in ("start_timestamp", "end_timestamp"):
        df[column] = df[column].astype("Int64")
    return df


def paginate_schedule(
    params: ScheduleParameters,
    start_ts: int,
    now_ts: int,
    *,
    page: int = 1,
    page_size: int = const.DEFAULT_PAGE_SIZE,
) -> SchedulePage:
    """Return one page of the schedule table (pages are 1-based)."""
    page = require_non_negative_int(page, "page")
    page_size = require_non_negative_int(page_size, "page_size")
    if page_size < 1:
        raise InvalidInput("page_size must be at least 1")

    total_pages = math.ceil(params.total_periods / page_size)
    if not 1 <= page <= total_pages:
        raise InvalidInput(f"Page {page} outside 1-{total_pages}")

    start_period = (page - 1) * page_size + 1
    end_period = min(start_period + page_size - 1, params.total_periods)
    frame = build_schedule_table(
        params,
        start_ts,
        now_ts,
        start_period=start_period,
        end_period=end_period,
    )
    return SchedulePage(
        frame=frame,
        page=page,
        total_pages=total_pages,
        total_periods=params.total_periods,
    )


def rate_change_metrics(params: ScheduleParameters, period: int) -> dict[str, int | float]:
    """Week-over-week rate changes around ``period`` in percent."""
    current, _ = period_rate(params, period)
    previous = period_rate(params, period - 1)[0] if period > 1 else 0
    following = period_rate(params, period + 1)[0] if period < params.total_periods else 0

    change_from_previous = (current - previous) / previous * 100 if previous else 0.0
    change_to_next = (following - current) / current * 100 if current else 0.0
    return {
        "current_rate": current,
        "previous_rate": previous,
        "next_rate": following,
        "change_from_previous_pct": change_from_previous,
        "change_to_next_pct": change_to_next,
    }
