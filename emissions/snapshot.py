"""Point-in-time tokenomics snapshots of the emission schedule."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any

from .schedule import (
    InvalidInput,
    Phase,
    ScheduleParameters,
    current_period,
    period_bounds,
    period_emitted_so_far,
    period_rate,
    require_non_negative_int,
    total_emitted_so_far,
    total_schedule_emissions,
)


@dataclass(frozen=True)
class PeriodEmission:
    """Emission detail for a single week relative to a schedule start."""

    period: int
    phase: Phase
    rate_per_second: int
    total_for_period: int
    start_timestamp: int | None
    end_timestamp: int | None
    is_completed: bool
    is_active: bool
    emitted_so_far: int


@dataclass(frozen=True)
class TokenomicsSnapshot:
    """Computed view of schedule progress at ``calculation_timestamp``.

    Token amounts are microVictory integers; the two ``*_percent`` fields are
    the only values meant for direct display.
    """

    current_period: int
    current_phase: Phase
    period_progress_percent: int
    current_period_rate: int
    current_period_total: int
    current_period_emitted_so_far: int
    current_period_remaining: int
    total_emitted_so_far: int
    total_remaining: int
    total_schedule_emissions: int
    emission_progress_percent: float
    total_elapsed_seconds: int
    current_period_elapsed_seconds: int
    period_remaining_seconds: int
    schedule_remaining_seconds: int
    schedule_complete: bool
    calculation_timestamp: int
    emission_start_timestamp: int

    def to_dict(self) -> dict[str, Any]:
        payload = asdict(self)
        payload["current_phase"] = self.current_phase.name
        return payload


def period_emission(
    params: ScheduleParameters, period: int, start_ts: int, now_ts: int
) -> PeriodEmission:
    """Return rate, totals and completion state of ``period`` at ``now_ts``."""
    rate, phase = period_rate(params, period)
    if period == 0:
        raise InvalidInput("period_emission requires a week >= 1")
    start_ts = require_non_negative_int(start_ts, "start_ts")
    now_ts = require_non_negative_int(now_ts, "now_ts")

    period_start: int | None = None
    period_end: int | None = None
    is_completed = False
    is_active = False
    if start_ts:
        period_start, period_end = period_bounds(params, period, start_ts)
        is_completed = now_ts >= period_end
        is_active = period_start <= now_ts < period_end

    return PeriodEmission(
        period=period,
        phase=phase,
        rate_per_second=rate,
        total_for_period=rate * params.period_length_seconds,
        start_timestamp=period_start,
        end_timestamp=period_end,
        is_completed=is_completed,
        is_active=is_active,
        emitted_so_far=period_emitted_so_far(params, period, start_ts, now_ts),
    )


def _not_started_snapshot(
    params: ScheduleParameters, start_ts: int, now_ts: int
) -> TokenomicsSnapshot:
    total_schedule = total_schedule_emissions(params)
    schedule_remaining = 0
    if start_ts:
        schedule_remaining = start_ts + params.schedule_length_seconds - now_ts
    return TokenomicsSnapshot(
        current_period=0,
        current_phase=Phase.NOT_STARTED,
        period_progress_percent=0,
        current_period_rate=0,
        current_period_total=0,
        current_period_emitted_so_far=0,
        current_period_remaining=0,
        total_emitted_so_far=0,
        total_remaining=total_schedule,
        total_schedule_emissions=total_schedule,
        emission_progress_percent=0.0,
        total_elapsed_seconds=0,
        current_period_elapsed_seconds=0,
        period_remaining_seconds=0,
        schedule_remaining_seconds=schedule_remaining,
        schedule_complete=False,
        calculation_timestamp=now_ts,
        emission_start_timestamp=start_ts,
    )


def compute_snapshot(
    params: ScheduleParameters, start_ts: int, now_ts: int
) -> TokenomicsSnapshot:
    """Assemble the full tokenomics snapshot for a schedule start and "now".

    ``start_ts == 0`` means the controller has not been initialised; a start in
    the future of ``now_ts`` is reported the same way. Past the final week the
    week number stays clamped and nothing further accrues.
    """
    start_ts = require_non_negative_int(start_ts, "start_ts")
    now_ts = require_non_negative_int(now_ts, "now_ts")

    period = current_period(params, start_ts, now_ts)
    if period == 0:
        return _not_started_snapshot(params, start_ts, now_ts)

    length = params.period_length_seconds
    period_start, period_end = period_bounds(params, period, start_ts)
    elapsed_in_period = min(max(0, now_ts - period_start), length)
    rate, phase = period_rate(params, period)
    period_total = rate * length
    emitted_in_period = period_emitted_so_far(params, period, start_ts, now_ts)

    total_schedule = total_schedule_emissions(params)
    total_emitted = total_emitted_so_far(params, start_ts, now_ts)
    emission_progress = (total_emitted / total_schedule * 100) if total_schedule else 0.0
    schedule_end = start_ts + params.schedule_length_seconds

    return TokenomicsSnapshot(
        current_period=period,
        current_phase=phase,
        period_progress_percent=min(100, elapsed_in_period * 100 // length),
        current_period_rate=rate,
        current_period_total=period_total,
        current_period_emitted_so_far=emitted_in_period,
        current_period_remaining=period_total - emitted_in_period,
        total_emitted_so_far=total_emitted,
        total_remaining=max(0, total_schedule - total_emitted),
        total_schedule_emissions=total_schedule,
        emission_progress_percent=emission_progress,
        total_elapsed_seconds=now_ts - start_ts,
        current_period_elapsed_seconds=elapsed_in_period,
        period_remaining_seconds=max(0, period_end - now_ts),
        schedule_remaining_seconds=max(0, schedule_end - now_ts),
        schedule_complete=now_ts >= schedule_end,
        calculation_timestamp=now_ts,
        emission_start_timestamp=start_ts,
    )
