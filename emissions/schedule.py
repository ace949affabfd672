"""Victory emission schedule model.

Provides pure functions to:
- Compute the per-second emission rate of any week (flat bootstrap, then
  floored 1% weekly decay)
- Convert rates into full-week and pro-rated partial-week amounts
- Aggregate emitted and remaining tokens between the schedule start and "now"

All amounts are integers in microVictory. Nothing here logs or keeps state;
callers pass an explicit ``ScheduleParameters`` and integer timestamps.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from functools import lru_cache
from numbers import Integral

from . import emission_constants as const


class InvalidInput(ValueError):
    """Raised when a caller supplies a malformed period, timestamp or parameter."""


class Phase(Enum):
    """Emission phases of the global emission controller."""

    NOT_STARTED = 0
    BOOTSTRAP = 1
    POST_BOOTSTRAP = 2
    ENDED = 3


@dataclass(frozen=True)
class ScheduleParameters:
    """Immutable contract parameters of the emission schedule.

    Attributes:
        period_length_seconds: Length of one emission week
        total_periods: Number of weeks in the schedule
        bootstrap_periods: Leading weeks emitted at ``bootstrap_rate``
        bootstrap_rate: Flat rate (microVictory/sec) during bootstrap
        post_bootstrap_start_rate: Rate of the first post-bootstrap week
        decay_factor_bps: Weekly multiplier in basis points (9900 = 1% decay)
        token_decimals: Decimals used to display microVictory as Victory
    """

    period_length_seconds: int = const.SECONDS_PER_WEEK
    total_periods: int = const.TOTAL_EMISSION_WEEKS
    bootstrap_periods: int = const.BOOTSTRAP_WEEKS
    bootstrap_rate: int = const.BOOTSTRAP_RATE
    post_bootstrap_start_rate: int = const.POST_BOOTSTRAP_START_RATE
    decay_factor_bps: int = const.WEEKLY_DECAY_RATE_BPS
    token_decimals: int = const.VICTORY_DECIMALS

    def __post_init__(self) -> None:
        for name in (
            "period_length_seconds",
            "total_periods",
            "bootstrap_rate",
            "post_bootstrap_start_rate",
            "decay_factor_bps",
        ):
            value = getattr(self, name)
            if _require_int(value, name) <= 0:
                raise InvalidInput(f"{name} must be positive, got {value}")
        _require_int(self.bootstrap_periods, "bootstrap_periods")
        _require_int(self.token_decimals, "token_decimals")
        if not 1 <= self.bootstrap_periods < self.total_periods:
            raise InvalidInput(
                "bootstrap_periods must be at least 1 and less than total_periods "
                f"({self.bootstrap_periods} vs {self.total_periods})"
            )
        if self.decay_factor_bps > const.BASIS_POINTS:
            raise InvalidInput(
                f"decay_factor_bps cannot exceed {const.BASIS_POINTS}, got {self.decay_factor_bps}"
            )
        if self.token_decimals < 0:
            raise InvalidInput(f"token_decimals cannot be negative, got {self.token_decimals}")

    @property
    def schedule_length_seconds(self) -> int:
        return self.total_periods * self.period_length_seconds


def _require_int(value: object, name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, Integral):
        raise InvalidInput(f"{name} must be an integer, got {value!r}")
    return int(value)


def require_non_negative_int(value: object, name: str) -> int:
    """Return ``value`` as ``int`` or raise ``InvalidInput`` if negative or not integral."""
    number = _require_int(value, name)
    if number < 0:
        raise InvalidInput(f"{name} cannot be negative, got {number}")
    return number


DEFAULT_SCHEDULE = ScheduleParameters()


@lru_cache(maxsize=32)
def _rate_table(params: ScheduleParameters) -> tuple[int, ...]:
    # Index 0 is the not-started slot; decay is floored once per week as on-chain.
    rates = [0]
    rate = params.post_bootstrap_start_rate
    for period in range(1, params.total_periods + 1):
        if period <= params.bootstrap_periods:
            rates.append(params.bootstrap_rate)
            continue
        if period > params.bootstrap_periods + 1:
            rate = rate * params.decay_factor_bps // const.BASIS_POINTS
        rates.append(rate)
    return tuple(rates)


def phase_for_period(params: ScheduleParameters, period: int) -> Phase:
    """Map a week number to its emission phase."""
    period = require_non_negative_int(period, "period")
    if period == 0:
        return Phase.NOT_STARTED
    if period <= params.bootstrap_periods:
        return Phase.BOOTSTRAP
    if period <= params.total_periods:
        return Phase.POST_BOOTSTRAP
    return Phase.ENDED


def period_rate(params: ScheduleParameters, period: int) -> tuple[int, Phase]:
    """Return ``(rate_per_second, phase)`` for a 1-based week number.

    Week 0 and weeks past the schedule emit nothing; that is the defined edge
    behaviour, not an error.
    """
    phase = phase_for_period(params, period)
    if phase in (Phase.NOT_STARTED, Phase.ENDED):
        return 0, phase
    return _rate_table(params)[period], phase


def period_total(params: ScheduleParameters, period: int) -> int:
    """Total microVictory emitted over a complete week."""
    rate, _ = period_rate(params, period)
    return rate * params.period_length_seconds


def period_bounds(params: ScheduleParameters, period: int, start_ts: int) -> tuple[int, int]:
    """Return the ``[start, end)`` timestamps of a week for a given schedule start."""
    period = require_non_negative_int(period, "period")
    start_ts = require_non_negative_int(start_ts, "start_ts")
    if period == 0:
        raise InvalidInput("period bounds are only defined for weeks >= 1")
    period_start = start_ts + (period - 1) * params.period_length_seconds
    return period_start, period_start + params.period_length_seconds


def period_emitted_so_far(
    params: ScheduleParameters, period: int, start_ts: int, now_ts: int
) -> int:
    """Tokens emitted within one week up to ``now_ts`` (linear pro-ration)."""
    period = require_non_negative_int(period, "period")
    start_ts = require_non_negative_int(start_ts, "start_ts")
    now_ts = require_non_negative_int(now_ts, "now_ts")
    if period == 0 or start_ts == 0:
        return 0

    rate, _ = period_rate(params, period)
    period_start, period_end = period_bounds(params, period, start_ts)
    if now_ts < period_start:
        return 0
    if now_ts >= period_end:
        return rate * params.period_length_seconds
    return rate * (now_ts - period_start)


def current_period(params: ScheduleParameters, start_ts: int, now_ts: int) -> int:
    """Active week for ``now_ts``; 0 before the start, clamped to the final week."""
    start_ts = require_non_negative_int(start_ts, "start_ts")
    now_ts = require_non_negative_int(now_ts, "now_ts")
    if start_ts == 0 or now_ts < start_ts:
        return 0
    elapsed_periods = (now_ts - start_ts) // params.period_length_seconds
    return min(elapsed_periods + 1, params.total_periods)


def total_emitted_so_far(params: ScheduleParameters, start_ts: int, now_ts: int) -> int:
    """Sum completed weeks plus the pro-rated active week."""
    active = current_period(params, start_ts, now_ts)
    return sum(
        period_emitted_so_far(params, period, start_ts, now_ts)
        for period in range(1, active + 1)
    )


@lru_cache(maxsize=32)
def total_schedule_emissions(params: ScheduleParameters) -> int:
    """Total microVictory across every week of the schedule."""
    return sum(
        period_total(params, period) for period in range(1, params.total_periods + 1)
    )


def total_remaining(params: ScheduleParameters, start_ts: int, now_ts: int) -> int:
    emitted = total_emitted_so_far(params, start_ts, now_ts)
    return max(0, total_schedule_emissions(params) - emitted)


def cumulative_emissions(params: ScheduleParameters, up_to_period: int) -> int:
    """Full-week emissions for weeks ``1..up_to_period`` (capped at the schedule end)."""
    up_to_period = require_non_negative_int(up_to_period, "up_to_period")
    last = min(up_to_period, params.total_periods)
    return sum(period_total(params, period) for period in range(1, last + 1))


def remaining_emissions(params: ScheduleParameters, from_period: int) -> int:
    """Full-week emissions for weeks ``from_period..total_periods``."""
    from_period = require_non_negative_int(from_period, "from_period")
    first = max(from_period, 1)
    return sum(
        period_total(params, period) for period in range(first, params.total_periods + 1)
    )


def emissions_for_time_range(
    params: ScheduleParameters,
    range_start: int,
    range_end: int,
    emission_start: int,
) -> int:
    """Tokens emitted between two timestamps, clipped to the schedule window.

    Walks week segments so each second is charged at the rate of the week it
    falls in.
    """
    range_start = require_non_negative_int(range_start, "range_start")
    range_end = require_non_negative_int(range_end, "range_end")
    emission_start = require_non_negative_int(emission_start, "emission_start")
    if emission_start == 0 or range_start >= range_end:
        return 0

    window_start = max(range_start, emission_start)
    window_end = min(range_end, emission_start + params.schedule_length_seconds)
    if window_start >= window_end:
        return 0

    total = 0
    cursor = window_start
    while cursor < window_end:
        period = (cursor - emission_start) // params.period_length_seconds + 1
        _, period_end = period_bounds(params, period, emission_start)
        segment_end = min(window_end, period_end)
        rate, _ = period_rate(params, period)
        total += rate * (segment_end - cursor)
        cursor = segment_end
    return total
