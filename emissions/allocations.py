"""Emission phase catalogue and per-week allocation split.

The global emission controller divides each week's emission between LP farms,
single-asset farms, Victory staking and the dev treasury. The split shifts
from LP incentives toward Victory staking as the schedule matures.
"""

from __future__ import annotations

from dataclasses import dataclass

from . import emission_constants as const
from .schedule import Phase, ScheduleParameters, period_rate, require_non_negative_int


@dataclass(frozen=True)
class PhaseInfo:
    phase: Phase
    name: str
    description: str
    week_range: str
    base_rate: str
    characteristics: tuple[str, ...]


@dataclass(frozen=True)
class Allocation:
    """Basis-point split of a week's emission (sums to 10000 while active)."""

    lp_bps: int
    single_bps: int
    victory_staking_bps: int
    dev_bps: int

    @property
    def total_bps(self) -> int:
        return self.lp_bps + self.single_bps + self.victory_staking_bps + self.dev_bps


@dataclass(frozen=True)
class AllocationRates:
    """Per-second microVictory rate of each recipient for one week."""

    total: int
    lp: int
    single: int
    victory_staking: int
    dev: int


@dataclass(frozen=True)
class PhaseTransition:
    next_phase: Phase
    at_period: int
    periods_until: int


PHASE_INFO: dict[Phase, PhaseInfo] = {
    Phase.NOT_STARTED: PhaseInfo(
        phase=Phase.NOT_STARTED,
        name="Not Started",
        description="Emission schedule has not been initialized",
        week_range="N/A",
        base_rate="0",
        characteristics=("No emissions", "Waiting for admin initialization"),
    ),
    Phase.BOOTSTRAP: PhaseInfo(
        phase=Phase.BOOTSTRAP,
        name="Bootstrap Phase",
        description="High emission rate to incentivize early adopters",
        week_range="Weeks 1-4",
        base_rate="6.6 Victory/sec",
        characteristics=(
            "Highest emission rate",
            "LP-focused incentives",
            "Initial liquidity building",
        ),
    ),
    Phase.POST_BOOTSTRAP: PhaseInfo(
        phase=Phase.POST_BOOTSTRAP,
        name="Post-Bootstrap Phase",
        description="Gradual decay with shifting allocation priorities",
        week_range="Weeks 5-156",
        base_rate="5.47 Victory/sec (Week 5, then 1% weekly decay)",
        characteristics=("1% weekly decay", "Shifting allocations", "Long-term sustainability"),
    ),
    Phase.ENDED: PhaseInfo(
        phase=Phase.ENDED,
        name="Ended",
        description="All emissions have been completed",
        week_range="After Week 156",
        base_rate="0",
        characteristics=("No new emissions", "System complete"),
    ),
}

NO_ALLOCATION = Allocation(0, 0, 0, 0)


def phase_name(phase: Phase) -> str:
    return PHASE_INFO[phase].name


def allocation_for_period(period: int) -> Allocation:
    """Return the allocation tier for a week; zero outside weeks 1-156."""
    period = require_non_negative_int(period, "period")
    if period == 0:
        return NO_ALLOCATION
    for last_week, lp, single, staking, dev in const.ALLOCATION_TIERS:
        if period <= last_week:
            return Allocation(lp, single, staking, dev)
    return NO_ALLOCATION


def allocation_rates(params: ScheduleParameters, period: int) -> AllocationRates:
    """Split a week's per-second rate by its allocation tier (floored)."""
    rate, _ = period_rate(params, period)
    allocation = allocation_for_period(period) if rate else NO_ALLOCATION

    def share(bps: int) -> int:
        return rate * bps // const.BASIS_POINTS

    return AllocationRates(
        total=rate,
        lp=share(allocation.lp_bps),
        single=share(allocation.single_bps),
        victory_staking=share(allocation.victory_staking_bps),
        dev=share(allocation.dev_bps),
    )


def next_phase_transition(
    params: ScheduleParameters, current_period: int
) -> PhaseTransition | None:
    """Describe the upcoming phase change, or ``None`` once in the final week."""
    current_period = require_non_negative_int(current_period, "current_period")
    if current_period == 0:
        return PhaseTransition(Phase.BOOTSTRAP, at_period=1, periods_until=1)
    if current_period <= params.bootstrap_periods:
        at_period = params.bootstrap_periods + 1
        return PhaseTransition(Phase.POST_BOOTSTRAP, at_period, at_period - current_period)
    if current_period < params.total_periods:
        at_period = params.total_periods + 1
        return PhaseTransition(Phase.ENDED, at_period, at_period - current_period)
    return None
