from __future__ import annotations

from emissions import allocations
from emissions import emission_constants as const
from emissions.schedule import DEFAULT_SCHEDULE, Phase


def test_allocation_tiers_sum_to_full_basis_points():
    for period in range(1, 157):
        assert allocations.allocation_for_period(period).total_bps == const.BASIS_POINTS


def test_allocation_tier_boundaries():
    assert allocations.allocation_for_period(4) == allocations.Allocation(6_500, 1_500, 1_750, 250)
    assert allocations.allocation_for_period(5) == allocations.Allocation(6_200, 1_200, 2_350, 250)
    assert allocations.allocation_for_period(26).single_bps == 700
    assert allocations.allocation_for_period(27).single_bps == 200
    assert allocations.allocation_for_period(104).victory_staking_bps == 4_750
    assert allocations.allocation_for_period(156).lp_bps == 4_500


def test_no_allocation_outside_schedule():
    assert allocations.allocation_for_period(0).total_bps == 0
    assert allocations.allocation_for_period(157).total_bps == 0


def test_bootstrap_allocation_rates_split_exactly():
    rates = allocations.allocation_rates(DEFAULT_SCHEDULE, 1)
    assert rates.total == 6_600_000
    assert rates.lp == 4_290_000
    assert rates.single == 990_000
    assert rates.victory_staking == 1_155_000
    assert rates.dev == 165_000


def test_allocation_rates_floor_and_never_exceed_total():
    rates = allocations.allocation_rates(DEFAULT_SCHEDULE, 6)
    assert rates.total == 5_415_300
    assert rates.lp == 3_357_486
    assert rates.victory_staking == 1_272_595
    assert rates.dev == 135_382
    assert rates.lp + rates.single + rates.victory_staking + rates.dev <= rates.total


def test_allocation_rates_after_schedule_are_zero():
    rates = allocations.allocation_rates(DEFAULT_SCHEDULE, 200)
    assert (rates.total, rates.lp, rates.single, rates.victory_staking, rates.dev) == (0, 0, 0, 0, 0)


def test_phase_names():
    assert allocations.phase_name(Phase.NOT_STARTED) == "Not Started"
    assert allocations.phase_name(Phase.POST_BOOTSTRAP) == "Post-Bootstrap Phase"
    assert set(allocations.PHASE_INFO) == set(Phase)


def test_next_phase_transition():
    assert allocations.next_phase_transition(DEFAULT_SCHEDULE, 0) == allocations.PhaseTransition(
        Phase.BOOTSTRAP, 1, 1
    )
    assert allocations.next_phase_transition(DEFAULT_SCHEDULE, 3) == allocations.PhaseTransition(
        Phase.POST_BOOTSTRAP, 5, 2
    )
    assert allocations.next_phase_transition(DEFAULT_SCHEDULE, 5) == allocations.PhaseTransition(
        Phase.ENDED, 157, 152
    )
    assert allocations.next_phase_transition(DEFAULT_SCHEDULE, 156) is None
