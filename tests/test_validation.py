from __future__ import annotations

import logging
from dataclasses import replace

import pytest

from emissions.schedule import DEFAULT_SCHEDULE, ScheduleParameters
from emissions.snapshot import compute_snapshot
from emissions.validation import (
    InvariantViolation,
    ReconciliationWarning,
    check_snapshot,
    validate_period_number,
    validate_reconciliation,
    validate_timing_adjustment_hours,
)

WEEK = 604_800
START = 1_000_000


@pytest.fixture
def snapshot():
    return compute_snapshot(DEFAULT_SCHEDULE, START, START + 30 * WEEK + 777)


def test_valid_snapshot_has_no_errors_or_warnings(snapshot):
    report = validate_reconciliation(snapshot, DEFAULT_SCHEDULE)
    assert report.ok
    assert report.errors == ()
    assert report.warnings == ()


@pytest.mark.parametrize("offset", [0, WEEK, 4 * WEEK + 5, 155 * WEEK, 170 * WEEK])
def test_computed_snapshots_always_reconcile(offset):
    report = validate_reconciliation(
        compute_snapshot(DEFAULT_SCHEDULE, START, START + offset), DEFAULT_SCHEDULE
    )
    assert report.ok
    assert not report.warnings


def test_out_of_range_week_is_hard_error(snapshot):
    report = validate_reconciliation(replace(snapshot, current_period=157), DEFAULT_SCHEDULE)
    assert not report.ok
    assert "Invalid current week: 157" in report.errors


def test_negative_totals_and_progress_are_hard_errors(snapshot):
    broken = replace(snapshot, total_emitted_so_far=-1, total_remaining=-1, period_progress_percent=101)
    report = validate_reconciliation(broken, DEFAULT_SCHEDULE)
    assert not report.ok
    assert len(report.errors) == 3


def test_drift_beyond_tolerance_is_only_a_warning(snapshot):
    drifted = replace(snapshot, total_remaining=0)
    report = validate_reconciliation(drifted, DEFAULT_SCHEDULE)
    assert report.ok
    assert len(report.warnings) == 1
    assert report.warnings[0].startswith("Total emissions mismatch")


def test_drift_within_tolerance_passes(snapshot):
    nudged = replace(snapshot, total_remaining=snapshot.total_remaining - 1_000)
    assert validate_reconciliation(nudged, DEFAULT_SCHEDULE).warnings == ()


def test_check_snapshot_raises_on_invariant_violation(snapshot, caplog):
    with caplog.at_level(logging.ERROR, logger="emissions.validation"):
        with pytest.raises(InvariantViolation):
            check_snapshot(replace(snapshot, current_period=-1), DEFAULT_SCHEDULE)
    assert "failed invariant checks" in caplog.text


def test_check_snapshot_warns_on_drift(snapshot):
    with pytest.warns(ReconciliationWarning):
        report = check_snapshot(replace(snapshot, total_remaining=0), DEFAULT_SCHEDULE)
    assert report.ok


def test_validate_period_number():
    assert validate_period_number(1).ok
    assert validate_period_number(156).ok

    assert validate_period_number(0).reason == "Week must be at least 1"
    assert validate_period_number(157).reason == "Week cannot exceed 156"
    assert validate_period_number(2.5).reason == "Week must be a whole number"
    assert validate_period_number(True).reason == "Week must be a whole number"
    assert validate_period_number(None).reason == "Week number is required"


def test_validate_timing_adjustment_hours():
    assert validate_timing_adjustment_hours(1).ok
    assert validate_timing_adjustment_hours(168).ok

    result = validate_timing_adjustment_hours(169)
    assert not result.ok
    assert result.reason == "Hours cannot exceed 168 (1 week)"
    assert validate_timing_adjustment_hours(0).reason == "Hours must be at least 1"
    assert validate_timing_adjustment_hours("12").reason == "Hours must be a whole number"


def test_timing_bound_follows_period_length():
    testnet = ScheduleParameters(period_length_seconds=4_200)
    assert validate_timing_adjustment_hours(1, testnet).ok
    assert not validate_timing_adjustment_hours(2, testnet).ok


def test_week_range_follows_schedule_length():
    """A longer schedule accepts weeks past 156 and rejects weeks past its own end."""
    extended = ScheduleParameters(total_periods=200)
    late = compute_snapshot(extended, START, START + 180 * WEEK)
    assert late.current_period == 181

    assert validate_reconciliation(late, extended).ok
    assert not validate_reconciliation(late, DEFAULT_SCHEDULE).ok

    report = validate_reconciliation(replace(late, current_period=201), extended)
    assert "Invalid current week: 201" in report.errors
