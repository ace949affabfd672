from __future__ import annotations

import logging

from emissions.chain_status import ChainStatus, cross_check_chain_status
from emissions.schedule import DEFAULT_SCHEDULE
from emissions.snapshot import compute_snapshot

WEEK = 604_800
START = 1_000_000


def test_matching_chain_status_has_no_discrepancies():
    snap = compute_snapshot(DEFAULT_SCHEDULE, START, START + WEEK + 5)
    status = ChainStatus(current_week=2, paused=False, weeks_remaining=154, is_active=True)
    assert cross_check_chain_status(snap, status, total_periods=156) == []


def test_week_mismatch_is_reported_and_logged(caplog):
    snap = compute_snapshot(DEFAULT_SCHEDULE, START, START + WEEK + 5)
    status = ChainStatus(current_week=3, paused=False, weeks_remaining=153, is_active=True)

    with caplog.at_level(logging.DEBUG, logger="emissions.chain_status"):
        discrepancies = cross_check_chain_status(snap, status, total_periods=156)

    assert len(discrepancies) == 2
    assert "On-chain week 3 differs from computed week 2" in discrepancies[0]
    assert "Emission status mismatch" in caplog.text


def test_paused_chain_skips_active_flag():
    snap = compute_snapshot(DEFAULT_SCHEDULE, START, START + 10)
    status = ChainStatus(current_week=1, paused=True, weeks_remaining=155, is_active=False)
    assert cross_check_chain_status(snap, status, total_periods=156) == []


def test_not_started_expectations():
    snap = compute_snapshot(DEFAULT_SCHEDULE, 0, START)
    status = ChainStatus(current_week=0, paused=False, weeks_remaining=156, is_active=False)
    assert cross_check_chain_status(snap, status, total_periods=156) == []

    active = ChainStatus(current_week=0, paused=False, weeks_remaining=156, is_active=True)
    assert len(cross_check_chain_status(snap, active, total_periods=156)) == 1
