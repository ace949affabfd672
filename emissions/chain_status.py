"""Cross-check on-chain controller status against the computed snapshot.

The controller tracks its own week counter and pause flag. The dashboard only
mirrors it, so divergence is reported for debugging and never corrected.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from .snapshot import TokenomicsSnapshot

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class ChainStatus:
    """Values returned by the controller's ``get_system_status`` view."""

    current_week: int
    paused: bool
    weeks_remaining: int
    is_active: bool


def expected_weeks_remaining(snapshot: TokenomicsSnapshot, total_periods: int) -> int:
    if snapshot.current_period == 0:
        return total_periods
    return max(0, total_periods - snapshot.current_period)


def cross_check_chain_status(
    snapshot: TokenomicsSnapshot,
    chain_status: ChainStatus,
    *,
    total_periods: int,
) -> list[str]:
    """Return human-readable discrepancies between chain state and the snapshot."""
    discrepancies: list[str] = []

    if chain_status.current_week != snapshot.current_period:
        discrepancies.append(
            f"On-chain week {chain_status.current_week} differs from computed week "
            f"{snapshot.current_period}"
        )

    expected_remaining = expected_weeks_remaining(snapshot, total_periods)
    if chain_status.weeks_remaining != expected_remaining:
        discrepancies.append(
            f"On-chain weeks remaining {chain_status.weeks_remaining} differs from "
            f"computed {expected_remaining}"
        )

    if not chain_status.paused:
        computed_active = snapshot.current_period > 0 and not snapshot.schedule_complete
        if chain_status.is_active != computed_active:
            discrepancies.append(
                f"On-chain active flag {chain_status.is_active} differs from computed "
                f"{computed_active}"
            )

    for message in discrepancies:
        LOGGER.debug("Emission status mismatch: %s", message)
    return discrepancies
