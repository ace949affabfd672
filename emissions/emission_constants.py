"""Victory Token Emission Constants.

This module centralizes the contract parameters and display constants used
across the emission dashboard. Each constant documents its source so the
values can be checked against the global emission controller.
"""

from __future__ import annotations

# =============================================================================
# Emission Schedule Constants
# =============================================================================

# Length of one emission period ("week") in seconds
# Source: global_emission_controller SECONDS_PER_WEEK (7 * 24 * 60 * 60)
SECONDS_PER_WEEK = 604_800

# Shortened week used by the testnet deployment (7 * 600 seconds)
# Note: select it via EMISSION_PERIOD_SECONDS, never by editing this module
TESTNET_SECONDS_PER_WEEK = 4_200

# Total number of emission weeks (3 years)
TOTAL_EMISSION_WEEKS = 156

# Weeks 1-4 run at the flat bootstrap rate
BOOTSTRAP_WEEKS = 4

# Bootstrap emission rate in microVictory per second (6.6 Victory/sec)
BOOTSTRAP_RATE = 6_600_000

# Week 5 emission rate in microVictory per second (5.47 Victory/sec)
POST_BOOTSTRAP_START_RATE = 5_470_000

# Weekly decay multiplier in basis points (99% = 1% decay per week)
WEEKLY_DECAY_RATE_BPS = 9_900

# Victory token decimals (1 Victory = 1,000,000 microVictory)
VICTORY_DECIMALS = 6


# =============================================================================
# Unit Conversions
# =============================================================================

BASIS_POINTS = 10_000

SECONDS_PER_HOUR = 3_600

SECONDS_PER_DAY = 86_400


# =============================================================================
# Allocation Tiers
# =============================================================================

# (last week of tier, LP bps, single-asset bps, Victory staking bps, dev bps)
# Source: global_emission_controller allocation table; each tier sums to 10000
ALLOCATION_TIERS: tuple[tuple[int, int, int, int, int], ...] = (
    (4, 6_500, 1_500, 1_750, 250),
    (12, 6_200, 1_200, 2_350, 250),
    (26, 5_800, 700, 3_250, 250),
    (52, 5_500, 200, 4_050, 250),
    (104, 5_000, 0, 4_750, 250),
    (156, 4_500, 0, 5_250, 250),
)


# =============================================================================
# Validation Bounds
# =============================================================================

# Relative drift allowed between emitted + remaining and the schedule total
# Rationale: floor truncation across 156 compounding steps stays far below 0.1%
RECONCILIATION_TOLERANCE = 0.001

MIN_PROGRESS_PCT = 0
MAX_PROGRESS_PCT = 100


# =============================================================================
# Dashboard Defaults
# =============================================================================

# Presentation layer refresh interval in seconds
DEFAULT_POLL_INTERVAL_SECONDS = 30

# Rows per page in the weekly schedule table
DEFAULT_PAGE_SIZE = 10
