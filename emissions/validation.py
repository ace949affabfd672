"""Sanity checks for snapshots and admin inputs.

Hard failures (week out of range, negative totals, progress outside 0-100)
indicate an engine bug and surface as ``InvariantViolation``. Drift between
emitted + remaining and the schedule total is expected from floor truncation
and only produces a ``ReconciliationWarning``.
"""

from __future__ import annotations

import logging
import warnings
from dataclasses import dataclass
from numbers import Integral

from . import emission_constants as const
from .formatting import format_token_amount
from .schedule import DEFAULT_SCHEDULE, ScheduleParameters
from .snapshot import TokenomicsSnapshot

LOGGER = logging.getLogger(__name__)


class InvariantViolation(RuntimeError):
    """Raised when a computed snapshot fails a hard consistency check."""


class ReconciliationWarning(UserWarning):
    """Emitted when emitted + remaining drifts from the schedule total beyond tolerance."""


@dataclass(frozen=True)
class ReconciliationReport:
    ok: bool
    errors: tuple[str, ...]
    warnings: tuple[str, ...]


@dataclass(frozen=True)
class ValidationResult:
    ok: bool
    reason: str | None = None


def validate_reconciliation(
    snapshot: TokenomicsSnapshot,
    params: ScheduleParameters,
    *,
    tolerance: float = const.RECONCILIATION_TOLERANCE,
) -> ReconciliationReport:
    """Check snapshot invariants without raising.

    ``ok`` is False only when a hard check fails; tolerance drift is reported
    in ``warnings`` and leaves ``ok`` untouched. The valid week range is
    ``0..params.total_periods``.
    """
    errors: list[str] = []
    advisories: list[str] = []

    if not 0 <= snapshot.current_period <= params.total_periods:
        errors.append(f"Invalid current week: {snapshot.current_period}")
    if snapshot.total_emitted_so_far < 0:
        errors.append("Total emitted cannot be negative")
    if snapshot.total_remaining < 0:
        errors.append("Total remaining cannot be negative")
    if not const.MIN_PROGRESS_PCT <= snapshot.period_progress_percent <= const.MAX_PROGRESS_PCT:
        errors.append(f"Invalid week progress: {snapshot.period_progress_percent}%")

    expected_total = snapshot.total_schedule_emissions
    difference = abs(snapshot.total_emitted_so_far + snapshot.total_remaining - expected_total)
    if difference > expected_total * tolerance:
        advisories.append(
            "Total emissions mismatch: "
            f"{format_token_amount(difference, decimals=2, token_decimals=params.token_decimals)} "
            "Victory difference"
        )

    return ReconciliationReport(
        ok=not errors,
        errors=tuple(errors),
        warnings=tuple(advisories),
    )


def check_snapshot(snapshot: TokenomicsSnapshot, params: ScheduleParameters) -> ReconciliationReport:
    """Validate a snapshot before display, raising on hard failures."""
    report = validate_reconciliation(snapshot, params)
    if report.errors:
        LOGGER.error(
            "Snapshot at %s failed invariant checks: %s",
            snapshot.calculation_timestamp,
            "; ".join(report.errors),
        )
        raise InvariantViolation("; ".join(report.errors))
    for message in report.warnings:
        LOGGER.warning("Reconciliation drift at %s: %s", snapshot.calculation_timestamp, message)
        warnings.warn(message, ReconciliationWarning, stacklevel=2)
    return report


def _whole_number(value: object) -> bool:
    return isinstance(value, Integral) and not isinstance(value, bool)


def validate_period_number(
    value: object, params: ScheduleParameters | None = None
) -> ValidationResult:
    """Validate a "reset to week" target entered by an admin."""
    cfg = params or DEFAULT_SCHEDULE
    if value is None:
        return ValidationResult(False, "Week number is required")
    if not _whole_number(value):
        return ValidationResult(False, "Week must be a whole number")
    if value < 1:
        return ValidationResult(False, "Week must be at least 1")
    if value > cfg.total_periods:
        return ValidationResult(False, f"Week cannot exceed {cfg.total_periods}")
    return ValidationResult(True)


def validate_timing_adjustment_hours(
    value: object, params: ScheduleParameters | None = None
) -> ValidationResult:
    """Validate an admin timing adjustment; at most one week's worth of hours."""
    cfg = params or DEFAULT_SCHEDULE
    max_hours = cfg.period_length_seconds // const.SECONDS_PER_HOUR
    if value is None:
        return ValidationResult(False, "Hours value is required")
    if not _whole_number(value):
        return ValidationResult(False, "Hours must be a whole number")
    if value < 1:
        return ValidationResult(False, "Hours must be at least 1")
    if value > max_hours:
        return ValidationResult(False, f"Hours cannot exceed {max_hours} (1 week)")
    return ValidationResult(True)
