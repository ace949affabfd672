"""Configuration helpers for the Victory emission dashboard."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from . import emission_constants as const
from .schedule import ScheduleParameters

load_dotenv()

OUT_DIR_ENV = "OUT_DIR"
OUT_DIR = Path(os.getenv(OUT_DIR_ENV, "out"))

PERIOD_SECONDS_ENV = "EMISSION_PERIOD_SECONDS"
START_TIMESTAMP_ENV = "EMISSION_START_TIMESTAMP"
POLL_INTERVAL_ENV = "EMISSION_POLL_INTERVAL_SECONDS"


@dataclass(frozen=True)
class DashboardConfig:
    """Runtime settings for report and polling scripts."""

    schedule: ScheduleParameters
    emission_start_timestamp: int = 0
    poll_interval_seconds: int = const.DEFAULT_POLL_INTERVAL_SECONDS
    out_dir: Path = OUT_DIR


def _int_from_env(name: str, default: int) -> int:
    env_value = os.getenv(name)
    if env_value:
        try:
            return int(env_value)
        except ValueError:
            pass
    return default


def period_length_seconds() -> int:
    """Week length for this deployment (testnet uses ``TESTNET_SECONDS_PER_WEEK``)."""
    value = _int_from_env(PERIOD_SECONDS_ENV, const.SECONDS_PER_WEEK)
    return value if value > 0 else const.SECONDS_PER_WEEK


def load_schedule_parameters() -> ScheduleParameters:
    return ScheduleParameters(period_length_seconds=period_length_seconds())


def load_dashboard_config() -> DashboardConfig:
    """Read script settings from the environment; exports resolve under ``out_dir``."""
    start_ts = _int_from_env(START_TIMESTAMP_ENV, 0)
    poll_interval = _int_from_env(POLL_INTERVAL_ENV, const.DEFAULT_POLL_INTERVAL_SECONDS)
    return DashboardConfig(
        schedule=load_schedule_parameters(),
        emission_start_timestamp=max(0, start_ts),
        poll_interval_seconds=poll_interval if poll_interval > 0 else const.DEFAULT_POLL_INTERVAL_SECONDS,
        out_dir=Path(os.getenv(OUT_DIR_ENV, "out")),
    )
