"""Display helpers for microVictory amounts, rates and durations."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

from . import emission_constants as const

_SUFFIXES = ((Decimal(10**9), "B"), (Decimal(10**6), "M"), (Decimal(10**3), "K"))


def to_tokens(amount: int, token_decimals: int = const.VICTORY_DECIMALS) -> Decimal:
    """Convert an integer amount in smallest units to whole tokens."""
    return Decimal(amount).scaleb(-token_decimals)


def format_token_amount(
    amount: int, decimals: int = 2, *, token_decimals: int = const.VICTORY_DECIMALS
) -> str:
    """Format microVictory as grouped Victory, e.g. ``1,995,840.00``."""
    quantum = Decimal(1).scaleb(-decimals)
    value = to_tokens(amount, token_decimals).quantize(quantum, rounding=ROUND_HALF_UP)
    return f"{value:,.{decimals}f}"


def format_large_number(value: float | Decimal) -> str:
    number = value if isinstance(value, Decimal) else Decimal(str(value))
    for threshold, suffix in _SUFFIXES:
        if number >= threshold:
            return f"{number / threshold:.2f}{suffix}"
    return f"{number:.2f}"


def format_large_token_amount(
    amount: int, *, token_decimals: int = const.VICTORY_DECIMALS
) -> str:
    """Abbreviate a microVictory amount with K/M/B suffixes."""
    return format_large_number(to_tokens(amount, token_decimals))


def format_rate(rate: int, *, token_decimals: int = const.VICTORY_DECIMALS) -> str:
    """Per-second rate in Victory with six fractional digits."""
    return f"{to_tokens(rate, token_decimals):.6f}"


def format_duration(seconds: int) -> str:
    """Render the two largest non-zero units of a duration, e.g. ``3d 4h``."""
    if seconds <= 0:
        return "0s"
    seconds = int(seconds)
    days, rest = divmod(seconds, const.SECONDS_PER_DAY)
    hours, rest = divmod(rest, const.SECONDS_PER_HOUR)
    minutes, secs = divmod(rest, 60)

    parts = []
    if days:
        parts.append(f"{days}d")
    if hours:
        parts.append(f"{hours}h")
    if minutes:
        parts.append(f"{minutes}m")
    if secs or not parts:
        parts.append(f"{secs}s")
    return " ".join(parts[:2])
