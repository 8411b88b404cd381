"""Number and date rendering that matches what the game client shows."""

from datetime import datetime, tzinfo
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional


def format_number(value: float | Decimal, places: int) -> str:
    """Thousands-separated, rounding midpoints away from zero (1,234.57)."""
    if not isinstance(value, Decimal):
        value = Decimal(str(value))
    if not value.is_finite():
        return str(value)
    rounded = value.quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP)
    if rounded.is_zero():
        rounded = rounded.copy_abs()
    return f"{rounded:,.{places}f}"


def format_general_date(date: datetime, tz: Optional[tzinfo] = None) -> str:
    """Short date plus long time in local time, e.g. '3/1/2026 9:30:05 AM'."""
    local = date.astimezone(tz)
    hour = local.hour % 12 or 12
    suffix = "AM" if local.hour < 12 else "PM"
    return (
        f"{local.month}/{local.day}/{local.year} "
        f"{hour}:{local.minute:02d}:{local.second:02d} {suffix}"
    )
