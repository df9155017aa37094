from decimal import Decimal
from typing import Union

from xrpl.utils import ripple_time_to_datetime

from xrplbot.models.amount import DROPS_PER_XRP


def drops_to_xrp(drops: Union[int, str]) -> Decimal:
    """Convert drops to XRP. Exact, and keeps the sign of negative deltas."""
    return Decimal(int(drops)) / DROPS_PER_XRP


def format_xrp(value: Decimal) -> str:
    """Render an XRP value as plain decimal text (never scientific notation)."""
    if value.is_zero():
        value = value.copy_abs()
    return f"{value.normalize():f}"


def format_signed_xrp(value: Decimal) -> str:
    if value > 0:
        return "+" + format_xrp(value)
    return format_xrp(value)


def ripple_epoch_to_calendar(seconds: int) -> str:
    """Convert seconds since the ledger epoch (2000-01-01T00:00:00Z) to an ISO-8601 UTC timestamp."""
    return ripple_time_to_datetime(int(seconds)).strftime("%Y-%m-%dT%H:%M:%SZ")
