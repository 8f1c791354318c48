"""Private helper utilities."""

import datetime
import decimal
import math
from numbers import Real


_HUNDREDTH = decimal.Decimal("0.01")


def round2(x: float) -> float:
    """Round to two decimal places, with ties going away from zero.

    The value is rounded as it is written in decimal (its shortest ``repr``),
    so ``round2(4.625) == 4.63`` and ``round2(-0.125) == -0.13``. Python's
    built-in :func:`round` would give ``4.62`` for the former.

    Non-finite values are returned unchanged.

    """
    x = float(x)
    if not math.isfinite(x):
        return x
    d = decimal.Decimal(repr(x)).quantize(_HUNDREDTH, rounding=decimal.ROUND_HALF_UP)
    return float(d)


def is_number(value) -> bool:
    """True for real numbers, excluding booleans."""
    return isinstance(value, Real) and not isinstance(value, bool)


def format_number(value) -> str:
    """Render a number as plain decimal text.

    Integral values are written without a trailing ``.0``; other values use
    the shortest representation that round-trips.

    """
    if isinstance(value, int):
        return str(value)

    value = float(value)
    if value.is_integer():
        return str(int(value))
    return repr(value)


def as_utc(moment: datetime.datetime) -> datetime.datetime:
    """Make a datetime timezone-aware. Naive values are taken to be in UTC."""
    if moment.tzinfo is None:
        return moment.replace(tzinfo=datetime.timezone.utc)
    return moment


def utcnow() -> datetime.datetime:
    return datetime.datetime.now(datetime.timezone.utc)
