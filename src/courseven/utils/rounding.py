"""Decimal rounding used for displayed and stored scores."""

from decimal import ROUND_HALF_UP, Decimal


def round_half_up(value: float, places: int = 2) -> float:
    """Round half away from zero on the decimal representation of ``value``.

    ``round(3.125, 2)`` gives 3.12 because of banker's rounding; this gives 3.13.
    """

    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP))
