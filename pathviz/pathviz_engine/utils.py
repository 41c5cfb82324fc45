import math
from typing import Tuple


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves upward (not banker's rounding)."""
    return int(math.floor(value + 0.5))


def round_point(lat: float, lng: float, precision: int) -> Tuple[float, float]:
    """Round a lat/lng pair to a fixed number of decimal digits."""
    return (round(lat, precision), round(lng, precision))


def format_ms(elapsed_ms: float) -> str:
    return f"{elapsed_ms:.2f}ms"
