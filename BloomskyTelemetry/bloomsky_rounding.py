"""Fixed-precision rounding used for every derived unit value."""
import math


def round_half_away(num: float) -> int:
    """Round to the nearest integer, ties away from zero (2.5 -> 3, -2.5 -> -3)."""
    return int(num + math.copysign(0.5, num))


def to_fixed(num: float, precision: int) -> float:
    """
    Round num to precision decimal digits, ties away from zero.

    Python's round() does banker's rounding on the binary value, which
    would give round(0.125, 2) == 0.12; to_fixed(0.125, 2) == 0.13.
    """
    output = math.pow(10, precision)
    return float(round_half_away(num * output)) / output
