"""Unit conversions from BloomSky vendor units to metric.

The vendor API reports temperature in Fahrenheit, pressure in inches of
mercury, wind in miles per hour and rain in inches. Every conversion here
is rounded to DERIVED_PRECISION decimals.
"""
from bloomsky_rounding import to_fixed

DERIVED_PRECISION = 2

INHG_TO_HPA = 33.8638815
MPH_TO_MS = 0.44704
MPH_TO_KMH = 1.60934
INCH_TO_MM = 25.4

# Approximate factor used by the legacy wind accessors. Not rounded and not
# an m/s factor at all (it is roughly mph -> km/h); kept as-is for readers
# of the old "Ms" values.
LEGACY_MPH_FACTOR = 1.61


def fahrenheit_to_celsius(temp_f: float) -> float:
    return to_fixed((temp_f - 32.00) * 5.00 / 9.00, DERIVED_PRECISION)


def inhg_to_hpa(pressure_inhg: float) -> float:
    return to_fixed(pressure_inhg * INHG_TO_HPA, DERIVED_PRECISION)


def mph_to_ms(speed_mph: float) -> float:
    return to_fixed(speed_mph * MPH_TO_MS, DERIVED_PRECISION)


def mph_to_kmh(speed_mph: float) -> float:
    return to_fixed(speed_mph * MPH_TO_KMH, DERIVED_PRECISION)


def inches_to_mm(length_in: float) -> float:
    return to_fixed(length_in * INCH_TO_MM, DERIVED_PRECISION)


def legacy_mph_to_ms(speed_mph: float) -> float:
    """Legacy approximate conversion, unrounded. Prefer mph_to_ms."""
    return speed_mph * LEGACY_MPH_FACTOR
