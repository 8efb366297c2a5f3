"""
Unit normalizer: converts raw form dimensions into canonical metric.

Canonical dimensions: length and width in meters, thickness (height) in
centimeters. Imperial input is feet for length/width and inches for height.
"""

import math
from typing import NamedTuple

from .constants import DEFAULT_CONSTANTS, EngineConstants
from .errors import InvalidDimension
from .schemas import InputUnit


class CanonicalDims(NamedTuple):
    length: float   # m
    width: float    # m
    height: float   # cm


def feet_to_meters(feet: float, constants: EngineConstants = DEFAULT_CONSTANTS) -> float:
    return feet * constants.feet_to_meters


def meters_to_feet(meters: float, constants: EngineConstants = DEFAULT_CONSTANTS) -> float:
    return meters / constants.feet_to_meters


def inches_to_cm(inches: float, constants: EngineConstants = DEFAULT_CONSTANTS) -> float:
    return inches * constants.inches_to_cm


def cm_to_inches(cm: float, constants: EngineConstants = DEFAULT_CONSTANTS) -> float:
    return cm / constants.inches_to_cm


def check_positive(name: str, value) -> float:
    """Return value as float, or raise InvalidDimension if it is not a positive finite number."""
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise InvalidDimension(f"{name} must be a number, got {value!r}")
    if not math.isfinite(number) or number <= 0:
        raise InvalidDimension(f"{name} must be a positive finite number, got {value!r}")
    return number


def check_in_range(name: str, value: float) -> float:
    """Raise InvalidDimension when a derived quantity overflowed to inf or nan."""
    if not math.isfinite(value):
        raise InvalidDimension(f"{name} is out of range for these inputs")
    return value


def normalize(
    raw_length: float,
    raw_width: float,
    raw_height: float,
    input_unit=InputUnit.METRIC,
    constants: EngineConstants = DEFAULT_CONSTANTS,
) -> CanonicalDims:
    """
    Validate raw dimensions and convert them to canonical metric.

    Metric input passes through unchanged. Imperial input is read as
    feet / feet / inches. Fails fast with InvalidDimension, no partial result.
    """
    length = check_positive("length", raw_length)
    width = check_positive("width", raw_width)
    height = check_positive("height", raw_height)

    try:
        unit = InputUnit(input_unit)
    except ValueError:
        raise InvalidDimension(f"Unknown input unit: {input_unit!r}")

    if unit is InputUnit.IMPERIAL:
        length = feet_to_meters(length, constants)
        width = feet_to_meters(width, constants)
        height = inches_to_cm(height, constants)

    # Conversion of a tiny value can underflow to 0
    return CanonicalDims(
        length=check_positive("length", length),
        width=check_positive("width", width),
        height=check_positive("height", height),
    )
