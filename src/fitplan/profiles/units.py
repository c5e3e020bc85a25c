"""Weight and height conversions between metric and imperial units."""

from __future__ import annotations

from typing import Optional

LBS_PER_KG = 2.20462
CM_PER_INCH = 2.54
INCHES_PER_FOOT = 12


def lbs_to_kg(weight_lbs: float) -> float:
    """Convert pounds to kilograms."""
    return weight_lbs / LBS_PER_KG


def kg_to_lbs(weight_kg: float) -> float:
    """Convert kilograms to pounds."""
    return weight_kg * LBS_PER_KG


def inches_to_cm(height_inches: float) -> float:
    """Convert inches to centimeters."""
    return height_inches * CM_PER_INCH


def cm_to_inches(height_cm: float) -> float:
    """Convert centimeters to inches."""
    return height_cm / CM_PER_INCH


def feet_inches_to_cm(feet: float, inches: float = 0.0) -> float:
    """Convert a feet + inches height (e.g. 5'10") to centimeters."""
    return inches_to_cm(feet * INCHES_PER_FOOT + inches)


def to_kg(weight: Optional[float], unit: Optional[str]) -> float:
    """Normalize a weight to kilograms.

    Args:
        weight: Weight value, None is treated as 0
        unit: "kg", "lb" or "lbs"; anything else is assumed to be kg

    Returns:
        Weight in kilograms
    """
    value = weight or 0.0
    if unit and unit.lower() in ("lb", "lbs"):
        return lbs_to_kg(value)
    return value
