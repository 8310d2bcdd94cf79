"""
Unit normalisation and display formatting.

All engine arithmetic runs in millimetres. Imperial inputs are converted once
on the way in; formatting converts canonical values back for display.
"""
from typing import Literal

from lasermatch.config import MM_PER_INCH, MM2_PER_M2, SQIN_PER_SQFT

Unit = Literal["metric", "imperial"]

METRIC: str = "metric"
IMPERIAL: str = "imperial"
SUPPORTED_UNITS = (METRIC, IMPERIAL)


def to_mm(value: float, unit: str) -> float:
    """Return ``value`` in millimetres; imperial values are taken as inches."""
    if unit == IMPERIAL:
        return value * MM_PER_INCH
    return value


def format_dimension(mm: float, unit: str) -> str:
    """``1300.0, "metric"`` → ``1300mm``; ``254.0, "imperial"`` → ``10.00"``."""
    if unit == IMPERIAL:
        return f'{mm / MM_PER_INCH:.2f}"'
    return f"{mm:.0f}mm"


def format_area(mm2: float, unit: str) -> str:
    """
    Render an area given in mm² for display.

    Imperial areas above one square foot are shown in sq ft, smaller ones in
    sq in. Metric areas above one square metre are shown in m², smaller ones
    in cm².
    """
    if unit == IMPERIAL:
        sq_inches = mm2 / (MM_PER_INCH * MM_PER_INCH)
        if sq_inches > SQIN_PER_SQFT:
            return f"{sq_inches / SQIN_PER_SQFT:.2f} sq ft"
        return f"{sq_inches:.2f} sq in"

    sq_meters = mm2 / MM2_PER_M2
    if sq_meters > 1:
        return f"{sq_meters:.2f} m²"
    return f"{mm2 / 100:.0f} cm²"
