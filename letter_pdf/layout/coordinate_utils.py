"""Coordinate Conversion Utilities

This module provides pure utility functions for converting between the two
coordinate systems used while composing a document:

- Document coordinates: document unit (pt/mm/cm/in) with origin at top-left
- ReportLab coordinates: points with origin at bottom-left

All functions are pure (no side effects) and can be tested in isolation.
"""

from typing import Tuple

from ..config import UNIT_SCALE


def unit_scale(unit: str) -> float:
    """
    Return the number of points per document unit.

    Examples:
        >>> unit_scale("pt")
        1.0
        >>> round(unit_scale("in"), 1)
        72.0
    """
    return UNIT_SCALE[unit]


def to_points(value: float, scale: float) -> float:
    """Convert a length in document units to points."""
    return value * scale


def to_units(points: float, scale: float) -> float:
    """Convert a length in points to document units."""
    return points / scale


def flip_y_coordinate(y: float, page_height: float) -> float:
    """
    Flip Y coordinate between top-left and bottom-left origin systems.

    Examples:
        >>> flip_y_coordinate(0, 792)  # Top becomes bottom
        792
        >>> flip_y_coordinate(792, 792)  # Bottom becomes top
        0

    Notes:
        This function is its own inverse:
        flip_y_coordinate(flip_y_coordinate(y, h), h) == y
    """
    return page_height - y


def box_to_points(
    x: float,
    y: float,
    width: float,
    height: float,
    page_height_pt: float,
    scale: float
) -> Tuple[float, float, float, float]:
    """
    Convert a top-left anchored box in document units to ReportLab coordinates.

    Args:
        x, y: Top-left corner in document units (origin top-left)
        width, height: Box size in document units
        page_height_pt: Page height in points (for Y-axis flipping)
        scale: Points per document unit

    Returns:
        Tuple of (x, y, width, height) in points where (x, y) is the
        bottom-left corner of the box

    Examples:
        >>> box_to_points(10, 10, 20, 5, 100, 1)
        (10, 85, 20, 5)
    """
    x_pt = x * scale
    w_pt = width * scale
    h_pt = height * scale
    bottom = flip_y_coordinate(y * scale + h_pt, page_height_pt)
    return x_pt, bottom, w_pt, h_pt


def point_to_points(x: float, y: float, page_height_pt: float, scale: float) -> Tuple[float, float]:
    """Convert a single document point to ReportLab coordinates."""
    return x * scale, flip_y_coordinate(y * scale, page_height_pt)
