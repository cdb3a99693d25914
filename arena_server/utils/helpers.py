# arena_server/utils/helpers.py
"""Utility functions and helpers."""

import math
from typing import Any, Optional


def calculate_distance(x1: float, y1: float, x2: float, y2: float) -> float:
    """Calculate distance between two points."""
    return math.hypot(x2 - x1, y2 - y1)


def bearing(x1: float, y1: float, x2: float, y2: float) -> float:
    """Angle of the vector from (x1, y1) to (x2, y2), in radians."""
    return math.atan2(y2 - y1, x2 - x1)


def normalize_angle(angle: float) -> float:
    """Normalize angle to the (-π, π] range."""
    if -math.pi < angle <= math.pi:
        return angle
    wrapped = math.atan2(math.sin(angle), math.cos(angle))
    # atan2 can return -π for a negative-zero sine
    if wrapped <= -math.pi:
        wrapped += 2 * math.pi
    return wrapped


def angular_delta(target: float, facing: float) -> float:
    """Signed difference target - facing, normalized to (-π, π]."""
    return normalize_angle(target - facing)


def coerce_number(value: Any) -> Optional[float]:
    """Return value as a finite float, or None if it is not a real number."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    try:
        number = float(value)
    except OverflowError:
        return None
    if not math.isfinite(number):
        return None
    return number
