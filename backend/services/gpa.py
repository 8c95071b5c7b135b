"""GPA normalization to a canonical 0-4 scale."""

import math
from typing import Any

from models.schemas.cv import EducationEntry

GPA_MAX = 4.0
PERCENT_SCALE_DIVISOR = 25.0
NOT_AVAILABLE = "N/A"


def _to_number(raw: Any) -> float | None:
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, (int, float)):
        value = float(raw)
    elif isinstance(raw, str):
        try:
            value = float(raw.strip())
        except ValueError:
            return None
    else:
        return None
    return value if math.isfinite(value) else None


def normalize_gpa(raw: Any) -> float | None:
    """Map a raw GPA of unknown scale onto [0, 4].

    Values up to 10 are taken as GPA-like and clamped, so a 0-10 scale grade
    such as 8.5 becomes 4.0. Values in (10, 100] are read as percentages and
    divided by 25. Anything absent, non-numeric, <= 0 or > 100 yields None.
    """
    value = _to_number(raw)
    if value is None or value <= 0 or value > 100:
        return None
    if value > 10:
        value = value / PERCENT_SCALE_DIVISOR
    return max(0.0, min(GPA_MAX, value))


def format_gpa(gpa: float | None) -> str:
    return NOT_AVAILABLE if gpa is None else f"{gpa:.2f}"


def pick_display_gpa(education: list[EducationEntry]) -> str:
    """Display GPA of the first education entry that has a usable value."""
    for entry in education:
        gpa = normalize_gpa(entry.gpa)
        if gpa is not None:
            return format_gpa(gpa)
    return NOT_AVAILABLE
