"""
Value domain validators for attribute columns.

Each validator takes the raw value and returns the value to store, or raises
ValidationError. None always means "unspecified" and is accepted.
"""

import re
from typing import Any, Optional

from featurestyle.exceptions import ValidationError

COLOR_PATTERN = re.compile(r"^#([0-9a-fA-F]{3}){1,2}$")


def validate_color(color: Optional[str], field: str = "color") -> Optional[str]:
    """
    Normalize a hex color to upper-case ``#RGB`` or ``#RRGGBB``.

    A missing ``#`` prefix is added before matching.
    """
    if color is None:
        return None
    if not isinstance(color, str):
        raise ValidationError(field, color, "Color must be a hex string #RRGGBB or #RGB")

    validated = color if color.startswith("#") else "#" + color
    if not COLOR_PATTERN.match(validated):
        raise ValidationError(field, color, "Color must be in hex format #RRGGBB or #RGB")
    return validated.upper()


def _as_real(value: Any, field: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValidationError(field, value, f"{field} must be a number")
    return float(value)


def validate_unit_interval(value: Optional[float], field: str = "value") -> Optional[float]:
    """Accept None or a real in [0.0, 1.0]."""
    if value is None:
        return None
    real = _as_real(value, field)
    if not 0.0 <= real <= 1.0:
        raise ValidationError(
            field, value, f"{field} must be set inclusively between 0.0 and 1.0"
        )
    return real


def validate_opacity(opacity: Optional[float], field: str = "opacity") -> Optional[float]:
    return validate_unit_interval(opacity, field)


def validate_non_negative(value: Optional[float], field: str = "width") -> Optional[float]:
    """Accept None or a real >= 0.0 (NaN is rejected)."""
    if value is None:
        return None
    real = _as_real(value, field)
    if not real >= 0.0:
        raise ValidationError(field, value, f"{field} must be greater than or equal to 0.0")
    return real
