"""
Color value: an optional hex color plus an optional opacity.
"""

from dataclasses import dataclass
from typing import Optional, Tuple

from featurestyle.attributes.domains import validate_color, validate_opacity
from featurestyle.exceptions import ValidationError


@dataclass(frozen=True)
class Color:
    """
    Hex color and opacity, validated on construction.

    Either part may be None; a style row stores them in separate columns.
    """
    hex: Optional[str] = None
    opacity: Optional[float] = None

    def __post_init__(self):
        object.__setattr__(self, "hex", validate_color(self.hex))
        object.__setattr__(self, "opacity", validate_opacity(self.opacity))

    @classmethod
    def from_rgb(cls, red: int, green: int, blue: int, opacity: Optional[float] = None) -> "Color":
        for name, value in (("red", red), ("green", green), ("blue", blue)):
            if not isinstance(value, int) or not 0 <= value <= 255:
                raise ValidationError(name, value, "Color channel must be an integer in 0-255")
        return cls(f"#{red:02X}{green:02X}{blue:02X}", opacity)

    @property
    def hex_full(self) -> Optional[str]:
        """``#RRGGBB`` form."""
        if self.hex is None or len(self.hex) == 7:
            return self.hex
        return "#" + "".join(c * 2 for c in self.hex[1:])

    @property
    def hex_shorthand(self) -> Optional[str]:
        """``#RGB`` when every channel repeats its digit, else ``#RRGGBB``."""
        full = self.hex_full
        if full is None:
            return None
        pairs = [full[i:i + 2] for i in (1, 3, 5)]
        if all(p[0] == p[1] for p in pairs):
            return "#" + "".join(p[0] for p in pairs)
        return full

    def to_rgb(self) -> Optional[Tuple[int, int, int]]:
        full = self.hex_full
        if full is None:
            return None
        return tuple(int(full[i:i + 2], 16) for i in (1, 3, 5))
