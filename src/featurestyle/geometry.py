"""
Geometry type discriminators.

Only the type names matter here; geometry encoding is handled elsewhere.
"""

from enum import Enum
from typing import Optional, Union

from featurestyle.exceptions import ValidationError


class GeometryType(str, Enum):
    GEOMETRY = "GEOMETRY"
    POINT = "POINT"
    LINESTRING = "LINESTRING"
    POLYGON = "POLYGON"
    MULTIPOINT = "MULTIPOINT"
    MULTILINESTRING = "MULTILINESTRING"
    MULTIPOLYGON = "MULTIPOLYGON"
    GEOMETRYCOLLECTION = "GEOMETRYCOLLECTION"
    CIRCULARSTRING = "CIRCULARSTRING"
    COMPOUNDCURVE = "COMPOUNDCURVE"
    CURVEPOLYGON = "CURVEPOLYGON"
    MULTICURVE = "MULTICURVE"
    MULTISURFACE = "MULTISURFACE"
    CURVE = "CURVE"
    SURFACE = "SURFACE"
    POLYHEDRALSURFACE = "POLYHEDRALSURFACE"
    TIN = "TIN"
    TRIANGLE = "TRIANGLE"

    @classmethod
    def from_name(cls, name: Optional[Union[str, "GeometryType"]]) -> Optional["GeometryType"]:
        """Case-insensitive lookup; None passes through as "no discriminator"."""
        if name is None or isinstance(name, GeometryType):
            return name
        try:
            return cls(name.strip().upper())
        except (ValueError, AttributeError):
            raise ValidationError("geometry_type", name, "Unknown geometry type")
