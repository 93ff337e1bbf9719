"""EXIF GPS extraction: converts photo GPS tags into decimal coordinates.

Public API:
    - extract_gps_from_image: Image bytes to Coordinate (or None)
    - coordinate_from_gps_ifd: Decoded GPS IFD to Coordinate (or None)
    - gps_value_to_decimal: Single tag + hemisphere reference to decimal degrees
    - classify_gps_value: Raw tag to DecimalDegrees / DmsTriple / DmsString
    - Coordinate, Axis, Hemisphere: Supporting types
"""

from ward_locator.lib.exif.dms import (
    Axis,
    DecimalDegrees,
    DmsString,
    DmsTriple,
    GpsTagValue,
    Hemisphere,
    classify_gps_value,
    gps_value_to_decimal,
    parse_hemisphere,
)
from ward_locator.lib.exif.extractor import Coordinate, coordinate_from_gps_ifd, extract_gps_from_image

__all__ = [
    "Axis",
    "Coordinate",
    "DecimalDegrees",
    "DmsString",
    "DmsTriple",
    "GpsTagValue",
    "Hemisphere",
    "classify_gps_value",
    "coordinate_from_gps_ifd",
    "extract_gps_from_image",
    "gps_value_to_decimal",
    "parse_hemisphere",
]
