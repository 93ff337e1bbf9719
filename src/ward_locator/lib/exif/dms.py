"""GPS tag value shapes and their conversion to signed decimal degrees.

EXIF GPS tags reach us in three shapes depending on the tool that wrote or
parsed them:

- ``DecimalDegrees``: a bare number already in decimal degrees.
- ``DmsTriple``: ``(degrees, minutes, seconds)`` plus a hemisphere reference.
- ``DmsString``: free text such as ``13° 4' 29.2" N`` holding the same triple.

``decimal = degrees + minutes / 60 + seconds / 3600``, negated for ``S``/``W``.
"""

import math
import re
from dataclasses import dataclass
from enum import StrEnum
from numbers import Real


class Axis(StrEnum):
    """Coordinate axis a GPS tag describes."""

    LATITUDE = "latitude"
    LONGITUDE = "longitude"


class Hemisphere(StrEnum):
    """GPS hemisphere reference (GPSLatitudeRef / GPSLongitudeRef)."""

    NORTH = "N"
    SOUTH = "S"
    EAST = "E"
    WEST = "W"

    @property
    def sign(self) -> int:
        return -1 if self in (Hemisphere.SOUTH, Hemisphere.WEST) else 1

    @property
    def axis(self) -> Axis:
        return Axis.LATITUDE if self in (Hemisphere.NORTH, Hemisphere.SOUTH) else Axis.LONGITUDE


_NUMBER = r"\d+(?:\.\d+)?(?:\s*/\s*\d+(?:\.\d+)?)?"
_DMS_PATTERN = re.compile(rf"({_NUMBER})[^\d./]+({_NUMBER})[^\d./]+({_NUMBER})")
# A hemisphere letter must stand alone; "29.2s" is a seconds unit, not South.
_TRAILING_REF_PATTERN = re.compile(r"(?<![A-Za-z0-9.])([NSEW])\W*$", re.IGNORECASE)


def parse_hemisphere(ref: object) -> Hemisphere | None:
    """Normalize a raw hemisphere reference.

    EXIF ASCII values may arrive as ``bytes`` with a trailing NUL
    (``b"N\\x00"``) or as padded strings.
    """
    if isinstance(ref, bytes):
        ref = ref.decode("ascii", errors="ignore")
    if not isinstance(ref, str):
        return None
    text = ref.strip("\x00 \t\r\n").upper()
    try:
        return Hemisphere(text)
    except ValueError:
        return None


def _to_float(value: object) -> float | None:
    """Convert a number or EXIF rational to float.

    Rationals may be ``IFDRational``/``Fraction`` objects or legacy
    ``(numerator, denominator)`` pairs.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, tuple) and len(value) == 2:
        num, den = value
        if isinstance(num, bool) or isinstance(den, bool):
            return None
        if not isinstance(num, Real) or not isinstance(den, Real) or den == 0:
            return None
        result = float(num) / float(den)
        return result if math.isfinite(result) else None
    if isinstance(value, Real):
        try:
            result = float(value)
        except (ZeroDivisionError, ValueError, OverflowError):
            return None
        return result if math.isfinite(result) else None
    return None


def _parse_text_number(text: str) -> float | None:
    """Parse ``"29.2"`` or a rational such as ``"146/5"``."""
    numerator, _, denominator = text.partition("/")
    value = float(numerator)
    if denominator:
        den = float(denominator)
        if den == 0:
            return None
        value /= den
    return value


def _apply_hemisphere(decimal: float, hemisphere: Hemisphere | None, axis: Axis) -> float | None:
    if hemisphere is None:
        return None
    if hemisphere.axis != axis:
        return None
    return hemisphere.sign * decimal


@dataclass(frozen=True)
class DecimalDegrees:
    """A tag already expressed in decimal degrees.

    The value is taken as signed. When a ``S``/``W`` reference accompanies a
    positive value, the reference wins.
    """

    value: float
    hemisphere: Hemisphere | None = None

    def to_decimal(self, axis: Axis) -> float | None:
        if not math.isfinite(self.value):
            return None
        if self.hemisphere is None:
            return self.value
        if self.hemisphere.axis != axis:
            return None
        return self.hemisphere.sign * abs(self.value)


@dataclass(frozen=True)
class DmsTriple:
    """Degrees, minutes and seconds with a hemisphere reference."""

    degrees: float
    minutes: float
    seconds: float
    hemisphere: Hemisphere | None

    def to_decimal(self, axis: Axis) -> float | None:
        parts = (self.degrees, self.minutes, self.seconds)
        if not all(math.isfinite(p) and p >= 0 for p in parts):
            return None
        decimal = self.degrees + self.minutes / 60 + self.seconds / 3600
        return _apply_hemisphere(decimal, self.hemisphere, axis)


@dataclass(frozen=True)
class DmsString:
    """Free-text degrees/minutes/seconds, e.g. ``13 deg 4' 29.20" N``.

    Components may be rationals (``"[13, 4, 146/5]"``). A standalone
    hemisphere letter at the end of the text is used when no separate
    reference is supplied; unit letters such as the ``s`` in ``29.2s`` are not
    hemispheres.
    """

    text: str
    hemisphere: Hemisphere | None = None

    def to_decimal(self, axis: Axis) -> float | None:
        match = _DMS_PATTERN.search(self.text)
        if not match:
            return None
        hemisphere = self.hemisphere
        if hemisphere is None:
            trailing = _TRAILING_REF_PATTERN.search(self.text)
            hemisphere = parse_hemisphere(trailing.group(1)) if trailing else None
        parts = [_parse_text_number(g) for g in match.groups()]
        if any(p is None for p in parts):
            return None
        degrees, minutes, seconds = parts
        return DmsTriple(degrees, minutes, seconds, hemisphere).to_decimal(axis)  # type: ignore[arg-type]


GpsTagValue = DecimalDegrees | DmsTriple | DmsString


def classify_gps_value(raw: object, ref: object = None) -> GpsTagValue | None:
    """Classify a raw GPS tag into one of the supported shapes.

    Args:
        raw: The GPSLatitude / GPSLongitude value as parsed from the image.
        ref: The matching GPSLatitudeRef / GPSLongitudeRef value, if any.

    Returns:
        The classified value, or None if the shape is not recognized.
    """
    hemisphere = parse_hemisphere(ref)

    if isinstance(raw, bytes):
        raw = raw.decode("ascii", errors="ignore")
    if isinstance(raw, str):
        return DmsString(raw, hemisphere)

    if isinstance(raw, (tuple, list)):
        if len(raw) != 3:
            return None
        parts = [_to_float(p) for p in raw]
        if any(p is None for p in parts):
            return None
        degrees, minutes, seconds = parts
        return DmsTriple(degrees, minutes, seconds, hemisphere)  # type: ignore[arg-type]

    value = _to_float(raw)
    if value is None:
        return None
    return DecimalDegrees(value, hemisphere)


def gps_value_to_decimal(raw: object, ref: object, axis: Axis) -> float | None:
    """Convert a raw GPS tag and its reference to signed decimal degrees.

    Returns:
        The decimal value, or None when the tag is missing, unparsable,
        references the wrong axis, or falls outside the axis range.
    """
    if raw is None:
        return None
    value = classify_gps_value(raw, ref)
    if value is None:
        return None
    decimal = value.to_decimal(axis)
    if decimal is None:
        return None
    limit = 90.0 if axis == Axis.LATITUDE else 180.0
    if not -limit <= decimal <= limit:
        return None
    return decimal
