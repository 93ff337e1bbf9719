"""Extract a GPS coordinate from image EXIF metadata using Pillow."""

import io
import struct
from collections.abc import Mapping
from dataclasses import dataclass

from loguru import logger
from PIL import ExifTags, Image, UnidentifiedImageError

from ward_locator.lib.exif.dms import Axis, gps_value_to_decimal


@dataclass(frozen=True)
class Coordinate:
    """A WGS84 point in (latitude, longitude) order."""

    latitude: float
    longitude: float

    def __post_init__(self) -> None:
        if not (-90 <= self.latitude <= 90):
            msg = f"latitude must be between -90 and 90, got {self.latitude}"
            raise ValueError(msg)
        if not (-180 <= self.longitude <= 180):
            msg = f"longitude must be between -180 and 180, got {self.longitude}"
            raise ValueError(msg)


def coordinate_from_gps_ifd(gps: Mapping[int, object]) -> Coordinate | None:
    """Build a coordinate from a decoded GPS IFD keyed by numeric tag id.

    Returns:
        The coordinate, or None when either axis is missing or unparsable.
    """
    lat = gps_value_to_decimal(
        gps.get(ExifTags.GPS.GPSLatitude),
        gps.get(ExifTags.GPS.GPSLatitudeRef),
        Axis.LATITUDE,
    )
    lng = gps_value_to_decimal(
        gps.get(ExifTags.GPS.GPSLongitude),
        gps.get(ExifTags.GPS.GPSLongitudeRef),
        Axis.LONGITUDE,
    )
    if lat is None or lng is None:
        return None
    return Coordinate(latitude=lat, longitude=lng)


def extract_gps_from_image(image_bytes: bytes) -> Coordinate | None:
    """Read the GPS position embedded in an image.

    A missing GPS block, a corrupt file, or an unsupported format is an
    expected outcome and yields None rather than an error.

    Args:
        image_bytes: Raw image file content.

    Returns:
        The embedded coordinate, or None.
    """
    if not image_bytes:
        return None

    try:
        with Image.open(io.BytesIO(image_bytes)) as image:
            gps = dict(image.getexif().get_ifd(ExifTags.IFD.GPSInfo))
    except (
        UnidentifiedImageError,
        Image.DecompressionBombError,
        OSError,
        SyntaxError,
        ValueError,
        TypeError,
        KeyError,
        IndexError,
        struct.error,
    ) as e:
        logger.debug(f"EXIF metadata unavailable: {e}")
        return None

    if not gps:
        logger.debug("Image has no GPS EXIF block")
        return None

    coordinate = coordinate_from_gps_ifd(gps)
    if coordinate is None:
        logger.debug("Image GPS EXIF block has no usable latitude/longitude")
    return coordinate
