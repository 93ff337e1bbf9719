"""Ward lookup service: the single entry point for resolving report locations to wards.

The service owns an immutable WardDataset loaded once at startup and is safe
to share across concurrent requests.
"""

import math
from dataclasses import dataclass
from enum import StrEnum
from numbers import Real

from loguru import logger

from ward_locator.core.config import Settings
from ward_locator.lib.boundary_loader import WardDataset, load_ward_dataset
from ward_locator.lib.exif import Coordinate, extract_gps_from_image
from ward_locator.lib.resolver import WardInfo, resolve


class InvalidCoordinateError(ValueError):
    """Raised when a latitude/longitude pair is non-numeric, non-finite, or out of range."""


class MissingLocationError(ValueError):
    """Raised when a report carries neither usable photo GPS data nor explicit coordinates."""


class LocationSource(StrEnum):
    """Where a report's coordinate came from."""

    EXIF = "exif"
    FORM = "form"


@dataclass(frozen=True)
class ReportLocation:
    """A report coordinate, its source, and the ward it falls in (None if outside all wards)."""

    coordinate: Coordinate
    source: LocationSource
    ward: WardInfo | None


def validate_coordinates(lat: object, lng: object) -> tuple[float, float]:
    """Validate a latitude/longitude pair.

    Args:
        lat: Candidate latitude.
        lng: Candidate longitude.

    Returns:
        The pair as floats.

    Raises:
        InvalidCoordinateError: If either value is not a real number, is not
            finite, or is outside the valid geographic range.
    """
    values: list[float] = []
    for label, value in (("lat", lat), ("lng", lng)):
        if isinstance(value, bool) or not isinstance(value, Real):
            msg = f"{label} must be a number, got {type(value).__name__}"
            raise InvalidCoordinateError(msg)
        try:
            as_float = float(value)
        except OverflowError as e:
            msg = f"{label} must be a finite number"
            raise InvalidCoordinateError(msg) from e
        if not math.isfinite(as_float):
            msg = f"{label} must be a finite number"
            raise InvalidCoordinateError(msg)
        values.append(as_float)

    lat_f, lng_f = values
    if not -90 <= lat_f <= 90:
        msg = f"lat must be between -90 and 90, got {lat_f}"
        raise InvalidCoordinateError(msg)
    if not -180 <= lng_f <= 180:
        msg = f"lng must be between -180 and 180, got {lng_f}"
        raise InvalidCoordinateError(msg)
    return lat_f, lng_f


class WardLookupService:
    """Resolves coordinates and photos to wards using a preloaded dataset."""

    def __init__(self, dataset: WardDataset) -> None:
        self._dataset = dataset

    @classmethod
    def from_settings(cls, settings: Settings) -> "WardLookupService":
        """Load the ward dataset configured in settings.

        Raises:
            DatasetLoadError: If the dataset cannot be loaded.
        """
        dataset = load_ward_dataset(
            settings.ward_boundaries_path,
            settings.ward_zones_path,
            ward_number_property=settings.ward_number_property,
            invalid_feature_policy=settings.invalid_feature_policy,
            check_overlaps=settings.check_ward_overlaps,
        )
        logger.info(f"Ward lookup ready with {len(dataset)} wards and {len(dataset.zone_table)} ward names")
        return cls(dataset)

    @property
    def dataset(self) -> WardDataset:
        return self._dataset

    def locate_ward(self, lat: object, lng: object) -> WardInfo | None:
        """Find the ward containing a coordinate.

        Returns:
            WardInfo, or None when the point is outside the service area.

        Raises:
            InvalidCoordinateError: If the coordinate is malformed.
        """
        lat_f, lng_f = validate_coordinates(lat, lng)
        return resolve(lat_f, lng_f, self._dataset.polygons, self._dataset.zone_table)

    def extract_gps_from_image(self, image_bytes: bytes) -> Coordinate | None:
        """Read the GPS coordinate embedded in a photo, or None."""
        return extract_gps_from_image(image_bytes)

    def resolve_report_location(
        self,
        lat: object = None,
        lng: object = None,
        image_bytes: bytes | None = None,
    ) -> ReportLocation:
        """Work out where a report was made and which ward it belongs to.

        Photo GPS data takes precedence; explicit coordinates are the
        fallback when the photo has none.

        Raises:
            MissingLocationError: If no usable location is available.
        """
        coordinate = self.extract_gps_from_image(image_bytes) if image_bytes else None
        source = LocationSource.EXIF

        if coordinate is None:
            if lat is None or lng is None:
                msg = "Invalid or missing location information"
                raise MissingLocationError(msg)
            try:
                lat_f, lng_f = validate_coordinates(lat, lng)
            except InvalidCoordinateError as e:
                msg = "Invalid or missing location information"
                raise MissingLocationError(msg) from e
            coordinate = Coordinate(latitude=lat_f, longitude=lng_f)
            source = LocationSource.FORM

        ward = self.locate_ward(coordinate.latitude, coordinate.longitude)
        if ward is None:
            logger.debug(f"Report location ({coordinate.latitude}, {coordinate.longitude}) is outside all wards")
        return ReportLocation(coordinate=coordinate, source=source, ward=ward)
