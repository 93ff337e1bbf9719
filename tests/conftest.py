"""Shared test fixtures for ward datasets, the lookup service, and EXIF test images."""

import io
import json
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest
from PIL import ExifTags, Image

from ward_locator.core.config import Settings
from ward_locator.lib.boundary_loader import WardDataset, load_ward_dataset
from ward_locator.services.ward_lookup_service import WardLookupService

# Ward 1 is the unit square x/y in [0, 1]; ward 2 is the adjacent square x in [1, 2].
# Coordinates are GeoJSON [lng, lat].
WARD_1_RING = [[0, 0], [0, 1], [1, 1], [1, 0]]
WARD_2_RING = [[1, 0], [1, 1], [2, 1], [2, 0]]

ZONE_NAMES = ["Fort St. George", "Tondiarpet"]


def make_feature(name: Any, ring: list[list[float]], **properties: Any) -> dict[str, Any]:
    """Build a Polygon feature with the ward number in the ``Name`` property."""
    return {
        "type": "Feature",
        "properties": {"Name": name, **properties},
        "geometry": {"type": "Polygon", "coordinates": [ring]},
    }


def make_collection(*features: dict[str, Any]) -> dict[str, Any]:
    """Wrap features in a FeatureCollection."""
    return {"type": "FeatureCollection", "features": list(features)}


def write_json(path: Path, data: object) -> Path:
    """Write a JSON document and return its path."""
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


def make_jpeg(gps: dict[int, Any] | None = None) -> bytes:
    """Render a tiny JPEG, optionally carrying a GPS EXIF block."""
    image = Image.new("RGB", (8, 8), "white")
    buf = io.BytesIO()
    if gps is None:
        image.save(buf, format="JPEG")
    else:
        exif = Image.Exif()
        exif[ExifTags.IFD.GPSInfo] = gps
        image.save(buf, format="JPEG", exif=exif.tobytes())
    return buf.getvalue()


def chennai_gps(lat_ref: str = "N", lng_ref: str = "E") -> dict[int, Any]:
    """GPS IFD for 13° 4' 29.2" / 80° 13' 17.0"."""
    return {
        ExifTags.GPS.GPSLatitudeRef: lat_ref,
        ExifTags.GPS.GPSLatitude: (13.0, 4.0, 29.2),
        ExifTags.GPS.GPSLongitudeRef: lng_ref,
        ExifTags.GPS.GPSLongitude: (80.0, 13.0, 17.0),
    }


@pytest.fixture
def two_ward_geojson() -> dict[str, Any]:
    """Two adjacent unit-square wards; ward 1's number is whitespace padded."""
    return make_collection(
        make_feature(" 1\n", WARD_1_RING, Zone="I"),
        make_feature("2", WARD_2_RING, Zone="II"),
    )


@pytest.fixture
def ward_files(tmp_path: Path, two_ward_geojson: dict[str, Any]) -> tuple[Path, Path]:
    """Boundary and zone-table files for the two-ward dataset."""
    boundaries = write_json(tmp_path / "wards.geojson", two_ward_geojson)
    zones = write_json(tmp_path / "ward-zones.json", ZONE_NAMES)
    return boundaries, zones


@pytest.fixture
def dataset(ward_files: tuple[Path, Path]) -> WardDataset:
    """Loaded two-ward dataset."""
    boundaries, zones = ward_files
    return load_ward_dataset(boundaries, zones)


@pytest.fixture
def service(dataset: WardDataset) -> WardLookupService:
    """Ward lookup service over the two-ward dataset."""
    return WardLookupService(dataset)


@pytest.fixture
def settings(ward_files: tuple[Path, Path]) -> Settings:
    """Test application settings pointing at the two-ward dataset."""
    boundaries, zones = ward_files
    return Settings(
        _env_file=None,
        ward_boundaries_path=str(boundaries),
        ward_zones_path=str(zones),
    )


@pytest.fixture
def chennai_jpeg() -> bytes:
    """JPEG geotagged at roughly (13.0748, 80.2214)."""
    return make_jpeg(chennai_gps())


@pytest.fixture
def jpeg_factory() -> Callable[..., bytes]:
    """Factory rendering a JPEG with an optional GPS EXIF block."""
    return make_jpeg


@pytest.fixture
def gps_factory() -> Callable[..., dict[int, Any]]:
    """Factory building the Chennai GPS IFD with chosen hemisphere references."""
    return chennai_gps


@pytest.fixture
def write_dataset(tmp_path: Path) -> Callable[..., tuple[Path, Path]]:
    """Factory writing a boundary document and zone table, returning their paths."""

    def _write(collection: object, zones: object = ZONE_NAMES) -> tuple[Path, Path]:
        boundaries = write_json(tmp_path / "custom-wards.geojson", collection)
        zone_path = write_json(tmp_path / "custom-zones.json", zones)
        return boundaries, zone_path

    return _write


@pytest.fixture
def feature_factory() -> Callable[..., dict[str, Any]]:
    """Factory building a ward Polygon feature."""
    return make_feature


@pytest.fixture
def collection_factory() -> Callable[..., dict[str, Any]]:
    """Factory wrapping features in a FeatureCollection."""
    return make_collection
