"""GeoJSON ward reader: parses ward FeatureCollections into WardPolygon records."""

import json
import math
from pathlib import Path
from types import MappingProxyType
from typing import Any, Literal

from loguru import logger
from shapely.errors import ShapelyError
from shapely.geometry import MultiPolygon, Polygon, shape

from ward_locator.lib.boundary_loader.types import DatasetLoadError, WardPolygon

InvalidFeaturePolicy = Literal["fail", "skip"]


def parse_ward_number(raw: object) -> int:
    """Normalize a raw ward-number property into a positive integer.

    Source data may pad the value with whitespace or newlines
    (``" 12\\n"``), so strings are trimmed before parsing.

    Args:
        raw: The raw property value.

    Returns:
        The ward number.

    Raises:
        ValueError: If the value is missing, not an integer, or not positive.
    """
    if raw is None or isinstance(raw, bool):
        msg = f"Ward number must be an integer, got {raw!r}"
        raise ValueError(msg)

    if isinstance(raw, int):
        number = raw
    elif isinstance(raw, float):
        if not math.isfinite(raw) or not raw.is_integer():
            msg = f"Ward number must be an integer, got {raw!r}"
            raise ValueError(msg)
        number = int(raw)
    elif isinstance(raw, str):
        text = raw.strip()
        if not text.isdecimal():
            msg = f"Ward number must be an integer, got {raw!r}"
            raise ValueError(msg)
        number = int(text)
    else:
        msg = f"Ward number must be an integer, got {type(raw).__name__}"
        raise ValueError(msg)

    if number < 1:
        msg = f"Ward number must be positive, got {number}"
        raise ValueError(msg)
    return number


def _to_multipolygon(geom_data: dict[str, Any]) -> MultiPolygon:
    """Build a valid MultiPolygon from a GeoJSON geometry object.

    Raises:
        ValueError: If the geometry is unparsable, empty, or not polygonal.
    """
    try:
        geom = shape(geom_data)
    except (ShapelyError, KeyError, TypeError, ValueError, AttributeError, IndexError) as e:
        msg = f"unparsable geometry: {e}"
        raise ValueError(msg) from e

    if isinstance(geom, Polygon):
        geom = MultiPolygon([geom])
    elif not isinstance(geom, MultiPolygon):
        msg = f"unsupported geometry type: {geom.geom_type}"
        raise ValueError(msg)

    if geom.is_empty:
        msg = "empty geometry"
        raise ValueError(msg)

    if not geom.is_valid:
        logger.warning("Ward geometry is invalid, attempting repair")
        geom = geom.buffer(0)
        if isinstance(geom, Polygon):
            geom = MultiPolygon([geom])
        if not isinstance(geom, MultiPolygon) or geom.is_empty:
            msg = "geometry could not be repaired"
            raise ValueError(msg)

    return geom


def parse_ward_features(
    data: object,
    *,
    ward_number_property: str = "Name",
    invalid_feature_policy: InvalidFeaturePolicy = "fail",
    source: str = "<memory>",
) -> tuple[WardPolygon, ...]:
    """Convert a decoded GeoJSON document into ward polygons.

    Args:
        data: The decoded JSON document.
        ward_number_property: Feature property holding the ward number.
        invalid_feature_policy: ``"fail"`` raises on the first malformed
            feature; ``"skip"`` drops it with a warning.
        source: Label used in log and error messages.

    Returns:
        Ward polygons in document order.

    Raises:
        DatasetLoadError: If the document is structurally invalid, a feature
            is malformed under the ``"fail"`` policy, or no usable ward remains.
    """
    if not isinstance(data, dict) or data.get("type") != "FeatureCollection":
        got = data.get("type") if isinstance(data, dict) else type(data).__name__
        msg = f"Expected FeatureCollection in {source}, got {got}"
        raise DatasetLoadError(msg)

    if "features" not in data:
        msg = f"FeatureCollection in {source} has no 'features' key"
        raise DatasetLoadError(msg)

    features = data["features"]
    if not isinstance(features, list):
        msg = f"'features' in {source} must be an array"
        raise DatasetLoadError(msg)

    polygons: list[WardPolygon] = []
    seen: dict[int, int] = {}

    for i, feature in enumerate(features):
        try:
            if not isinstance(feature, dict):
                msg = "feature is not an object"
                raise ValueError(msg)

            props = feature.get("properties") or {}
            if not isinstance(props, dict):
                msg = "feature properties are not an object"
                raise ValueError(msg)

            geom_data = feature.get("geometry")
            if not geom_data:
                msg = "feature has no geometry"
                raise ValueError(msg)

            ward_number = parse_ward_number(props.get(ward_number_property))
            geometry = _to_multipolygon(geom_data)
        except ValueError as e:
            if invalid_feature_policy == "fail":
                msg = f"Invalid ward feature {i} in {source}: {e}"
                raise DatasetLoadError(msg) from e
            logger.warning(f"Skipping invalid ward feature {i} in {source}: {e}")
            continue

        if ward_number in seen:
            logger.warning(f"Ward {ward_number} appears in features {seen[ward_number]} and {i} of {source}")
        else:
            seen[ward_number] = i

        polygons.append(
            WardPolygon(
                ward_number=ward_number,
                geometry=geometry,
                properties=MappingProxyType(dict(props)),
            )
        )

    if not polygons:
        msg = f"No usable ward features in {source}"
        raise DatasetLoadError(msg)

    return tuple(polygons)


def read_ward_polygons(
    file_path: Path,
    *,
    ward_number_property: str = "Name",
    invalid_feature_policy: InvalidFeaturePolicy = "fail",
) -> tuple[WardPolygon, ...]:
    """Read a GeoJSON file of ward boundaries.

    Args:
        file_path: Path to a .geojson or .json FeatureCollection.
        ward_number_property: Feature property holding the ward number.
        invalid_feature_policy: ``"fail"`` or ``"skip"`` for malformed features.

    Returns:
        Ward polygons in file order.

    Raises:
        DatasetLoadError: If the file is missing, not valid JSON, or not a
            usable ward FeatureCollection.
    """
    logger.info(f"Reading ward boundaries: {file_path}")

    try:
        with file_path.open("r", encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError as e:
        msg = f"Ward boundary file not found: {file_path}"
        raise DatasetLoadError(msg) from e
    except (OSError, UnicodeDecodeError) as e:
        msg = f"Cannot read ward boundary file {file_path}: {e}"
        raise DatasetLoadError(msg) from e
    except json.JSONDecodeError as e:
        msg = f"Malformed JSON in ward boundary file {file_path}: {e}"
        raise DatasetLoadError(msg) from e

    polygons = parse_ward_features(
        data,
        ward_number_property=ward_number_property,
        invalid_feature_policy=invalid_feature_policy,
        source=str(file_path),
    )
    logger.info(f"Parsed {len(polygons)} ward boundaries from GeoJSON")
    return polygons
