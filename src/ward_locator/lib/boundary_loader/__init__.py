"""Boundary loader library: loads ward boundary polygons and the ward-name table.

Public API:
    - load_ward_dataset: Load both sources into an immutable WardDataset
    - read_ward_polygons: Direct GeoJSON ward reader
    - parse_ward_features: Parse an already-decoded FeatureCollection
    - parse_ward_number: Centralized ward-number normalization
    - read_zone_table: Direct ward-name table reader
    - parse_zone_table: Validate an already-decoded ward-name table
    - find_overlapping_wards: Overlap data-quality pass
    - WardPolygon, WardZoneTable, WardDataset: Dataset structures
    - DatasetLoadError: Fatal load failure
"""

from pathlib import Path

from loguru import logger

from ward_locator.lib.boundary_loader.geojson import (
    InvalidFeaturePolicy,
    parse_ward_features,
    parse_ward_number,
    read_ward_polygons,
)
from ward_locator.lib.boundary_loader.overlap import find_overlapping_wards
from ward_locator.lib.boundary_loader.types import DatasetLoadError, WardDataset, WardPolygon, WardZoneTable
from ward_locator.lib.boundary_loader.zone_table import parse_zone_table, read_zone_table


def load_ward_dataset(
    polygon_source: Path | str,
    zone_table_source: Path | str,
    *,
    ward_number_property: str = "Name",
    invalid_feature_policy: InvalidFeaturePolicy = "fail",
    check_overlaps: bool = False,
) -> WardDataset:
    """Load ward polygons and the ward-name table.

    Args:
        polygon_source: Path to the ward GeoJSON FeatureCollection.
        zone_table_source: Path to the JSON array of ward names.
        ward_number_property: Feature property holding the ward number.
        invalid_feature_policy: ``"fail"`` or ``"skip"`` for malformed features.
        check_overlaps: Log a warning for every pair of overlapping wards.

    Returns:
        The loaded dataset.

    Raises:
        DatasetLoadError: If either source is missing or malformed.
    """
    polygons = read_ward_polygons(
        Path(polygon_source),
        ward_number_property=ward_number_property,
        invalid_feature_policy=invalid_feature_policy,
    )
    zone_table = read_zone_table(Path(zone_table_source))

    unnamed = sorted({p.ward_number for p in polygons if zone_table.name_for(p.ward_number) is None})
    if unnamed:
        logger.warning(f"{len(unnamed)} ward(s) have no name in the zone table: {unnamed}")

    if check_overlaps:
        overlaps = find_overlapping_wards(polygons)
        if overlaps:
            logger.warning(f"Found {len(overlaps)} overlapping ward pair(s); first match in load order wins")

    return WardDataset(polygons=polygons, zone_table=zone_table)


__all__ = [
    "DatasetLoadError",
    "InvalidFeaturePolicy",
    "WardDataset",
    "WardPolygon",
    "WardZoneTable",
    "find_overlapping_wards",
    "load_ward_dataset",
    "parse_ward_features",
    "parse_ward_number",
    "parse_zone_table",
    "read_ward_polygons",
    "read_zone_table",
]
