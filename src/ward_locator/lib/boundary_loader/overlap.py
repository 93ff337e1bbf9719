"""Optional data-quality pass that reports wards whose interiors overlap.

The resolver returns the first ward containing a point, so overlapping
polygons make ward assignment depend on load order.
"""

from collections.abc import Sequence

from loguru import logger
from shapely.strtree import STRtree

from ward_locator.lib.boundary_loader.types import WardPolygon

# Intersections smaller than this (in squared degrees) are digitizing noise
DEFAULT_AREA_TOLERANCE = 1e-10


def find_overlapping_wards(
    polygons: Sequence[WardPolygon],
    area_tolerance: float = DEFAULT_AREA_TOLERANCE,
) -> list[tuple[int, int]]:
    """Find pairs of wards whose interiors overlap.

    Wards that only share an edge or a vertex are not reported.

    Args:
        polygons: Ward polygons in load order.
        area_tolerance: Minimum intersection area to count as an overlap.

    Returns:
        ``(ward_a, ward_b)`` pairs, ordered by load position.
    """
    geometries = [p.geometry for p in polygons]
    if len(geometries) < 2:
        return []

    tree = STRtree(geometries)
    overlaps: list[tuple[int, int]] = []

    for i, geom in enumerate(geometries):
        for j in sorted(int(k) for k in tree.query(geom)):
            if j <= i:
                continue
            other = geometries[j]
            if not geom.intersects(other):
                continue
            area = geom.intersection(other).area
            if area > area_tolerance:
                pair = (polygons[i].ward_number, polygons[j].ward_number)
                logger.warning(f"Wards {pair[0]} and {pair[1]} overlap (area {area:.3g} sq deg)")
                overlaps.append(pair)

    return overlaps
