"""Point-in-ward resolution against loaded ward polygons.

Ward geometries use GeoJSON ``[longitude, latitude]`` axis order while every
caller works in ``(lat, lng)``; the swap happens here and nowhere else.

Points on a ward edge or vertex count as inside that ward (shapely
``covers``). A point on an edge shared by two wards resolves to the ward
loaded first.
"""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from shapely.geometry import Point

from ward_locator.lib.boundary_loader.types import WardPolygon, WardZoneTable


@dataclass(frozen=True)
class WardInfo:
    """The ward containing a point. ``properties`` is a read-only view."""

    ward_number: int
    ward_name: str | None
    properties: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))

    def __post_init__(self) -> None:
        if not isinstance(self.properties, MappingProxyType):
            object.__setattr__(self, "properties", MappingProxyType(dict(self.properties)))

    def as_record(self) -> dict[str, Any]:
        """Flatten into the ``{wardNumber, wardName, ...properties}`` record attached to issues.

        ``wardNumber`` and ``wardName`` take precedence over same-named feature properties.
        """
        return {**self.properties, "wardNumber": self.ward_number, "wardName": self.ward_name}


def _in_bounds(bounds: tuple[float, float, float, float], x: float, y: float) -> bool:
    min_x, min_y, max_x, max_y = bounds
    return min_x <= x <= max_x and min_y <= y <= max_y


def find_containing_ward(lat: float, lng: float, polygons: Sequence[WardPolygon]) -> WardPolygon | None:
    """Return the first polygon, in load order, that covers the point."""
    point = Point(lng, lat)
    for polygon in polygons:
        if not _in_bounds(polygon.bounds, lng, lat):
            continue
        if polygon.geometry.covers(point):
            return polygon
    return None


def resolve(
    lat: float,
    lng: float,
    polygons: Sequence[WardPolygon],
    zone_table: WardZoneTable | None = None,
) -> WardInfo | None:
    """Resolve a coordinate to the ward containing it.

    Input is assumed to be finite and in range; validation belongs to the
    lookup service.

    Args:
        lat: WGS84 latitude.
        lng: WGS84 longitude.
        polygons: Ward polygons in load order.
        zone_table: Ward-name table; names are None when absent.

    Returns:
        WardInfo for the first containing ward, or None when the point lies
        outside every ward.
    """
    polygon = find_containing_ward(lat, lng, polygons)
    if polygon is None:
        return None

    ward_name = zone_table.name_for(polygon.ward_number) if zone_table is not None else None
    return WardInfo(
        ward_number=polygon.ward_number,
        ward_name=ward_name,
        properties=polygon.properties,
    )
