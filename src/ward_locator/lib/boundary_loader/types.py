"""Immutable ward dataset structures produced by the boundary loader."""

from collections.abc import Iterator
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from shapely.geometry import MultiPolygon, mapping


class DatasetLoadError(Exception):
    """Raised when the ward boundary dataset or zone table cannot be loaded.

    This is a fatal startup error: the lookup service must not serve
    requests without a successfully loaded dataset.
    """


@dataclass(frozen=True)
class WardPolygon:
    """One administrative ward boundary.

    Geometry vertices are in GeoJSON ``[longitude, latitude]`` order.
    """

    ward_number: int
    geometry: MultiPolygon
    properties: MappingProxyType = field(default_factory=lambda: MappingProxyType({}))

    @property
    def bounds(self) -> tuple[float, float, float, float]:
        """Bounding box as ``(min_lng, min_lat, max_lng, max_lat)``."""
        return self.geometry.bounds


@dataclass(frozen=True)
class WardZoneTable:
    """Positional ward-name table: ward ``n`` maps to ``names[n - 1]``."""

    names: tuple[str | None, ...] = ()

    def name_for(self, ward_number: int) -> str | None:
        """Return the ward name for a 1-based ward number, or None if unknown."""
        if ward_number < 1 or ward_number > len(self.names):
            return None
        return self.names[ward_number - 1]

    def __len__(self) -> int:
        return len(self.names)

    def __iter__(self) -> Iterator[str | None]:
        return iter(self.names)


@dataclass(frozen=True)
class WardDataset:
    """Ward polygons in load order plus the ward-name table."""

    polygons: tuple[WardPolygon, ...]
    zone_table: WardZoneTable

    def __len__(self) -> int:
        return len(self.polygons)

    def ward_numbers(self) -> list[int]:
        """Ward numbers in load order."""
        return [p.ward_number for p in self.polygons]

    def to_feature_collection(self) -> dict[str, Any]:
        """Render the loaded wards as a GeoJSON FeatureCollection.

        Each feature carries its original properties plus ``wardNumber`` and
        ``wardName``.
        """
        features = []
        for polygon in self.polygons:
            properties = dict(polygon.properties)
            properties["wardNumber"] = polygon.ward_number
            properties["wardName"] = self.zone_table.name_for(polygon.ward_number)
            features.append(
                {
                    "type": "Feature",
                    "properties": properties,
                    "geometry": mapping(polygon.geometry),
                }
            )
        return {"type": "FeatureCollection", "features": features}
