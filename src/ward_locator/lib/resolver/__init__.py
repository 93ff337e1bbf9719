"""Point-in-ward resolver.

Public API:
    - resolve: Coordinate to WardInfo (or None) against loaded polygons
    - find_containing_ward: First covering WardPolygon in load order
    - WardInfo: Resolver output record
"""

from ward_locator.lib.resolver.point_in_ward import WardInfo, find_containing_ward, resolve

__all__ = [
    "WardInfo",
    "find_containing_ward",
    "resolve",
]
