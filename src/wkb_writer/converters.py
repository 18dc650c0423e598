"""
Encode shapely geometries through the incremental writer.

This module walks shapely geometries and feeds their coordinates to a
WKBWriter, so that whole geometries can be encoded with the same code path as
streamed ones. Only the x and y ordinates are written.
"""

from collections.abc import Iterable, Sequence

import shapely
from shapely.geometry import LineString, MultiPolygon, Point, Polygon
from shapely.geometry.base import BaseGeometry

from .geometry import OutType, WkbType
from .writer import WKBWriter


def _coords(seq: Iterable[Sequence[float]]) -> list[tuple[float, float]]:
    return [(c[0], c[1]) for c in seq]


def _write_rings(writer: WKBWriter, poly: Polygon, prefix: str) -> None:
    """Write the rings of one polygon through the ``prefix``-ed builder methods"""
    if poly.is_empty:
        return
    add_location = getattr(writer, f"{prefix}_add_location")

    getattr(writer, f"{prefix}_outer_ring_start")()
    for x, y in _coords(poly.exterior.coords):
        add_location(x, y)
    getattr(writer, f"{prefix}_outer_ring_finish")()

    for interior in poly.interiors:
        getattr(writer, f"{prefix}_inner_ring_start")()
        for x, y in _coords(interior.coords):
            add_location(x, y)
        getattr(writer, f"{prefix}_inner_ring_finish")()


def write_geometry(writer: WKBWriter, geom: BaseGeometry) -> bytes | str:
    """
    Encode a shapely geometry with an existing writer.

    Args:
        writer: Idle WKBWriter; its configuration decides WKB/EWKB and output
        geom: Point, LineString (or LinearRing), Polygon or MultiPolygon

    Returns:
        The rendered geometry

    Raises:
        ValueError: If the geometry type is not supported or the point is empty

    Example:
        >>> writer = WKBWriter(4326, WkbType.WKB, OutType.HEX)
        >>> write_geometry(writer, Point(1, 2))
        '0101000000000000000000F03F0000000000000040'
    """
    if isinstance(geom, Point):
        if geom.is_empty:
            raise ValueError("Cannot encode an empty point")
        return writer.make_point(geom.x, geom.y)

    if isinstance(geom, LineString):
        points = _coords(geom.coords)
        writer.linestring_start()
        for x, y in points:
            writer.linestring_add_location(x, y)
        return writer.linestring_finish(len(points))

    if isinstance(geom, Polygon):
        writer.polygon_start()
        _write_rings(writer, geom, "polygon")
        return writer.polygon_finish()

    if isinstance(geom, MultiPolygon):
        writer.multipolygon_start()
        for poly in geom.geoms:
            writer.multipolygon_polygon_start()
            _write_rings(writer, poly, "multipolygon")
            writer.multipolygon_polygon_finish()
        return writer.multipolygon_finish()

    raise ValueError(f"Unsupported geometry type: {geom.geom_type}")


def to_wkb(
    geom: BaseGeometry,
    srid: int | None = None,
    wkb_type: WkbType = WkbType.WKB,
    out_type: OutType = OutType.BINARY,
) -> bytes | str:
    """
    Encode a shapely geometry as WKB or EWKB.

    Args:
        geom: Geometry to encode
        srid: Spatial reference ID. Defaults to the SRID stored on the
            shapely geometry (0 when none is set).
        wkb_type: WkbType.WKB or WkbType.EWKB
        out_type: OutType.BINARY or OutType.HEX

    Returns:
        Encoded geometry as bytes, or as an uppercase hex string

    Example:
        >>> to_wkb(Point(3.2, 4.2), 4326, WkbType.EWKB, OutType.HEX)[:18]
        '0101000020E6100000'
    """
    if srid is None:
        srid = int(shapely.get_srid(geom))
    writer = WKBWriter(srid, wkb_type, out_type)
    return write_geometry(writer, geom)
