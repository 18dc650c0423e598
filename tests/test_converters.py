"""Tests for encoding shapely geometries."""

import pytest
import shapely
from shapely.geometry import (
    LinearRing,
    LineString,
    MultiPoint,
    MultiPolygon,
    Point,
    Polygon,
)

from wkb_writer import OutType, WKBWriter, WkbType, to_wkb, write_geometry
from wkb_writer.encoding import unpack_uint32_at

EXTERIOR = [(0, 0), (10, 0), (10, 10), (0, 10), (0, 0)]
HOLE = [(2, 2), (8, 2), (8, 8), (2, 8), (2, 2)]

GEOMETRIES = [
    Point(-122.0, 47.0),
    LineString([(3.2, 4.2), (3.5, 4.7), (3.6, 4.9)]),
    Polygon(EXTERIOR),
    Polygon(EXTERIOR, [HOLE]),
    MultiPolygon(
        [
            Polygon([(3.2, 4.2), (3.5, 4.7), (3.0, 4.9), (3.2, 4.2)]),
            Polygon(
                [(13.2, 4.2), (13.5, 4.7), (13.0, 4.9), (13.2, 4.2)],
                [[(13.25, 4.25), (13.05, 4.85), (13.45, 4.65), (13.25, 4.25)]],
            ),
        ]
    ),
]


def geos_wkb(geom, srid=0, as_hex=False):
    """Reference encoding produced by GEOS"""
    if srid:
        geom = shapely.set_srid(geom, srid)
    return shapely.to_wkb(
        geom, hex=as_hex, output_dimension=2, byte_order=1, include_srid=bool(srid)
    )


class TestMatchesGeos:
    @pytest.mark.parametrize("geom", GEOMETRIES, ids=lambda g: g.geom_type)
    def test_wkb_bytes(self, geom):
        assert to_wkb(geom, 4326) == geos_wkb(geom)

    @pytest.mark.parametrize("geom", GEOMETRIES, ids=lambda g: g.geom_type)
    def test_ewkb_bytes(self, geom):
        ours = to_wkb(geom, 4326, WkbType.EWKB)
        assert ours == geos_wkb(geom, srid=4326)

    @pytest.mark.parametrize("geom", GEOMETRIES, ids=lambda g: g.geom_type)
    def test_ewkb_hex(self, geom):
        ours = to_wkb(geom, 3857, WkbType.EWKB, OutType.HEX)
        assert ours == geos_wkb(geom, srid=3857, as_hex=True)

    @pytest.mark.parametrize("geom", GEOMETRIES, ids=lambda g: g.geom_type)
    def test_geos_reads_ewkb(self, geom):
        decoded = shapely.from_wkb(to_wkb(geom, 4326, WkbType.EWKB))
        assert decoded.equals_exact(geom, 0)
        assert shapely.get_srid(decoded) == 4326

    def test_point_scenario(self):
        assert to_wkb(Point(3.2, 4.2), 4326, WkbType.EWKB, OutType.HEX) == (
            "0101000020E61000009A99999999990940CDCCCCCCCCCC1040"
        )


class TestToWkb:
    def test_srid_defaults_to_geometry_srid(self):
        geom = shapely.set_srid(Point(1.0, 2.0), 3857)
        wkb = to_wkb(geom, wkb_type=WkbType.EWKB)
        assert unpack_uint32_at(wkb, 5) == 3857

    def test_srid_argument_wins(self):
        geom = shapely.set_srid(Point(1.0, 2.0), 3857)
        wkb = to_wkb(geom, 4326, WkbType.EWKB)
        assert unpack_uint32_at(wkb, 5) == 4326

    def test_z_is_dropped(self):
        wkb = to_wkb(Point(1.0, 2.0, 3.0))
        assert len(wkb) == 21
        assert wkb == to_wkb(Point(1.0, 2.0))

    def test_linear_ring_as_linestring(self):
        wkb = to_wkb(LinearRing(EXTERIOR))
        assert unpack_uint32_at(wkb, 1) == 2
        assert unpack_uint32_at(wkb, 5) == len(EXTERIOR)

    def test_empty_polygon(self):
        assert to_wkb(Polygon()) == b"\x01\x03\x00\x00\x00\x00\x00\x00\x00"

    def test_empty_point_rejected(self):
        with pytest.raises(ValueError, match="empty point"):
            to_wkb(Point())

    def test_unsupported_type(self):
        with pytest.raises(ValueError, match="Unsupported geometry type: MultiPoint"):
            to_wkb(MultiPoint([(0, 0), (1, 1)]))


class TestWriteGeometry:
    def test_reuses_writer(self):
        writer = WKBWriter(4326, WkbType.EWKB, OutType.HEX)
        first = write_geometry(writer, GEOMETRIES[3])
        second = write_geometry(writer, GEOMETRIES[4])
        assert first.startswith("0103000020E6100000")
        assert second.startswith("0106000020E6100000")
        assert not writer.in_session

    def test_unsupported_leaves_writer_idle(self):
        writer = WKBWriter(0)
        with pytest.raises(ValueError):
            write_geometry(writer, MultiPoint([(0, 0)]))
        assert writer.make_point(0, 0) == to_wkb(Point(0, 0))
