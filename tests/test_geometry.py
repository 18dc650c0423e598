"""Tests for geometry codes and writer configuration."""

import dataclasses

import pytest
from wkb_writer import (
    GeometryType, WkbType, OutType, WriterConfig, WKB_NDR, WKB_SRID_FLAG
)


class TestGeometryType:
    def test_codes(self):
        assert GeometryType.POINT == 1
        assert GeometryType.LINESTRING == 2
        assert GeometryType.POLYGON == 3
        assert GeometryType.MULTIPOLYGON == 6

    def test_constants(self):
        assert WKB_NDR == 1
        assert WKB_SRID_FLAG == 0x20000000


class TestWriterConfig:
    def test_default_values(self):
        cfg = WriterConfig()
        assert cfg.srid == 0
        assert cfg.wkb_type is WkbType.WKB
        assert cfg.out_type is OutType.BINARY
        assert not cfg.extended

    def test_plain_type_code(self):
        cfg = WriterConfig(srid=4326)
        assert cfg.type_code(GeometryType.POLYGON) == 3

    def test_extended_type_code(self):
        cfg = WriterConfig(srid=4326, wkb_type=WkbType.EWKB)
        assert cfg.extended
        assert cfg.type_code(GeometryType.POINT) == 0x20000001
        assert cfg.type_code(GeometryType.MULTIPOLYGON) == 0x20000006

    def test_nested_type_code_has_no_flag(self):
        cfg = WriterConfig(srid=4326, wkb_type=WkbType.EWKB)
        assert cfg.type_code(GeometryType.POLYGON, nested=True) == 3

    def test_frozen(self):
        cfg = WriterConfig(srid=4326)
        with pytest.raises(dataclasses.FrozenInstanceError):
            cfg.srid = 3857  # type: ignore[misc]

    def test_srid_range(self):
        assert WriterConfig(srid=0xFFFFFFFF).srid == 0xFFFFFFFF
        with pytest.raises(ValueError, match="SRID out of range"):
            WriterConfig(srid=2**32)

    def test_invalid_out_type(self):
        with pytest.raises(ValueError, match="Invalid out_type"):
            WriterConfig(out_type="hex")  # type: ignore[arg-type]
