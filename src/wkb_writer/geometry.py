"""
Geometry type codes and writer configuration.

These values fix the layout of every header the writer emits.
"""

from dataclasses import dataclass
from enum import Enum, IntEnum

# Type alias for an (x, y) coordinate pair
Coord2D = tuple[float, float]

# Byte-order flag for little-endian (NDR) encodings
WKB_NDR = 1

# High bit of the type code announcing a 4-byte SRID field (PostGIS EWKB)
WKB_SRID_FLAG = 0x20000000

UINT32_MAX = 0xFFFFFFFF


class GeometryType(IntEnum):
    """OGC base geometry type codes"""

    POINT = 1
    LINESTRING = 2
    POLYGON = 3
    MULTIPOINT = 4
    MULTILINESTRING = 5
    MULTIPOLYGON = 6
    GEOMETRYCOLLECTION = 7


class WkbType(Enum):
    """Binary flavour: plain OGC WKB or PostGIS extended WKB with SRID"""

    WKB = "wkb"
    EWKB = "ewkb"


class OutType(Enum):
    """Rendering of a finished geometry"""

    BINARY = "binary"
    HEX = "hex"


@dataclass(frozen=True)
class WriterConfig:
    """
    Settings fixed for the lifetime of a writer.

    Attributes:
        srid: Spatial reference ID, written only for EWKB output
        wkb_type: Plain WKB or EWKB
        out_type: Raw bytes or uppercase hex string
    """

    srid: int = 0
    wkb_type: WkbType = WkbType.WKB
    out_type: OutType = OutType.BINARY

    def __post_init__(self) -> None:
        if not 0 <= self.srid <= UINT32_MAX:
            raise ValueError(f"SRID out of range: {self.srid}")
        if not isinstance(self.wkb_type, WkbType):
            raise ValueError(f"Invalid wkb_type: {self.wkb_type!r}")
        if not isinstance(self.out_type, OutType):
            raise ValueError(f"Invalid out_type: {self.out_type!r}")

    @property
    def extended(self) -> bool:
        """Whether headers carry the SRID"""
        return self.wkb_type is WkbType.EWKB

    def type_code(self, geometry_type: GeometryType, nested: bool = False) -> int:
        """
        Type code as written to the header.

        Args:
            geometry_type: Base OGC type
            nested: True for members of a collection, which never repeat the SRID

        Returns:
            The base code, with the SRID flag set for an outermost EWKB geometry
        """
        if self.extended and not nested:
            return int(geometry_type) | WKB_SRID_FLAG
        return int(geometry_type)
