"""
WKB Writer

Write vector geometries as OGC Well-Known Binary (WKB) or PostGIS extended
WKB (EWKB) with an SRID, either as raw bytes or as an uppercase hex string.

Geometries are built incrementally: length fields are reserved when a
geometry, polygon or ring starts and back-patched when it finishes, so
coordinates can be streamed straight from their source.

Example:
    >>> from wkb_writer import WKBWriter, WkbType, OutType
    >>>
    >>> writer = WKBWriter(4326, WkbType.EWKB, OutType.HEX)
    >>> writer.make_point(3.2, 4.2)
    '0101000020E61000009A99999999990940CDCCCCCCCCCC1040'
    >>>
    >>> writer.polygon_start()
    >>> writer.polygon_outer_ring_start()
    >>> for x, y in [(0, 0), (1, 0), (1, 1), (0, 0)]:
    ...     writer.polygon_add_location(x, y)
    >>> writer.polygon_outer_ring_finish()
    >>> hex_wkb = writer.polygon_finish()
"""

__version__ = "0.1.0"

from .geometry import (
    GeometryType,
    WkbType,
    OutType,
    WriterConfig,
    WKB_NDR,
    WKB_SRID_FLAG,
)

from .errors import (
    WKBWriterError,
    InvalidSequenceError,
    CountMismatchError,
    PatchError,
    EncodingError,
)

from .encoding import (
    pack_byte,
    pack_uint32,
    pack_double,
    pack_coordinate,
    byte_to_hex,
    convert_to_hex,
    hex_to_bytes,
)

from .buffer import PatchableBuffer

from .writer import WKBWriter

from .converters import (
    write_geometry,
    to_wkb,
)

__all__ = [
    # Version
    "__version__",
    # Types and configuration
    "GeometryType",
    "WkbType",
    "OutType",
    "WriterConfig",
    "WKB_NDR",
    "WKB_SRID_FLAG",
    # Errors
    "WKBWriterError",
    "InvalidSequenceError",
    "CountMismatchError",
    "PatchError",
    "EncodingError",
    # Encoding
    "pack_byte",
    "pack_uint32",
    "pack_double",
    "pack_coordinate",
    "byte_to_hex",
    "convert_to_hex",
    "hex_to_bytes",
    # Buffer
    "PatchableBuffer",
    # Writer
    "WKBWriter",
    # Converters
    "write_geometry",
    "to_wkb",
]
