"""
Incremental WKB/EWKB geometry writer.

This module builds Well-Known Binary encodings one element at a time, the way
a streaming producer (database loader, GIS exporter) receives coordinates.

Key Technical Facts:
    - Byte order: always little-endian, byte-order flag 0x01
    - EWKB: type code OR 0x20000000, followed by a uint32 SRID
    - SRID appears once, in the outermost header only
    - Counts (points, rings, polygons) are uint32 slots reserved at start and
      back-patched at finish
    - A multipolygon holds one complete Polygon encoding per member
"""

import logging
from dataclasses import dataclass
from enum import Enum

from .buffer import PatchableBuffer
from .encoding import UINT32_SIZE, pack_byte, pack_coordinate, pack_uint32
from .errors import CountMismatchError, InvalidSequenceError
from .geometry import GeometryType, OutType, WkbType, WriterConfig, WKB_NDR

logger = logging.getLogger(__name__)


class FrameKind(Enum):
    """Composite levels that can be open on the writer's stack"""

    LINESTRING = "linestring"
    POLYGON = "polygon"
    MULTIPOLYGON = "multipolygon"
    OUTER_RING = "outer ring"
    INNER_RING = "inner ring"


@dataclass
class Frame:
    """
    One open composite level.

    Attributes:
        kind: What is under construction
        offset: Buffer offset of the reserved count slot
        count: Children appended since the slot was reserved
    """

    kind: FrameKind
    offset: int
    count: int = 0


class WKBWriter:
    """
    Builder for WKB and EWKB geometries.

    Each geometry is a session: a ``*_start`` call, element calls, and the
    matching ``*_finish`` call, which returns the rendered geometry. Points
    are written in a single ``make_point`` call. The writer can be reused
    after a session finishes.

    Example:
        >>> writer = WKBWriter(4326, WkbType.EWKB, OutType.HEX)
        >>> writer.make_point(3.2, 4.2)[:18]
        '0101000020E6100000'
        >>> writer.linestring_start()
        >>> writer.linestring_add_location(3.2, 4.2)
        >>> writer.linestring_add_location(3.5, 4.7)
        >>> wkb = writer.linestring_finish(2)
    """

    def __init__(
        self,
        srid: int = 0,
        wkb_type: WkbType = WkbType.WKB,
        out_type: OutType = OutType.BINARY,
    ):
        """
        Initialize the writer.

        Args:
            srid: Spatial reference ID, only written for EWKB
            wkb_type: WkbType.WKB or WkbType.EWKB
            out_type: OutType.BINARY (bytes) or OutType.HEX (str)
        """
        self.config = WriterConfig(srid=srid, wkb_type=wkb_type, out_type=out_type)
        self._buffer = PatchableBuffer()
        self._stack: list[Frame] = []

    @property
    def in_session(self) -> bool:
        """True while a geometry is under construction"""
        return bool(self._stack)

    @property
    def depth(self) -> int:
        """Number of open composite levels"""
        return len(self._stack)

    def reset(self) -> None:
        """Abandon the geometry under construction, if any"""
        if self._stack:
            logger.debug("Abandoning %s session", self._stack[0].kind.value)
        self._stack.clear()
        self._buffer.reset()

    # -- low level --------------------------------------------------------

    def _header(self, geometry_type: GeometryType, nested: bool = False) -> None:
        self._buffer.append_bytes(pack_byte(WKB_NDR))
        self._buffer.append_bytes(
            pack_uint32(self.config.type_code(geometry_type, nested))
        )
        if self.config.extended and not nested:
            self._buffer.append_bytes(pack_uint32(self.config.srid))

    def _begin(self, geometry_type: GeometryType, kind: FrameKind | None) -> None:
        if self._stack:
            raise InvalidSequenceError(
                f"Cannot start {geometry_type.name.lower()}: "
                f"{self._stack[0].kind.value} is still open"
            )
        self._buffer.reset()
        self._header(geometry_type)
        if kind is not None:
            self._push(kind)
        logger.debug("Started %s", geometry_type.name.lower())

    def _push(self, kind: FrameKind) -> Frame:
        frame = Frame(kind=kind, offset=self._buffer.reserve_patch(UINT32_SIZE))
        self._stack.append(frame)
        return frame

    def _pop(self, kind: FrameKind) -> Frame:
        frame = self._expect(kind, f"finish {kind.value}")
        self._stack.pop()
        self._buffer.patch(frame.offset, pack_uint32(frame.count))
        if self._stack:
            self._stack[-1].count += 1
        return frame

    def _expect(self, kind: FrameKind, action: str) -> Frame:
        """Return the innermost frame, which must be of ``kind``"""
        if not self._stack:
            raise InvalidSequenceError(f"Cannot {action}: no geometry started")
        frame = self._stack[-1]
        if frame.kind is not kind:
            raise InvalidSequenceError(
                f"Cannot {action}: {frame.kind.value} is open"
            )
        return frame

    def _check_root(self, kind: FrameKind, action: str) -> None:
        if not self._stack:
            raise InvalidSequenceError(f"Cannot {action}: no geometry started")
        if self._stack[0].kind is not kind:
            raise InvalidSequenceError(
                f"Cannot {action} while building a {self._stack[0].kind.value}"
            )

    def _render(self, geometry_type: GeometryType) -> bytes | str:
        result = self._buffer.render(self.config.out_type)
        logger.debug(
            "Finished %s: %d bytes", geometry_type.name.lower(), len(self._buffer)
        )
        return result

    def _add_location(self, x: float, y: float) -> None:
        frame = self._stack[-1]
        if frame.kind not in (
            FrameKind.OUTER_RING,
            FrameKind.INNER_RING,
            FrameKind.LINESTRING,
        ):
            raise InvalidSequenceError(
                f"Cannot add location: {frame.kind.value} has no open ring"
            )
        self._buffer.append_bytes(pack_coordinate(x, y))
        frame.count += 1

    def _outer_ring_start(self) -> None:
        polygon = self._expect(FrameKind.POLYGON, "start outer ring")
        if polygon.count:
            raise InvalidSequenceError(
                "Cannot start outer ring: polygon already has one"
            )
        self._push(FrameKind.OUTER_RING)

    def _inner_ring_start(self) -> None:
        polygon = self._expect(FrameKind.POLYGON, "start inner ring")
        if not polygon.count:
            raise InvalidSequenceError(
                "Cannot start inner ring: outer ring must come first"
            )
        self._push(FrameKind.INNER_RING)

    # -- point ------------------------------------------------------------

    def make_point(self, x: float, y: float) -> bytes | str:
        """
        Encode a point in one call.

        Returns:
            The rendered point (21 bytes as WKB, 25 as EWKB)
        """
        self._begin(GeometryType.POINT, None)
        self._buffer.append_bytes(pack_coordinate(x, y))
        return self._render(GeometryType.POINT)

    # -- linestring -------------------------------------------------------

    def linestring_start(self) -> None:
        """Write the linestring header and reserve its point count"""
        self._begin(GeometryType.LINESTRING, FrameKind.LINESTRING)

    def linestring_add_location(self, x: float, y: float) -> None:
        """Append one point to the linestring"""
        self._check_root(FrameKind.LINESTRING, "add linestring location")
        self._add_location(x, y)

    def linestring_finish(self, count: int | None = None) -> bytes | str:
        """
        Patch the point count and render the linestring.

        Args:
            count: Expected number of points. If given, it must equal the
                number of locations added.

        Raises:
            CountMismatchError: If ``count`` disagrees with the locations added
        """
        frame = self._expect(FrameKind.LINESTRING, "finish linestring")
        if count is not None and count != frame.count:
            raise CountMismatchError(
                f"Linestring declared {count} points but {frame.count} were added"
            )
        self._pop(FrameKind.LINESTRING)
        return self._render(GeometryType.LINESTRING)

    # -- polygon ----------------------------------------------------------

    def polygon_start(self) -> None:
        """Write the polygon header and reserve its ring count"""
        self._begin(GeometryType.POLYGON, FrameKind.POLYGON)

    def polygon_outer_ring_start(self) -> None:
        self._check_root(FrameKind.POLYGON, "start polygon outer ring")
        self._outer_ring_start()

    def polygon_inner_ring_start(self) -> None:
        self._check_root(FrameKind.POLYGON, "start polygon inner ring")
        self._inner_ring_start()

    def polygon_add_location(self, x: float, y: float) -> None:
        """Append one point to the open ring"""
        self._check_root(FrameKind.POLYGON, "add polygon location")
        self._add_location(x, y)

    def polygon_outer_ring_finish(self) -> None:
        self._check_root(FrameKind.POLYGON, "finish polygon outer ring")
        self._pop(FrameKind.OUTER_RING)

    def polygon_inner_ring_finish(self) -> None:
        self._check_root(FrameKind.POLYGON, "finish polygon inner ring")
        self._pop(FrameKind.INNER_RING)

    def polygon_finish(self) -> bytes | str:
        """Patch the ring count and render the polygon"""
        self._check_root(FrameKind.POLYGON, "finish polygon")
        self._pop(FrameKind.POLYGON)
        return self._render(GeometryType.POLYGON)

    # -- multipolygon -----------------------------------------------------

    def multipolygon_start(self) -> None:
        """Write the multipolygon header and reserve its polygon count"""
        self._begin(GeometryType.MULTIPOLYGON, FrameKind.MULTIPOLYGON)

    def multipolygon_polygon_start(self) -> None:
        """Write a nested polygon header (no SRID) and reserve its ring count"""
        self._expect(FrameKind.MULTIPOLYGON, "start multipolygon member")
        self._header(GeometryType.POLYGON, nested=True)
        self._push(FrameKind.POLYGON)

    def multipolygon_outer_ring_start(self) -> None:
        self._check_root(FrameKind.MULTIPOLYGON, "start multipolygon outer ring")
        self._outer_ring_start()

    def multipolygon_inner_ring_start(self) -> None:
        self._check_root(FrameKind.MULTIPOLYGON, "start multipolygon inner ring")
        self._inner_ring_start()

    def multipolygon_add_location(self, x: float, y: float) -> None:
        """Append one point to the open ring of the current member"""
        self._check_root(FrameKind.MULTIPOLYGON, "add multipolygon location")
        self._add_location(x, y)

    def multipolygon_outer_ring_finish(self) -> None:
        self._check_root(FrameKind.MULTIPOLYGON, "finish multipolygon outer ring")
        self._pop(FrameKind.OUTER_RING)

    def multipolygon_inner_ring_finish(self) -> None:
        self._check_root(FrameKind.MULTIPOLYGON, "finish multipolygon inner ring")
        self._pop(FrameKind.INNER_RING)

    def multipolygon_polygon_finish(self) -> None:
        """Patch the member's ring count"""
        self._check_root(FrameKind.MULTIPOLYGON, "finish multipolygon member")
        self._pop(FrameKind.POLYGON)

    def multipolygon_finish(self) -> bytes | str:
        """Patch the polygon count and render the multipolygon"""
        self._pop(FrameKind.MULTIPOLYGON)
        return self._render(GeometryType.MULTIPOLYGON)
