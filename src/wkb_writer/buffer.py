"""
Growable byte buffer with back-patchable slots.

Length fields of WKB geometries are only known once their elements have been
written. The buffer reserves zeroed space for such a field, hands out its
offset, and accepts exactly one patch for it later.
"""

from .encoding import convert_to_hex
from .errors import PatchError
from .geometry import OutType


class PatchableBuffer:
    """
    Byte accumulator used by WKBWriter.

    Example:
        >>> buf = PatchableBuffer()
        >>> slot = buf.reserve_patch(4)
        >>> buf.append_bytes(b"\\xff")
        5
        >>> buf.patch(slot, b"\\x01\\x00\\x00\\x00")
        >>> buf.render(OutType.HEX)
        '01000000FF'
    """

    def __init__(self) -> None:
        self._data = bytearray()
        # offset -> width of slots not yet patched
        self._pending: dict[int, int] = {}

    def __len__(self) -> int:
        return len(self._data)

    @property
    def pending_slots(self) -> list[int]:
        """Offsets of reserved slots still waiting for their patch"""
        return sorted(self._pending)

    def append_bytes(self, data: bytes) -> int:
        """
        Append raw bytes.

        Returns:
            The new buffer length
        """
        self._data += data
        return len(self._data)

    def reserve_patch(self, width: int) -> int:
        """
        Append ``width`` zero bytes to be filled in later.

        Returns:
            Offset of the reserved slot
        """
        if width <= 0:
            raise PatchError(f"Invalid slot width: {width}")
        offset = len(self._data)
        self._data += bytes(width)
        self._pending[offset] = width
        return offset

    def patch(self, offset: int, data: bytes) -> None:
        """
        Overwrite a reserved slot. Each slot accepts exactly one patch.

        Raises:
            PatchError: If the slot is unknown, already patched, of another
                width, or lies past the end of the buffer
        """
        end = offset + len(data)
        if offset < 0 or end > len(self._data):
            raise PatchError(
                f"Patch [{offset}:{end}] outside buffer of {len(self._data)} bytes"
            )
        width = self._pending.get(offset)
        if width is None:
            raise PatchError(f"No reserved slot at offset {offset}")
        if width != len(data):
            raise PatchError(
                f"Slot at offset {offset} is {width} bytes, got {len(data)}"
            )
        self._data[offset:end] = data
        del self._pending[offset]

    def getvalue(self) -> bytes:
        """Copy of the accumulated bytes"""
        return bytes(self._data)

    def render(self, out_type: OutType) -> bytes | str:
        """
        Render the accumulated bytes without clearing them.

        Args:
            out_type: BINARY for raw bytes, HEX for an uppercase hex string

        Raises:
            PatchError: If reserved slots have not been patched yet
        """
        if self._pending:
            raise PatchError(f"Unpatched slots at offsets {self.pending_slots}")
        if out_type is OutType.HEX:
            return convert_to_hex(self._data)
        return bytes(self._data)

    def reset(self) -> None:
        """Drop all bytes and pending slots"""
        self._data.clear()
        self._pending.clear()
