"""Exception types raised by the writer."""


class WKBWriterError(Exception):
    """Base error of the package."""


class InvalidSequenceError(WKBWriterError):
    """A builder method was called out of order."""


class CountMismatchError(WKBWriterError, ValueError):
    """A declared element count disagrees with the elements appended."""


class PatchError(WKBWriterError):
    """A reserved buffer slot was misused."""


class EncodingError(WKBWriterError, ValueError):
    """A value does not fit its field, or hex input is malformed."""
