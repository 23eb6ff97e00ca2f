from typing import Any, BinaryIO, Protocol


class ValueFormat(Protocol):
    """
    Defines the interface to a self-delimiting binary value encoding.

    The codec never interprets the wire bytes itself: it hands a file-like
    object to the format and relies on the encoding's own structure to know
    where a value ends.

    Implementations must:
    - pull from `fp` only the bytes belonging to the value being decoded
    - signal end-of-input mid-value with IncompleteFrame
    - signal every other decode failure with MalformedFrame
    - signal unrepresentable values with EncodeError
    """

    name: str
    """
    Short name used in configuration, e.g. "cbor".
    """

    self_describe_marker: bytes | None
    """
    Fixed byte sequence announcing the format, or None when the format
    has no such marker.
    """

    def load(self, fp: BinaryIO) -> Any:
        """Decode exactly one value from the front of `fp`."""

    def dump(self, value: Any, fp: BinaryIO) -> None:
        """Encode `value` and write it to `fp`."""
