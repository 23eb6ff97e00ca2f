class CodecError(Exception):
    """Base class for every error raised by cborstream."""


class IncompleteFrame(CodecError):
    """
    Raised by a ValueFormat when the source ran out of bytes in the middle
    of a value. The Decoder turns it into INCOMPLETE; it never reaches the
    caller of `decode()`.
    """


class MalformedFrame(CodecError):
    """
    The bytes at the front of the buffer cannot form a valid frame, whatever
    arrives next. Terminal for the byte stream: the frame boundary is lost
    and the connection must be closed or reset.

    The underlying format or validation error is available as `__cause__`.
    """


class EncodeError(CodecError):
    """An item could not be represented in the value format."""


class ConfigurationError(CodecError):
    """Invalid codec configuration (unknown format, unsupported mode)."""


class StreamClosed(CodecError):
    """The connection behind a FramedProtocol is gone."""
