import re
from typing import Any, BinaryIO

from cbor2 import (
    CBORDecodeEOF,
    CBORDecodeError,
    CBORDecoder,
    CBOREncodeError,
    CBOREncoder,
    break_marker,
)

from cborstream.core.errors import EncodeError, IncompleteFrame, MalformedFrame
from cborstream.core.ports.value_format import ValueFormat


class CBORFormat(ValueFormat):
    """
    cbor2-based implementation of the ValueFormat interface.

    - every CBOR data item is self-delimiting
    - the self-describe marker is tag 55799, which cbor2 strips on decode
    - premature end of stream is reported by cbor2 as CBORDecodeEOF
    - semantic tag decoders fail with plain TypeError/ValueError/re.error
      on bad payloads, these are malformed frames as well
    """
    name = "cbor"
    self_describe_marker = b"\xd9\xd9\xf7"

    def load(self, fp: BinaryIO) -> Any:
        try:
            value = CBORDecoder(fp).decode()
        except CBORDecodeEOF as exc:
            raise IncompleteFrame(str(exc)) from exc
        except (CBORDecodeError, TypeError, ValueError, re.error) as exc:
            raise MalformedFrame(str(exc) or type(exc).__name__) from exc

        # a lone break byte only makes sense inside an indefinite-length item
        if value is break_marker:
            raise MalformedFrame("unexpected break outside an indefinite-length item")
        return value

    def dump(self, value: Any, fp: BinaryIO) -> None:
        try:
            CBOREncoder(fp).encode(value)
        except (CBOREncodeError, TypeError, ValueError) as exc:
            raise EncodeError(str(exc)) from exc
