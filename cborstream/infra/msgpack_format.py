from typing import Any, BinaryIO

import msgpack

from cborstream.core.errors import EncodeError, IncompleteFrame, MalformedFrame
from cborstream.core.ports.value_format import ValueFormat


class MsgPackFormat(ValueFormat):
    """
    MsgPack-based implementation of the ValueFormat interface.

    - compact, self-delimiting binary encoding
    - no self-describe marker exists for MessagePack
    - integer map keys are allowed, packed records rely on them
    """
    name = "msgpack"
    self_describe_marker = None

    def load(self, fp: BinaryIO) -> Any:
        # read_size=1: the unpacker only pulls bytes it needs, so it never
        # reads into the next frame.
        unpacker = msgpack.Unpacker(fp, read_size=1, raw=False, strict_map_key=False)
        try:
            return unpacker.unpack()
        except msgpack.OutOfData as exc:
            raise IncompleteFrame("premature end of stream") from exc
        except (msgpack.UnpackException, ValueError, TypeError) as exc:
            raise MalformedFrame(str(exc) or type(exc).__name__) from exc

    def dump(self, value: Any, fp: BinaryIO) -> None:
        try:
            fp.write(msgpack.packb(value, use_bin_type=True))
        except (TypeError, ValueError, OverflowError) as exc:
            raise EncodeError(str(exc)) from exc
