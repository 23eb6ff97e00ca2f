import logging
from typing import Generic, TypeVar

from cborstream.core.codec.schema import to_wire
from cborstream.core.codec.writer import BufferWriter
from cborstream.core.errors import ConfigurationError
from cborstream.core.models.mode import SelfDescribeMode
from cborstream.core.ports.value_format import ValueFormat
from cborstream.infra.registry import get_value_format

T = TypeVar("T")


class Encoder(Generic[T]):
    """
    Appends the wire representation of one item per call to an outgoing
    buffer.

    Two settings shape the output:
    - self_describe: whether the format's marker precedes the frame.
      ONCE is per-instance state, it turns into NEVER as soon as one
      encode call has written the marker. Give every connection its own
      Encoder.
    - packed: records (pydantic models, dataclasses) are written with
      field indexes instead of field names. Smaller, but the receiver must
      know the exact field order.

    On failure the bytes written so far stay in the buffer; nothing is
    rolled back.
    """
    def __init__(
        self,
        self_describe: SelfDescribeMode = SelfDescribeMode.NEVER,
        packed: bool = False,
        value_format: ValueFormat | None = None,
    ) -> None:
        self._format = value_format or get_value_format()
        self._self_describe = SelfDescribeMode.NEVER
        self._packed = packed
        self._logger = logging.getLogger("core.codec.encoder")
        self.set_self_describe(self_describe)

    @property
    def self_describe(self) -> SelfDescribeMode:
        return self._self_describe

    @property
    def packed(self) -> bool:
        return self._packed

    @property
    def value_format(self) -> ValueFormat:
        return self._format

    def set_self_describe(self, mode: SelfDescribeMode | str) -> None:
        mode = SelfDescribeMode(mode)
        if mode is not SelfDescribeMode.NEVER and self._format.self_describe_marker is None:
            raise ConfigurationError(
                f"Format '{self._format.name}' has no self-describe marker, "
                f"mode '{mode.value}' is not supported"
            )
        self._self_describe = mode

    def set_packed(self, packed: bool) -> None:
        self._packed = packed

    def encode(self, item: T, buffer: bytearray) -> None:
        writer = BufferWriter(buffer)
        value = to_wire(item, self._packed)

        if self._self_describe is not SelfDescribeMode.NEVER:
            writer.write(self._format.self_describe_marker)  # type: ignore[arg-type]
            if self._self_describe is SelfDescribeMode.ONCE:
                self._logger.debug("Self-describe marker emitted, switching to never")
                self._self_describe = SelfDescribeMode.NEVER

        self._format.dump(value, writer)  # type: ignore[arg-type]
        self._logger.debug(f"Encoded frame of {writer.written} bytes")
