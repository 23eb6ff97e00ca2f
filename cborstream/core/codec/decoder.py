import logging
from typing import Any, Generic, Iterator, TypeVar

from pydantic import ValidationError

from cborstream.core.codec.reader import CountingReader
from cborstream.core.codec.schema import Schema
from cborstream.core.errors import IncompleteFrame, MalformedFrame
from cborstream.core.models.outcome import Complete, Incomplete, INCOMPLETE
from cborstream.core.ports.value_format import ValueFormat
from cborstream.infra.registry import get_value_format

T = TypeVar("T")


class Decoder(Generic[T]):
    """
    Extracts at most one complete item per call from the front of a buffer
    that may hold zero, one or several frames plus a partial trailing one.

    There is no length prefix: the value format reads through a
    CountingReader and stops where the encoded value ends, and the count
    of bytes it pulled is the frame length. Trailing bytes belong to the
    next frame and are never inspected.

    Each call has three possible outcomes:
    - Complete: the frame's bytes are removed from the buffer, the item is
      returned
    - INCOMPLETE: the format ran out of bytes mid-value; the buffer is left
      untouched and the caller retries once more bytes were appended
    - MalformedFrame raised: the bytes are invalid, or the value does not fit
      the item type; the buffer is left untouched and the stream can't be
      resynchronised

    Decoder holds no state between calls. A stream that ends for good in the
    middle of a value is indistinguishable from one that is merely slow, so
    it stays INCOMPLETE forever; giving up is the transport's job.
    """
    def __init__(
        self,
        item_type: type[T] | Any = None,
        value_format: ValueFormat | None = None,
    ) -> None:
        self._schema = Schema(item_type)
        self._format = value_format or get_value_format()
        self._logger = logging.getLogger("core.codec.decoder")

    @property
    def item_type(self) -> Any:
        return self._schema.item_type

    @property
    def value_format(self) -> ValueFormat:
        return self._format

    def decode(self, buffer: bytearray) -> Complete[T] | Incomplete:
        with memoryview(buffer) as view:
            reader = CountingReader(view)
            try:
                raw = self._format.load(reader)
            except IncompleteFrame:
                return INCOMPLETE
            except MalformedFrame as exc:
                self._logger.debug(f"Malformed frame ({len(buffer)} bytes buffered): {exc}")
                raise
            finally:
                reader.release()

        try:
            item = self._schema.from_wire(raw)
        except ValidationError as exc:
            self._logger.debug(f"Frame does not match {self.item_type!r}: {exc}")
            raise MalformedFrame(f"frame does not match {self.item_type!r}") from exc

        consumed = reader.consumed
        del buffer[:consumed]
        return Complete(item, consumed)

    def iter_decode(self, buffer: bytearray) -> Iterator[T]:
        """
        Yield items until the buffer holds no further complete frame.
        MalformedFrame propagates; items yielded before it stay consumed.
        """
        while True:
            outcome = self.decode(buffer)
            if not outcome:
                return
            yield outcome.item

    def decode_all(self, buffer: bytearray) -> list[T]:
        return list(self.iter_decode(buffer))
