import asyncio
import logging
from typing import Any, Generic, TypeVar

from cborstream.core.codec.codec import Codec
from cborstream.core.errors import MalformedFrame, StreamClosed

Dec = TypeVar("Dec")
Enc = TypeVar("Enc")

_CLOSED = object()


class _Failure:
    def __init__(self, exc: BaseException) -> None:
        self.exc = exc


class FramedProtocol(asyncio.Protocol, Generic[Dec, Enc]):
    """
    Drives a Codec from an asyncio transport.

    Incoming bytes are appended to a per-connection buffer and decoded until
    the codec reports INCOMPLETE; each decoded item is queued for
    `receive()`. Outgoing items are encoded once per `send()` call and
    written to the transport.

    If the buffer grows beyond `max_buffer_size` the connection is closed
    immediately. A malformed frame is fatal as well: frame boundaries can't
    be recovered, so the error is queued for the reader and the transport
    is closed.

    When the connection is lost, pending items remain readable; after them
    `receive()` raises StreamClosed.

    FramedProtocol does not open connections; pass a factory to
    `loop.create_connection()` or `loop.create_server()`.
    """
    def __init__(
        self,
        codec: Codec[Dec, Enc],
        max_buffer_size: int = 4 * 1024 * 1024,
    ) -> None:
        self._transport: asyncio.Transport = None   # type: ignore[assignment]
        self._codec = codec
        self._max_buffer_size = max_buffer_size
        self._buffer = bytearray()
        self._queue: asyncio.Queue[Any] = asyncio.Queue()
        self._closed = False
        self._peer: Any = None
        self._logger = logging.getLogger("core.transport.protocol")

    @property
    def buffered(self) -> int:
        return len(self._buffer)

    def connection_made(self, transport: asyncio.BaseTransport) -> None:
        self._transport = transport  # type: ignore[assignment]
        self._peer = transport.get_extra_info("peername")
        self._logger.debug(f"{self._peer} - Connection made")

    def connection_lost(self, exc: Exception | None) -> None:
        self._logger.debug(f"{self._peer} - Connection lost.")
        if self._buffer:
            self._logger.debug(f"{self._peer} - Dropping {len(self._buffer)} undecoded bytes")
        self._closed = True
        self._queue.put_nowait(_CLOSED)

    def data_received(self, data: bytes) -> None:
        if self._closed:
            return

        self._buffer.extend(data)

        if len(self._buffer) > self._max_buffer_size:
            self._logger.warning("Buffer overflow, closing connection")
            self._fail(StreamClosed("receive buffer overflow"))
            return

        try:
            for item in self._codec.iter_decode(self._buffer):
                self._queue.put_nowait(item)
        except MalformedFrame as exc:
            self._logger.warning(f"{self._peer} - Malformed frame, closing connection: {exc}")
            self._fail(exc)

    async def receive(self) -> Dec:
        item = await self._queue.get()
        if item is _CLOSED:
            # keep later receive() calls failing as well
            self._queue.put_nowait(_CLOSED)
            raise StreamClosed("connection closed")
        if isinstance(item, _Failure):
            self._queue.put_nowait(_CLOSED)
            raise item.exc
        return item

    def send(self, item: Enc) -> None:
        if self._closed or self._transport is None or self._transport.is_closing():
            raise StreamClosed("connection closed")

        frame = bytearray()
        self._codec.encode(item, frame)
        self._transport.write(bytes(frame))

    def close(self) -> None:
        if self._transport is not None:
            self._transport.close()

    def _fail(self, exc: BaseException) -> None:
        self._closed = True
        self._queue.put_nowait(_Failure(exc))
        self._transport.close()
