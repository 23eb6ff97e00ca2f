class BufferWriter:
    """
    Append-only file-like sink over a bytearray.

    Every write lands verbatim at the end of the buffer and always succeeds.
    """

    def __init__(self, buffer: bytearray) -> None:
        self._buffer = buffer
        self._written = 0

    @property
    def written(self) -> int:
        return self._written

    def writable(self) -> bool:
        return True

    def write(self, data: bytes) -> int:
        self._buffer.extend(data)
        self._written += len(data)
        return len(data)

    def flush(self) -> None:
        pass
