class CountingReader:
    """
    Read-only file-like object over a memoryview that records how many
    bytes were handed to its caller.

    Value decoders give no way to ask "how far did you get", so the decoder
    reads through this wrapper and treats `consumed` as the length of the
    frame. No buffering, no look-ahead and no seeking: the count is exactly
    what the parser pulled.

    At end of input `read()` returns b"" like any exhausted stream; it is the
    value format that decides whether that means "incomplete".
    """

    def __init__(self, view: memoryview) -> None:
        self._view = view
        self._consumed = 0

    @property
    def consumed(self) -> int:
        return self._consumed

    def readable(self) -> bool:
        return True

    def read(self, size: int = -1) -> bytes:
        remaining = len(self._view) - self._consumed
        if size is None or size < 0 or size > remaining:
            size = remaining
        if size == 0:
            return b""

        # tobytes() on a temporary slice: no sub-view outlives the call,
        # so the underlying bytearray can be resized afterwards.
        data = self._view[self._consumed:self._consumed + size].tobytes()
        self._consumed += size
        return data

    def release(self) -> None:
        self._view = memoryview(b"")
