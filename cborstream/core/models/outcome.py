from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Complete(Generic[T]):
    """
    A frame was decoded and removed from the front of the buffer.

    `item` may legitimately be None (a null value on the wire), so callers
    test the outcome itself rather than the item.
    """
    item: T
    """
    The decoded item, already converted to the decoder's item type.
    """

    consumed: int
    """
    Number of bytes removed from the buffer for this frame.
    """

    def __bool__(self) -> bool:
        return True


@dataclass(frozen=True)
class Incomplete:
    """
    Not enough bytes yet. The buffer was left untouched; append more bytes
    and call decode again.
    """

    def __bool__(self) -> bool:
        return False


INCOMPLETE = Incomplete()
