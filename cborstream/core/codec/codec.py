from typing import Any, Generic, Iterator, TypeVar

from cborstream.core.codec.decoder import Decoder
from cborstream.core.codec.encoder import Encoder
from cborstream.core.models.mode import SelfDescribeMode
from cborstream.core.models.outcome import Complete, Incomplete
from cborstream.core.ports.value_format import ValueFormat
from cborstream.infra.registry import get_value_format

Dec = TypeVar("Dec")
Enc = TypeVar("Enc")


class Codec(Generic[Dec, Enc]):
    """
    A Decoder and an Encoder bundled for a channel carrying both directions.

    The two item types are independent, so asymmetric protocols are
    expressed by mirrored codecs: a client uses Codec[Response, Request]
    and the server Codec[Request, Response]. Only the encoder is
    configurable; what the decoder accepts follows from its item type and
    the bytes themselves.
    """
    def __init__(
        self,
        decode_type: type[Dec] | Any = None,
        *,
        self_describe: SelfDescribeMode = SelfDescribeMode.NEVER,
        packed: bool = False,
        value_format: ValueFormat | None = None,
    ) -> None:
        value_format = value_format or get_value_format()
        self._decoder: Decoder[Dec] = Decoder(decode_type, value_format)
        self._encoder: Encoder[Enc] = Encoder(self_describe, packed, value_format)

    @classmethod
    def from_settings(cls, settings: Any, decode_type: type[Dec] | Any = None) -> "Codec[Dec, Enc]":
        """Build a codec from a CodecSettings-like object."""
        return cls(
            decode_type,
            self_describe=settings.self_describe,
            packed=settings.packed,
            value_format=get_value_format(settings.format),
        )

    @property
    def decoder(self) -> Decoder[Dec]:
        return self._decoder

    @property
    def encoder(self) -> Encoder[Enc]:
        return self._encoder

    def set_self_describe(self, mode: SelfDescribeMode | str) -> None:
        self._encoder.set_self_describe(mode)

    def set_packed(self, packed: bool) -> None:
        self._encoder.set_packed(packed)

    def decode(self, buffer: bytearray) -> Complete[Dec] | Incomplete:
        return self._decoder.decode(buffer)

    def iter_decode(self, buffer: bytearray) -> Iterator[Dec]:
        return self._decoder.iter_decode(buffer)

    def decode_all(self, buffer: bytearray) -> list[Dec]:
        return self._decoder.decode_all(buffer)

    def encode(self, item: Enc, buffer: bytearray) -> None:
        self._encoder.encode(item, buffer)
