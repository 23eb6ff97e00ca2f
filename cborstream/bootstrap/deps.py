import json
from typing import Any, Callable

from pydantic import ValidationError

from cborstream.bootstrap.config.settings import CodecSettings
from cborstream.core.codec.codec import Codec
from cborstream.core.transport.protocol import FramedProtocol


def get_settings(**overrides: Any) -> CodecSettings:
    try:
        return CodecSettings(**overrides)
    except ValidationError as ex:
        msg = ["Configuration validation failed:"]
        errs = json.loads(ex.json())
        for err in errs:
            msg.append(f"  {'.'.join(str(part) for part in err['loc'])}: {err['msg']}")
        raise SystemExit("\n".join(msg))


def get_codec(settings: CodecSettings, decode_type: Any = None) -> Codec:
    return Codec.from_settings(settings, decode_type)


def get_protocol_factory(settings: CodecSettings, decode_type: Any = None) -> Callable[[], FramedProtocol]:
    """
    Factory for `loop.create_connection()` / `loop.create_server()`.
    Every connection gets its own codec, so ONCE applies per connection.
    """
    def create_protocol() -> FramedProtocol:
        return FramedProtocol(
            codec=get_codec(settings, decode_type),
            max_buffer_size=settings.max_buffer_size,
        )

    return create_protocol
