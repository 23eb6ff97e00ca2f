from functools import lru_cache

from cborstream.core.errors import ConfigurationError
from cborstream.core.ports.value_format import ValueFormat
from cborstream.infra.cbor_format import CBORFormat
from cborstream.infra.msgpack_format import MsgPackFormat

FORMATS: dict[str, type[ValueFormat]] = {
    CBORFormat.name: CBORFormat,
    MsgPackFormat.name: MsgPackFormat,
}

DEFAULT_FORMAT = CBORFormat.name


@lru_cache
def get_value_format(name: str = DEFAULT_FORMAT) -> ValueFormat:
    """Formats are stateless, one shared instance per name is enough."""
    try:
        factory = FORMATS[name.lower()]
    except KeyError:
        raise ConfigurationError(
            f"Unknown value format '{name}', expected one of: {', '.join(sorted(FORMATS))}"
        ) from None
    return factory()
