import logging
from typing import Any

import yaml


def setup_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=level,
        format='%(asctime)s %(levelname)-8s [%(name)s:%(funcName)s] : %(message)s',
    )


def render_yaml(data: Any) -> str:
    """
    Render a decoded value as a YAML document.

    Map keys that YAML can't hold (tuples from array keys) and values it
    doesn't know are normalized first; bytes are kept as binary scalars.
    """
    return yaml.safe_dump(_normalize(data), sort_keys=False, explicit_start=True)


def _normalize(obj: Any) -> Any:
    if isinstance(obj, dict):
        return {_normalize_key(k): _normalize(v) for k, v in obj.items()}

    if isinstance(obj, (list, tuple)):
        return [_normalize(x) for x in obj]

    if obj is None or isinstance(obj, (str, bytes, bool, int, float)):
        return obj

    return repr(obj)


def _normalize_key(key: Any) -> Any:
    if key is None or isinstance(key, (str, bool, int, float)):
        return key
    return repr(key)
