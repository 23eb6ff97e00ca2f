import dataclasses
import types
import typing
from collections.abc import Hashable, Mapping, Sequence, Set
from enum import Enum
from functools import lru_cache
from typing import Any, Annotated, Union

from pydantic import BaseModel, TypeAdapter


def is_record(tp: Any) -> bool:
    """True for pydantic models and dataclasses, classes or instances."""
    if isinstance(tp, type):
        return issubclass(tp, BaseModel) or dataclasses.is_dataclass(tp)
    return isinstance(tp, BaseModel) or dataclasses.is_dataclass(tp)


def record_fields(tp: type) -> list[tuple[str, Any]]:
    """
    Field names and annotations of a record type, in declaration order.
    This order is the one packed encoding relies on.
    """
    if issubclass(tp, BaseModel):
        return [(name, info.annotation) for name, info in tp.model_fields.items()]

    hints = typing.get_type_hints(tp, include_extras=True)
    return [(f.name, hints.get(f.name, Any)) for f in dataclasses.fields(tp)]


def to_wire(value: Any, packed: bool = False) -> Any:
    """
    Convert an item into plain values the value format can encode.

    Records become maps keyed by field name, or by field index when `packed`
    is set. The choice only affects records: scalars, maps and sequences keep
    their shape and are converted recursively.
    """
    if is_record(value):
        names = [name for name, _ in record_fields(type(value))]
        if packed:
            return {index: to_wire(getattr(value, name), packed) for index, name in enumerate(names)}
        return {name: to_wire(getattr(value, name), packed) for name in names}

    if isinstance(value, Enum):
        return value.value

    if isinstance(value, dict):
        return {to_wire(k, packed): to_wire(v, packed) for k, v in value.items()}

    if isinstance(value, (list, tuple)):
        return [to_wire(v, packed) for v in value]

    return value


@lru_cache(maxsize=None)
def get_adapter(tp: Any) -> TypeAdapter:
    return TypeAdapter(tp)


class Schema:
    """
    Decode-side view of an item type.

    Restores field names on records that arrived packed (index-keyed maps
    or positional arrays) and validates the result with pydantic in strict
    mode: a wire value of the wrong type is a mismatch, never coerced (text
    "42" is not an int, 1.0 is not an int, "yes" is not a bool). With no
    item type the raw decoded value is returned as is.

    Strict validation only takes instances for enums, tuples, sets and
    dataclasses, so the restore step builds those from their wire shape.
    """

    def __init__(self, item_type: Any = None) -> None:
        self.item_type = item_type
        self._adapter: TypeAdapter | None = None
        if item_type is not None and item_type is not Any:
            self._adapter = get_adapter(item_type)

    def from_wire(self, raw: Any) -> Any:
        """Raises pydantic.ValidationError when `raw` does not fit the type."""
        if self._adapter is None:
            return raw
        return self._adapter.validate_python(self._restore(raw, self.item_type), strict=True)

    def _restore(self, raw: Any, tp: Any) -> Any:
        origin = typing.get_origin(tp)
        args = typing.get_args(tp)

        if origin is Annotated:
            return self._restore(raw, args[0])

        if origin in (Union, types.UnionType):
            members = [a for a in args if a is not type(None)]
            if raw is None or len(members) != 1:
                return raw
            return self._restore(raw, members[0])

        if is_record(tp):
            return self._restore_record(raw, tp)

        if isinstance(tp, type) and issubclass(tp, Enum):
            # exact value type: True must not match an IntEnum member 1
            return next((m for m in tp if type(m.value) is type(raw) and m.value == raw), raw)

        if origin is None:
            return raw

        if isinstance(origin, type) and issubclass(origin, Mapping) and isinstance(raw, Mapping):
            key_type, value_type = args if len(args) == 2 else (Any, Any)
            return {
                self._restore(k, key_type): self._restore(v, value_type)
                for k, v in raw.items()
            }

        if origin is tuple and isinstance(raw, (list, tuple)):
            if len(args) == 2 and args[1] is Ellipsis:
                return tuple(self._restore(v, args[0]) for v in raw)
            if len(args) == len(raw):
                return tuple(self._restore(v, t) for v, t in zip(raw, args))
            return raw

        if isinstance(origin, type) and issubclass(origin, Set) and isinstance(raw, (list, tuple)):
            items = [self._restore(v, args[0] if args else Any) for v in raw]
            if not all(isinstance(v, Hashable) for v in items):
                return items
            return frozenset(items) if origin is frozenset else set(items)

        if isinstance(origin, type) and issubclass(origin, Sequence) and isinstance(raw, (list, tuple)):
            item_type = args[0] if args else Any
            return [self._restore(v, item_type) for v in raw]

        return raw

    def _restore_record(self, raw: Any, tp: type) -> Any:
        fields = record_fields(tp)
        annotations = dict(fields)

        if isinstance(raw, (list, tuple)):
            raw = dict(enumerate(raw))

        if not isinstance(raw, Mapping):
            return raw

        restored = {}
        for key, value in raw.items():
            # bool is an int subclass but never a field index
            if isinstance(key, int) and not isinstance(key, bool) and 0 <= key < len(fields):
                name, annotation = fields[key]
            else:
                name = key
                annotation = annotations.get(key, Any)
            restored[name] = self._restore(value, annotation)

        if issubclass(tp, BaseModel):
            return restored

        # Strict mode rejects a dict for a dataclass. Check the fields one by
        # one, then build the instance from values that are already exact.
        for name, value in restored.items():
            if name in annotations:
                restored[name] = get_adapter(annotations[name]).validate_python(value, strict=True)
        return get_adapter(tp).validate_python(restored)
