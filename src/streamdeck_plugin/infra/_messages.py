"""Base message type and the JSON (de)serialization helpers it's built on.

Messages are dataclasses. Field names are written in lowerCamelCase on the wire,
and the event name travels in the ``event`` key of the envelope. Decoding is driven
by the dataclass type hints, which is why message modules should only use
annotations that can be inspected at runtime."""

from __future__ import annotations

import dataclasses
import enum
import functools
import json
import types
from typing import Any, ClassVar, Dict, List, Optional, Type, TypeVar, Union, cast

from typing_extensions import get_args, get_origin, get_type_hints

from .._exceptions import ProtocolError

_UnionType = getattr(types, "UnionType", None)


@functools.lru_cache(maxsize=None)
def _camel_case(snake_name: str) -> str:
    parts = snake_name.split("_")
    return parts[0] + "".join(part.capitalize() for part in parts[1:])


def wire_key(field: dataclasses.Field) -> str:
    """Key used for a dataclass field in JSON. Can be overridden with
    `dataclasses.field(metadata={"key": ...})`."""
    return field.metadata.get("key", _camel_case(field.name))


@functools.lru_cache(maxsize=None)
def get_type_hints_cached(cls: Type[Any]) -> Dict[str, Any]:
    return get_type_hints(cls)  # type: ignore


def _is_union(annotation: Any) -> bool:
    origin = get_origin(annotation)
    return origin is Union or (_UnionType is not None and origin is _UnionType)


def _is_optional(annotation: Any) -> bool:
    return _is_union(annotation) and type(None) in get_args(annotation)


def _prepare_for_serialization(value: Any) -> Any:
    """Convert dataclasses, enums and tuples into plain JSON values. `None` fields
    are dropped from objects: on the wire, absent and null mean the same thing."""

    to_json = getattr(value, "to_json", None)
    if callable(to_json) and not isinstance(value, type):
        return to_json()

    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        out: Dict[str, Any] = {}
        for field in dataclasses.fields(value):
            v = getattr(value, field.name)
            if v is None or not field.metadata.get("wire", True):
                continue
            out[wire_key(field)] = _prepare_for_serialization(v)
        return out

    # Check enums before scalars: IntEnum members are also ints.
    if isinstance(value, enum.Enum):
        return value.value
    if isinstance(value, (list, tuple)):
        return [_prepare_for_serialization(v) for v in value]
    if isinstance(value, dict):
        return {k: _prepare_for_serialization(v) for k, v in value.items()}
    return value


def _coerce_from_json(value: Any, annotation: Any, path: str) -> Any:
    """Check a decoded JSON value against a type annotation, and convert it into the
    annotated type. Raises `ProtocolError` on mismatch."""

    if annotation is Any:
        return value

    if _is_union(annotation):
        args = get_args(annotation)
        if value is None and type(None) in args:
            return None
        candidates = [a for a in args if a is not type(None)]
        if len(candidates) == 1:
            return _coerce_from_json(value, candidates[0], path)
        for candidate in candidates:
            try:
                return _coerce_from_json(value, candidate, path)
            except ProtocolError:
                continue
        raise ProtocolError(f"{path}: {value!r} does not match {annotation}")

    # Types with custom wire formats, eg colors.
    from_json = getattr(annotation, "from_json", None)
    if callable(from_json):
        try:
            return from_json(value)
        except (TypeError, ValueError) as e:
            raise ProtocolError(f"{path}: {e}") from e

    if dataclasses.is_dataclass(annotation):
        return structure(cast(type, annotation), value, path)

    if isinstance(annotation, type) and issubclass(annotation, enum.Enum):
        try:
            return annotation(value)
        except ValueError as e:
            raise ProtocolError(f"{path}: {e}") from e

    if annotation is bool:
        if not isinstance(value, bool):
            raise ProtocolError(f"{path}: expected a boolean, got {value!r}")
        return value
    if annotation is int:
        if isinstance(value, bool) or not isinstance(value, int):
            raise ProtocolError(f"{path}: expected an integer, got {value!r}")
        return value
    if annotation is float:
        # These are both `number` in Javascript.
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ProtocolError(f"{path}: expected a number, got {value!r}")
        return float(value)
    if annotation is str:
        if not isinstance(value, str):
            raise ProtocolError(f"{path}: expected a string, got {value!r}")
        return value

    origin = get_origin(annotation)
    if origin is list:
        if not isinstance(value, list):
            raise ProtocolError(f"{path}: expected an array, got {value!r}")
        (item_type,) = get_args(annotation) or (Any,)
        return [
            _coerce_from_json(v, item_type, f"{path}[{i}]") for i, v in enumerate(value)
        ]

    if origin is tuple:
        if not isinstance(value, (list, tuple)):
            raise ProtocolError(f"{path}: expected an array, got {value!r}")
        args = get_args(annotation)
        if len(args) == 2 and args[1] is ...:
            args = (args[0],) * len(value)
        elif len(args) != len(value):
            raise ProtocolError(
                f"{path}: expected {len(args)} items, got {len(value)}"
            )
        return tuple(
            _coerce_from_json(v, typ, f"{path}[{i}]")
            for i, (v, typ) in enumerate(zip(value, args))
        )

    if origin is dict:
        if not isinstance(value, dict):
            raise ProtocolError(f"{path}: expected an object, got {value!r}")
        args = get_args(annotation)
        if len(args) == 2 and args[1] is not Any:
            return {
                k: _coerce_from_json(v, args[1], f"{path}.{k}")
                for k, v in value.items()
            }
        return dict(value)

    raise TypeError(f"Unsupported annotation {annotation} at {path}")


TDataclass = TypeVar("TDataclass")


def structure(cls: Type[TDataclass], value: Any, path: str = "$") -> TDataclass:
    """Build a dataclass instance from a decoded JSON object.

    Fields that aren't present (or are null) fall back to the dataclass default. If
    there's no default, `Optional` fields become `None`; anything else is a required
    field, and its absence raises `ProtocolError`. Unrecognized keys are ignored."""
    if not isinstance(value, dict):
        raise ProtocolError(f"{path}: expected an object, got {value!r}")

    hints = get_type_hints_cached(cls)
    kwargs: Dict[str, Any] = {}
    for field in dataclasses.fields(cast(Any, cls)):
        if not field.init or not field.metadata.get("wire", True):
            continue
        key = wire_key(field)
        annotation = hints[field.name]
        if value.get(key) is not None:
            kwargs[field.name] = _coerce_from_json(
                value[key], annotation, f"{path}.{key}"
            )
        elif (
            field.default is not dataclasses.MISSING
            or field.default_factory is not dataclasses.MISSING
        ):
            continue
        elif _is_optional(annotation):
            kwargs[field.name] = None
        elif key in value:
            raise ProtocolError(f"{path}.{key}: required field is null")
        else:
            raise ProtocolError(f"{path}: missing required field {key!r}")
    return cls(**kwargs)


def unstructure(value: Any) -> Any:
    """Inverse of `structure()`."""
    return _prepare_for_serialization(value)


@dataclasses.dataclass
class UnknownMessage:
    """Fields for catch-all messages. Mixed into a `catch_all=True` subclass of a
    message base class, in front of it."""

    event_name: str
    raw_payload: Any = None
    """The unparsed `payload` value of the envelope, or None if it had none."""
    raw: Dict[str, Any] = dataclasses.field(
        default_factory=dict, compare=False, repr=False
    )
    """The complete envelope, as received."""

    def get_event_name(self) -> str:
        return self.event_name

    def as_serializable_dict(self) -> Dict[str, Any]:
        if self.raw:
            return dict(self.raw)
        out: Dict[str, Any] = {"event": self.event_name}
        if self.raw_payload is not None:
            out["payload"] = self.raw_payload
        return out


T = TypeVar("T", bound="Message")


class Message:
    """Base message type for communication with the Stream Deck application.

    Subclasses are dataclasses that declare the event name they're sent or received
    under:

        @dataclasses.dataclass
        class KeyDown(Event, event="keyDown"):
            ...

    A subclass declared with `catch_all=True` is constructed for event names that
    have no registered class. It must accept `event_name`, `raw_payload` and `raw`
    keyword arguments."""

    _event_name: ClassVar[Optional[str]] = None
    _catch_all: ClassVar[bool] = False

    def __init_subclass__(
        cls, event: Optional[str] = None, catch_all: bool = False, **kwargs: Any
    ) -> None:
        super().__init_subclass__(**kwargs)
        cls._event_name = event
        cls._catch_all = catch_all
        Message._subclass_from_event_name.__func__.cache_clear()  # type: ignore

    def get_event_name(self) -> str:
        """Event name this message is sent under."""
        name = type(self)._event_name
        assert name is not None, f"{type(self).__name__} has no event name"
        return name

    def as_serializable_dict(self) -> Dict[str, Any]:
        """Convert a Python Message object into a JSON-serializable envelope."""
        out: Dict[str, Any] = {"event": self.get_event_name()}
        out.update(_prepare_for_serialization(self))
        return out

    def serialize(self) -> str:
        """Convert a Python Message object into a JSON text frame."""
        return json.dumps(self.as_serializable_dict(), separators=(",", ":"))

    @classmethod
    def deserialize(cls: Type[T], message: Union[str, bytes]) -> T:
        """Convert a JSON text frame into a Python Message object."""
        try:
            mapping = json.loads(message)
        except (ValueError, RecursionError) as e:
            raise ProtocolError(f"frame is not valid JSON: {e}") from e
        return cls.from_envelope(mapping)

    @classmethod
    def from_envelope(cls: Type[T], mapping: Any) -> T:
        """Convert an already-parsed JSON envelope into a Python Message object."""
        if not isinstance(mapping, dict):
            raise ProtocolError(f"expected a JSON object, got {type(mapping).__name__}")
        event_name = mapping.get("event")
        if not isinstance(event_name, str):
            raise ProtocolError("envelope has no string 'event' field")

        message_type = cls._subclass_from_event_name().get(event_name)
        if message_type is None:
            catch_all = cls._catch_all_subclass()
            if catch_all is None:
                raise ProtocolError(f"unknown event {event_name!r}", event_name)
            return catch_all(  # type: ignore
                event_name=event_name,
                raw_payload=mapping.get("payload"),
                raw=mapping,
            )

        try:
            return structure(message_type, mapping, event_name)
        except ProtocolError as e:
            raise ProtocolError(str(e), event_name) from e

    @classmethod
    @functools.lru_cache(maxsize=100)
    def _subclass_from_event_name(cls: Type[T]) -> Dict[str, Type[T]]:
        out: Dict[str, Type[T]] = {}
        for sub in cls.get_subclasses():
            if sub._event_name is not None:
                out[sub._event_name] = sub
        return out

    @classmethod
    def _catch_all_subclass(cls: Type[T]) -> Optional[Type[T]]:
        for sub in cls.get_subclasses():
            if sub._catch_all:
                return sub
        return None

    @classmethod
    def get_subclasses(cls: Type[T]) -> List[Type[T]]:
        """Recursively get message subclasses."""

        def _get_subclasses(typ: Type[T]) -> List[Type[T]]:
            out = []
            for sub in typ.__subclasses__():
                out.append(sub)
                out.extend(_get_subclasses(sub))
            return out

        return _get_subclasses(cls)
