"""Serialization of request bodies and decoding of Gerrit response bodies."""

import json
from collections.abc import MutableMapping, MutableSequence
from dataclasses import dataclass
from typing import Any, Optional, Type, Union, get_args, get_origin

from gerrit.rest import MAGIC_PREFIX
from gerrit.rest._protocols import ByteSink
from gerrit.rest.errors import ResponseDecodeError

# Methods tried in order to turn a model into JSON compatible data, and back
_DUMP_METHODS = ("model_dump", "to_json", "to_dict")
_LOAD_METHODS = ("model_validate", "from_dict", "from_json")

_SCALARS = (str, int, float, bool)


@dataclass(frozen=True)
class Discard:
    """Ignore the response body."""


@dataclass(frozen=True)
class RawSink:
    """Copy the response body verbatim into writer, without JSON decoding.

    For endpoints that do not return JSON, e.g. patches and file contents.
    """

    writer: ByteSink


@dataclass(frozen=True)
class Typed:
    """Decode the JSON response body, optionally into cls."""

    cls: Optional[Type] = None


Destination = Union[Discard, RawSink, Typed, None]


def strip_magic_prefix(body: bytes) -> bytes:
    """Remove the ")]}'" XSSI guard line from a response body if present.

    All standard Gerrit APIs prepend it to JSON responses, though some plugins
    do not. Only the first line is considered.
    """
    if body.startswith(MAGIC_PREFIX):
        return body[len(MAGIC_PREFIX) :]
    return body


def decode_body(body: bytes, cls: Optional[Type] = None, response: Any = None) -> Any:
    """Strip the magic prefix, parse the JSON and convert it to cls.

    Raises:
        ResponseDecodeError: If the body is not valid JSON
    """
    try:
        data = json.loads(strip_magic_prefix(body))
    except ValueError as e:
        raise ResponseDecodeError(f"Could not decode JSON response: {e}", response=response) from e
    return deserialize(data, cls)


def serialize_body(body: Any) -> Any:
    """Turn a request body into JSON compatible data.

    Dicts, lists, tuples and scalars are walked recursively. Models are converted
    with model_dump() (pydantic), to_json() or to_dict(), whichever exists first.

    Raises:
        ValueError: For bytes, which have no JSON representation
        TypeError: For any other unsupported type
    """
    if body is None or isinstance(body, _SCALARS):
        return body
    if isinstance(body, bytes):
        raise ValueError("bytes data is not supported")
    if isinstance(body, dict):
        return {k: serialize_body(v) for k, v in body.items()}
    if isinstance(body, (list, tuple)):
        return [serialize_body(item) for item in body]
    for method in _DUMP_METHODS:
        dump = getattr(body, method, None)
        if callable(dump):
            return serialize_body(dump())
    raise TypeError(f"Cannot serialize value of type {type(body).__name__}")


def _origin(cls: Any) -> Optional[type]:
    origin = get_origin(cls) or cls
    return origin if isinstance(origin, type) else None


def _is_list_type(cls: Any) -> bool:
    origin = _origin(cls)
    return origin is not None and issubclass(origin, MutableSequence)


def _is_dict_type(cls: Any) -> bool:
    origin = _origin(cls)
    return origin is not None and issubclass(origin, MutableMapping)


def _is_plain(cls: Any) -> bool:
    return cls is None or cls in _SCALARS or _is_dict_type(cls) or _is_list_type(cls)


def deserialize(data: Any, cls: Optional[Type] = None) -> Any:
    """Convert decoded JSON to cls.

    Plain types (dict, list, str, ...) leave the data as-is, ``List[Model]``
    converts every item.
    """
    if _is_list_type(cls):
        args = get_args(cls)
        if not args or _is_plain(args[0]):
            return data
        return [_load(item, args[0]) for item in data]
    if _is_plain(cls):
        return data
    return _load(data, cls)


def _load(data: Any, cls: Type) -> Any:
    for method in _LOAD_METHODS:
        load = getattr(cls, method, None)
        if callable(load):
            return load(data)
    raise TypeError(f"Cannot deserialize to {cls.__name__}, it has none of {', '.join(_LOAD_METHODS)}()")
