"""Type classification helpers.

Everything the engine needs to know about a type beyond its members lives
here: whether it is a scalar that is never walked, whether it is an enum, how
to see through Annotated/Optional wrappers, and how to name it in messages.
"""

from __future__ import annotations

import pydoc
import types
import typing
from datetime import date, datetime, time, timedelta
from decimal import Decimal
from enum import Enum
from typing import Annotated, Any, NewType, NotRequired, Required, Union, get_args, get_origin
from uuid import UUID

# A single character. Registered as its own type so it can have a strategy
# separate from str.
Char = NewType("Char", str)

NoneType = type(None)

PRIMITIVE_TYPES: frozenset[Any] = frozenset(
    {bool, int, float, complex, str, bytes, bytearray, NoneType, Char}
)

# Values that are treated as opaque leaves: they have no members worth filling.
SCALAR_TYPES: frozenset[Any] = frozenset({datetime, date, time, timedelta, UUID, Decimal})

_REQUIREDNESS_WRAPPERS = (Required, NotRequired)


def unwrap_annotated(tp: Any) -> tuple[Any, tuple[Any, ...]]:
    """Strip Annotated/Required/NotRequired wrappers.

    Args:
        tp: A type hint.

    Returns:
        Tuple of (bare type, collected Annotated metadata).
    """
    metadata: tuple[Any, ...] = ()
    while True:
        origin = get_origin(tp)
        if origin is Annotated:
            metadata += tuple(tp.__metadata__)
            tp = tp.__origin__
        elif origin in _REQUIREDNESS_WRAPPERS:
            tp = get_args(tp)[0]
        else:
            return tp, metadata


def is_union(tp: Any) -> bool:
    """True for typing.Union[...] and X | Y hints."""
    return get_origin(tp) in (Union, types.UnionType)


def strip_optional(tp: Any) -> Any:
    """Turn Optional[T] into T; any other hint is returned unchanged."""
    if is_union(tp):
        args = [arg for arg in get_args(tp) if arg is not NoneType]
        if len(args) == 1:
            return args[0]
    return tp


def runtime_class(tp: Any) -> type | None:
    """The class instances of tp belong to, if there is one.

    list[int] gives list, a plain class gives itself, NewTypes give their
    supertype. Hints such as Union or Any have no runtime class.
    """
    tp, _ = unwrap_annotated(tp)
    if isinstance(tp, typing.NewType):
        return runtime_class(tp.__supertype__)
    if is_union(tp):
        return None
    origin = get_origin(tp)
    if isinstance(origin, type):
        return origin
    if isinstance(tp, type):
        return tp
    return None


def is_primitive(tp: Any) -> bool:
    """Builtin scalars (numbers, text, bytes, None)."""
    tp, _ = unwrap_annotated(tp)
    try:
        return tp in PRIMITIVE_TYPES
    except TypeError:
        # Unhashable hint
        return False


def is_scalar(tp: Any) -> bool:
    """Date/time, identifier and fixed-point types."""
    cls = runtime_class(tp)
    return cls is not None and any(issubclass(cls, scalar) for scalar in SCALAR_TYPES)


def is_enum(tp: Any) -> bool:
    cls = runtime_class(tp)
    return cls is not None and issubclass(cls, Enum)


def type_name(tp: Any) -> str:
    """Readable name for logs and error messages."""
    if isinstance(tp, typing.NewType):
        return tp.__name__
    if isinstance(tp, type) and get_origin(tp) is None:
        return tp.__qualname__
    return repr(tp).replace("typing.", "")


def locate_type(name: str) -> Any:
    """Resolve a type from a dotted name such as "decimal.Decimal".

    Builtin names ("int", "str") resolve without a module prefix.

    Returns:
        The located type, or None when nothing by that name exists.
    """
    if not name:
        raise ValueError("Type name must not be empty")
    located = pydoc.locate(name)
    return located if isinstance(located, type) else None
