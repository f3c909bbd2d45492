"""Collection shape detection for type hints."""

from __future__ import annotations

import collections
import collections.abc as abc
from dataclasses import dataclass, field
from typing import Any, get_args, get_origin, is_typeddict

from pydantic import BaseModel

from typesynth.reflection.types import runtime_class, unwrap_annotated

# Text and binary types are iterable but are generated as scalars.
_NON_COLLECTIONS = (str, bytes, bytearray, memoryview)

# Abstract collection origins and the concrete class built for them.
_CONCRETE_FOR_ABSTRACT: dict[type, type] = {
    abc.Iterable: list,
    abc.Collection: list,
    abc.Sequence: list,
    abc.MutableSequence: list,
    abc.Reversible: list,
    abc.Set: set,
    abc.MutableSet: set,
}


@dataclass(frozen=True)
class CollectionInfo:
    """Collection shape of a type.

    Attributes:
        is_collection: The type is iterable (and not text or bytes).
        is_array: The type is a variadic tuple, e.g. tuple[int, ...].
        element_types: Type arguments of the collection. A variadic tuple
            reports its single element type.
        container: Concrete class to build instances with, or None.
    """

    is_collection: bool = False
    is_array: bool = False
    element_types: tuple[Any, ...] = field(default_factory=tuple)
    container: type | None = None

    @property
    def is_supported(self) -> bool:
        """True when exactly one element type and a container are known."""
        return self.is_collection and len(self.element_types) == 1 and self.container is not None

    @property
    def element_type(self) -> Any:
        """The single element type, or None for unsupported shapes."""
        return self.element_types[0] if self.is_supported else None


def _is_record(cls: type) -> bool:
    """Iterable classes that are filled member by member rather than element by element."""
    return issubclass(cls, _NON_COLLECTIONS) or issubclass(cls, BaseModel) or is_typeddict(cls)


def get_collection_info(tp: Any) -> CollectionInfo:
    """Describe the collection shape of a type hint.

    Args:
        tp: Type hint to inspect, e.g. list[int], set[str], tuple[float, ...].

    Returns:
        CollectionInfo for the hint. Non-collections report is_collection=False.
    """
    if tp is None:
        raise TypeError("tp must not be None")

    tp, _ = unwrap_annotated(tp)
    cls = runtime_class(tp)
    if cls is None or _is_record(cls) or not issubclass(cls, abc.Iterable):
        return CollectionInfo()

    args = get_args(tp) if get_origin(tp) is not None else ()

    if cls is tuple:
        if len(args) == 2 and args[1] is Ellipsis:
            return CollectionInfo(
                is_collection=True, is_array=True, element_types=(args[0],), container=tuple
            )
        # Heterogeneous tuples have one type per position
        return CollectionInfo(is_collection=True, element_types=tuple(args), container=None)

    if issubclass(cls, abc.Mapping) and not issubclass(cls, collections.Counter):
        return CollectionInfo(is_collection=True, element_types=tuple(args), container=None)

    container = _CONCRETE_FOR_ABSTRACT.get(cls, cls)
    if getattr(container, "__abstractmethods__", None):
        container = None
    return CollectionInfo(is_collection=True, element_types=tuple(args), container=container)


def is_collection(tp: Any) -> bool:
    """Shorthand for get_collection_info(tp).is_collection."""
    return get_collection_info(tp).is_collection
