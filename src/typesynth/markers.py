"""Markers that exclude members from generation.

A member excluded from generation keeps whatever value the constructor gave
it. Only the reference is kept: when the member holds an object, that
object's own members are still populated. Three spellings are recognised:

    name: Annotated[str, NOT_GENERATED]
    name: str = not_generated(default="fixed")            # dataclasses
    name: str = Field("fixed", json_schema_extra={"not_generated": True})  # pydantic
"""

import dataclasses
from collections.abc import Iterable, Mapping
from typing import Any

from typesynth.constants import NOT_GENERATED_KEY


class NotGenerated:
    """Annotated metadata marking a member as excluded from generation."""

    def __repr__(self) -> str:
        return "NOT_GENERATED"


NOT_GENERATED = NotGenerated()


def not_generated(**kwargs: Any) -> Any:
    """dataclasses.field() that is excluded from generation.

    Accepts the same keyword arguments as dataclasses.field(). The field keeps
    its default object, whose own members are still populated.
    """
    metadata = dict(kwargs.pop("metadata", None) or {})
    metadata[NOT_GENERATED_KEY] = True
    return dataclasses.field(metadata=metadata, **kwargs)


def has_not_generated_marker(metadata: Iterable[Any] | Mapping[str, Any] | None) -> bool:
    """Check Annotated metadata, field metadata or json_schema_extra for the marker."""
    if not metadata:
        return False
    if isinstance(metadata, Mapping):
        return bool(metadata.get(NOT_GENERATED_KEY, False))
    return any(item is NotGenerated or isinstance(item, NotGenerated) for item in metadata)
