"""Uniform read/write access to the data members of a type.

A member is anything the engine can fill in on an instance: an annotated
attribute, a dataclass field, a pydantic model field, a property with a
return annotation, or a TypedDict key. MemberAccessor hides which of these
it is.
"""

from __future__ import annotations

import dataclasses
import inspect
import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, ClassVar, get_origin, get_type_hints, is_typeddict

from pydantic import BaseModel

from typesynth.markers import has_not_generated_marker
from typesynth.reflection.types import (
    is_enum,
    is_primitive,
    is_scalar,
    runtime_class,
    type_name,
    unwrap_annotated,
)

logger = logging.getLogger(__name__)


def _missing_as_none(target: Any, name: str) -> Any:
    return getattr(target, name, None)


@dataclass(frozen=True)
class MemberAccessor:
    """A readable (and usually writable) data member of a type."""

    name: str
    declaring_type: type
    member_type: Any
    getter: Callable[[Any], Any] = field(compare=False, repr=False)
    setter: Callable[[Any, Any], None] | None = field(default=None, compare=False, repr=False)
    is_property: bool = False
    is_indexed: bool = False
    excluded: bool = False

    @property
    def read_only(self) -> bool:
        return self.setter is None

    def get_value(self, target: Any) -> Any:
        """Read the member from target. Unset attributes read as None."""
        return self.getter(target)

    def set_value(self, target: Any, value: Any) -> None:
        """Write the member on target. Read-only members are left untouched."""
        if self.setter is not None:
            self.setter(target, value)

    def __str__(self) -> str:
        return f"{type_name(self.member_type)} {type_name(self.declaring_type)}.{self.name}"

    @classmethod
    def for_attribute(
        cls,
        name: str,
        declaring_type: type,
        member_type: Any,
        read_only: bool = False,
        excluded: bool = False,
    ) -> "MemberAccessor":
        """Accessor for a plain instance attribute (including dataclass/pydantic fields)."""
        return cls(
            name=name,
            declaring_type=declaring_type,
            member_type=member_type,
            getter=lambda target: _missing_as_none(target, name),
            setter=None if read_only else (lambda target, value: setattr(target, name, value)),
            excluded=excluded,
        )

    @classmethod
    def for_property(
        cls, name: str, declaring_type: type, member_type: Any, prop: property, excluded: bool
    ) -> "MemberAccessor":
        """Accessor for a property; properties without a setter are read-only."""
        return cls(
            name=name,
            declaring_type=declaring_type,
            member_type=member_type,
            getter=lambda target: _missing_as_none(target, name),
            setter=None if prop.fset is None else (lambda target, value: setattr(target, name, value)),
            is_property=True,
            excluded=excluded,
        )

    @classmethod
    def for_key(
        cls, name: str, declaring_type: type, member_type: Any, excluded: bool = False
    ) -> "MemberAccessor":
        """Accessor for a TypedDict key, read and written by indexing."""
        return cls(
            name=name,
            declaring_type=declaring_type,
            member_type=member_type,
            getter=lambda target: target.get(name),
            setter=lambda target, value: target.__setitem__(name, value),
            is_indexed=True,
            excluded=excluded,
        )


def safe_type_hints(obj: Any, include_extras: bool = True) -> dict[str, Any]:
    """get_type_hints() that returns {} for objects whose hints cannot be resolved."""
    try:
        return get_type_hints(obj, include_extras=include_extras)
    except (NameError, TypeError, AttributeError) as e:
        logger.debug(f"Could not resolve type hints of {obj!r}: {e}")
        return {}


def _declaring_class(cls: type, name: str) -> type:
    """First class in the MRO that annotates name itself."""
    for klass in cls.__mro__:
        if name in inspect.get_annotations(klass):
            return klass
    return cls


def _is_frozen(cls: type) -> bool:
    if dataclasses.is_dataclass(cls):
        return cls.__dataclass_params__.frozen  # type: ignore[attr-defined]
    if issubclass(cls, BaseModel):
        return bool(cls.model_config.get("frozen", False))
    return False


def _pydantic_members(cls: type[BaseModel]) -> list[MemberAccessor]:
    frozen = _is_frozen(cls)
    hints = safe_type_hints(cls)
    members = []
    for name, info in cls.model_fields.items():
        hint = hints.get(name, info.annotation)
        member_type, annotated = unwrap_annotated(hint)
        extra = info.json_schema_extra if isinstance(info.json_schema_extra, dict) else None
        excluded = (
            has_not_generated_marker(annotated)
            or has_not_generated_marker(info.metadata)
            or has_not_generated_marker(extra)
        )
        members.append(
            MemberAccessor.for_attribute(
                name,
                _declaring_class(cls, name),
                member_type,
                read_only=frozen or bool(info.frozen),
                excluded=excluded,
            )
        )
    return members


def _typeddict_members(cls: type) -> list[MemberAccessor]:
    members = []
    for name, hint in safe_type_hints(cls).items():
        member_type, annotated = unwrap_annotated(hint)
        members.append(
            MemberAccessor.for_key(
                name, cls, member_type, excluded=has_not_generated_marker(annotated)
            )
        )
    return members


def _attribute_members(cls: type) -> list[MemberAccessor]:
    frozen = _is_frozen(cls)
    field_metadata = (
        {f.name: f.metadata for f in dataclasses.fields(cls)}
        if dataclasses.is_dataclass(cls)
        else {}
    )
    members = []
    for name, hint in safe_type_hints(cls).items():
        if name.startswith("__") or get_origin(hint) is ClassVar:
            continue
        if dataclasses.is_dataclass(cls) and name not in field_metadata:
            # InitVar and other pseudo-fields
            continue
        member_type, annotated = unwrap_annotated(hint)
        excluded = has_not_generated_marker(annotated) or has_not_generated_marker(
            field_metadata.get(name)
        )
        members.append(
            MemberAccessor.for_attribute(
                name, _declaring_class(cls, name), member_type, read_only=frozen, excluded=excluded
            )
        )
    return members


def _property_members(cls: type) -> list[MemberAccessor]:
    members = []
    seen: set[str] = set()
    for klass in cls.__mro__:
        if klass is object or klass is BaseModel:
            continue
        for name, attr in vars(klass).items():
            if name in seen or not isinstance(attr, property):
                continue
            seen.add(name)
            if attr.fget is None:
                continue
            hint = safe_type_hints(attr.fget).get("return")
            if hint is None:
                continue
            member_type, annotated = unwrap_annotated(hint)
            members.append(
                MemberAccessor.for_property(
                    name, klass, member_type, attr, excluded=has_not_generated_marker(annotated)
                )
            )
    return members


def get_members(tp: Any, skip_backing_fields: bool = True) -> list[MemberAccessor]:
    """List the data members of a type.

    Args:
        tp: Type (or parametrised generic alias) to inspect.
        skip_backing_fields: Drop the attribute "_x" when a property "x" exists.

    Returns:
        Member accessors, attributes first and properties after them.
        Scalars, enums and hints without a runtime class have no members.

    Raises:
        TypeError: If tp is None.
    """
    if tp is None:
        raise TypeError("tp must not be None")

    cls = runtime_class(tp)
    if cls is None or cls is object or is_primitive(cls) or is_scalar(cls) or is_enum(cls):
        return []

    if is_typeddict(cls):
        return _typeddict_members(cls)

    if issubclass(cls, BaseModel):
        attributes = _pydantic_members(cls)
    else:
        attributes = _attribute_members(cls)
    properties = _property_members(cls)

    if skip_backing_fields:
        property_names = {member.name for member in properties}
        attributes = [
            member
            for member in attributes
            if not (member.name.startswith("_") and member.name[1:] in property_names)
        ]

    attribute_names = {member.name for member in attributes}
    return attributes + [member for member in properties if member.name not in attribute_names]


def get_member(tp: Any, name: str, skip_backing_fields: bool = True) -> MemberAccessor | None:
    """Find a member of tp by name, or None."""
    if name is None:
        raise TypeError("name must not be None")
    for member in get_members(tp, skip_backing_fields=skip_backing_fields):
        if member.name == name:
            return member
    return None


def get_member_value(tp: Any, name: str, target: Any) -> Any:
    """Read the named member of tp from target; None when tp has no such member."""
    member = get_member(tp, name, skip_backing_fields=False)
    return member.get_value(target) if member is not None else None
