"""Type introspection: members, collection shapes and type classification."""

from typesynth.reflection.types import (
    Char,
    NoneType,
    is_enum,
    is_primitive,
    is_scalar,
    is_union,
    locate_type,
    runtime_class,
    strip_optional,
    type_name,
    unwrap_annotated,
)
from typesynth.reflection.shapes import CollectionInfo, get_collection_info, is_collection
from typesynth.reflection.members import (
    MemberAccessor,
    get_member,
    get_member_value,
    get_members,
    safe_type_hints,
)

__all__ = [
    # Types
    "Char",
    "NoneType",
    "is_enum",
    "is_primitive",
    "is_scalar",
    "is_union",
    "locate_type",
    "runtime_class",
    "strip_optional",
    "type_name",
    "unwrap_annotated",
    # Shapes
    "CollectionInfo",
    "get_collection_info",
    "is_collection",
    # Members
    "MemberAccessor",
    "get_member",
    "get_member_value",
    "get_members",
    "safe_type_hints",
]
