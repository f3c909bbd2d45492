"""Static analysis of the type graph formed by member types."""

from typing import Any, get_args

import networkx as nx

from typesynth.reflection.members import get_members
from typesynth.reflection.shapes import get_collection_info
from typesynth.reflection.types import (
    NoneType,
    is_union,
    strip_optional,
    type_name,
    unwrap_annotated,
)


def _targets(member_type: Any) -> list[tuple[Any, str]]:
    """Types a member points at, with how it reaches them ("member" or "element")."""
    member_type, _ = unwrap_annotated(member_type)
    member_type = strip_optional(member_type)
    if is_union(member_type):
        return [(arg, "member") for arg in get_args(member_type) if arg is not NoneType]
    info = get_collection_info(member_type)
    if info.is_collection:
        return [(element, "element") for element in info.element_types if element is not Ellipsis]
    return [(member_type, "member")]


def build_type_graph(root_type: Any, skip_backing_fields: bool = True) -> nx.DiGraph:
    """Build a directed graph of the types reachable from root_type.

    Nodes are types. An edge A -> B means A has a member of type B (or a
    collection of B); edge attributes record the member names and how B is
    reached.

    Args:
        root_type: Type to start from.
        skip_backing_fields: Passed through to get_members.

    Returns:
        NetworkX directed graph of member types.
    """
    G = nx.DiGraph()
    root, _ = unwrap_annotated(root_type)
    G.add_node(root, name=type_name(root))
    pending = [root]

    while pending:
        current = pending.pop()
        for member in get_members(current, skip_backing_fields=skip_backing_fields):
            for target, via in _targets(member.member_type):
                if not G.has_node(target):
                    G.add_node(target, name=type_name(target))
                    pending.append(target)
                if G.has_edge(current, target):
                    G.edges[current, target]["members"].append(member.name)
                else:
                    G.add_edge(current, target, members=[member.name], via=via)

    return G


def find_type_cycles(root_type: Any, include_self_loops: bool = False) -> list[list[Any]]:
    """Cycles among the types reachable from root_type.

    Args:
        root_type: Type to start from.
        include_self_loops: Also report types that reference themselves directly.

    Returns:
        Each cycle as a list of types, in no particular order.
    """
    G = build_type_graph(root_type)
    cycles = list(nx.simple_cycles(G))
    if include_self_loops:
        return cycles
    return [cycle for cycle in cycles if len(cycle) > 1]


def has_indirect_cycle(root_type: Any) -> bool:
    """True when types reachable from root_type reference each other in a loop."""
    return bool(find_type_cycles(root_type))
