"""Depth-first walk over the member graph of a value."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from typesynth.constants import TOP_LEVEL
from typesynth.graph.models import TraversalStep, VisitFunction
from typesynth.reflection.members import get_members
from typesynth.reflection.types import strip_optional, type_name, unwrap_annotated

if TYPE_CHECKING:
    from typesynth.synthesis.registry import StrategyRegistry

logger = logging.getLogger(__name__)


def _walk_type(tp: Any) -> Any:
    tp, _ = unwrap_annotated(tp)
    return strip_optional(tp)


class GraphWalker:
    """Visits every member reachable from a root value.

    The visit function sees one TraversalStep per member. Whatever it assigns
    to the member is read back after the visit, recorded in the registry
    history under the member's declared type, and becomes the owner of the
    next level when the visit function returns True.

    Args:
        registry: Registry whose histories receive post-visit member values.
            None disables recording.
        skip_backing_fields: Skip attribute "_x" when a property "x" exists.
        skip_unreachable: Do not announce members whose owner is None.
        guard_cycles: Never recurse into a type already on the current path.
            Without this guard, termination depends on the visit function alone.
    """

    def __init__(
        self,
        registry: StrategyRegistry | None = None,
        skip_backing_fields: bool = True,
        skip_unreachable: bool = False,
        guard_cycles: bool = True,
    ):
        self.registry = registry
        self.skip_backing_fields = skip_backing_fields
        self.skip_unreachable = skip_unreachable
        self.guard_cycles = guard_cycles

    def walk(self, root: Any, visit: VisitFunction, root_type: Any = None) -> int:
        """Walk the member graph of root.

        Args:
            root: Value to traverse.
            visit: Called for the root and every member; its return value
                decides recursion for members and is ignored for the root.
            root_type: Type whose members are enumerated first; type(root)
                when omitted.

        Returns:
            Number of visits made, the root included.

        Raises:
            TypeError: If root or visit is None.
        """
        if root is None:
            raise TypeError("root must not be None")
        if visit is None:
            raise TypeError("visit must not be None")

        current_type = _walk_type(root_type) if root_type is not None else type(root)
        visit(TraversalStep(parent=None, current=root, member=None, depth=TOP_LEVEL))
        return 1 + self._descend(root, current_type, TOP_LEVEL + 1, visit, (current_type,))

    def _descend(
        self,
        owner: Any,
        current_type: Any,
        depth: int,
        visit: VisitFunction,
        path: tuple[Any, ...],
    ) -> int:
        visits = 0
        for member in get_members(current_type, skip_backing_fields=self.skip_backing_fields):
            if owner is None:
                # Nothing to read from: announce the member, then move on
                if not self.skip_unreachable:
                    visit(TraversalStep(parent=None, current=None, member=member, depth=depth))
                    visits += 1
                continue

            current = member.get_value(owner)
            recurse = visit(TraversalStep(parent=owner, current=current, member=member, depth=depth))
            visits += 1
            updated = member.get_value(owner)
            if self.registry is not None:
                self.registry.record_value(member.member_type, updated)

            if not recurse:
                continue

            next_type = _walk_type(member.member_type)
            if self.guard_cycles and next_type in path:
                logger.debug(
                    f"Not descending into {member}: {type_name(next_type)} is already on the path"
                )
                continue
            visits += self._descend(updated, next_type, depth + 1, visit, path + (next_type,))
        return visits
