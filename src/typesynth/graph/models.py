"""Data models for member graph traversal."""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from typesynth.constants import TOP_LEVEL
from typesynth.reflection.members import MemberAccessor

_NULL = "None"


@dataclass(frozen=True)
class TraversalStep:
    """One visited member during a graph walk.

    The root is visited with member=None at depth TOP_LEVEL. Members whose
    owner could not be reached are announced with parent and current set to
    None.
    """

    parent: Any  # Instance owning the member, None for the root
    current: Any  # Member value before the visit
    member: MemberAccessor | None
    depth: int = TOP_LEVEL

    def __post_init__(self):
        if self.depth < TOP_LEVEL:
            object.__setattr__(self, "depth", TOP_LEVEL)

    @property
    def is_root(self) -> bool:
        return self.depth == TOP_LEVEL

    @property
    def value_found(self) -> bool:
        """True when both the owner and the member value are present."""
        return self.current is not None and self.parent is not None

    def render(self) -> str:
        """Indented description of the step, one tab per level below the root."""
        if self.is_root:
            return f"{self.current!r}\n"
        tabs = "\t" * (self.depth - 1)
        parent = _NULL if self.parent is None else repr(self.parent)
        member = _NULL if self.member is None else str(self.member)
        current = _NULL if self.current is None else repr(self.current)
        return f"{tabs}{parent}\n{tabs}  {member} = {current}\n"


# Returns True to recurse into the visited member's own members.
VisitFunction = Callable[[TraversalStep], bool]
