"""Member graph traversal and type graph analysis."""

from typesynth.graph.models import TraversalStep, VisitFunction
from typesynth.graph.walker import GraphWalker
from typesynth.graph.analysis import build_type_graph, find_type_cycles, has_indirect_cycle

__all__ = [
    # Models
    "TraversalStep",
    "VisitFunction",
    # Walker
    "GraphWalker",
    # Analysis
    "build_type_graph",
    "find_type_cycles",
    "has_indirect_cycle",
]
