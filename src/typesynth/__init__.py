"""typesynth - populate arbitrary object graphs with random data."""

from typesynth.config import Config, ConfigError, load_settings
from typesynth.engine import (
    Engine,
    default_engine,
    default_populate_predicate,
    many,
    one,
    reset_default_engine,
)
from typesynth.exceptions import (
    ConstructionError,
    SynthesisError,
    UnknownOptionError,
    UnsupportedCollectionError,
)
from typesynth.graph import GraphWalker, TraversalStep
from typesynth.markers import NOT_GENERATED, NotGenerated, not_generated
from typesynth.reflection import Char, MemberAccessor, get_member, get_members
from typesynth.synthesis import StrategyRegistry, TypeStrategy

__version__ = "0.1.0"

__all__ = [
    "Engine",
    "default_engine",
    "default_populate_predicate",
    "many",
    "one",
    "reset_default_engine",
    "StrategyRegistry",
    "TypeStrategy",
    "GraphWalker",
    "TraversalStep",
    "MemberAccessor",
    "get_member",
    "get_members",
    "Char",
    "NOT_GENERATED",
    "NotGenerated",
    "not_generated",
    "Config",
    "ConfigError",
    "load_settings",
    "ConstructionError",
    "SynthesisError",
    "UnknownOptionError",
    "UnsupportedCollectionError",
]
