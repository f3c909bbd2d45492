"""Synthesis engine: produce populated instances of arbitrary types.

Typical use:

    engine = Engine()
    engine.register_strategy(int, lambda: 42)
    person = engine.produce(Person)
    people = engine.produce_many(Person, 10)

The module-level one() and many() use a process-wide default engine.
"""

from __future__ import annotations

import logging
import random
from collections.abc import Callable
from typing import Any, TypeVar, overload

import networkx as nx

from typesynth.config import Config, load_settings
from typesynth.graph.analysis import build_type_graph, has_indirect_cycle
from typesynth.graph.models import TraversalStep, VisitFunction
from typesynth.graph.walker import GraphWalker
from typesynth.reflection.members import MemberAccessor
from typesynth.reflection.shapes import is_collection
from typesynth.reflection.types import (
    is_enum,
    is_primitive,
    is_scalar,
    strip_optional,
    type_name,
    unwrap_annotated,
)
from typesynth.synthesis.registry import StrategyRegistry
from typesynth.synthesis.strategy import Producer, TypeStrategy

logger = logging.getLogger(__name__)

T = TypeVar("T")

ProgressCallback = Callable[[float], None]


def default_populate_predicate(tp: Any) -> bool:
    """Whether values of tp get their member graph filled in.

    Primitives, strings, dates/times, identifiers, enums and collections are
    treated as finished values.
    """
    tp = strip_optional(unwrap_annotated(tp)[0])
    return not (is_primitive(tp) or is_scalar(tp) or is_enum(tp) or is_collection(tp))


def should_recurse(member: MemberAccessor) -> bool:
    """Recurse into a member unless its type is primitive, its own declaring
    type, or a collection."""
    tp = strip_optional(member.member_type)
    return not (is_primitive(tp) or tp is member.declaring_type or is_collection(tp))


class Engine:
    """Produces instances of arbitrary types with their members filled in.

    Each engine owns its random source and strategy registry. None of them is
    locked, so an engine must not be shared between threads without external
    locking; use one engine per worker instead.

    Args:
        config: Ranges and behaviour flags. Defaults from CONFIG_SCHEMA.
        registry: Registry to use instead of a new one. The engine binds it so
            collection elements and constructor arguments are populated too.
        rng: Random source. Defaults to the registry's, or a new one seeded
            from config.
    """

    def __init__(
        self,
        config: Config | None = None,
        registry: StrategyRegistry | None = None,
        rng: random.Random | None = None,
    ):
        self.config = config or Config()
        generation = self.config.generation
        if registry is None:
            rng = rng or random.Random(generation.random_seed)
            registry = StrategyRegistry(rng=rng, generation=generation)
        self.rng = rng or registry.rng
        self.registry = registry
        self.registry.bind(self.produce)
        self.registry.strict = generation.strict

        self.populate_hierarchy: Callable[[Any], bool] | None = default_populate_predicate
        self.skip_backing_fields = generation.skip_backing_fields
        self.guard_cycles = generation.guard_cycles
        self.skip_unreachable = self.config.walker.skip_unreachable

        self._producing: list[Any] = []
        self._cycle_checked: set[Any] = set()

    @property
    def strict(self) -> bool:
        """Raise on unsynthesizable types instead of using None."""
        return self.registry.strict

    @strict.setter
    def strict(self, value: bool) -> None:
        self.registry.strict = value

    # -------------------------------------------------------------------------
    # Strategies
    # -------------------------------------------------------------------------

    @overload
    def register_strategy(self, tp: type[T], strategy: Callable[[], T]) -> TypeStrategy: ...

    @overload
    def register_strategy(self, tp: Any, strategy: TypeStrategy) -> TypeStrategy: ...

    def register_strategy(self, tp: Any, strategy: Producer | TypeStrategy) -> TypeStrategy:
        """Define or replace how values of tp are produced.

        Args:
            tp: Type to register for.
            strategy: A nullary producer or a complete TypeStrategy.

        Returns:
            The registered TypeStrategy.
        """
        if strategy is None:
            raise TypeError("strategy must not be None")
        if isinstance(strategy, TypeStrategy):
            self.registry.set_strategy(tp, strategy)
            return strategy
        return self.registry.set_producer(tp, strategy)

    def register(self, tp: Any) -> Callable[[Producer], Producer]:
        """Decorator form of register_strategy for producer functions."""

        def decorator(producer: Producer) -> Producer:
            self.register_strategy(tp, producer)
            return producer

        return decorator

    # -------------------------------------------------------------------------
    # Production
    # -------------------------------------------------------------------------

    def produce(self, tp: type[T] | Any) -> T:
        """Produce one value of tp.

        The type's strategy creates the value, which is recorded in its
        history. Unless populate_hierarchy rejects tp, every member reachable
        from the value is then assigned a freshly produced value, except
        read-only members and members excluded from generation.

        Args:
            tp: Type to produce.

        Returns:
            The produced value. None when tp could not be synthesized and the
            engine is not strict.

        Raises:
            TypeError: If tp is None.
            SynthesisError: In strict mode, for types that cannot be synthesized.
        """
        if tp is None:
            raise TypeError("tp must not be None")

        key = self.registry.key_for(tp)
        strategy = self.registry.get_strategy(key)
        instance = strategy.get_instance()
        strategy.record(instance)

        if instance is None or not self._should_populate(key):
            return instance

        if key in self._producing:
            if self.guard_cycles:
                # Nested production of a type already being populated further up
                logger.debug(f"Leaving nested {type_name(key)} unpopulated")
                return instance
        elif not self.guard_cycles:
            self._warn_on_cycles(key)

        self._producing.append(key)
        try:
            self.walk(instance, self._populate_member, root_type=key)
        finally:
            self._producing.pop()
        return instance

    def produce_many(
        self,
        tp: type[T] | Any,
        count: int | None = None,
        distinct_each_time: bool = True,
        progress: ProgressCallback | None = None,
    ) -> list[T]:
        """Produce several values of tp.

        Args:
            tp: Type to produce.
            count: Number of values; a random count in the configured
                collection range when None.
            distinct_each_time: Produce every value independently. When False,
                one value is produced and repeated count times.
            progress: Called with the completed percentage after each item.

        Returns:
            List of count values.

        Raises:
            ValueError: If count is negative.
        """
        if tp is None:
            raise TypeError("tp must not be None")
        if count is None:
            count = self.registry.collections.random_count()
        if count < 0:
            raise ValueError(f"count must be >= 0, got {count}")

        items: list[Any] = []
        shared = None if distinct_each_time or count == 0 else self.produce(tp)
        for index in range(count):
            items.append(self.produce(tp) if distinct_each_time else shared)
            if progress is not None:
                progress(100.0 * (index + 1) / count)

        logger.info(f"Produced {count} value(s) of {type_name(tp)}")
        return items

    def walk(self, value: Any, visit: VisitFunction, root_type: Any = None) -> int:
        """Walk the member graph of value with this engine's walker settings."""
        walker = GraphWalker(
            registry=self.registry,
            skip_backing_fields=self.skip_backing_fields,
            skip_unreachable=self.skip_unreachable,
            guard_cycles=self.guard_cycles,
        )
        return walker.walk(value, visit, root_type=root_type)

    def type_graph(self, tp: Any) -> nx.DiGraph:
        """Graph of the member types reachable from tp."""
        return build_type_graph(tp, skip_backing_fields=self.skip_backing_fields)

    def _should_populate(self, tp: Any) -> bool:
        return self.populate_hierarchy is None or bool(self.populate_hierarchy(tp))

    def _populate_member(self, step: TraversalStep) -> bool:
        """Default visit function: assign a fresh value and decide on recursion."""
        if step.is_root or step.member is None:
            return False
        if step.parent is None:
            return False

        member = step.member
        if not member.excluded and not member.read_only:
            member.set_value(step.parent, self.registry.produce(member.member_type))
        return should_recurse(member)

    def _warn_on_cycles(self, tp: Any) -> None:
        if tp in self._cycle_checked:
            return
        self._cycle_checked.add(tp)
        if has_indirect_cycle(strip_optional(tp)):
            logger.warning(
                f"{type_name(tp)} has indirect member cycles and guard_cycles is off; "
                "production may not terminate"
            )


_default_engine: Engine | None = None


def default_engine() -> Engine:
    """Get the process-wide engine, creating it from load_settings() on first use."""
    global _default_engine
    if _default_engine is None:
        _default_engine = Engine(load_settings())
    return _default_engine


def reset_default_engine() -> None:
    """Drop the process-wide engine (for testing)."""
    global _default_engine
    _default_engine = None


def one(tp: type[T] | Any) -> T:
    """Produce one value of tp with the default engine."""
    return default_engine().produce(tp)


def many(
    tp: type[T] | Any,
    count: int | None = None,
    distinct_each_time: bool = True,
    progress: ProgressCallback | None = None,
) -> list[T]:
    """Produce several values of tp with the default engine."""
    return default_engine().produce_many(tp, count, distinct_each_time, progress)
