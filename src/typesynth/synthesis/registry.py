"""Strategy registry: maps each type to the strategy that produces its values."""

from __future__ import annotations

import logging
import random
from collections.abc import Callable
from typing import Any, Literal, get_args, get_origin

from typesynth.config import Config, GenerationConfig
from typesynth.exceptions import ConstructionError, UnsupportedCollectionError
from typesynth.reflection.shapes import get_collection_info
from typesynth.reflection.types import (
    NoneType,
    is_enum,
    is_union,
    runtime_class,
    strip_optional,
    type_name,
    unwrap_annotated,
)
from typesynth.synthesis.collections import CollectionSynthesizer
from typesynth.synthesis.constructors import ConstructorSynthesizer
from typesynth.synthesis.defaults import register_defaults
from typesynth.synthesis.strategy import Producer, TypeStrategy

logger = logging.getLogger(__name__)


class StrategyRegistry:
    """Registry holding one TypeStrategy per type.

    Strategies are created lazily: looking up a type that was never registered
    stores and returns a default strategy for it. Registering a type again
    replaces its strategy. Entries are never removed.

    The registry is not thread-safe; see Engine.

    Args:
        rng: Random source shared by every default producer.
        generation: Ranges and behaviour flags; defaults from CONFIG_SCHEMA.
        seed_defaults: Register the builtin scalar producers.
    """

    def __init__(
        self,
        rng: random.Random | None = None,
        generation: GenerationConfig | None = None,
        seed_defaults: bool = True,
    ):
        self.rng = rng or random.Random()
        self.generation = generation or Config().generation
        self.strict = self.generation.strict
        self._strategies: dict[Any, TypeStrategy] = {}
        self._value_factory: Callable[[Any], Any] | None = None
        self.collections = CollectionSynthesizer(
            self.synthesize,
            self.rng,
            min_count=self.generation.collection_min,
            max_count=self.generation.collection_max,
        )
        self.constructors = ConstructorSynthesizer(self.synthesize)
        if seed_defaults:
            register_defaults(self)

    # -------------------------------------------------------------------------
    # Lookup and registration
    # -------------------------------------------------------------------------

    @staticmethod
    def key_for(tp: Any) -> Any:
        """Registry key for a hint: the hint without Annotated metadata."""
        if tp is None:
            raise TypeError("tp must not be None")
        key, _ = unwrap_annotated(tp)
        return key

    def get_strategy(self, tp: Any) -> TypeStrategy:
        """Get the strategy for tp, creating a default one on first access."""
        key = self.key_for(tp)
        strategy = self._strategies.get(key)
        if strategy is None:
            strategy = TypeStrategy(producer=self._default_producer(key))
            strategy.bind(key, self.constructors)
            self._strategies[key] = strategy
            logger.debug(f"Created default strategy for {type_name(key)}")
        return strategy

    def set_strategy(self, tp: Any, strategy: TypeStrategy) -> None:
        """Register strategy for tp, replacing any existing one.

        A strategy registered without a producer gets the type's default producer.
        """
        if strategy is None:
            raise TypeError("strategy must not be None")
        key = self.key_for(tp)
        if strategy.producer is None:
            strategy.producer = self._default_producer(key)
        strategy.bind(key, self.constructors)
        self._strategies[key] = strategy

    def set_producer(self, tp: Any, producer: Producer) -> TypeStrategy:
        """Register a nullary producer for tp and return the new strategy."""
        if producer is None:
            raise TypeError("producer must not be None")
        strategy = TypeStrategy(producer=producer)
        self.set_strategy(tp, strategy)
        return strategy

    def __contains__(self, tp: Any) -> bool:
        return self.key_for(tp) in self._strategies

    def __len__(self) -> int:
        return len(self._strategies)

    @property
    def registered_types(self) -> list[Any]:
        return list(self._strategies)

    # -------------------------------------------------------------------------
    # History
    # -------------------------------------------------------------------------

    def last_value_of(self, tp: Any) -> Any:
        """Most recent value recorded for tp, or None if there is none yet."""
        return self.get_strategy(tp).last_value

    def record_value(self, tp: Any, value: Any) -> None:
        """Append value to tp's history."""
        self.get_strategy(tp).record(value)

    def history_of(self, tp: Any) -> tuple[Any, ...]:
        return self.get_strategy(tp).history

    # -------------------------------------------------------------------------
    # Production
    # -------------------------------------------------------------------------

    def bind(self, value_factory: Callable[[Any], Any] | None) -> None:
        """Route nested values (collection elements, constructor arguments) through
        value_factory. The engine binds its produce() here so nested objects are
        populated too. With nothing bound, nested values come from produce().
        """
        self._value_factory = value_factory

    def synthesize(self, tp: Any) -> Any:
        """Produce a nested value through the bound value factory."""
        factory = self._value_factory or self.produce
        return factory(tp)

    def produce(self, tp: Any) -> Any:
        """Create one value of tp with its strategy. The value is not recorded."""
        return self.get_strategy(tp).get_instance()

    def _degrade(self, tp: Any, error: Exception | str) -> None:
        """Turn a failed synthesis into None, or raise in strict mode."""
        if self.strict:
            if isinstance(error, Exception):
                raise error
            raise ConstructionError(tp, error)
        logger.warning(f"Could not synthesize {type_name(tp)}, using None: {error}")
        return None

    def _instantiate(self, tp: Any) -> Any:
        result = self.constructors.instantiate(tp)
        if result.ok:
            return result.value
        return self._degrade(tp, result.error or "no candidates")

    def _default_producer(self, tp: Any) -> Producer:
        """Build the producer used when no strategy was registered for tp."""
        if tp is NoneType:
            return lambda: None

        if is_union(tp):
            inner = strip_optional(tp)
            if inner is not tp:
                return lambda: self.produce(inner)
            alternatives = list(get_args(tp))
            return lambda: self.produce(self.rng.choice(alternatives))

        if get_origin(tp) is Literal:
            choices = list(get_args(tp))
            return lambda: self.rng.choice(choices)

        if is_enum(tp):
            members = list(runtime_class(tp))  # type: ignore[arg-type]
            if not members:
                return lambda: self._degrade(tp, "enum has no members")
            return lambda: self.rng.choice(members)

        info = get_collection_info(tp)
        if info.is_supported:
            return lambda: self.collections.synthesize(tp)
        if info.is_collection:

            def unsupported_collection() -> Any:
                if self.strict:
                    raise UnsupportedCollectionError(tp)
                # Mappings and fixed tuples fall back to their empty instance
                logger.debug(f"{type_name(tp)} is not synthesized element-wise, instantiating")
                return self._instantiate(tp)

            return unsupported_collection

        return lambda: self._instantiate(tp)
