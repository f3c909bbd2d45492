"""Per-type synthesis strategy."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING, Any

from typesynth.reflection.types import type_name

if TYPE_CHECKING:
    from typesynth.synthesis.constructors import ConstructorSynthesizer

logger = logging.getLogger(__name__)

Producer = Callable[[], Any]


class TypeStrategy:
    """How to produce values of one type, plus the values produced so far.

    Args:
        producer: Nullary callable returning a new value. When a strategy
            without a producer is registered, the registry fills in the
            default one for the type.
        constructor_param_types: Parameter types of the constructor to call
            instead of the producer. Arguments are synthesized per type.
    """

    def __init__(
        self,
        producer: Producer | None = None,
        constructor_param_types: Sequence[Any] | None = None,
    ):
        self.producer = producer
        self.constructor_param_types = (
            list(constructor_param_types) if constructor_param_types is not None else None
        )
        self.target: Any = None
        self._constructors: ConstructorSynthesizer | None = None
        self._history: list[Any] = []

    def bind(self, target: Any, constructors: ConstructorSynthesizer) -> None:
        """Attach the strategy to its type and the registry's constructor synthesizer."""
        self.target = target
        self._constructors = constructors

    @property
    def history(self) -> tuple[Any, ...]:
        """Every value recorded for this type, oldest first."""
        return tuple(self._history)

    @property
    def last_value(self) -> Any:
        """The most recently recorded value, or None if nothing was recorded."""
        return self._history[-1] if self._history else None

    def record(self, value: Any) -> None:
        self._history.append(value)

    def produce(self) -> Any:
        """Run the producer; None when there is no producer."""
        return self.producer() if self.producer is not None else None

    def get_instance(self, overrides: dict[int, Any] | None = None) -> Any:
        """Create an instance of the strategy's type.

        Uses the configured constructor when constructor_param_types is set,
        falling back to the producer if that constructor cannot be found or
        raises. Otherwise the producer is used directly.

        Args:
            overrides: Constructor arguments by position. Positions without an
                override (or whose override has the wrong type) are synthesized.

        Returns:
            The new instance.
        """
        if self.constructor_param_types is None or self._constructors is None:
            return self.produce()

        result = self._constructors.invoke(self.target, self.constructor_param_types, overrides)
        if result.ok:
            return result.value

        logger.debug(
            f"Constructor for {type_name(self.target)} failed ({result.error}), using producer"
        )
        return self.produce()

    def __repr__(self) -> str:
        target = type_name(self.target) if self.target is not None else None
        return f"TypeStrategy(target={target}, history={len(self._history)})"
