"""Collection synthesis: build collections element by element."""

from __future__ import annotations

import logging
import random
from collections.abc import Callable
from typing import Any

from typesynth.constants import COLLECTION_MAX, COLLECTION_MIN
from typesynth.exceptions import UnsupportedCollectionError
from typesynth.reflection.shapes import get_collection_info
from typesynth.reflection.types import type_name

logger = logging.getLogger(__name__)


class CollectionSynthesizer:
    """Builds collections of a single element type.

    Each element is an independent draw from element_factory, so a
    list[Person] holds distinct, fully populated Person instances.

    Args:
        element_factory: Callable producing one value of a given type.
        rng: Random source for drawing cardinalities.
        min_count: Lower bound for a random cardinality.
        max_count: Exclusive upper bound for a random cardinality.
    """

    def __init__(
        self,
        element_factory: Callable[[Any], Any],
        rng: random.Random,
        min_count: int = COLLECTION_MIN,
        max_count: int = COLLECTION_MAX,
    ):
        if min_count < 0 or min_count >= max_count:
            raise ValueError(f"Invalid cardinality range [{min_count}, {max_count})")
        self._element_factory = element_factory
        self._rng = rng
        self.min_count = min_count
        self.max_count = max_count

    def random_count(self) -> int:
        """Draw a cardinality in [min_count, max_count)."""
        return self._rng.randrange(self.min_count, self.max_count)

    def elements(self, element_type: Any, count: int | None = None) -> list[Any]:
        """Produce count values of element_type (a random count when None).

        Raises:
            ValueError: If count is negative.
        """
        if count is None:
            count = self.random_count()
        if count < 0:
            raise ValueError(f"count must be >= 0, got {count}")
        return [self._element_factory(element_type) for _ in range(count)]

    def synthesize(self, collection_type: Any, count: int | None = None) -> Any:
        """Build an instance of a single-element-type collection.

        Args:
            collection_type: Hint such as list[int], set[str], tuple[float, ...].
            count: Exact number of elements; a random count when None.

        Returns:
            Collection of the requested shape. Sets may hold fewer elements than
            count when draws collide.

        Raises:
            UnsupportedCollectionError: For non-collections and for shapes with
                other than exactly one element type (e.g. dict[str, int]).
            ValueError: If count is negative.
        """
        info = get_collection_info(collection_type)
        if not info.is_supported:
            raise UnsupportedCollectionError(collection_type)

        items = self.elements(info.element_type, count)
        logger.debug(f"Synthesized {len(items)} elements for {type_name(collection_type)}")
        return info.container(items)  # type: ignore[misc]

    def synthesize_list(self, element_type: Any, count: int | None = None) -> list[Any]:
        """Shorthand for synthesize(list[element_type], count)."""
        return self.elements(element_type, count)
