"""Small random and interval helpers used by the strategies."""

from __future__ import annotations

import random
from collections.abc import Sequence
from enum import Enum
from typing import Any, TypeVar

from typesynth.constants import STRING_MAX_LENGTH, STRING_MIN_LENGTH
from typesynth.exceptions import UnknownOptionError

T = TypeVar("T")


class Inclusion(Enum):
    """Which ends of an interval are included in a range check."""

    BOTH_INCLUSIVE = "both_inclusive"
    ONLY_LEFT_INCLUSIVE = "only_left_inclusive"
    ONLY_RIGHT_INCLUSIVE = "only_right_inclusive"
    BOTH_EXCLUSIVE = "both_exclusive"


def between(
    value: Any, left: Any, right: Any, inclusion: Inclusion = Inclusion.BOTH_INCLUSIVE
) -> bool:
    """Check whether value lies between left and right.

    Args:
        value: Value to check.
        left: Lower bound.
        right: Upper bound.
        inclusion: Which bounds belong to the interval.

    Returns:
        True if value is inside the interval.

    Raises:
        UnknownOptionError: If inclusion is not an Inclusion member.
    """
    if inclusion is Inclusion.BOTH_INCLUSIVE:
        return left <= value <= right
    if inclusion is Inclusion.ONLY_LEFT_INCLUSIVE:
        return left <= value < right
    if inclusion is Inclusion.ONLY_RIGHT_INCLUSIVE:
        return left < value <= right
    if inclusion is Inclusion.BOTH_EXCLUSIVE:
        return left < value < right
    raise UnknownOptionError(inclusion, Inclusion)


def random_item(items: Sequence[T], *unwanted: T, rng: random.Random | None = None) -> T:
    """Pick a random element of items that is not one of the unwanted values.

    Raises:
        ValueError: If nothing is left to pick from.
    """
    rng = rng or random
    candidates = [item for item in items if item not in unwanted] if unwanted else list(items)
    if not candidates:
        raise ValueError("No items left to choose from")
    return rng.choice(candidates)


def create_random_string(
    allowed_characters: str,
    length: int | None = None,
    rng: random.Random | None = None,
    min_length: int = STRING_MIN_LENGTH,
    max_length: int = STRING_MAX_LENGTH,
) -> str:
    """Build a random string out of the allowed characters.

    Args:
        allowed_characters: Alphabet to draw from.
        length: Exact length. When None, a length in [min_length, max_length) is drawn.
        rng: Random source; the module-level one is used when omitted.
        min_length: Lower bound for a drawn length.
        max_length: Exclusive upper bound for a drawn length.

    Returns:
        The generated string.
    """
    rng = rng or random
    if length is None:
        length = rng.randrange(min_length, max_length)
    if length < 0:
        raise ValueError(f"length must be >= 0, got {length}")
    return "".join(rng.choice(allowed_characters) for _ in range(length))
