"""Pre-seeded strategies for builtin scalar types.

Every producer draws from the registry's random source so a seeded engine
is reproducible (datetimes are relative to the current time). All of them
can be replaced with StrategyRegistry.set_producer().
"""

from __future__ import annotations

import random
import uuid
from collections.abc import Callable
from datetime import date, datetime, time, timedelta
from decimal import Decimal
from typing import TYPE_CHECKING, Any

from typesynth.config import GenerationConfig
from typesynth.constants import (
    ALPHANUMERICS_WITH_UPPER,
    DECIMAL_DIVISOR,
    FLOAT_DIVISOR,
    STRING_ALPHABET,
)
from typesynth.reflection.types import Char
from typesynth.utils import create_random_string, random_item

if TYPE_CHECKING:
    from typesynth.synthesis.registry import StrategyRegistry


def _time_of_day(moment: datetime) -> timedelta:
    return timedelta(
        hours=moment.hour,
        minutes=moment.minute,
        seconds=moment.second,
        microseconds=moment.microsecond,
    )


def default_producers(
    rng: random.Random, generation: GenerationConfig
) -> dict[Any, Callable[[], Any]]:
    """Producers for int, float, Decimal, Char, bool, str, bytes, dates, times and UUID."""

    def random_int() -> int:
        return rng.randrange(generation.int_min, generation.int_max)

    def random_length() -> int:
        return rng.randrange(generation.string_min_length, generation.string_max_length)

    def shifted_now() -> datetime:
        spread = generation.seconds_spread
        return datetime.now() + timedelta(seconds=rng.randrange(-spread, spread))

    return {
        int: random_int,
        float: lambda: random_int() / FLOAT_DIVISOR,
        Decimal: lambda: random_int() / Decimal(DECIMAL_DIVISOR),
        Char: lambda: random_item(ALPHANUMERICS_WITH_UPPER, rng=rng),
        bool: lambda: rng.randrange(2) == 0,
        str: lambda: create_random_string(STRING_ALPHABET, random_length(), rng=rng),
        bytes: lambda: rng.randbytes(random_length()),
        datetime: shifted_now,
        date: lambda: shifted_now().date(),
        time: lambda: shifted_now().time(),
        timedelta: lambda: _time_of_day(shifted_now()),
        uuid.UUID: lambda: uuid.UUID(int=rng.getrandbits(128), version=4),
    }


def register_defaults(registry: StrategyRegistry) -> None:
    """Register the builtin scalar producers on a registry."""
    for tp, producer in default_producers(registry.rng, registry.generation).items():
        registry.set_producer(tp, producer)
