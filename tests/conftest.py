"""Shared pytest fixtures for all tests.

Engines and registries are seeded so failures reproduce.
"""

import random

import pytest

from typesynth.config import Config, load_settings
from typesynth.engine import Engine, reset_default_engine
from typesynth.synthesis.registry import StrategyRegistry

SEED = 20240611


@pytest.fixture(autouse=True)
def reset_process_state():
    """Drop the cached settings and the default engine around every test."""
    load_settings.cache_clear()
    reset_default_engine()
    yield
    load_settings.cache_clear()
    reset_default_engine()


@pytest.fixture
def rng():
    """Seeded random source."""
    return random.Random(SEED)


@pytest.fixture
def registry(rng):
    """Registry with the builtin producers, not bound to an engine."""
    return StrategyRegistry(rng=rng)


@pytest.fixture
def engine():
    """Seeded engine with default configuration."""
    return Engine(rng=random.Random(SEED))


@pytest.fixture
def strict_engine():
    """Seeded engine that raises instead of degrading to None."""
    engine = Engine(Config(), rng=random.Random(SEED))
    engine.strict = True
    return engine
