"""Tests for StrategyRegistry: lookup, registration, history and default strategies."""

import random
from datetime import date, datetime, time, timedelta
from decimal import Decimal
from typing import Annotated, Literal, Optional, Union
from uuid import UUID

import pytest
from hypothesis import given, settings, strategies as st

from typesynth.constants import ALPHANUMERICS_WITH_UPPER, STRING_ALPHABET
from typesynth.exceptions import ConstructionError, UnsupportedCollectionError
from typesynth.reflection.types import Char
from typesynth.synthesis.registry import StrategyRegistry
from typesynth.synthesis.strategy import TypeStrategy

from models import Address, Colour, Empty, Money, Token, Unbuildable


# =============================================================================
# Lookup and Registration
# =============================================================================


class TestLookup:
    def test_unknown_type_gets_stored_default(self, registry):
        assert Address not in registry
        size = len(registry)

        strategy = registry.get_strategy(Address)

        assert Address in registry
        assert len(registry) == size + 1
        assert registry.get_strategy(Address) is strategy

    def test_annotated_shares_strategy_with_bare_type(self, registry):
        assert registry.get_strategy(Annotated[int, "meta"]) is registry.get_strategy(int)

    def test_builtin_types_are_preseeded(self, registry):
        for tp in (int, float, Decimal, Char, bool, str, bytes, datetime, date, time, UUID):
            assert tp in registry, tp

    def test_none_arguments_raise(self, registry):
        with pytest.raises(TypeError):
            registry.get_strategy(None)
        with pytest.raises(TypeError):
            registry.set_strategy(int, None)
        with pytest.raises(TypeError):
            registry.set_producer(int, None)


class TestRegistration:
    def test_last_registration_wins(self, registry):
        registry.set_producer(int, lambda: 1)
        registry.set_producer(int, lambda: 2)

        assert registry.produce(int) == 2

    def test_strategy_without_producer_gets_default(self, registry):
        strategy = TypeStrategy()
        registry.set_strategy(Address, strategy)

        assert strategy.producer is not None
        assert isinstance(registry.produce(Address), Address)

    def test_registered_types_lists_keys(self, registry):
        registry.set_producer(Address, Address)

        assert Address in registry.registered_types


# =============================================================================
# History
# =============================================================================


def test_history_is_per_type(registry):
    assert registry.last_value_of(int) is None

    registry.record_value(int, 3)
    registry.record_value(int, 4)
    registry.record_value(str, "x")

    assert registry.last_value_of(int) == 4
    assert registry.history_of(int) == (3, 4)
    assert registry.history_of(str) == ("x",)


def test_produce_does_not_record(registry):
    registry.produce(int)

    assert registry.history_of(int) == ()


# =============================================================================
# Pre-seeded Strategies
# =============================================================================


class TestDefaultProducers:
    @given(seed=st.integers(min_value=0, max_value=2**32))
    @settings(max_examples=100, deadline=None)
    def test_int_range(self, seed):
        value = StrategyRegistry(rng=random.Random(seed)).produce(int)

        assert isinstance(value, int)
        assert -10_000 <= value < 10_000

    @given(seed=st.integers(min_value=0, max_value=2**32))
    @settings(max_examples=100, deadline=None)
    def test_char_alphabet(self, seed):
        value = StrategyRegistry(rng=random.Random(seed)).produce(Char)

        assert len(value) == 1
        assert value in ALPHANUMERICS_WITH_UPPER

    @given(seed=st.integers(min_value=0, max_value=2**32))
    @settings(max_examples=50, deadline=None)
    def test_string_length_and_alphabet(self, seed):
        value = StrategyRegistry(rng=random.Random(seed)).produce(str)

        assert 5 <= len(value) < 20
        assert set(value) <= set(STRING_ALPHABET)

    def test_scalar_types(self, registry):
        assert isinstance(registry.produce(float), float)
        assert isinstance(registry.produce(Decimal), Decimal)
        assert isinstance(registry.produce(bool), bool)
        assert 5 <= len(registry.produce(bytes)) < 20
        assert isinstance(registry.produce(datetime), datetime)
        assert isinstance(registry.produce(date), date)
        assert isinstance(registry.produce(time), time)

    def test_timedelta_is_time_of_day(self, registry):
        value = registry.produce(timedelta)

        assert timedelta(0) <= value < timedelta(days=1)

    def test_uuid_is_version_4(self, registry):
        assert registry.produce(UUID).version == 4

    def test_same_seed_same_values(self):
        first = StrategyRegistry(rng=random.Random(5))
        second = StrategyRegistry(rng=random.Random(5))

        for tp in (int, float, str, Char, bytes, UUID, Decimal):
            assert first.produce(tp) == second.produce(tp), tp


# =============================================================================
# Default Strategies
# =============================================================================


class TestDefaultStrategies:
    def test_enum_member(self, registry):
        assert registry.produce(Colour) in set(Colour)

    def test_literal_choice(self, registry):
        assert registry.produce(Literal["a", "b"]) in {"a", "b"}

    def test_optional_produces_inner_type(self, registry):
        assert isinstance(registry.produce(Optional[int]), int)

    def test_union_picks_an_alternative(self, registry):
        values = [registry.produce(Union[int, Address]) for _ in range(30)]

        assert all(isinstance(value, (int, Address)) for value in values)

    def test_none_type(self, registry):
        assert registry.produce(type(None)) is None

    def test_single_element_collection(self, registry):
        value = registry.produce(list[int])

        assert isinstance(value, list)
        assert 5 <= len(value) < 50
        assert all(isinstance(item, int) for item in value)

    def test_parameterless_instantiation(self, registry):
        assert isinstance(registry.produce(Address), Address)

    def test_constructor_chain(self, registry):
        money = registry.produce(Money)

        assert isinstance(money.amount, int)
        assert isinstance(money.currency, str)
        assert isinstance(registry.produce(Token), Token)

    def test_unbuildable_degrades_to_none(self, registry, caplog):
        assert registry.produce(Unbuildable) is None
        assert "Unbuildable" in caplog.text

    def test_unbuildable_raises_in_strict_mode(self, registry):
        registry.strict = True

        with pytest.raises(ConstructionError):
            registry.produce(Unbuildable)

    def test_empty_enum_degrades(self, registry):
        assert registry.produce(Empty) is None

    def test_mapping_degrades_to_empty_instance(self, registry):
        assert registry.produce(dict[str, int]) == {}

    def test_mapping_raises_in_strict_mode(self, registry):
        registry.strict = True

        with pytest.raises(UnsupportedCollectionError):
            registry.produce(dict[str, int])


def test_bound_value_factory_receives_nested_types(registry):
    """Collection elements are routed through the bound factory."""
    seen = []

    def factory(tp):
        seen.append(tp)
        return 0

    registry.bind(factory)

    assert set(registry.produce(set[int])) == {0}
    assert set(seen) == {int}
