"""Tests for TypeStrategy."""

from typesynth.synthesis.constructors import ConstructorSynthesizer
from typesynth.synthesis.strategy import TypeStrategy

from models import Money


def test_new_strategy_has_empty_history():
    strategy = TypeStrategy(producer=lambda: 1)

    assert strategy.history == ()
    assert strategy.last_value is None


def test_record_appends_to_history():
    strategy = TypeStrategy(producer=lambda: 1)

    strategy.record("a")
    strategy.record("b")

    assert strategy.history == ("a", "b")
    assert strategy.last_value == "b"


def test_get_instance_does_not_record():
    strategy = TypeStrategy(producer=lambda: 5)

    assert strategy.get_instance() == 5
    assert strategy.history == ()


def test_produce_without_producer_returns_none():
    assert TypeStrategy().produce() is None


class TestConstructorStrategy:
    """Strategies configured with constructor parameter types."""

    def make_strategy(self, producer=None):
        strategy = TypeStrategy(producer=producer, constructor_param_types=[int, str])
        factory = {int: lambda: 7, str: lambda: "EUR"}
        strategy.bind(Money, ConstructorSynthesizer(lambda tp: factory[tp]()))
        return strategy

    def test_uses_constructor(self):
        money = self.make_strategy().get_instance()

        assert isinstance(money, Money)
        assert (money.amount, money.currency) == (7, "EUR")

    def test_overrides_by_position(self):
        money = self.make_strategy().get_instance({0: 100})

        assert (money.amount, money.currency) == (100, "EUR")

    def test_override_with_wrong_type_is_ignored(self):
        """An override only applies when its type is exactly the parameter type."""
        money = self.make_strategy().get_instance({0: "lots", 1: 3, 5: "x"})

        assert (money.amount, money.currency) == (7, "EUR")

    def test_falls_back_to_producer_without_matching_constructor(self):
        sentinel = Money(0, "XXX")
        strategy = TypeStrategy(producer=lambda: sentinel, constructor_param_types=[str])
        strategy.bind(Money, ConstructorSynthesizer(lambda tp: "x"))

        assert strategy.get_instance() is sentinel


def test_repr_names_target():
    strategy = TypeStrategy(producer=lambda: 0)
    strategy.bind(Money, ConstructorSynthesizer(lambda tp: None))
    strategy.record(1)

    assert repr(strategy) == "TypeStrategy(target=Money, history=1)"
