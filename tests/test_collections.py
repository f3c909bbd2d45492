"""Tests for CollectionSynthesizer."""

import collections
import random
from collections.abc import Sequence

import pytest
from hypothesis import given, settings, strategies as st

from typesynth.exceptions import UnsupportedCollectionError
from typesynth.synthesis.collections import CollectionSynthesizer


@pytest.fixture
def synthesizer():
    counter = iter(range(10_000))
    return CollectionSynthesizer(lambda tp: tp(next(counter)), random.Random(1))


@pytest.mark.parametrize(
    "hint,container",
    [
        (list[int], list),
        (set[int], set),
        (frozenset[int], frozenset),
        (collections.deque[int], collections.deque),
        (tuple[int, ...], tuple),
        (Sequence[int], list),
    ],
)
def test_builds_requested_container(synthesizer, hint, container):
    value = synthesizer.synthesize(hint, 4)

    assert type(value) is container
    assert len(value) == 4


def test_elements_are_independent_draws(synthesizer):
    assert synthesizer.synthesize(list[str], 3) == ["0", "1", "2"]


def test_zero_count(synthesizer):
    assert synthesizer.synthesize(list[int], 0) == []


@given(seed=st.integers(min_value=0, max_value=2**32))
@settings(max_examples=100, deadline=None)
def test_random_count_in_default_range(seed):
    synthesizer = CollectionSynthesizer(lambda tp: 0, random.Random(seed))

    assert 5 <= len(synthesizer.synthesize(list[int])) < 50


@given(low=st.integers(0, 20), span=st.integers(1, 20), seed=st.integers(0, 2**16))
@settings(max_examples=50, deadline=None)
def test_random_count_respects_configured_range(low, span, seed):
    synthesizer = CollectionSynthesizer(lambda tp: 0, random.Random(seed), low, low + span)

    assert low <= synthesizer.random_count() < low + span


def test_negative_count_raises(synthesizer):
    with pytest.raises(ValueError):
        synthesizer.synthesize(list[int], -1)


@pytest.mark.parametrize("hint", [dict[str, int], tuple[int, str], int])
def test_unsupported_shapes_raise(synthesizer, hint):
    with pytest.raises(UnsupportedCollectionError):
        synthesizer.synthesize(hint, 2)


@pytest.mark.parametrize("low,high", [(-1, 5), (5, 5), (6, 5)])
def test_invalid_range_rejected(low, high):
    with pytest.raises(ValueError):
        CollectionSynthesizer(lambda tp: 0, random.Random(), low, high)


def test_synthesize_list(synthesizer):
    assert synthesizer.synthesize_list(int, 2) == [0, 1]
