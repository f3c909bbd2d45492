"""Value synthesis: strategies, the strategy registry and the synthesizers."""

from typesynth.synthesis.models import SynthesisResult
from typesynth.synthesis.strategy import Producer, TypeStrategy
from typesynth.synthesis.collections import CollectionSynthesizer
from typesynth.synthesis.constructors import ConstructorSynthesizer
from typesynth.synthesis.defaults import default_producers, register_defaults
from typesynth.synthesis.registry import StrategyRegistry

__all__ = [
    "SynthesisResult",
    "Producer",
    "TypeStrategy",
    "CollectionSynthesizer",
    "ConstructorSynthesizer",
    "default_producers",
    "register_defaults",
    "StrategyRegistry",
]
