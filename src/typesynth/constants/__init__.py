"""Synthesis constants.

Re-exports all constants for convenient importing:
    from typesynth.constants import ALPHANUMERICS_WITH_UPPER, TOP_LEVEL
"""

from typesynth.constants.alphabets import *  # noqa: F403
from typesynth.constants.generation import *  # noqa: F403
