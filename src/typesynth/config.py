# src/typesynth/config.py
"""Configuration system for typesynth.

This module handles loading settings from environment variables and INI files,
providing sensible defaults for the synthesis engine. Every engine can also be
built from an explicit Config, so nothing here is required at runtime.
"""

from configparser import ConfigParser
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any, Optional
import os

from typesynth.constants import (
    COLLECTION_MAX,
    COLLECTION_MIN,
    INT_MAX,
    INT_MIN,
    SECONDS_SPREAD,
    STRING_MAX_LENGTH,
    STRING_MIN_LENGTH,
)


class ConfigError(Exception):
    """Raised when configuration validation fails."""

    pass


# Schema: section -> key -> (type, default, min, max, description)
CONFIG_SCHEMA: dict[str, dict[str, tuple[type, Any, Any, Any, str]]] = {
    "generation": {
        "collection_min": (int, COLLECTION_MIN, 0, None, "Minimum random collection size"),
        "collection_max": (int, COLLECTION_MAX, 1, None, "Exclusive maximum collection size"),
        "string_min_length": (int, STRING_MIN_LENGTH, 0, None, "Minimum random string length"),
        "string_max_length": (
            int,
            STRING_MAX_LENGTH,
            1,
            None,
            "Exclusive maximum random string length",
        ),
        "int_min": (int, INT_MIN, None, None, "Lower bound for random integers"),
        "int_max": (int, INT_MAX, None, None, "Exclusive upper bound for random integers"),
        "seconds_spread": (int, SECONDS_SPREAD, 1, 2**35, "Datetime shift range in seconds"),
        "seed": (int, -1, -1, None, "Random seed (-1 for an unseeded source)"),
        "skip_backing_fields": (bool, True, None, None, "Skip _x storage of property x"),
        "strict": (bool, False, None, None, "Raise instead of degrading to None"),
        "guard_cycles": (bool, True, None, None, "Stop recursion on repeated types in a path"),
    },
    "walker": {
        "skip_unreachable": (bool, False, None, None, "Skip notifications under absent owners"),
    },
}


@dataclass(frozen=True)
class GenerationConfig:
    """Value generation configuration."""

    collection_min: int
    collection_max: int
    string_min_length: int
    string_max_length: int
    int_min: int
    int_max: int
    seconds_spread: int
    seed: int
    skip_backing_fields: bool
    strict: bool
    guard_cycles: bool

    @property
    def random_seed(self) -> Optional[int]:
        """Seed for the engine's random source, or None for an unseeded one."""
        return None if self.seed < 0 else self.seed


@dataclass(frozen=True)
class WalkerConfig:
    """Graph walker configuration."""

    skip_unreachable: bool


def _defaults(section: str) -> dict[str, Any]:
    return {key: default for key, (_, default, _, _, _) in CONFIG_SCHEMA[section].items()}


def _load_section(
    parser: ConfigParser, section: str, schema: dict[str, tuple[type, Any, Any, Any, str]]
) -> dict[str, Any]:
    """Load and validate a configuration section.

    Args:
        parser: ConfigParser instance with loaded config
        section: Section name to load
        schema: Schema definition for the section

    Returns:
        Dictionary of validated configuration values

    Raises:
        ConfigError: If validation fails
    """
    result = {}

    if parser.has_section(section):
        unknown = set(parser.options(section)) - set(schema)
        if unknown:
            raise ConfigError(f"Unknown option(s) in [{section}]: {', '.join(sorted(unknown))}")

    for key, (typ, default, min_val, max_val, _) in schema.items():
        if parser.has_option(section, key):
            raw_value = parser.get(section, key)
            value: bool | int | float | str
            try:
                if typ is bool:
                    value = _parse_bool(raw_value)
                elif typ is int:
                    value = int(raw_value)
                elif typ is float:
                    value = float(raw_value)
                else:
                    value = raw_value
            except ValueError as e:
                raise ConfigError(
                    f"Invalid value for [{section}].{key}: {raw_value!r} (expected {typ.__name__})"
                ) from e
        else:
            value = default

        # Validate range for numeric types
        if typ in (int, float) and value is not None:
            if min_val is not None and value < min_val:
                raise ConfigError(
                    f"Value for [{section}].{key} is {value}, but minimum is {min_val}"
                )
            if max_val is not None and value > max_val:
                raise ConfigError(
                    f"Value for [{section}].{key} is {value}, but maximum is {max_val}"
                )

        result[key] = value

    return result


def _parse_bool(raw_value: str) -> bool:
    lowered = raw_value.strip().lower()
    if lowered in ("true", "1", "yes", "on"):
        return True
    if lowered in ("false", "0", "no", "off"):
        return False
    raise ValueError(f"not a boolean: {raw_value!r}")


def _validate_ranges(generation: GenerationConfig) -> None:
    """Check that every half-open range in the generation section is non-empty."""
    pairs = [
        ("collection_min", "collection_max"),
        ("string_min_length", "string_max_length"),
        ("int_min", "int_max"),
    ]
    for low_key, high_key in pairs:
        low = getattr(generation, low_key)
        high = getattr(generation, high_key)
        if low >= high:
            raise ConfigError(
                f"[generation].{low_key} ({low}) must be less than "
                f"[generation].{high_key} ({high})"
            )


def _load_config(config_path: Optional[Path] = None) -> "Config":
    """Load configuration from an INI file.

    Args:
        config_path: Path to config file. If None, uses defaults from schema.

    Returns:
        Config object with all sections populated

    Raises:
        ConfigError: If validation fails
    """
    parser = ConfigParser()

    if config_path and config_path.exists():
        parser.read(config_path)

    unknown_sections = set(parser.sections()) - set(CONFIG_SCHEMA)
    if unknown_sections:
        raise ConfigError(f"Unknown config section(s): {', '.join(sorted(unknown_sections))}")

    generation = GenerationConfig(
        **_load_section(parser, "generation", CONFIG_SCHEMA["generation"])
    )
    walker = WalkerConfig(**_load_section(parser, "walker", CONFIG_SCHEMA["walker"]))
    _validate_ranges(generation)

    return Config(generation=generation, walker=walker)


@dataclass(frozen=True)
class Config:
    """Complete synthesis configuration."""

    generation: GenerationConfig = None  # type: ignore[assignment]
    walker: WalkerConfig = None  # type: ignore[assignment]

    def __post_init__(self):
        """Initialize section configs with defaults if not provided."""
        # Since frozen=True, we need to use object.__setattr__
        if self.generation is None:
            object.__setattr__(self, "generation", GenerationConfig(**_defaults("generation")))
        if self.walker is None:
            object.__setattr__(self, "walker", WalkerConfig(**_defaults("walker")))


@lru_cache(maxsize=1)
def load_settings() -> Config:
    """Load settings from environment variables and config file.

    Settings are cached for the lifetime of the process.
    Use load_settings.cache_clear() to reload settings.

    Environment:
        TYPESYNTH_CONFIG: Path to an INI file with [generation]/[walker] sections.
        TYPESYNTH_SEED: Integer seed, overrides [generation].seed.
        TYPESYNTH_STRICT: Boolean, overrides [generation].strict.

    Returns:
        Config object populated from environment variables and config file.

    Raises:
        ConfigError: If the file or an override is invalid.
    """
    config_path_str = os.getenv("TYPESYNTH_CONFIG")
    config_path = Path(config_path_str) if config_path_str else None
    if config_path is not None and not config_path.exists():
        raise ConfigError(f"TYPESYNTH_CONFIG points to a missing file: {config_path}")

    base_config = _load_config(config_path)

    overrides: dict[str, Any] = {}
    seed_env = os.getenv("TYPESYNTH_SEED")
    if seed_env:
        try:
            overrides["seed"] = int(seed_env)
        except ValueError as e:
            raise ConfigError(f"Invalid TYPESYNTH_SEED: {seed_env!r}") from e
    strict_env = os.getenv("TYPESYNTH_STRICT")
    if strict_env:
        try:
            overrides["strict"] = _parse_bool(strict_env)
        except ValueError as e:
            raise ConfigError(f"Invalid TYPESYNTH_STRICT: {strict_env!r}") from e

    if not overrides:
        return base_config

    generation_values = {
        key: getattr(base_config.generation, key) for key in CONFIG_SCHEMA["generation"]
    }
    generation_values.update(overrides)
    return Config(generation=GenerationConfig(**generation_values), walker=base_config.walker)
