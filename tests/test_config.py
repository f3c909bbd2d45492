# tests/test_config.py
"""Configuration tests.

Tests verify behavior (types, ranges, loading) not specific values.
"""

import tempfile
from pathlib import Path

import pytest

from typesynth.config import (
    CONFIG_SCHEMA,
    Config,
    ConfigError,
    _load_config,
    load_settings,
)


@pytest.fixture
def temp_workspace():
    """Create temporary workspace directory."""
    with tempfile.TemporaryDirectory() as tmpdir:
        workspace = Path(tmpdir) / "workspace"
        workspace.mkdir()
        yield workspace


def write_config(workspace: Path, content: str) -> Path:
    """Write a config.ini file to the workspace and return the path."""
    config_path = workspace / "config.ini"
    config_path.write_text(content)
    return config_path


# =============================================================================
# Type Validation Tests
# =============================================================================


def test_all_settings_have_correct_types():
    """Every setting matches its declared type from schema."""
    config = _load_config(None)

    for section_name, keys in CONFIG_SCHEMA.items():
        section = getattr(config, section_name)
        for key, (expected_type, *_) in keys.items():
            value = getattr(section, key)
            assert isinstance(value, expected_type), (
                f"{section_name}.{key}: expected {expected_type.__name__}, "
                f"got {type(value).__name__}"
            )


def test_invalid_type_raises_clear_error(temp_workspace: Path):
    """Non-numeric value for int setting gives helpful message."""
    config_path = write_config(temp_workspace, "[generation]\nint_min = not_a_number")

    with pytest.raises(ConfigError) as exc_info:
        _load_config(config_path)

    assert "generation" in str(exc_info.value)
    assert "int_min" in str(exc_info.value)
    assert "int" in str(exc_info.value)


def test_invalid_bool_raises_clear_error(temp_workspace: Path):
    """Unrecognised boolean spelling is rejected."""
    config_path = write_config(temp_workspace, "[generation]\nstrict = maybe")

    with pytest.raises(ConfigError) as exc_info:
        _load_config(config_path)

    assert "strict" in str(exc_info.value)
    assert "bool" in str(exc_info.value)


@pytest.mark.parametrize("raw", ["true", "Yes", "1", "on"])
def test_bool_spellings_accepted(temp_workspace: Path, raw: str):
    config_path = write_config(temp_workspace, f"[walker]\nskip_unreachable = {raw}")

    assert _load_config(config_path).walker.skip_unreachable is True


# =============================================================================
# Range Validation Tests
# =============================================================================


def test_value_below_minimum_raises(temp_workspace: Path):
    """Values below the schema minimum are rejected."""
    config_path = write_config(temp_workspace, "[generation]\nseed = -2")

    with pytest.raises(ConfigError) as exc_info:
        _load_config(config_path)

    assert "minimum" in str(exc_info.value)


def test_value_above_maximum_raises(temp_workspace: Path):
    config_path = write_config(temp_workspace, f"[generation]\nseconds_spread = {2**36}")

    with pytest.raises(ConfigError, match="maximum"):
        _load_config(config_path)


def test_empty_range_raises(temp_workspace: Path):
    """A lower bound at or above its upper bound is rejected."""
    config_path = write_config(
        temp_workspace, "[generation]\ncollection_min = 10\ncollection_max = 10"
    )

    with pytest.raises(ConfigError) as exc_info:
        _load_config(config_path)

    assert "collection_min" in str(exc_info.value)
    assert "collection_max" in str(exc_info.value)


def test_unknown_option_raises(temp_workspace: Path):
    config_path = write_config(temp_workspace, "[generation]\nmax_depth = 4")

    with pytest.raises(ConfigError, match="max_depth"):
        _load_config(config_path)


def test_unknown_section_raises(temp_workspace: Path):
    config_path = write_config(temp_workspace, "[output]\nformat = json")

    with pytest.raises(ConfigError, match="output"):
        _load_config(config_path)


# =============================================================================
# Loading Tests
# =============================================================================


def test_file_values_override_defaults(temp_workspace: Path):
    config_path = write_config(
        temp_workspace,
        "[generation]\ncollection_min = 1\ncollection_max = 3\nseed = 99\n",
    )

    config = _load_config(config_path)

    assert config.generation.collection_min == 1
    assert config.generation.collection_max == 3
    assert config.generation.random_seed == 99
    # Untouched keys keep their defaults
    assert config.generation.int_max == CONFIG_SCHEMA["generation"]["int_max"][1]


def test_default_config_is_unseeded():
    assert Config().generation.random_seed is None


def test_load_settings_reads_config_file(temp_workspace: Path, monkeypatch):
    config_path = write_config(temp_workspace, "[generation]\nguard_cycles = false\n")
    monkeypatch.setenv("TYPESYNTH_CONFIG", str(config_path))

    settings = load_settings()

    assert settings.generation.guard_cycles is False


def test_load_settings_missing_file_raises(temp_workspace: Path, monkeypatch):
    monkeypatch.setenv("TYPESYNTH_CONFIG", str(temp_workspace / "absent.ini"))

    with pytest.raises(ConfigError, match="missing"):
        load_settings()


def test_environment_overrides(monkeypatch):
    """TYPESYNTH_SEED and TYPESYNTH_STRICT override the file values."""
    monkeypatch.delenv("TYPESYNTH_CONFIG", raising=False)
    monkeypatch.setenv("TYPESYNTH_SEED", "7")
    monkeypatch.setenv("TYPESYNTH_STRICT", "yes")

    settings = load_settings()

    assert settings.generation.seed == 7
    assert settings.generation.strict is True


@pytest.mark.parametrize(
    "name,value", [("TYPESYNTH_SEED", "seven"), ("TYPESYNTH_STRICT", "perhaps")]
)
def test_invalid_environment_override_raises(monkeypatch, name: str, value: str):
    monkeypatch.delenv("TYPESYNTH_CONFIG", raising=False)
    monkeypatch.setenv(name, value)

    with pytest.raises(ConfigError, match=name):
        load_settings()


def test_load_settings_is_cached(monkeypatch):
    monkeypatch.delenv("TYPESYNTH_CONFIG", raising=False)

    assert load_settings() is load_settings()
