from __future__ import annotations

import dataclasses

import pytest

from dfcompress.config import ConvertConfig, _parse_bool, load_config, parse_level
from dfcompress.errors import EXIT_USAGE, ConfigError


@pytest.mark.parametrize("value", ["true", "True", "1", "yes", " YES "])
def test_parse_bool_truthy(value: str) -> None:
    assert _parse_bool(value) is True


@pytest.mark.parametrize("value", ["false", "0", "no", "", "maybe"])
def test_parse_bool_falsy(value: str) -> None:
    assert _parse_bool(value) is False


def test_defaults() -> None:
    cfg = load_config({})
    assert cfg == ConvertConfig()
    assert cfg.level == -1
    assert cfg.debug is False
    assert cfg.verbose is False


def test_from_env() -> None:
    cfg = load_config({"DFCOMPRESS_LEVEL": "9", "DFCOMPRESS_DEBUG": "1", "DFCOMPRESS_VERBOSE": "yes"})
    assert cfg == ConvertConfig(level=9, debug=True, verbose=True)


def test_frozen() -> None:
    with pytest.raises(dataclasses.FrozenInstanceError):
        ConvertConfig().level = 3  # type: ignore[misc]


@pytest.mark.parametrize("value", ["10", "-2", "fast", ""])
def test_bad_level(value: str) -> None:
    with pytest.raises(ConfigError) as ei:
        parse_level(value)
    assert ei.value.exit_code == EXIT_USAGE


def test_bad_level_from_env() -> None:
    with pytest.raises(ConfigError):
        load_config({"DFCOMPRESS_LEVEL": "11"})
