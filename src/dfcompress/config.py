"""Configuration: a frozen dataclass loaded from environment variables.

CLI flags override environment values (see dfcompress.cli).
"""

from __future__ import annotations

import os
import zlib
from collections.abc import Mapping
from dataclasses import dataclass

from dfcompress.errors import ConfigError


def _parse_bool(value: str) -> bool:
    return value.strip().lower() in ("true", "1", "yes")


def parse_level(value: str | int) -> int:
    try:
        level = int(value)
    except (TypeError, ValueError) as err:
        raise ConfigError(f"invalid zlib level: {value!r}") from err
    if not (-1 <= level <= 9):
        raise ConfigError(f"zlib level must be -1..9, got {level}")
    return level


@dataclass(frozen=True)
class ConvertConfig:
    level: int = zlib.Z_DEFAULT_COMPRESSION
    debug: bool = False
    verbose: bool = False


def load_config(env: Mapping[str, str] | None = None) -> ConvertConfig:
    env = os.environ if env is None else env
    return ConvertConfig(
        level=parse_level(env.get("DFCOMPRESS_LEVEL", str(ConvertConfig.level))),
        debug=_parse_bool(env.get("DFCOMPRESS_DEBUG", "false")),
        verbose=_parse_bool(env.get("DFCOMPRESS_VERBOSE", "false")),
    )
