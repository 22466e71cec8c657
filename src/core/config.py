"""Runtime configuration model for Cardsmith.

This module owns all environment variable and config file parsing.
Other modules consume a typed config object instead of raw env reads.
"""

from __future__ import annotations

import codecs
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, cast

import yaml

from core.constants import (
    DEFAULT_ENCODING,
    DEFAULT_ID_STRATEGY,
    DEFAULT_LOG_LEVEL,
    ENV_ENCODING,
    ENV_ID_STRATEGY,
    ENV_LOG_LEVEL,
    SUPPORTED_ID_STRATEGIES,
    SUPPORTED_LOG_LEVELS,
)
from core.errors import CardsmithConfigError

_CONFIG_FILE_KEYS = ("id_strategy", "encoding", "log_level")


@dataclass(frozen=True)
class CardsmithConfig:
    """Validated runtime configuration.

    Attributes:
        id_strategy: Identifier token source for synthesized card ids.
        encoding: Text encoding used when reading payload files.
        log_level: Minimum log level name.
    """

    id_strategy: str = DEFAULT_ID_STRATEGY
    encoding: str = DEFAULT_ENCODING
    log_level: str = DEFAULT_LOG_LEVEL

    @classmethod
    def from_env(cls) -> "CardsmithConfig":
        """Build config from process environment variables.

        Returns:
            A validated config object.

        Raises:
            CardsmithConfigError: If environment values are invalid.
        """
        return cls(
            id_strategy=_parse_id_strategy(os.getenv(ENV_ID_STRATEGY, DEFAULT_ID_STRATEGY)),
            encoding=_parse_encoding(os.getenv(ENV_ENCODING, DEFAULT_ENCODING)),
            log_level=_parse_log_level(os.getenv(ENV_LOG_LEVEL, DEFAULT_LOG_LEVEL)),
        )

    @classmethod
    def from_yaml_file(cls, config_path: str | Path) -> "CardsmithConfig":
        """Build config from a YAML file.

        Missing keys keep their defaults.

        Args:
            config_path: Path to a YAML mapping with config keys.

        Returns:
            A validated config object.

        Raises:
            CardsmithConfigError: If the file is unreadable or holds invalid values.
        """
        mapping = _load_yaml_mapping(Path(config_path).expanduser().resolve())
        return cls(
            id_strategy=_parse_id_strategy(
                _expect_string(mapping, "id_strategy", DEFAULT_ID_STRATEGY)
            ),
            encoding=_parse_encoding(_expect_string(mapping, "encoding", DEFAULT_ENCODING)),
            log_level=_parse_log_level(_expect_string(mapping, "log_level", DEFAULT_LOG_LEVEL)),
        )


def _load_yaml_mapping(config_file: Path) -> Mapping[str, object]:
    try:
        payload = cast(object, yaml.safe_load(config_file.read_text(encoding="utf-8")))
    except OSError as error:
        raise CardsmithConfigError(
            f"Failed to read config at {config_file}: {error}. Check the path and retry."
        ) from error
    except yaml.YAMLError as error:
        raise CardsmithConfigError(
            f"Failed to parse YAML config at {config_file}: {error}. Fix YAML syntax and retry."
        ) from error
    if payload is None:
        return {}
    if not isinstance(payload, Mapping):
        raise CardsmithConfigError(
            f"Invalid config at {config_file}: expected a mapping, got {type(payload).__name__}."
        )
    unknown_keys = sorted(str(key) for key in payload if key not in _CONFIG_FILE_KEYS)
    if unknown_keys:
        raise CardsmithConfigError(
            f"Unsupported config keys in {config_file}: {', '.join(unknown_keys)}. "
            f"Supported keys: {', '.join(_CONFIG_FILE_KEYS)}."
        )
    return cast(Mapping[str, object], payload)


def _expect_string(mapping: Mapping[str, object], key: str, default: str) -> str:
    value = mapping.get(key, default)
    if not isinstance(value, str):
        raise CardsmithConfigError(
            f"Config field '{key}' must be a string, got {type(value).__name__}."
        )
    return value


def _parse_id_strategy(raw_value: str) -> str:
    """Parse the id strategy value.

    Args:
        raw_value: Raw strategy name.

    Returns:
        Normalized strategy name.

    Raises:
        CardsmithConfigError: If the strategy is unknown.
    """
    strategy = raw_value.strip().lower()
    if strategy not in SUPPORTED_ID_STRATEGIES:
        raise CardsmithConfigError(
            f"Invalid id strategy '{raw_value}'. "
            f"Set {ENV_ID_STRATEGY} to one of: {', '.join(SUPPORTED_ID_STRATEGIES)}."
        )
    return strategy


def _parse_encoding(raw_value: str) -> str:
    """Parse and validate a text encoding name.

    Args:
        raw_value: Raw codec name.

    Returns:
        The codec name as given.

    Raises:
        CardsmithConfigError: If Python does not know the codec.
    """
    try:
        codecs.lookup(raw_value)
    except LookupError as error:
        raise CardsmithConfigError(
            f"Invalid encoding '{raw_value}'. Set {ENV_ENCODING} to a known codec such as utf-8."
        ) from error
    return raw_value


def _parse_log_level(raw_value: str) -> str:
    level = raw_value.strip().upper()
    if level not in SUPPORTED_LOG_LEVELS:
        raise CardsmithConfigError(
            f"Invalid log level '{raw_value}'. "
            f"Set {ENV_LOG_LEVEL} to one of: {', '.join(SUPPORTED_LOG_LEVELS)}."
        )
    return level
