# Copyright 2026 ProtoIDL Contributors
# SPDX-License-Identifier: Apache-2.0

"""Data model and YAML loader for the parser configuration file."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import yaml

from protoidl.parser.dialect import Dialect

# ###############
# Public Interface
# ###############

CONFIG_FILE_NAME = ".protoidl.yaml"


class ConfigError(Exception):
    """Raised when a configuration file is invalid or cannot be loaded."""


@dataclass(frozen=True)
class ParserConfig:
    """Settings that select how schema files are parsed.

    Attributes:
        dialect: The grammar dialect applied to every file.
    """

    dialect: Dialect = Dialect.STRICT


def load_parser_config(path: Path) -> ParserConfig:
    """Load and parse a parser configuration file.

    An empty file yields the default configuration.

    Args:
        path: Path to the `.protoidl.yaml` file.

    Returns:
        A ParserConfig instance populated from the file.

    Raises:
        ConfigError: If the file cannot be read or the configuration is invalid.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise ConfigError(f"Config file not found: {path}") from None
    except OSError as exc:
        raise ConfigError(f"Cannot read config file: {exc}") from exc

    return parse_parser_config(text, source_label=str(path))


def parse_parser_config(text: str, source_label: str = "<string>") -> ParserConfig:
    """Parse configuration YAML text into a ParserConfig.

    Args:
        text: Raw YAML content.
        source_label: Human-readable label used in error messages (e.g. the file path).

    Raises:
        ConfigError: If the YAML is invalid or contains unknown keys or values.
    """
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {source_label}: {exc}") from exc

    if data is None:
        return ParserConfig()
    if not isinstance(data, dict):
        raise ConfigError(f"{source_label}: parser config must be a YAML mapping")

    unknown = sorted(str(key) for key in data if key not in _KNOWN_KEYS)
    if unknown:
        raise ConfigError(f"{source_label}: unknown config key(s): {', '.join(unknown)}")

    if "dialect" not in data:
        return ParserConfig()
    return ParserConfig(dialect=_parse_dialect(data["dialect"], source_label))


# ################
# Implementation
# ################

_KNOWN_KEYS = frozenset({"dialect"})


def _parse_dialect(value: object, source_label: str) -> Dialect:
    """Map a dialect name such as 'legacy' or 'strict' to a Dialect."""
    if not isinstance(value, str):
        raise ConfigError(f"{source_label}: 'dialect' must be a string")
    try:
        return Dialect(value.lower())
    except ValueError:
        choices = ", ".join(d.value for d in Dialect)
        raise ConfigError(f"{source_label}: unknown dialect {value!r} (expected one of: {choices})") from None
