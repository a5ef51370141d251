"""Danger-pattern configuration loading.

This module loads the sanitizer's danger-pattern tables, length caps and
type-inference settings from YAML. The packaged ``patterns.yaml`` is used
unless a path is passed explicitly or ``SQLINLINE_PATTERNS_FILE`` points
elsewhere.
"""

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Any

import yaml

from ..errors import ConfigurationError
from ..models import DangerPattern, ParameterType

logger = logging.getLogger(__name__)

DEFAULT_PATTERNS_PATH = Path(__file__).parent / "patterns.yaml"
PATTERNS_ENV_VAR = "SQLINLINE_PATTERNS_FILE"
SUPPORTED_VERSION = "1.0"


@dataclass(frozen=True)
class PatternTable:
    """Ordered danger patterns plus the length cap for one sanitizer.

    Attributes:
        max_length: Maximum output length in characters
        patterns: Danger patterns in application order
    """

    max_length: int
    patterns: tuple[DangerPattern, ...] = ()


@dataclass(frozen=True)
class InferenceSettings:
    """Thresholds and markers used by the type inferrer.

    Attributes:
        id_max_length: Longest string still classified as an ID
        description_min_length: Strings longer than this are descriptions
        name_markers: Substrings that mark a value as a name
    """

    id_max_length: int = 100
    description_min_length: int = 500
    name_markers: tuple[str, ...] = ()


@dataclass(frozen=True)
class PatternConfig:
    """Complete sanitizer configuration.

    Attributes:
        version: Configuration format version
        source: Path the configuration was loaded from
        inference: Type inference settings
        validators: Pattern table per parameter type (read-only mapping)
        legacy: Pattern table for the standalone sanitizer
    """

    version: str
    source: str
    inference: InferenceSettings
    validators: Mapping[ParameterType, PatternTable]
    legacy: PatternTable

    def table_for(self, parameter_type: ParameterType) -> PatternTable:
        """Get the pattern table for a parameter type.

        Args:
            parameter_type: Parameter type to look up

        Returns:
            Pattern table for the type
        """
        return self.validators[parameter_type]


def resolve_patterns_path(path: str | Path | None = None) -> Path:
    """Resolve which configuration file to load.

    Args:
        path: Explicit path, takes precedence over the environment

    Returns:
        Path to the configuration file
    """
    if path is not None:
        return Path(path)
    env_path = os.environ.get(PATTERNS_ENV_VAR, "")
    if env_path:
        return Path(env_path)
    return DEFAULT_PATTERNS_PATH


def load_pattern_config(path: str | Path | None = None) -> PatternConfig:
    """Load and validate a pattern configuration file.

    Args:
        path: Path to a YAML configuration file (optional)

    Returns:
        Parsed PatternConfig

    Raises:
        ConfigurationError: If the file is missing, unparsable or malformed
    """
    config_path = resolve_patterns_path(path)
    source = str(config_path)

    if not config_path.exists():
        raise ConfigurationError(source, "file not found")

    try:
        with open(config_path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(source, f"invalid YAML: {e}") from e

    if not isinstance(data, dict):
        raise ConfigurationError(source, "top level must be a mapping")

    version = str(data.get("version", "unknown"))
    if version != SUPPORTED_VERSION:
        raise ConfigurationError(
            source, f"unsupported version {version!r}, expected {SUPPORTED_VERSION!r}"
        )

    inference = _parse_inference(source, data.get("inference", {}))

    raw_validators = data.get("validators")
    if not isinstance(raw_validators, dict):
        raise ConfigurationError(source, "'validators' must be a mapping")

    validators: dict[ParameterType, PatternTable] = {}
    for parameter_type in ParameterType:
        if parameter_type.value not in raw_validators:
            raise ConfigurationError(
                source, f"missing validator table '{parameter_type.value}'"
            )
        validators[parameter_type] = _parse_table(
            source, parameter_type.value, raw_validators[parameter_type.value]
        )

    if "legacy" not in data:
        raise ConfigurationError(source, "missing 'legacy' table")
    legacy = _parse_table(source, "legacy", data["legacy"])

    logger.debug(
        "Loaded pattern config %s (%d validator tables, %d legacy patterns)",
        source,
        len(validators),
        len(legacy.patterns),
    )

    return PatternConfig(
        version=version,
        source=source,
        inference=inference,
        validators=MappingProxyType(validators),
        legacy=legacy,
    )


@lru_cache(maxsize=1)
def default_pattern_config() -> PatternConfig:
    """Load the default configuration once per process.

    Returns:
        Cached PatternConfig for the packaged (or env-selected) file
    """
    return load_pattern_config()


def _parse_inference(source: str, raw: Any) -> InferenceSettings:
    """Parse the 'inference' section."""
    if not isinstance(raw, dict):
        raise ConfigurationError(source, "'inference' must be a mapping")

    markers = raw.get("name_markers", [])
    if not isinstance(markers, list) or not all(isinstance(m, str) and m for m in markers):
        raise ConfigurationError(source, "'inference.name_markers' must be a list of strings")

    return InferenceSettings(
        id_max_length=_positive_int(source, "inference.id_max_length", raw.get("id_max_length", 100)),
        description_min_length=_positive_int(
            source, "inference.description_min_length", raw.get("description_min_length", 500)
        ),
        name_markers=tuple(markers),
    )


def _parse_table(source: str, name: str, raw: Any) -> PatternTable:
    """Parse one pattern table."""
    if not isinstance(raw, dict):
        raise ConfigurationError(source, f"table '{name}' must be a mapping")

    max_length = _positive_int(source, f"{name}.max_length", raw.get("max_length"))

    raw_patterns = raw.get("patterns") or []
    if not isinstance(raw_patterns, list):
        raise ConfigurationError(source, f"'{name}.patterns' must be a list")

    patterns: list[DangerPattern] = []
    for index, entry in enumerate(raw_patterns):
        if (
            not isinstance(entry, list)
            or len(entry) != 2
            or not all(isinstance(part, str) for part in entry)
        ):
            raise ConfigurationError(
                source, f"'{name}.patterns[{index}]' must be a [match, replacement] pair"
            )
        match, replacement = entry
        if not match:
            raise ConfigurationError(source, f"'{name}.patterns[{index}]' has an empty match")
        patterns.append(DangerPattern(pattern=match.lower(), replacement=replacement))

    return PatternTable(max_length=max_length, patterns=tuple(patterns))


def _positive_int(source: str, key: str, value: Any) -> int:
    """Validate a positive integer setting."""
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise ConfigurationError(source, f"'{key}' must be a positive integer")
    return value
