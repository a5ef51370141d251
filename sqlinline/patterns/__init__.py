"""Danger-pattern configuration for the sanitizer pipeline."""

from .loader import (
    InferenceSettings,
    PatternConfig,
    PatternTable,
    default_pattern_config,
    load_pattern_config,
)

__all__ = [
    "InferenceSettings",
    "PatternConfig",
    "PatternTable",
    "default_pattern_config",
    "load_pattern_config",
]
