"""Validator registry and sanitizer configuration.

A ``Sanitizer`` pairs an immutable ValidatorRegistry with a TypeInferrer.
It is built once and passed by reference to the encoder and expander; no
method mutates it after construction, so one instance can be shared by any
number of threads without locking.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from functools import lru_cache
from types import MappingProxyType

from .inference import TypeInferrer
from .models import ParameterType, SanitizedText
from .patterns.loader import PatternConfig, default_pattern_config
from .validators.base import ParameterValidator
from .validators.description import DescriptionValidator
from .validators.generic import GenericValidator
from .validators.identifier import IDValidator
from .validators.name import NameValidator

logger = logging.getLogger(__name__)

VALIDATOR_CLASSES: tuple[type[ParameterValidator], ...] = (
    IDValidator,
    NameValidator,
    DescriptionValidator,
    GenericValidator,
)


class ValidatorRegistry:
    """Read-only mapping from ParameterType to its validator.

    Exactly one validator is registered per type at construction time.
    Lookups for an unregistered type fall back to the GENERIC validator.
    """

    def __init__(self, validators: Mapping[ParameterType, ParameterValidator]) -> None:
        """Initialize registry.

        Args:
            validators: Validator per parameter type; must include GENERIC

        Raises:
            ValueError: If GENERIC is missing or a validator is keyed under
                a type it does not handle
        """
        for parameter_type, validator in validators.items():
            if validator.kind is not parameter_type:
                raise ValueError(
                    f"{type(validator).__name__} handles {validator.kind.name}, "
                    f"not {parameter_type.name}"
                )
        if ParameterType.GENERIC not in validators:
            raise ValueError("Registry requires a GENERIC validator")

        self._validators: Mapping[ParameterType, ParameterValidator] = MappingProxyType(
            dict(validators)
        )

    @classmethod
    def from_config(cls, config: PatternConfig) -> "ValidatorRegistry":
        """Build a registry with one validator per type from a config.

        Args:
            config: Pattern configuration

        Returns:
            New ValidatorRegistry
        """
        return cls(
            {
                validator_class.kind: validator_class(config.table_for(validator_class.kind))
                for validator_class in VALIDATOR_CLASSES
            }
        )

    def get(self, parameter_type: ParameterType) -> ParameterValidator:
        """Get the validator for a parameter type.

        Args:
            parameter_type: Parameter type to look up

        Returns:
            Registered validator, or the GENERIC validator as fallback
        """
        validator = self._validators.get(parameter_type)
        if validator is None:
            return self._validators[ParameterType.GENERIC]
        return validator

    def types(self) -> frozenset[ParameterType]:
        """Get the registered parameter types."""
        return frozenset(self._validators)

    def __len__(self) -> int:
        return len(self._validators)

    def __repr__(self) -> str:
        kinds = ", ".join(t.name for t in self._validators)
        return f"ValidatorRegistry({kinds})"


@dataclass(frozen=True)
class Sanitizer:
    """Immutable sanitizer configuration shared by encoder calls.

    Attributes:
        registry: Validator per parameter type
        inferrer: Type inferrer for raw strings
    """

    registry: ValidatorRegistry
    inferrer: TypeInferrer

    @classmethod
    def from_config(cls, config: PatternConfig) -> "Sanitizer":
        """Build a sanitizer from a pattern configuration.

        Args:
            config: Pattern configuration

        Returns:
            New Sanitizer
        """
        return cls(
            registry=ValidatorRegistry.from_config(config),
            inferrer=TypeInferrer(config.inference),
        )

    def infer_type(self, value: str) -> ParameterType:
        """Infer the parameter type of a string."""
        return self.inferrer.infer(value)

    def validate(self, value: str, parameter_type: ParameterType) -> str:
        """Run the validator registered for a type."""
        return self.registry.get(parameter_type).validate(value)

    def sanitize(self, value: str) -> SanitizedText:
        """Infer a string's type and validate it accordingly.

        Args:
            value: Raw string

        Returns:
            SanitizedText with the inferred type and cleaned text
        """
        parameter_type = self.infer_type(value)
        return SanitizedText(
            original=value,
            parameter_type=parameter_type,
            cleaned=self.validate(value, parameter_type),
        )


@lru_cache(maxsize=1)
def default_sanitizer() -> Sanitizer:
    """Get the process-wide default sanitizer, building it on first use.

    Returns:
        Sanitizer built from the default pattern configuration
    """
    config = default_pattern_config()
    logger.debug("Building default sanitizer from %s", config.source)
    return Sanitizer.from_config(config)


def infer_type(value: str, sanitizer: Sanitizer | None = None) -> ParameterType:
    """Infer the parameter type of a string.

    Args:
        value: Raw string
        sanitizer: Sanitizer to use (default sanitizer if None)

    Returns:
        Inferred ParameterType

    Examples:
        >>> infer_type("project_123_abc")
        <ParameterType.ID: 'id'>
    """
    return (sanitizer or default_sanitizer()).infer_type(value)


def validate(value: str, parameter_type: ParameterType, sanitizer: Sanitizer | None = None) -> str:
    """Clean a string with the validator for an explicit type.

    Args:
        value: Raw string
        parameter_type: Parameter type whose validator to run
        sanitizer: Sanitizer to use (default sanitizer if None)

    Returns:
        Cleaned string (not quoted)
    """
    return (sanitizer or default_sanitizer()).validate(value, parameter_type)
