"""Configuration validation with schema definitions.

Provides declarative schema definitions (ConfigField, ConfigItems) for the
`[cmdnest]` settings table: type checking, choices, custom validators and
typo detection for unknown keys.
"""

import difflib
import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from .config import BOOL_STRINGS

__all__ = [
    "ConfigField",
    "ConfigItems",
    "ConfigValidator",
    "format_config_error",
]


@dataclass
class ConfigField:
    """Describes an expected configuration field.

    Attributes:
        name: The configuration key name
        field_type: Expected type (str, int, bool) or tuple of types for union
        default: Default value if not provided
        description: Human-readable description for error messages
        choices: List of valid values for enum-like fields
        validator: Custom validator function returning list of error messages
    """

    name: str
    field_type: type | tuple[type, ...] = str
    default: Any = None
    description: str = ""
    choices: list | None = None
    validator: Callable[[Any], list[str]] | None = None

    @property
    def type_name(self) -> str:
        """Return human-readable type name (e.g., 'str', 'int or str')."""
        if isinstance(self.field_type, tuple):
            return " or ".join(typ.__name__ for typ in self.field_type)
        return self.field_type.__name__


class ConfigItems(list):
    """A list of ConfigField items with lookup by name."""

    def __init__(self, *args: ConfigField) -> None:
        super().__init__(args)

    def get(self, name: str) -> ConfigField | None:
        """Get a ConfigField by name."""
        for prop in self:
            if prop.name == name:
                return prop
        return None


def _find_similar_key(unknown_key: str, known_keys: list[str]) -> str | None:
    """Find a similar key using fuzzy matching.

    Args:
        unknown_key: The unknown key to find a match for
        known_keys: List of valid keys to search

    Returns:
        The closest matching key, or None if no close match found
    """
    matches = difflib.get_close_matches(unknown_key, known_keys, n=1)
    if matches:
        return matches[0]
    return None


def format_config_error(section: str, field: str, message: str, suggestion: str = "") -> str:
    """Format a configuration error message.

    Args:
        section: Settings table name
        field: Field name that has the error
        message: Error description
        suggestion: Optional suggestion for fixing the error

    Returns:
        Formatted error message
    """
    msg = f"[{section}] Config error for '{field}': {message}"
    if suggestion:
        msg += f" -> {suggestion}"
    return msg


class ConfigValidator:
    """Validates configuration against a schema."""

    def __init__(self, config: dict, section: str, logger: logging.Logger) -> None:
        """Initialize the validator.

        Args:
            config: The configuration dictionary to validate
            section: Name of the settings table for error messages
            logger: Logger instance for warnings
        """
        self.config = config
        self.section = section
        self.log = logger
        self.invalid: set[str] = set()

    def validate(self, schema: ConfigItems) -> list[str]:
        """Validate configuration against schema.

        Args:
            schema: List of ConfigField definitions

        Returns:
            List of error messages (empty if validation passed)
        """
        errors = []

        for field_def in schema:
            value = self.config.get(field_def.name)
            if value is None:
                continue

            field_errors = []
            type_error = self._check_type(field_def, value)
            if type_error:
                field_errors.append(type_error)
            else:
                if field_def.choices is not None and value not in field_def.choices:
                    choices_str = ", ".join(repr(c) for c in field_def.choices)
                    field_errors.append(format_config_error(self.section, field_def.name, f"Invalid value {value!r}", f"Valid options: {choices_str}"))
                if field_def.validator:
                    field_errors.extend(format_config_error(self.section, field_def.name, problem) for problem in field_def.validator(value))

            if field_errors:
                self.invalid.add(field_def.name)
                errors.extend(field_errors)

        return errors

    def _check_type(self, field_def: ConfigField, value: Any) -> str | None:
        """Check if value matches expected type.

        Returns:
            Error message if type mismatch, None otherwise
        """
        expected = field_def.field_type if isinstance(field_def.field_type, tuple) else (field_def.field_type,)
        for single_type in expected:
            if self._matches(single_type, value):
                return None
        return format_config_error(
            self.section,
            field_def.name,
            f"Expected {field_def.type_name}, got {type(value).__name__}",
        )

    @staticmethod
    def _matches(expected_type: type, value: Any) -> bool:
        """Check a single type (bool is a subclass of int, hence the special cases)."""
        if expected_type is bool:
            return isinstance(value, bool) or (isinstance(value, str) and value.lower() in BOOL_STRINGS)
        if expected_type is int:
            return isinstance(value, int) and not isinstance(value, bool)
        return isinstance(value, expected_type)

    def warn_unknown_keys(self, schema: ConfigItems) -> list[str]:
        """Log warnings for unknown configuration keys.

        Args:
            schema: List of ConfigField definitions

        Returns:
            List of warning messages
        """
        warnings = []
        known_keys = [f.name for f in schema]

        for key in self.config:
            if key in known_keys:
                continue

            similar = _find_similar_key(key, known_keys)
            if similar:
                msg = f"[{self.section}] Unknown option '{key}' (did you mean '{similar}'?)"
            else:
                msg = f"[{self.section}] Unknown option '{key}' - will be ignored"

            self.log.warning(msg)
            warnings.append(msg)

        return warnings
