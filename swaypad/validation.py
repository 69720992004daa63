"""Configuration validation framework with schema definitions.

Provides declarative schema definitions (ConfigField, ConfigItems) used by
``swaypad --validate`` and for the defaults of the typed configuration
objects. Supports type checking, required fields, nested tables, custom
validators and fuzzy matching for typo detection.
"""

import difflib
import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, cast

from .config import BOOL_STRINGS

__all__ = [
    "ConfigField",
    "ConfigItems",
    "ConfigValidator",
    "format_config_error",
]


@dataclass
class ConfigField:
    """Describes an expected configuration field for validation.

    Attributes:
        name: The configuration key name
        field_type: Expected type (str, bool, list, dict) or tuple of types for union
        required: Whether the field is required
        default: Default value if not provided
        description: Human-readable description
        validator: Custom validator function returning list of error messages
        children: Schema for each value of a table of tables (e.g. ``[apps.*]``)
    """

    name: str
    field_type: type | tuple[type, ...] = str
    required: bool = False
    default: Any = None
    description: str = ""
    validator: Callable[[Any], list[str]] | None = None
    children: "ConfigItems | None" = None

    @property
    def type_name(self) -> str:
        """Return human-readable type name (e.g. 'str or list')."""
        if isinstance(self.field_type, tuple):
            return " or ".join(typ.__name__ for typ in self.field_type)
        return self.field_type.__name__


class ConfigItems(list):
    """A list of ConfigField items with cached lookup by name."""

    def __init__(self, *args: ConfigField) -> None:
        super().__init__(args)
        self._cache: dict[str, ConfigField] = {}

    def get(self, name: str) -> ConfigField | None:
        """Get a ConfigField by name."""
        v = self._cache.get(name)
        if not v:
            for prop in self:
                if prop.name == name:
                    v = prop
                    self._cache[name] = v
                    break
        return v


def _find_similar_key(unknown_key: str, known_keys: list[str]) -> str | None:
    """Find a similar key using fuzzy matching."""
    matches = difflib.get_close_matches(unknown_key, known_keys, n=1)
    if matches:
        return matches[0]
    return None


def format_config_error(section: str, field: str, message: str, suggestion: str = "") -> str:
    """Format a configuration error message.

    Args:
        section: Config section, e.g. "apps.fish"
        field: Field name that has the error
        message: Error description
        suggestion: Optional suggestion for fixing the error
    """
    prefix = f"[{section}] " if section else ""
    msg = f"{prefix}Config error for '{field}': {message}"
    if suggestion:
        msg += f" -> {suggestion}"
    return msg


class ConfigValidator:
    """Validates configuration against a schema."""

    def __init__(self, config: dict, section: str, logger: logging.Logger) -> None:
        """Initialize the validator.

        Args:
            config: The configuration dictionary to validate
            section: Name of the section for error messages
            logger: Logger instance for warnings
        """
        self.config = config
        self.section = section
        self.log = logger
        self.warnings: list[str] = []

    def validate(self, schema: ConfigItems) -> list[str]:
        """Validate configuration against schema.

        Returns:
            List of error messages (empty if validation passed)
        """
        errors = []

        for field_def in schema:
            value = self.config.get(field_def.name)

            if field_def.required and value is None:
                errors.append(
                    format_config_error(
                        self.section,
                        field_def.name,
                        "Missing required field",
                        self._get_required_suggestion(field_def),
                    )
                )
                continue

            if value is None:
                continue

            type_error = self._check_type(field_def, value)
            if type_error:
                errors.append(type_error)
                continue

            if isinstance(value, dict) and field_def.children is not None:
                errors.extend(self._validate_dict_children(field_def, value))

            if field_def.validator:
                errors.extend(
                    format_config_error(self.section, field_def.name, validation_error) for validation_error in field_def.validator(value)
                )

        return errors

    def _check_type(self, field_def: ConfigField, value: Any) -> str | None:  # noqa: ANN401
        """Check if value matches expected type.

        Returns:
            Error message if type mismatch, None otherwise
        """
        expected = field_def.field_type
        expected_types = expected if isinstance(expected, tuple) else (expected,)

        for expected_type in expected_types:
            if expected_type is bool:
                if isinstance(value, bool) or (isinstance(value, str) and value.lower() in BOOL_STRINGS):
                    return None
            elif isinstance(value, expected_type) and not isinstance(value, bool):
                return None

        suggestion = ""
        if expected is bool:
            suggestion = "Use true/false (without quotes)"
        elif expected is str:
            suggestion = f'Use {field_def.name} = "value"'
        return format_config_error(
            self.section,
            field_def.name,
            f"Expected {field_def.type_name}, got {type(value).__name__}",
            suggestion,
        )

    def _validate_dict_children(self, field_def: ConfigField, value: dict) -> list[str]:
        """Validate every sub-table of `value` against the children schema."""
        errors: list[str] = []
        children_schema = cast("ConfigItems", field_def.children)
        for key, child_value in value.items():
            if not isinstance(child_value, dict):
                errors.append(
                    format_config_error(
                        f"{self.section}.{field_def.name}" if self.section else field_def.name,
                        key,
                        f"Expected a table, got {type(child_value).__name__}",
                    )
                )
                continue

            child_prefix = f"{self.section}.{field_def.name}.{key}" if self.section else f"{field_def.name}.{key}"
            child_validator = ConfigValidator(child_value, child_prefix, self.log)
            errors.extend(child_validator.validate(children_schema))
            self.warnings.extend(child_validator.warnings)
            self.warnings.extend(child_validator.warn_unknown_keys(children_schema))

        return errors

    def _get_required_suggestion(self, field_def: ConfigField) -> str:
        """Generate suggestion for a missing required field."""
        field_type = field_def.field_type
        if isinstance(field_type, tuple):
            field_type = field_type[0]

        if field_type is str:
            return f'Add {field_def.name} = "value" to [{self.section}]'
        if field_type is bool:
            return f"Add {field_def.name} = true/false to [{self.section}]"
        if field_type is list:
            return f'Add {field_def.name} = ["item"] to [{self.section}]'
        return f"Add '{field_def.name}' to [{self.section}]"

    def warn_unknown_keys(self, schema: ConfigItems) -> list[str]:
        """Log warnings for unknown configuration keys.

        Returns:
            List of warning messages
        """
        warnings = []
        known_keys = {f.name for f in schema}

        for key in self.config:
            if key in known_keys:
                continue

            similar = _find_similar_key(key, list(known_keys))
            prefix = f"[{self.section}] " if self.section else ""
            if similar:
                msg = f"{prefix}Unknown option '{key}' (did you mean '{similar}'?)"
            else:
                msg = f"{prefix}Unknown option '{key}' - will be ignored"

            self.log.warning(msg)
            warnings.append(msg)

        return warnings
