"""Configuration schema."""

import logging
from typing import Any

from .config import coerce_to_bool, parse_identifier
from .models import ByTitle, ConfigError
from .validation import ConfigField, ConfigItems, ConfigValidator

__all__ = ["APP_SCHEMA", "ROOT_SCHEMA", "validate_config"]

# Null logger for validation (warnings become part of the returned list)
_null_logger = logging.getLogger("swaypad.schema")
_null_logger.addHandler(logging.NullHandler())
_null_logger.propagate = False


def _validate_identifier(value: dict) -> list[str]:
    try:
        parse_identifier(value)
    except ConfigError as e:
        return [str(e)]
    return []


def _validate_command(value: str) -> list[str]:
    if not value.strip():
        return ["command is empty"]
    return []


# Schema for one [apps.<name>] entry
APP_SCHEMA = ConfigItems(
    ConfigField("command", str, required=True, description="Command starting the application", validator=_validate_command),
    ConfigField("identifier", dict, required=True, description="How to recognize its window: { Title | AppId | Class = \"...\" }", validator=_validate_identifier),
    ConfigField("is_terminal", bool, default=False, description="Run the command inside `terminal`"),
    ConfigField("startup_override", str, description="Command used instead of the computed one on launch"),
)

ROOT_SCHEMA = ConfigItems(
    ConfigField("terminal", str, default="", description="Terminal program hosting terminal applications"),
    ConfigField("apps", dict, default={}, description="Applications, by name", children=APP_SCHEMA),
    ConfigField("include", (str, list), description="Extra configuration files to merge"),
)


def _check_terminal_apps(config: dict[str, Any]) -> list[str]:
    """Report terminal applications which can't be started or found again."""
    warnings = []
    apps = config.get("apps")
    if not isinstance(apps, dict):
        return warnings
    for name, app in apps.items():
        if not isinstance(app, dict) or not coerce_to_bool(app.get("is_terminal")) or "startup_override" in app:
            continue
        try:
            identifier = parse_identifier(app.get("identifier"))
        except ConfigError:
            continue  # already reported
        if not isinstance(identifier, ByTitle):
            warnings.append(f"[apps.{name}] is_terminal only wraps the command when the identifier is a Title")
        elif not config.get("terminal"):
            warnings.append(f"[apps.{name}] is a terminal application but no `terminal` is configured")
    return warnings


def validate_config(config: dict[str, Any], log: logging.Logger = _null_logger) -> tuple[list[str], list[str]]:
    """Validate a raw configuration document.

    Returns:
        (errors, warnings)
    """
    validator = ConfigValidator(config, "", log)
    errors = validator.validate(ROOT_SCHEMA)
    warnings = validator.warn_unknown_keys(ROOT_SCHEMA) + validator.warnings
    for warning in _check_terminal_apps(config):
        log.warning(warning)
        warnings.append(warning)
    return errors, warnings
