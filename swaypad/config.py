"""Typed configuration objects built from the raw TOML document."""

from __future__ import annotations

import difflib
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, assert_never

from .models import ByApplicationId, ByClass, ByTitle, ConfigError, Identifier

if TYPE_CHECKING:
    import logging

    from .validation import ConfigItems

__all__ = [
    "BOOL_FALSE_STRINGS",
    "BOOL_STRINGS",
    "BOOL_TRUE_STRINGS",
    "AppConfig",
    "Configuration",
    "SwaypadConfig",
    "coerce_to_bool",
    "describe_identifier",
    "parse_identifier",
]

# Type alias for config values
ConfigValueType = float | bool | str | list | dict

# Boolean string constants (shared with validation module)
BOOL_TRUE_STRINGS = frozenset({"true", "yes", "on", "1", "enabled"})
BOOL_FALSE_STRINGS = frozenset({"false", "no", "off", "0", "disabled"})
BOOL_STRINGS = BOOL_TRUE_STRINGS | BOOL_FALSE_STRINGS

# normalized identifier key -> variant
IDENTIFIER_KINDS: dict[str, type[ByTitle] | type[ByApplicationId] | type[ByClass]] = {
    "title": ByTitle,
    "appid": ByApplicationId,
    "class": ByClass,
}


def coerce_to_bool(value: ConfigValueType | None, default: bool = False) -> bool:
    """Coerce a value to boolean, handling loose typing.

    Args:
        value: The value to coerce
        default: Default value if value is None

    Behavior:
        - None → default
        - Empty string → False
        - Explicit falsy strings ("false", "no", "off", "0", "disabled") → False
        - Any other non-empty string → True
        - Non-string values → bool(value)
    """
    if value is None:
        return default
    if isinstance(value, str):
        if not value.strip():
            return False
        return value.lower().strip() not in BOOL_FALSE_STRINGS
    return bool(value)


class Configuration(dict):
    """A config section with schema defaults and typed accessors."""

    def __init__(
        self,
        *args: Any,  # noqa: ANN401
        logger: logging.Logger,
        schema: ConfigItems | None = None,
        **kwargs: Any,  # noqa: ANN401
    ):
        """Initialize the configuration object.

        Args:
            *args: Arguments for dict
            logger: Logger instance to use for warnings
            schema: Optional list of ConfigField definitions for automatic defaults
            **kwargs: Keyword arguments for dict
        """
        super().__init__(*args, **kwargs)
        self.log = logger
        self._schema_defaults: dict[str, ConfigValueType] = {}
        if schema:
            self._schema_defaults = {f.name: f.default for f in schema if f.default is not None}

    def get(self, name: str, default: ConfigValueType | None = None) -> ConfigValueType | None:  # type: ignore[override]
        """Get a value, falling back to the schema default then to `default`."""
        if name in self:
            return dict.get(self, name)  # type: ignore[return-value]
        return self._schema_defaults.get(name, default)

    def get_bool(self, name: str, default: bool = False) -> bool:
        """Get a boolean value, handling loose typing (see `coerce_to_bool`)."""
        value = self.get(name)
        if isinstance(value, str) and value.lower().strip() not in BOOL_STRINGS:
            self.log.warning("Invalid value for boolean option %s: %r, considering it true", name, value)
        return coerce_to_bool(value, default)

    def get_str(self, name: str, default: str = "") -> str:
        """Get a string value."""
        value = self.get(name)
        if value is None:
            return default
        return str(value)


def parse_identifier(value: Any) -> Identifier:  # noqa: ANN401
    """Build an Identifier from its TOML form.

    Accepts a single-key table such as ``{ AppId = "obsidian" }`` or
    ``{ title = "fish-term" }``. Keys are case-insensitive and ``_`` is
    ignored, so ``AppId``, ``app_id`` and ``appid`` are equivalent.

    Raises:
        ConfigError: if the value is not a one-key table of a known kind
    """
    if not isinstance(value, dict) or len(value) != 1:
        msg = f"identifier must be a table with exactly one of Title, AppId or Class, got {value!r}"
        raise ConfigError(msg)
    ((key, literal),) = value.items()
    kind = IDENTIFIER_KINDS.get(str(key).replace("_", "").lower())
    if kind is None:
        msg = f"unknown identifier kind {key!r} (expected Title, AppId or Class)"
        raise ConfigError(msg)
    if not isinstance(literal, str) or not literal:
        msg = f"identifier {key} must be a non-empty string"
        raise ConfigError(msg)
    return kind(literal)


def describe_identifier(identifier: Identifier) -> str:
    """Return a short human readable form, e.g. ``app_id=obsidian``."""
    match identifier:
        case ByTitle(value):
            return f"title={value}"
        case ByApplicationId(value):
            return f"app_id={value}"
        case ByClass(value):
            return f"class={value}"
        case _:
            assert_never(identifier)


@dataclass(frozen=True)
class AppConfig:
    """How to recognize and start one application."""

    name: str
    command: str
    identifier: Identifier
    is_terminal: bool = False
    startup_override: str | None = None

    @classmethod
    def from_section(cls, name: str, section: Configuration) -> AppConfig:
        """Build the app entry from its ``[apps.<name>]`` section.

        Raises:
            ConfigError: if the section is incomplete
        """
        command = section.get("command")
        if not isinstance(command, str) or not command.strip():
            msg = f"application {name!r} has no command"
            raise ConfigError(msg)
        try:
            identifier = parse_identifier(section.get("identifier"))
        except ConfigError as e:
            msg = f"application {name!r}: {e}"
            raise ConfigError(msg) from e
        override = section.get("startup_override")
        return cls(
            name=name,
            command=command,
            identifier=identifier,
            is_terminal=section.get_bool("is_terminal"),
            startup_override=None if override is None else str(override),
        )


@dataclass(frozen=True)
class SwaypadConfig:
    """The whole configuration, loaded once per invocation."""

    terminal: str = ""
    apps: dict[str, AppConfig] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, raw: dict[str, Any], log: logging.Logger) -> SwaypadConfig:
        """Build the configuration from the merged TOML document.

        Raises:
            ConfigError: if an application entry is invalid
        """
        from .schema import APP_SCHEMA, ROOT_SCHEMA  # pylint: disable=import-outside-toplevel

        root = Configuration(raw, logger=log, schema=ROOT_SCHEMA)
        apps_section = root.get("apps") or {}
        if not isinstance(apps_section, dict):
            msg = "[apps] must be a table"
            raise ConfigError(msg)
        apps = {}
        for name, section in apps_section.items():
            if not isinstance(section, dict):
                msg = f"application {name!r} must be a table"
                raise ConfigError(msg)
            apps[name] = AppConfig.from_section(name, Configuration(section, logger=log, schema=APP_SCHEMA))
        return cls(terminal=root.get_str("terminal"), apps=apps)

    def get_app(self, name: str) -> AppConfig:
        """Return the entry for `name`.

        Raises:
            ConfigError: if `name` is not configured
        """
        try:
            return self.apps[name]
        except KeyError:
            pass
        msg = f"Unknown application: {name}"
        similar = difflib.get_close_matches(name, list(self.apps), n=1)
        if similar:
            msg += f" (did you mean '{similar[0]}'?)"
        raise ConfigError(msg)
