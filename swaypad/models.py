"""Window, identifier and action types."""

from dataclasses import dataclass
from enum import IntEnum, StrEnum
from typing import Any

__all__ = [
    "Action",
    "AggregateState",
    "ByApplicationId",
    "ByClass",
    "ByTitle",
    "ConfigError",
    "DispatchError",
    "ExitCode",
    "Focus",
    "Hide",
    "Identifier",
    "IpcError",
    "Launch",
    "NodeDecodeError",
    "SwaypadError",
    "WindowRecord",
]


# Exit codes {{{


class ExitCode(IntEnum):
    """Process exit codes."""

    SUCCESS = 0
    USAGE_ERROR = 1  # invalid arguments, interrupted
    CONFIG_ERROR = 2  # missing/invalid config, unknown application
    CONNECTION_ERROR = 3  # cannot talk to sway or read its tree
    COMMAND_ERROR = 4  # sway refused the command


# }}}

# Errors {{{


class SwaypadError(Exception):
    """Fatal error for the current invocation."""

    exit_code = ExitCode.USAGE_ERROR


class ConfigError(SwaypadError):
    """Configuration could not be loaded or does not describe the application."""

    exit_code = ExitCode.CONFIG_ERROR


class IpcError(SwaypadError):
    """The tree snapshot could not be fetched or parsed."""

    exit_code = ExitCode.CONNECTION_ERROR


class DispatchError(SwaypadError):
    """A command sent to sway failed."""

    exit_code = ExitCode.COMMAND_ERROR


class NodeDecodeError(ValueError):
    """A window node does not have the expected shape."""


# }}}

# Windows {{{


def _optional_str(node: dict[str, Any], key: str) -> str | None:
    value = node.get(key)
    if value is None or isinstance(value, str):
        return value
    msg = f"{key!r} should be a string, got {type(value).__name__}"
    raise NodeDecodeError(msg)


@dataclass(frozen=True)
class WindowRecord:
    """One window as found in a sway tree snapshot."""

    title: str | None
    app_id: str | None
    window_class: str | None
    focused: bool
    node_kind: str

    @classmethod
    def from_node(cls, node: dict[str, Any]) -> "WindowRecord":
        """Decode a raw sway tree node.

        Raises:
            NodeDecodeError: if a field is missing or has the wrong type
        """
        if not isinstance(node, dict):
            msg = f"expected an object, got {type(node).__name__}"
            raise NodeDecodeError(msg)

        node_kind = node.get("type")
        if not isinstance(node_kind, str):
            msg = "missing node type"
            raise NodeDecodeError(msg)

        focused = node.get("focused")
        if not isinstance(focused, bool):
            msg = "'focused' should be a boolean"
            raise NodeDecodeError(msg)

        # XWayland windows only: {"class": ..., "instance": ..., ...}
        props = node.get("window_properties")
        if props is None:
            window_class = None
        elif isinstance(props, dict):
            window_class = _optional_str(props, "class")
        else:
            msg = "'window_properties' should be an object"
            raise NodeDecodeError(msg)

        return cls(
            title=_optional_str(node, "name"),
            app_id=_optional_str(node, "app_id"),
            window_class=window_class,
            focused=focused,
            node_kind=node_kind,
        )


# }}}

# Identifiers {{{


@dataclass(frozen=True)
class ByTitle:
    """Match windows by title."""

    value: str


@dataclass(frozen=True)
class ByApplicationId:
    """Match windows by Wayland app_id."""

    value: str


@dataclass(frozen=True)
class ByClass:
    """Match windows by X11 class (XWayland clients)."""

    value: str


Identifier = ByTitle | ByApplicationId | ByClass

# }}}

# Toggle state & actions {{{


class AggregateState(StrEnum):
    """State of an application relative to the window manager."""

    ABSENT = "absent"
    PRESENT_UNFOCUSED = "unfocused"
    PRESENT_FOCUSED = "focused"


@dataclass(frozen=True)
class Launch:
    """Start a new instance."""

    command: str


@dataclass(frozen=True)
class Focus:
    """Focus the windows selected by `criteria`."""

    criteria: str


@dataclass(frozen=True)
class Hide:
    """Move the windows selected by `criteria` to the scratchpad."""

    criteria: str


Action = Launch | Focus | Hide

# }}}
