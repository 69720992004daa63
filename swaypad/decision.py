"""Choice of the single action to perform for a toggle."""

from typing import assert_never

from .config import AppConfig
from .models import Action, AggregateState, ByApplicationId, ByClass, ByTitle, Focus, Hide, Identifier, Launch

__all__ = [
    "build_criteria",
    "build_startup_command",
    "criteria_key",
    "decide",
    "quote_criteria_value",
]


def criteria_key(identifier: Identifier) -> str:
    """Return the sway criteria attribute for `identifier`."""
    match identifier:
        case ByTitle():
            return "title"
        case ByApplicationId():
            return "app_id"
        case ByClass():
            return "class"
        case _:
            assert_never(identifier)


def quote_criteria_value(text: str) -> str:
    """Escape backslashes and double quotes for a quoted criteria value."""
    return text.replace("\\", "\\\\").replace('"', '\\"')


def build_criteria(identifier: Identifier) -> str:
    """Render `identifier` as a sway criteria, e.g. ``[app_id="obsidian"]``."""
    return f'[{criteria_key(identifier)}="{quote_criteria_value(identifier.value)}"]'


def build_startup_command(app: AppConfig, terminal: str) -> str:
    """Return the command starting a new instance of `app`.

    An explicit ``startup_override`` always wins. Terminal applications
    identified by title are wrapped in `terminal` with that title, the
    terminal being the one owning the window. Anything else runs as is.
    """
    if app.startup_override is not None:
        return app.startup_override

    if app.is_terminal and isinstance(app.identifier, ByTitle):
        return f"{terminal} --title {app.identifier.value} --command {app.command}"

    return app.command


def decide(state: AggregateState, app: AppConfig, terminal: str = "") -> Action:
    """Map the current state of `app` to the action toggling it."""
    match state:
        case AggregateState.ABSENT:
            return Launch(build_startup_command(app, terminal))
        case AggregateState.PRESENT_UNFOCUSED:
            return Focus(build_criteria(app.identifier))
        case AggregateState.PRESENT_FOCUSED:
            return Hide(build_criteria(app.identifier))
        case _:
            assert_never(state)
