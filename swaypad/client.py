"""One toggle: snapshot, decide, act."""

from logging import Logger

from .config import SwaypadConfig, describe_identifier
from .decision import decide
from .ipc import SwayIPC, format_action
from .models import Action
from .resolver import resolve_state
from .tree import extract_windows

__all__ = ["run_toggle"]


async def run_toggle(app_name: str, config: SwaypadConfig, ipc: SwayIPC, log: Logger, dry_run: bool = False) -> Action:
    """Toggle `app_name` and return the action performed.

    Unknown applications fail before sway is contacted. With `dry_run`, the
    tree is still read but the action is not sent.

    Raises:
        ConfigError: unknown application
        IpcError: the tree couldn't be fetched
        DispatchError: sway refused the command
    """
    app = config.get_app(app_name)

    tree = await ipc.get_tree()
    windows = extract_windows(tree, log=log)
    log.debug("%d windows in the tree", len(windows))

    state = resolve_state(windows, app.identifier)
    action = decide(state, app, config.terminal)
    log.debug("%s (%s) is %s -> %s", app_name, describe_identifier(app.identifier), state, format_action(action))

    if not dry_run:
        await ipc.dispatch(action)
    return action
