"""Interact with sway using its IPC socket."""

__all__ = [
    "IPC_MAGIC",
    "MessageType",
    "SwayIPC",
    "format_action",
    "get_socket_path",
    "sway_connection",
]

import asyncio
import contextlib
import json
import os
import struct
from collections.abc import AsyncIterator
from enum import IntEnum
from logging import Logger
from typing import Any, assert_never

from .models import Action, DispatchError, Focus, Hide, IpcError, Launch

IPC_MAGIC = b"i3-ipc"
# payload length, message type
_HEADER = struct.Struct("=II")
HEADER_SIZE = len(IPC_MAGIC) + _HEADER.size


class MessageType(IntEnum):
    """i3/sway IPC message types used here."""

    RUN_COMMAND = 0
    GET_TREE = 4


def get_socket_path() -> str:
    """Return sway's socket path from the environment.

    Raises:
        IpcError: when no socket is advertised
    """
    path = os.environ.get("SWAYSOCK") or os.environ.get("I3SOCK")
    if not path:
        msg = "SWAYSOCK is not set, is sway running?"
        raise IpcError(msg)
    return path


def format_action(action: Action) -> str:
    """Render an action as a sway command."""
    match action:
        case Launch(command):
            return f"exec {command}"
        case Focus(criteria):
            return f"{criteria} focus"
        case Hide(criteria):
            return f"{criteria} move scratchpad"
        case _:
            assert_never(action)


def pack_message(message_type: MessageType, payload: str = "") -> bytes:
    """Frame `payload` as an IPC message."""
    data = payload.encode("utf-8")
    return IPC_MAGIC + _HEADER.pack(len(data), message_type) + data


@contextlib.asynccontextmanager
async def sway_connection(socket_path: str, log: Logger) -> AsyncIterator[tuple[asyncio.StreamReader, asyncio.StreamWriter]]:
    """Open a connection to sway, closing it on exit.

    Raises:
        IpcError: if the socket can't be reached
    """
    try:
        reader, writer = await asyncio.open_unix_connection(socket_path)
    except OSError as e:
        log.debug("connection to %s failed: %s", socket_path, e)
        msg = f"Cannot connect to sway at {socket_path}, is it running? ({e.strerror or type(e).__name__})"
        raise IpcError(msg) from e
    try:
        yield reader, writer
    finally:
        writer.close()
        try:
            await writer.wait_closed()
        except OSError as e:
            # reply already received
            log.debug("closing connection to %s: %s", socket_path, e)


class SwayIPC:
    """Minimal sway IPC client: tree snapshots and commands."""

    def __init__(self, log: Logger, socket_path: str | None = None) -> None:
        """Initialize the client.

        Args:
            log: Logger to use for this client
            socket_path: Socket to use, defaults to ``$SWAYSOCK``
        """
        self.log = log
        self.socket_path = socket_path

    async def _request(self, message_type: MessageType, payload: str = "") -> Any:  # noqa: ANN401
        """Send one message and return the decoded JSON reply."""
        socket_path = self.socket_path or get_socket_path()
        async with sway_connection(socket_path, self.log) as (reader, writer):
            try:
                writer.write(pack_message(message_type, payload))
                await writer.drain()
                header = await reader.readexactly(HEADER_SIZE)
                if not header.startswith(IPC_MAGIC):
                    msg = f"Invalid reply from sway: {header!r}"
                    raise IpcError(msg)
                length, reply_type = _HEADER.unpack(header[len(IPC_MAGIC) :])
                data = await reader.readexactly(length)
            except asyncio.IncompleteReadError as e:
                msg = "Connection to sway closed unexpectedly"
                raise IpcError(msg) from e
            except OSError as e:
                msg = f"Communication with sway failed: {e.strerror or type(e).__name__}"
                raise IpcError(msg) from e

        if reply_type != message_type:
            self.log.warning("Unexpected reply type %d for request %d", reply_type, message_type)
        try:
            return json.loads(data.decode("utf-8", errors="replace"))
        except json.JSONDecodeError as e:
            msg = f"Invalid JSON from sway: {e}"
            raise IpcError(msg) from e

    async def get_tree(self) -> dict[str, Any]:
        """Return the current layout tree.

        Raises:
            IpcError: if the tree can't be fetched or isn't an object
        """
        self.log.debug("get_tree")
        tree = await self._request(MessageType.GET_TREE)
        if not isinstance(tree, dict):
            msg = f"Unexpected tree document: {type(tree).__name__}"
            raise IpcError(msg)
        return tree

    async def command(self, command: str) -> None:
        """Run a sway command.

        Raises:
            DispatchError: if sway couldn't run it, or reports a failure
        """
        self.log.debug("command: %s", command)
        try:
            replies = await self._request(MessageType.RUN_COMMAND, command)
        except IpcError as e:
            raise DispatchError(str(e)) from e

        if not isinstance(replies, list):
            replies = [replies]
        for reply in replies:
            if not isinstance(reply, dict) or not reply.get("success", False):
                error = reply.get("error", "unknown error") if isinstance(reply, dict) else reply
                msg = f"sway failed to run '{command}': {error}"
                raise DispatchError(msg)

    async def dispatch(self, action: Action) -> None:
        """Perform `action`."""
        await self.command(format_action(action))
