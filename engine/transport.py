"""Duplex message channels between the arbiter and each player agent.

Every agent gets one private channel. Delivery is FIFO and lossless, ``send``
and ``recv`` block, and closing either end makes the peer's next ``send`` or
``recv`` raise ``ChannelClosed``.
"""

from __future__ import annotations

import multiprocessing
import queue
import threading
from typing import Any, Callable, Dict, Protocol, Sequence, Tuple


class ChannelClosed(Exception):
    """Raised when the other end of a channel has gone away."""


class Channel(Protocol):
    def send(self, message: Any) -> None:
        ...

    def recv(self) -> Any:
        ...

    def close(self) -> None:
        ...


class AgentHandle(Protocol):
    def join(self, timeout: float | None = None) -> None:
        ...

    def is_alive(self) -> bool:
        ...


_CLOSED = object()


class _Link:
    """State shared by the two ends of an in-process channel."""

    def __init__(self) -> None:
        self.queues = (queue.Queue(), queue.Queue())
        self.closed = (threading.Event(), threading.Event())


class ThreadChannel:
    def __init__(self, link: _Link, side: int) -> None:
        self._link = link
        self._side = side
        self._peer = 1 - side

    def send(self, message: Any) -> None:
        if self._link.closed[self._side].is_set() or self._link.closed[self._peer].is_set():
            raise ChannelClosed("Channel is closed.")
        self._link.queues[self._peer].put(message)

    def recv(self) -> Any:
        if self._link.closed[self._side].is_set():
            raise ChannelClosed("Channel is closed.")
        inbox = self._link.queues[self._side]
        message = inbox.get()
        if message is _CLOSED:
            # Keep the marker so later reads fail the same way.
            inbox.put(_CLOSED)
            raise ChannelClosed("Peer closed the channel.")
        return message

    def close(self) -> None:
        if self._link.closed[self._side].is_set():
            return
        self._link.closed[self._side].set()
        self._link.queues[self._peer].put(_CLOSED)


class ProcessChannel:
    """Channel end backed by a ``multiprocessing`` pipe connection."""

    def __init__(self, connection) -> None:
        self._connection = connection

    def send(self, message: Any) -> None:
        try:
            self._connection.send(message)
        except (BrokenPipeError, EOFError, OSError) as exc:
            raise ChannelClosed(str(exc)) from exc

    def recv(self) -> Any:
        try:
            return self._connection.recv()
        except (EOFError, OSError) as exc:
            raise ChannelClosed(str(exc)) from exc

    def close(self) -> None:
        self._connection.close()


class ThreadTransport:
    """Agents run as daemon threads in the arbiter's process."""

    name = "thread"

    def open_channel(self) -> Tuple[ThreadChannel, ThreadChannel]:
        link = _Link()
        return ThreadChannel(link, 0), ThreadChannel(link, 1)

    def start_agent(
        self,
        target: Callable[..., None],
        args: Sequence[Any],
        channel: ThreadChannel,
        name: str,
    ) -> AgentHandle:
        thread = threading.Thread(target=target, args=(*args, channel), name=name, daemon=True)
        thread.start()
        return thread


class ProcessTransport:
    """Agents run as separate OS processes connected by pipes."""

    name = "process"

    def __init__(self) -> None:
        # Spawned children inherit only the pipe end handed to them, so closing
        # the arbiter's end is seen as end-of-file by the agent.
        self._context = multiprocessing.get_context("spawn")

    def open_channel(self) -> Tuple[ProcessChannel, ProcessChannel]:
        arbiter_end, agent_end = self._context.Pipe(duplex=True)
        return ProcessChannel(arbiter_end), ProcessChannel(agent_end)

    def start_agent(
        self,
        target: Callable[..., None],
        args: Sequence[Any],
        channel: ProcessChannel,
        name: str,
    ) -> AgentHandle:
        process = self._context.Process(target=target, args=(*args, channel), name=name, daemon=True)
        process.start()
        channel.close()
        return process


TRANSPORT_REGISTRY: Dict[str, type] = {
    "thread": ThreadTransport,
    "process": ProcessTransport,
}


def make_transport(kind: str):
    try:
        return TRANSPORT_REGISTRY[kind]()
    except KeyError:
        raise ValueError(f"Unknown transport: {kind!r}") from None
