"""In-process broadcast channel for block events.

Every receiver sees every item sent after it subscribed, in order. The channel
keeps at most ``capacity`` items; a receiver that falls further behind than
that is told how many items it missed instead of silently skipping them.
"""

import asyncio
from collections import deque
from dataclasses import dataclass
from typing import Generic, TypeVar

from .constants import DEFAULT_EVENT_CAPACITY
from .errors import EventStreamError

T = TypeVar("T")


@dataclass(frozen=True)
class Received(Generic[T]):
    item: T


@dataclass(frozen=True)
class Lagged:
    skipped: int

    def error(self) -> EventStreamError:
        return EventStreamError(f"channel lagged by {self.skipped}")


@dataclass(frozen=True)
class Closed:
    def error(self) -> EventStreamError:
        return EventStreamError("channel closed")


RecvResult = Received[T] | Lagged | Closed


class BroadcastChannel(Generic[T]):
    """Bounded multi-consumer channel."""

    def __init__(self, capacity: int = DEFAULT_EVENT_CAPACITY):
        if capacity < 1:
            raise ValueError("Broadcast channel capacity must be at least 1")
        self.capacity = capacity
        self._buffer: deque[T] = deque(maxlen=capacity)
        self._next_seq = 0
        self._closed = False
        self._condition = asyncio.Condition()

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def _oldest_seq(self) -> int:
        return self._next_seq - len(self._buffer)

    def subscribe(self) -> "BroadcastReceiver[T]":
        """Create a receiver that starts with the next item sent."""
        return BroadcastReceiver(self, self._next_seq)

    async def send(self, item: T) -> None:
        async with self._condition:
            if self._closed:
                raise EventStreamError("channel closed")
            self._buffer.append(item)
            self._next_seq += 1
            self._condition.notify_all()

    async def close(self) -> None:
        """Close the channel; receivers drain what is buffered, then see Closed."""
        async with self._condition:
            self._closed = True
            self._condition.notify_all()


class BroadcastReceiver(Generic[T]):
    def __init__(self, channel: BroadcastChannel[T], next_seq: int):
        self._channel = channel
        self._next_seq = next_seq

    async def recv(self) -> RecvResult:
        """Wait for the next item, a lag notice, or the end of the stream."""
        channel = self._channel
        async with channel._condition:
            while True:
                oldest = channel._oldest_seq
                if self._next_seq < oldest:
                    skipped = oldest - self._next_seq
                    self._next_seq = oldest
                    return Lagged(skipped)

                if self._next_seq < channel._next_seq:
                    item = channel._buffer[self._next_seq - oldest]
                    self._next_seq += 1
                    return Received(item)

                if channel._closed:
                    return Closed()

                await channel._condition.wait()
