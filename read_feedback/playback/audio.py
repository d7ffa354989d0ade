"""Collaborator interfaces for the playback scheduler.

The scheduler never talks to a concrete player or event loop directly: it
drives an ``AudioHandle`` and arms timers through a ``Clock``, so the same
logic runs against a real player and against fakes in tests.
"""
from __future__ import annotations

import asyncio
from typing import Callable, Optional, Protocol


class AudioHandle(Protocol):
    """A single controllable audio output holding the scored recording."""

    @property
    def metadata_ready(self) -> bool:
        """True once duration/seekability are known."""

    def load(self) -> None:
        """Start (re)loading the media; metadata listeners fire when done."""

    def seek(self, position_sec: float) -> None: ...

    def play(self) -> None: ...

    def pause(self) -> None: ...

    def add_metadata_listener(self, callback: Callable[[], None]) -> None: ...

    def remove_metadata_listener(self, callback: Callable[[], None]) -> None: ...


class TimerHandle(Protocol):
    def cancel(self) -> None: ...


class Clock(Protocol):
    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle: ...


class AsyncioClock:
    """Clock backed by an asyncio event loop.

    Args:
        loop: Loop to schedule on (default: the running loop at call time)
    """

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None):
        self._loop = loop

    def call_later(self, delay: float, callback: Callable[[], None]) -> asyncio.TimerHandle:
        loop = self._loop or asyncio.get_running_loop()
        return loop.call_later(delay, callback)
