"""Exclusive playback of one interval of a shared recording.

Every request mints a generation number. Each continuation (the metadata
wait and the stop timer) remembers the generation it was issued under and
does nothing if a newer request has arrived since, so a superseded request
can never seek, start, or cut short the current playback. Requests are not
queued: a new request preempts whatever is in flight.

State: IDLE -> AWAITING_METADATA -> SEEKING -> PLAYING -> STOPPED -> IDLE,
and any state may be superseded by a new request.
"""
from __future__ import annotations

import asyncio
import enum
import logging
import math
from dataclasses import dataclass
from typing import Any, Optional, Set, Tuple

from ..errors import NoTimingError
from ..models.word_display import WordDisplay
from ..timing.resolver import MIN_WORD_SEC
from .audio import AsyncioClock, AudioHandle, Clock, TimerHandle

logger = logging.getLogger(__name__)

# Extra time before the stop timer fires, to absorb timer jitter
STOP_SLACK_SEC = 0.06

# Never arm a stop timer shorter than this
MIN_STOP_SEC = 0.08

# Words start playing slightly early so their onset is not clipped
WORD_LEAD_IN_SEC = 0.05


class PlaybackState(enum.Enum):
    IDLE = "idle"
    AWAITING_METADATA = "awaiting_metadata"
    SEEKING = "seeking"
    PLAYING = "playing"
    STOPPED = "stopped"


@dataclass(frozen=True)
class _Segment:
    start_sec: float
    end_sec: float
    generation: int


class PlaybackScheduler:
    """Plays word intervals of one recording, latest request wins.

    Args:
        audio: The audio output to drive; only this scheduler may touch it
        clock: Timer source (default: the running asyncio loop)
        slack_sec: Added to the interval length for the stop timer
        min_stop_sec: Lower bound on the stop timer delay
        lead_in_sec: Pre-roll applied by ``play_word``
    """

    def __init__(
        self,
        audio: AudioHandle,
        clock: Optional[Clock] = None,
        *,
        slack_sec: float = STOP_SLACK_SEC,
        min_stop_sec: float = MIN_STOP_SEC,
        lead_in_sec: float = WORD_LEAD_IN_SEC,
    ):
        self.audio = audio
        self.clock = clock if clock is not None else AsyncioClock()
        self.slack_sec = slack_sec
        self.min_stop_sec = min_stop_sec
        self.lead_in_sec = lead_in_sec

        self.generation = 0
        self.state = PlaybackState.IDLE
        self._segment: Optional[_Segment] = None
        self._timer: Optional[TimerHandle] = None
        self._waiters: Set[asyncio.Future] = set()

    @property
    def current_segment(self) -> Optional[_Segment]:
        return self._segment

    def is_current(self, generation: int) -> bool:
        return generation == self.generation

    def stop_delay(self, start_sec: float, end_sec: float) -> float:
        """Delay of the stop timer for an interval."""
        return max(self.min_stop_sec, (end_sec - start_sec) + self.slack_sec)

    # ------------------------------------------------------------------
    # Requests
    # ------------------------------------------------------------------

    async def play_interval(self, start_sec: float, end_sec: float) -> bool:
        """Play ``[start_sec, end_sec]`` of the recording and stop at its end.

        Supersedes every earlier request as soon as it is called.

        Returns:
            True if this request started playback, False if a newer request
            arrived before it could
        Raises:
            ValueError: If the interval is not finite or end <= start
        """
        generation, start_sec, end_sec = self._begin(start_sec, end_sec)
        return await self._run(generation, start_sec, end_sec)

    def request_interval(self, start_sec: float, end_sec: float) -> "asyncio.Task[bool]":
        """Fire-and-forget form of ``play_interval``; needs a running loop.

        The request takes effect immediately: earlier requests are superseded
        before this returns, and a later ``stop()`` cancels this one even if
        its task has not started yet.

        Raises:
            ValueError: If the interval is not finite or end <= start
        """
        loop = asyncio.get_running_loop()
        generation, start_sec, end_sec = self._begin(start_sec, end_sec)
        task = loop.create_task(self._run(generation, start_sec, end_sec))
        task.add_done_callback(_log_task_failure)
        return task

    def _begin(self, start_sec: Any, end_sec: Any) -> Tuple[int, float, float]:
        """Validate, mint a generation and silence whatever is playing."""
        start_sec, end_sec = _check_interval(start_sec, end_sec)

        self.generation += 1
        self._cancel_timer()
        self._segment = None
        self.audio.pause()
        return self.generation, start_sec, end_sec

    async def _run(self, generation: int, start_sec: float, end_sec: float) -> bool:
        if not self.is_current(generation):
            logger.debug("Playback request %d superseded by %d", generation, self.generation)
            return False

        if not self.audio.metadata_ready:
            self.state = PlaybackState.AWAITING_METADATA
            await self._wait_for_metadata()

        if not self.is_current(generation):
            logger.debug("Playback request %d superseded by %d", generation, self.generation)
            return False

        self.state = PlaybackState.SEEKING
        self.audio.seek(start_sec)
        self._segment = _Segment(start_sec, end_sec, generation)
        try:
            self.audio.play()
        except Exception as e:
            logger.warning("Audio play() failed for [%.2f, %.2f]: %s", start_sec, end_sec, e)
        self.state = PlaybackState.PLAYING

        delay = self.stop_delay(start_sec, end_sec)
        self._timer = self.clock.call_later(delay, lambda: self._on_stop_timer(generation))
        logger.debug(
            "Playback %d: [%.2f, %.2f], stop in %.3fs", generation, start_sec, end_sec, delay
        )
        return True

    async def play_word(self, word: WordDisplay) -> bool:
        """Play the interval of one aligned word.

        Raises:
            NoTimingError: If the word has no timing; the audio is not touched
        """
        timing = word.timing
        if timing is None:
            raise NoTimingError(word.word, word.index)

        start = max(0.0, timing.start_sec - self.lead_in_sec)
        end = max(start + MIN_WORD_SEC, timing.end_sec)
        return await self.play_interval(start, end)

    def stop(self) -> None:
        """Stop playback and invalidate every in-flight request."""
        self.generation += 1
        self._cancel_timer()
        self._segment = None
        self.audio.pause()
        for waiter in list(self._waiters):
            if not waiter.done():
                waiter.set_result(None)
        self.state = PlaybackState.IDLE

    # ------------------------------------------------------------------
    # Continuations
    # ------------------------------------------------------------------

    def handle_time_update(self, position_sec: float) -> None:
        """Position report from the player; stops early once the end is reached."""
        segment = self._segment
        if segment is None or not self.is_current(segment.generation):
            return
        if position_sec >= segment.end_sec:
            self._finish(segment.generation)

    def _on_stop_timer(self, generation: int) -> None:
        segment = self._segment
        if segment is None or segment.generation != generation or not self.is_current(generation):
            logger.debug("Stale stop timer for playback %d ignored", generation)
            return
        self._finish(generation)

    def _finish(self, generation: int) -> None:
        self.state = PlaybackState.STOPPED
        self._cancel_timer()
        self.audio.pause()
        self._segment = None
        self.state = PlaybackState.IDLE
        logger.debug("Playback %d finished", generation)

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    async def _wait_for_metadata(self) -> None:
        loop = asyncio.get_running_loop()
        ready: asyncio.Future = loop.create_future()

        def on_ready() -> None:
            self.audio.remove_metadata_listener(on_ready)
            if not ready.done():
                ready.set_result(None)

        self.audio.add_metadata_listener(on_ready)
        try:
            self.audio.load()
        except Exception as e:
            logger.warning("Audio load() failed, seeking without metadata: %s", e)
            self.audio.remove_metadata_listener(on_ready)
            return

        self._waiters.add(ready)
        try:
            await ready
        finally:
            self._waiters.discard(ready)


def _check_interval(start_sec: Any, end_sec: Any) -> Tuple[float, float]:
    try:
        start = float(start_sec)
        end = float(end_sec)
    except (TypeError, ValueError):
        raise ValueError(f"Invalid playback interval: ({start_sec!r}, {end_sec!r})")
    if not (math.isfinite(start) and math.isfinite(end)):
        raise ValueError(f"Playback interval must be finite: ({start}, {end})")
    start = max(0.0, start)
    if end <= start:
        raise ValueError(f"Playback interval end must be after start: ({start}, {end})")
    return start, end


def _log_task_failure(task: "asyncio.Task[bool]") -> None:
    if task.cancelled():
        return
    exc = task.exception()
    if exc is not None:
        logger.warning("Playback request failed: %r", exc, exc_info=exc)
