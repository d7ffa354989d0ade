"""Exclusive, cancellable playback of word intervals."""
from .audio import AsyncioClock, AudioHandle, Clock, TimerHandle
from .scheduler import PlaybackScheduler, PlaybackState

__all__ = [
    "AsyncioClock",
    "AudioHandle",
    "Clock",
    "PlaybackScheduler",
    "PlaybackState",
    "TimerHandle",
]
