"""Shared fakes: a scripted audio handle and a manually advanced clock."""
from __future__ import annotations

from typing import Callable, List, Tuple

import pytest


class FakeAudio:
    """Records every call; metadata readiness is controlled by the test."""

    def __init__(self, metadata_ready: bool = True, fail_load: bool = False, fail_play: bool = False):
        self._metadata_ready = metadata_ready
        self.fail_load = fail_load
        self.fail_play = fail_play
        self.calls: List[Tuple] = []
        self.listeners: List[Callable[[], None]] = []

    @property
    def metadata_ready(self) -> bool:
        return self._metadata_ready

    def load(self) -> None:
        self.calls.append(("load",))
        if self.fail_load:
            raise RuntimeError("no source")

    def seek(self, position_sec: float) -> None:
        self.calls.append(("seek", position_sec))

    def play(self) -> None:
        self.calls.append(("play",))
        if self.fail_play:
            raise RuntimeError("autoplay blocked")

    def pause(self) -> None:
        self.calls.append(("pause",))

    def add_metadata_listener(self, callback: Callable[[], None]) -> None:
        self.listeners.append(callback)

    def remove_metadata_listener(self, callback: Callable[[], None]) -> None:
        if callback in self.listeners:
            self.listeners.remove(callback)

    def fire_metadata_ready(self) -> None:
        self._metadata_ready = True
        for cb in list(self.listeners):
            cb()

    def names(self) -> List[str]:
        return [c[0] for c in self.calls]

    def seeks(self) -> List[float]:
        return [c[1] for c in self.calls if c[0] == "seek"]


class FakeTimer:
    def __init__(self, when: float, callback: Callable[[], None]):
        self.when = when
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualClock:
    """Clock whose time only moves when ``advance`` is called."""

    def __init__(self):
        self.now = 0.0
        self.timers: List[FakeTimer] = []

    def call_later(self, delay: float, callback: Callable[[], None]) -> FakeTimer:
        timer = FakeTimer(self.now + delay, callback)
        self.timers.append(timer)
        return timer

    def advance(self, seconds: float) -> None:
        self.now += seconds
        for timer in list(self.timers):
            if not timer.cancelled and timer.when <= self.now:
                self.timers.remove(timer)
                timer.callback()


@pytest.fixture
def audio():
    return FakeAudio()


@pytest.fixture
def clock():
    return ManualClock()


def speechace_item(word, quality, extents=None, **extra):
    """One word_score_list entry in the SpeechAce shape."""
    item = {"word": word, "quality_score": quality}
    if extents is not None:
        item["phone_score_list"] = [
            {"phone": f"p{i}", "quality_score": quality, "extent": list(ext)}
            for i, ext in enumerate(extents)
        ]
    item.update(extra)
    return item


@pytest.fixture
def cat_response():
    """Scoring response for "The cat sat."."""
    return {
        "status": "success",
        "text_score": {
            "text": "The cat sat.",
            "word_score_list": [
                speechace_item("the", 90, [(0, 20), (20, 50)]),
                speechace_item("cat", 40, [(50, 90), (90, 120), (120, 150)]),
                speechace_item("sat", 95, [(150, 180), (180, 220)]),
            ],
            "speechace_score": {"overall": 75},
        },
    }
