import os
import random
import sqlite3

os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import pygame
import pytest

from sheep_bounce.constants import (
    BOUNCE_PAD_FRAMES, DANGER_ICON, DEBRIS_IMAGE, SHEEP_FRAMES
)
from sheep_bounce.data_models import GameMode
from sheep_bounce.images import ImageCache
from sheep_bounce.physics_engine import SheepEngine

SCREEN_W = 800
SCREEN_H = 480


class FakeAudio:
    """Records every call the simulation makes."""

    def __init__(self):
        self.calls = []
        self.enabled = True

    def play_catch(self):
        self.calls.append("catch")

    def play_miss(self):
        self.calls.append("miss")

    def play_click(self):
        self.calls.append("click")

    def play_music(self):
        self.calls.append("music")

    def pause_music(self):
        self.calls.append("pause_music")

    def stop_music(self):
        self.calls.append("stop_music")

    def set_enabled(self, enabled, resume_music=True):
        self.enabled = enabled
        self.calls.append(("enabled", enabled, resume_music))

    def release(self):
        self.calls.append("release")


class FakeStore:
    def __init__(self, scores=None, fail_writes=False, fail_reads=False):
        self.scores = dict(scores or {})
        self.writes = []
        self.fail_writes = fail_writes
        self.fail_reads = fail_reads

    def get_high_score(self, mode):
        if self.fail_reads:
            raise sqlite3.OperationalError("database is locked")
        return self.scores.get(mode, 0)

    def set_high_score(self, mode, score):
        if self.fail_writes:
            raise sqlite3.OperationalError("disk I/O error")
        self.writes.append((mode, score))
        self.scores[mode] = score


@pytest.fixture
def make_frame():
    def _make(width, height):
        return pygame.Surface((width, height))
    return _make


@pytest.fixture
def images(make_frame):
    cache = ImageCache()
    cache.add(SHEEP_FRAMES[0], make_frame(40, 30))
    cache.add(SHEEP_FRAMES[1], make_frame(40, 30))
    cache.add(BOUNCE_PAD_FRAMES[0], make_frame(90, 20))
    cache.add(BOUNCE_PAD_FRAMES[1], make_frame(90, 20))
    cache.add(DEBRIS_IMAGE, make_frame(6, 6))
    cache.add(DANGER_ICON, make_frame(16, 16))
    return cache


@pytest.fixture
def audio():
    return FakeAudio()


@pytest.fixture
def engine(images, audio):
    return SheepEngine(
        images=images,
        mode=GameMode.EASY,
        screen_width=SCREEN_W,
        screen_height=SCREEN_H,
        audio=audio,
        rng=random.Random(1234),
    )
