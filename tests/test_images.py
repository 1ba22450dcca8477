"""Tests for the named frame cache and the built-in sprites."""

import logging

import pygame

from sheep_bounce.constants import (
    BACKGROUND_IMAGE, BOUNCE_PAD_FRAMES, DANGER_ICON, DEBRIS_IMAGE, SHEEP_FRAMES
)
from sheep_bounce.images import ImageCache, draw_default_images


def test_missing_image_is_none_and_warned_once(caplog):
    cache = ImageCache()
    with caplog.at_level(logging.WARNING, logger="sheep_bounce.images"):
        assert cache.get("nope") is None
        assert cache.get("nope") is None
    assert caplog.text.count("Image not available: nope") == 1


def test_unreadable_file_is_skipped(tmp_path, caplog):
    cache = ImageCache()
    with caplog.at_level(logging.WARNING, logger="sheep_bounce.images"):
        assert cache.load("sheep", str(tmp_path / "missing.png")) is None
    assert "sheep" not in cache


def test_load_dir_picks_up_pngs(tmp_path):
    pygame.image.save(pygame.Surface((12, 8)), str(tmp_path / "debris.png"))
    (tmp_path / "notes.txt").write_text("not an image")

    cache = ImageCache()
    assert cache.load_dir(str(tmp_path)) == 1
    assert cache.get("debris").get_size() == (12, 8)


def test_defaults_fill_only_missing_names(make_frame):
    custom = make_frame(50, 50)
    cache = ImageCache()
    cache.add(DEBRIS_IMAGE, custom)

    draw_default_images(cache, 320, 240)

    assert cache.get(DEBRIS_IMAGE) is custom
    for name in (*SHEEP_FRAMES, *BOUNCE_PAD_FRAMES, DANGER_ICON):
        assert name in cache
    assert cache.get(BACKGROUND_IMAGE).get_size() == (320, 240)
    assert cache.get(SHEEP_FRAMES[0]).get_size() == cache.get(SHEEP_FRAMES[1]).get_size()
