"""
images.py: Named frame registry used to build game items.

Lookups fail closed: an unknown name yields None and the caller skips
creating the item.
"""

import logging
import os
from typing import Dict, Optional, Set

import pygame

from .animation import Frame
from .constants import (
    BACKGROUND_IMAGE, BOUNCE_PAD_FRAMES, DANGER_ICON, DEBRIS_IMAGE, SHEEP_FRAMES
)

logger = logging.getLogger(__name__)


class ImageCache:
    """Caches frames by name."""

    def __init__(self):
        self._frames: Dict[str, Frame] = {}
        self._missing: Set[str] = set()

    def add(self, name: str, frame: Frame):
        self._frames[name] = frame
        self._missing.discard(name)

    def load(self, name: str, path: str) -> Optional[Frame]:
        """Loads an image file into the cache. Returns None if it cannot be read."""
        if name in self._frames:
            return self._frames[name]
        try:
            surface = pygame.image.load(path)
        except (pygame.error, FileNotFoundError) as e:
            logger.warning(f"Could not load image {name!r} from {path}: {e}")
            return None
        self.add(name, surface)
        return surface

    def load_dir(self, directory: str) -> int:
        """Loads every `<name>.png` in `directory`. Returns how many loaded."""
        count = 0
        for entry in sorted(os.listdir(directory)):
            name, ext = os.path.splitext(entry)
            if ext.lower() != ".png":
                continue
            if self.load(name, os.path.join(directory, entry)) is not None:
                count += 1
        logger.info(f"Loaded {count} images from {directory}")
        return count

    def get(self, name: str) -> Optional[Frame]:
        frame = self._frames.get(name)
        if frame is None and name not in self._missing:
            self._missing.add(name)
            logger.warning(f"Image not available: {name}")
        return frame

    def __contains__(self, name: str) -> bool:
        return name in self._frames


# ----------------- Built-in sprites -----------------

WOOL = (245, 245, 240)
FACE = (40, 40, 40)
PAD = (200, 60, 40)
PAD_SPRING = (90, 90, 90)
DEBRIS = (230, 230, 225)
DANGER = (250, 200, 0)


def _sheep_frame(legs_apart: bool) -> pygame.Surface:
    # Faces left; the renderer mirrors it when heading right.
    surface = pygame.Surface((40, 30), pygame.SRCALPHA)
    pygame.draw.ellipse(surface, WOOL, (6, 4, 32, 20))
    pygame.draw.ellipse(surface, FACE, (0, 6, 12, 10))
    spread = 4 if legs_apart else 0
    for leg_x in (12, 28):
        pygame.draw.line(surface, FACE, (leg_x, 22), (leg_x - spread, 29), 3)
    return surface


def _pad_frame(compressed: bool) -> pygame.Surface:
    surface = pygame.Surface((90, 20), pygame.SRCALPHA)
    top = 8 if compressed else 2
    pygame.draw.rect(surface, PAD_SPRING, (10, top + 4, 70, 20 - top - 4))
    pygame.draw.rect(surface, PAD, (0, top, 90, 6), border_radius=3)
    return surface


def _debris_frame() -> pygame.Surface:
    surface = pygame.Surface((6, 6), pygame.SRCALPHA)
    pygame.draw.circle(surface, DEBRIS, (3, 3), 3)
    return surface


def _danger_icon() -> pygame.Surface:
    surface = pygame.Surface((16, 16), pygame.SRCALPHA)
    pygame.draw.polygon(surface, DANGER, [(8, 0), (16, 16), (0, 16)])
    pygame.draw.line(surface, FACE, (8, 5), (8, 11), 2)
    pygame.draw.line(surface, FACE, (8, 13), (8, 14), 2)
    return surface


def _background(width: int, height: int) -> pygame.Surface:
    surface = pygame.Surface((width, height))
    surface.fill((135, 206, 235))
    pygame.draw.rect(surface, (90, 170, 70), (0, height - 40, width, 40))
    return surface


def draw_default_images(cache: ImageCache, width: int, height: int):
    """Registers the built-in sprites for any name not already cached."""
    defaults = {
        SHEEP_FRAMES[0]: lambda: _sheep_frame(False),
        SHEEP_FRAMES[1]: lambda: _sheep_frame(True),
        BOUNCE_PAD_FRAMES[0]: lambda: _pad_frame(False),
        BOUNCE_PAD_FRAMES[1]: lambda: _pad_frame(True),
        DEBRIS_IMAGE: _debris_frame,
        DANGER_ICON: _danger_icon,
        BACKGROUND_IMAGE: lambda: _background(width, height),
    }
    for name, build in defaults.items():
        if name not in cache:
            cache.add(name, build())
