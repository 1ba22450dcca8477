"""
data_models.py: Data structures for the game state.
"""

import threading
from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import NamedTuple, Optional, Sequence

from .animation import AnimatedImage, Frame
from .constants import MAX_SHEEP_EASY, MAX_SHEEP_NORMAL, MAX_SHEEP_UNFAIR


class Direction(IntEnum):
    LEFT = 0
    RIGHT = 1


class GameMode(IntEnum):
    """Difficulty mode; selects the sheep population and the high score slot."""
    EASY = 1
    NORMAL = 2
    UNFAIR = 3

    @property
    def max_sheep(self) -> int:
        return MODE_SHEEP_TARGETS[self]


MODE_SHEEP_TARGETS = {
    GameMode.EASY: MAX_SHEEP_EASY,
    GameMode.NORMAL: MAX_SHEEP_NORMAL,
    GameMode.UNFAIR: MAX_SHEEP_UNFAIR,
}


class ItemKind(Enum):
    STATIC = "static"
    KINEMATIC = "kinematic"


@dataclass
class Kinematics:
    """Energy-driven motion state for items that jump (sheep, debris)."""
    direction: Direction = Direction.LEFT
    horizontal_energy: int = 0
    vertical_energy: int = 0
    max_horizontal_energy: int = 0
    max_vertical_energy: int = 0

    # Speed bounds; minimums may be negative
    min_horizontal_speed: int = 0
    max_horizontal_speed: int = 0
    min_vertical_speed: int = 0
    max_vertical_speed: int = 0

    last_height: int = 0                # Highest point since the last ground contact
    jump_exponentially: bool = False
    active: bool = True

    def reverse_direction(self):
        if self.direction == Direction.LEFT:
            self.direction = Direction.RIGHT
        else:
            self.direction = Direction.LEFT


@dataclass
class GameItem:
    """
    A positioned item with a body image and an optional icon drawn over it.
    Jumping items carry a `Kinematics` record; the pad carries none.
    """
    body: AnimatedImage
    x: int = 0
    y: int = 0
    icon: Optional[AnimatedImage] = None
    visible: bool = True
    kinematics: Optional[Kinematics] = None

    @property
    def kind(self) -> ItemKind:
        return ItemKind.STATIC if self.kinematics is None else ItemKind.KINEMATIC

    @property
    def width(self) -> int:
        return self.body.width

    @property
    def height(self) -> int:
        return self.body.height

    @property
    def active(self) -> bool:
        return self.kinematics is None or self.kinematics.active

    def set_icon(self, frame: Optional[Frame]):
        self.icon = AnimatedImage(frame) if frame is not None else None

    def is_collision(self, x: int, y: int, width: int, height: int) -> bool:
        """True when the given box overlaps this item's box (edges touching do not count)."""
        return (x < self.x + self.width and self.x < x + width
                and y < self.y + self.height and self.y < y + height)

    def collides_with(self, other: "GameItem") -> bool:
        return self.is_collision(other.x, other.y, other.width, other.height)

    def make_inactive(self):
        """Zeroes all energy and hides the item. It stays pooled until swept."""
        self.visible = False
        k = self.kinematics
        if k is None:
            return
        k.max_horizontal_energy = 0
        k.max_vertical_energy = 0
        k.horizontal_energy = 0
        k.vertical_energy = 0
        k.jump_exponentially = False
        k.active = False


@dataclass
class ScoreState:
    """Running score and best score for one difficulty mode."""
    mode: GameMode
    score: int = 0
    high_score: int = 0


@dataclass
class GameEnvironment:
    """Device information captured once at session start."""
    density: float = 1.0            # Movement scale for differing resolutions
    rotation: int = 0               # Display rotation at start, in quarter turns

    @property
    def accel_axis(self) -> int:
        """Raw accelerometer axis that maps to horizontal tilt."""
        # Rotation 0 means the device's natural orientation is portrait.
        return 0 if self.rotation == 0 else 1


class RenderItem(NamedTuple):
    """What the renderer needs to draw one item."""
    x: int
    y: int
    frame: Optional[Frame]
    icon: Optional[Frame] = None
    mirrored: bool = False


@dataclass
class RenderState:
    """Flat per-tick snapshot handed to the renderer."""
    items: list = field(default_factory=list)
    score_text: str = ""


class AccelInput:
    """
    Latest horizontal acceleration sample. Written by the input source,
    read by the bounce pad update; only the newest value matters.
    """

    def __init__(self, value: float = 0.0):
        self._lock = threading.Lock()
        self._value = float(value)

    @property
    def value(self) -> float:
        with self._lock:
            return self._value

    def set(self, value: float):
        with self._lock:
            self._value = float(value)

    def set_from_sample(self, sample: Sequence[float], environment: GameEnvironment):
        """Stores the axis of a raw accelerometer sample that maps to horizontal tilt."""
        self.set(sample[environment.accel_axis])
