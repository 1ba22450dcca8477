"""
physics_engine.py: The world simulation. Owns the sheep and debris pools and
the bounce pad, and advances all of them one fixed tick at a time.
"""

import logging
import random
from dataclasses import dataclass, field
from typing import List, Optional

from .animation import AnimatedImage
from .constants import (
    ACCEL_MULTIPLIER, ACCEL_SENSOR_BUFFER, BOUNCE_PAD_FRAMES, DAMAGE_HEIGHT_FRACTION,
    DANGER_ICON, DEBRIS_IMAGE, MAX_DEBRIS_HORIZONTAL_SPEED, MAX_DEBRIS_ITEMS,
    MAX_DEBRIS_STARTING_HORIZONTAL_ENERGY, MAX_DEBRIS_STARTING_VERTICAL_ENERGY,
    MAX_DEBRIS_VERTICAL_SPEED, MAX_DISPLAYED_DEBRIS, MAX_PAD_MOVEMENT_DISTANCE,
    MAX_SHEEP_HORIZONTAL_SPEED, MAX_SHEEP_VERTICAL_SPEED, MIN_DEBRIS_HORIZONTAL_SPEED,
    MIN_DEBRIS_ITEMS, MIN_DEBRIS_STARTING_HORIZONTAL_ENERGY,
    MIN_DEBRIS_STARTING_VERTICAL_ENERGY, MIN_DEBRIS_VERTICAL_SPEED,
    MIN_SHEEP_HORIZONTAL_SPEED, MIN_SHEEP_VERTICAL_SPEED, POINTS_PER_SHEEP,
    SCREEN_HEIGHT, SCREEN_WIDTH, SHEEP_BOUNCE_ENERGY_MULTIPLIER, SHEEP_FRAMES,
    SHEEP_JUMP_CHANCE, SHEEP_JUMP_ENERGY_MULTIPLIER, SHEEP_POOL_SURPLUS,
    SHEEP_STARTING_HORIZONTAL_ENERGY, SHEEP_STARTING_VERTICAL_ENERGY
)
from .data_models import (
    AccelInput, Direction, GameEnvironment, GameItem, GameMode, Kinematics,
    RenderItem, RenderState
)
from .images import ImageCache
from .physics_core import PhysicsCore
from .score import ScoreTracker
from .sound import AudioService

logger = logging.getLogger(__name__)


@dataclass
class SheepEngine(PhysicsCore):
    """
    The authoritative engine managing the entire game state.
    Inherits the speed model and integration from PhysicsCore.
    """
    images: ImageCache = field(default_factory=ImageCache)
    mode: GameMode = GameMode.NORMAL
    screen_width: int = SCREEN_WIDTH
    screen_height: int = SCREEN_HEIGHT
    environment: GameEnvironment = field(default_factory=GameEnvironment)
    scores: Optional[ScoreTracker] = None
    audio: Optional[AudioService] = None
    accel: AccelInput = field(default_factory=AccelInput)
    rng: random.Random = field(default_factory=random.Random)

    tick_count: int = 0
    ground_y: int = 0
    bounce_pad: Optional[GameItem] = None
    sheep: List[GameItem] = field(default_factory=list)
    debris: List[GameItem] = field(default_factory=list)

    def __post_init__(self):
        self.mode = GameMode(self.mode)
        if self.scores is None:
            self.scores = ScoreTracker(None, self.mode)
        self.start_game()

    @property
    def max_sheep(self) -> int:
        return self.mode.max_sheep

    @property
    def damage_threshold(self) -> float:
        """Fall height at or above which landing means a catch or a miss."""
        return int(self.screen_height * DAMAGE_HEIGHT_FRACTION) * self.environment.density

    # ---------- Session setup ----------

    def start_game(self):
        """Places the bounce pad and fills the sheep pool for a new session."""
        self._create_bounce_pad()
        logger.info(f"Starting {self.mode.name} game: {self.max_sheep} sheep, "
                    f"{self.screen_width}x{self.screen_height}")
        self.replenish_sheep()

    def _create_bounce_pad(self):
        frame = self.images.get(BOUNCE_PAD_FRAMES[0])
        if frame is None:
            # Without a pad every damaging fall is a miss.
            self.bounce_pad = None
            self.ground_y = self.screen_height
            return

        body = AnimatedImage(frame)
        body.set_frames([self.images.get(name) for name in BOUNCE_PAD_FRAMES])
        body.loop = False

        pad = GameItem(body)
        self.ground_y = self.screen_height - pad.height
        pad.y = self.ground_y - pad.height // 2
        pad.x = self.screen_width // 2 - pad.width // 2
        self.bounce_pad = pad

    def clean_up(self):
        """Drops every pooled item at the end of a session."""
        self.sheep.clear()
        self.debris.clear()

    # ---------- Item factories ----------

    def _random_direction(self) -> Direction:
        return Direction.RIGHT if self.rng.random() < 0.5 else Direction.LEFT

    def add_sheep(self) -> Optional[GameItem]:
        """Appends a fresh sheep on the ground at a random x. None if its image is missing."""
        frame = self.images.get(SHEEP_FRAMES[0])
        if frame is None:
            return None

        body = AnimatedImage(frame)
        body.set_frames([self.images.get(name) for name in SHEEP_FRAMES])
        body.start()

        kinematics = Kinematics(
            direction=self._random_direction(),
            horizontal_energy=SHEEP_STARTING_HORIZONTAL_ENERGY,
            vertical_energy=SHEEP_STARTING_VERTICAL_ENERGY,
            max_horizontal_energy=SHEEP_STARTING_HORIZONTAL_ENERGY,
            max_vertical_energy=SHEEP_STARTING_VERTICAL_ENERGY,
            min_horizontal_speed=MIN_SHEEP_HORIZONTAL_SPEED,
            max_horizontal_speed=MAX_SHEEP_HORIZONTAL_SPEED,
            min_vertical_speed=MIN_SHEEP_VERTICAL_SPEED,
            max_vertical_speed=MAX_SHEEP_VERTICAL_SPEED,
        )
        sheep = GameItem(body, x=self.rng.randint(0, self.screen_width), kinematics=kinematics)
        sheep.y = self.rest_y(sheep, self.ground_y)
        self.sheep.append(sheep)
        return sheep

    def generate_debris(self, x: int, y: int) -> List[GameItem]:
        """Bursts a random number of debris items outward from (x, y)."""
        burst = []
        for _ in range(self.rng.randint(MIN_DEBRIS_ITEMS, MAX_DEBRIS_ITEMS)):
            frame = self.images.get(DEBRIS_IMAGE)
            if frame is None:
                break

            max_h = self.rng.randint(
                MIN_DEBRIS_STARTING_HORIZONTAL_ENERGY, MAX_DEBRIS_STARTING_HORIZONTAL_ENERGY)
            max_v = self.rng.randint(
                MIN_DEBRIS_STARTING_VERTICAL_ENERGY, MAX_DEBRIS_STARTING_VERTICAL_ENERGY)
            kinematics = Kinematics(
                direction=self._random_direction(),
                horizontal_energy=max_h,
                vertical_energy=max_v,
                max_horizontal_energy=max_h,
                max_vertical_energy=max_v,
                min_horizontal_speed=MIN_DEBRIS_HORIZONTAL_SPEED,
                max_horizontal_speed=MAX_DEBRIS_HORIZONTAL_SPEED,
                min_vertical_speed=MIN_DEBRIS_VERTICAL_SPEED,
                max_vertical_speed=MAX_DEBRIS_VERTICAL_SPEED,
            )
            burst.append(GameItem(AnimatedImage(frame), x=x, y=y, kinematics=kinematics))

        self.debris.extend(burst)
        return burst

    # ---------- Simulation step ----------

    def step(self, now_ms: int):
        """
        The main simulation step. Order matters: sheep first (may spawn
        debris and change the score), then debris, then the bounce pad.
        """
        self.tick_count += 1
        self.update_sheep(now_ms)
        self.update_debris()
        self.update_bounce_pad(now_ms)

    def update_sheep(self, now_ms: int):
        density = self.environment.density
        threshold = self.damage_threshold

        for sheep in self.sheep:
            if sheep.active:
                self._update_one_sheep(sheep, now_ms, density, threshold)

        self.sheep = [s for s in self.sheep if s.active]
        self.replenish_sheep()

    def _update_one_sheep(self, sheep: GameItem, now_ms: int, density: float, threshold: float):
        k = sheep.kinematics
        sheep.body.advance(now_ms)

        self.apply_horizontal_movement(sheep, density)
        if self.reached_edge(sheep, 0, self.screen_width):
            k.reverse_direction()

        self.apply_gravity_and_movement(sheep, density)

        if self.check_ground_contact(sheep, self.ground_y):
            if k.last_height >= threshold:
                if self.bounce_pad is not None and self.bounce_pad.collides_with(sheep):
                    self._catch(sheep)
                else:
                    self._miss(sheep)
                return

            if k.jump_exponentially:
                k.max_vertical_energy = int(k.max_vertical_energy * SHEEP_JUMP_ENERGY_MULTIPLIER)
            k.vertical_energy = k.max_vertical_energy

        height = self.ground_y - sheep.y
        if height > k.last_height:
            k.last_height = height
            if k.last_height >= threshold and sheep.icon is None:
                sheep.set_icon(self.images.get(DANGER_ICON))

        if not k.jump_exponentially:
            if self.rng.randint(0, SHEEP_JUMP_CHANCE) == SHEEP_JUMP_CHANCE:
                k.jump_exponentially = True

    def _catch(self, sheep: GameItem):
        k = sheep.kinematics
        k.last_height = 0
        k.max_vertical_energy = int(SHEEP_STARTING_VERTICAL_ENERGY * SHEEP_BOUNCE_ENERGY_MULTIPLIER)
        k.vertical_energy = k.max_vertical_energy
        sheep.set_icon(None)

        self.scores.update(POINTS_PER_SHEEP)
        self.bounce_pad.body.restart()
        if self.audio is not None:
            self.audio.play_catch()
        logger.debug(f"Caught sheep at x={sheep.x}; score {self.scores.score}")

    def _miss(self, sheep: GameItem):
        sheep.make_inactive()
        self.generate_debris(sheep.x, sheep.y)

        self.scores.update(-POINTS_PER_SHEEP)
        if self.audio is not None:
            self.audio.play_miss()
        logger.debug(f"Missed sheep at ({sheep.x}, {sheep.y}); score {self.scores.score}")

    def replenish_sheep(self) -> int:
        """Tops the pool up to target + surplus once it drops below target."""
        added = 0
        if len(self.sheep) < self.max_sheep:
            while len(self.sheep) < self.max_sheep + SHEEP_POOL_SURPLUS:
                if self.add_sheep() is None:
                    break
                added += 1
        if added:
            logger.debug(f"Replenished {added} sheep")
        return added

    def update_debris(self):
        # Only the oldest entries past capacity are trimmed, and only once they have landed.
        overflow = len(self.debris) - MAX_DISPLAYED_DEBRIS
        if overflow > 0:
            self.debris = [d for i, d in enumerate(self.debris) if i >= overflow or d.active]

        density = self.environment.density
        for item in self.debris:
            if not item.active:
                continue
            self.apply_horizontal_movement(item, density)
            self.apply_gravity_and_movement(item, density)
            if self.check_ground_contact(item, self.ground_y):
                item.make_inactive()

    def update_bounce_pad(self, now_ms: int):
        pad = self.bounce_pad
        if pad is None:
            return
        pad.body.advance(now_ms)

        accel_x = self.accel.value
        if abs(accel_x) <= ACCEL_SENSOR_BUFFER:
            return

        accel_x = max(-MAX_PAD_MOVEMENT_DISTANCE, min(MAX_PAD_MOVEMENT_DISTANCE, accel_x))
        distance = int(accel_x * ACCEL_MULTIPLIER * self.environment.density)

        # Positive acceleration tilts towards the left edge.
        new_x = pad.x - distance
        if new_x < 0 or new_x + pad.width > self.screen_width:
            return
        pad.x = new_x

    # ---------- Debug / render ----------

    def explode(self):
        """Bursts every active sheep as though it fell too far. Score is untouched."""
        for sheep in self.sheep:
            if not sheep.active:
                continue
            sheep.make_inactive()
            self.generate_debris(sheep.x, sheep.y)
            if self.audio is not None:
                self.audio.play_miss()
        logger.info("Exploded all sheep")

    def render_state(self) -> RenderState:
        """Snapshot of everything the renderer draws this frame."""
        items = []
        for sheep in self.sheep:
            if not sheep.visible:
                continue
            icon = sheep.icon.current_frame if sheep.icon is not None else None
            mirrored = sheep.kinematics.direction == Direction.RIGHT
            items.append(RenderItem(sheep.x, sheep.y, sheep.body.current_frame, icon, mirrored))

        # Spent debris stays on the ground until trimmed.
        for item in self.debris:
            items.append(RenderItem(item.x, item.y, item.body.current_frame))

        if self.bounce_pad is not None:
            pad = self.bounce_pad
            items.append(RenderItem(pad.x, pad.y, pad.body.current_frame))

        return RenderState(items=items, score_text=self.scores.score_text())
