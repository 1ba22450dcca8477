"""
physics_core.py: The shared, deterministic kinematic functions and collision logic.
"""

from .constants import ENERGY_PER_SPEED_UNIT, GRAVITY
from .data_models import Direction, GameItem, Kinematics


class PhysicsCore:
    """
    Energy-to-speed conversion and per-tick integration shared by every
    jumping item. Speeds are whole pixels per tick before density scaling.
    """

    GRAVITY = GRAVITY

    @staticmethod
    def effective_speed(energy: int, min_speed: int, max_speed: int) -> int:
        """Speed for `energy`: floor(energy / 10) clamped to [min_speed, max_speed]."""
        speed = energy // ENERGY_PER_SPEED_UNIT
        if speed > max_speed:
            return max_speed
        if speed < min_speed:
            return min_speed
        return speed

    def horizontal_speed(self, k: Kinematics) -> int:
        """Signed horizontal speed; negative while heading left."""
        speed = self.effective_speed(
            k.horizontal_energy, k.min_horizontal_speed, k.max_horizontal_speed)
        return -speed if k.direction == Direction.LEFT else speed

    def vertical_speed(self, k: Kinematics) -> int:
        """Upward speed; negative while falling."""
        return self.effective_speed(
            k.vertical_energy, k.min_vertical_speed, k.max_vertical_speed)

    def apply_horizontal_movement(self, item: GameItem, density: float):
        item.x += int(self.horizontal_speed(item.kinematics) * density)

    def apply_gravity_and_movement(self, item: GameItem, density: float):
        """Moves the item by its current vertical speed, then spends one tick of gravity."""
        item.y -= int(self.vertical_speed(item.kinematics) * density)
        item.kinematics.vertical_energy -= self.GRAVITY

    @staticmethod
    def reached_edge(item: GameItem, screen_min: int, screen_max: int) -> bool:
        """True when the item touches the screen edge it is heading towards."""
        k = item.kinematics
        if k.direction == Direction.LEFT:
            return item.x <= screen_min
        return item.x + item.width >= screen_max

    @staticmethod
    def rest_y(item: GameItem, ground_y: int) -> int:
        """Y coordinate at which the item stands on the ground line."""
        return ground_y - item.height

    def check_ground_contact(self, item: GameItem, ground_y: int) -> bool:
        """Clamps the item to the ground line; True if it had passed it."""
        rest = self.rest_y(item, ground_y)
        if item.y > rest:
            item.y = rest
            return True
        return False
