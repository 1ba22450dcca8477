"""
animation.py: Displayable frame holder with a self-contained frame-advance state machine.
"""

import logging
from typing import Optional, Protocol, Sequence

from .constants import DEFAULT_ANIMATION_FRAME_MS

logger = logging.getLogger(__name__)


class Frame(Protocol):
    """Anything with pixel dimensions. pygame.Surface satisfies this."""

    def get_width(self) -> int: ...

    def get_height(self) -> int: ...


class AnimatedImage:
    """
    Holds the frame currently shown for an item and advances through
    `frames` on a fixed per-frame duration (loop, play-once or reverse).
    """

    def __init__(self, frame: Optional[Frame] = None,
                 frame_duration_ms: int = DEFAULT_ANIMATION_FRAME_MS):
        if frame_duration_ms <= 0:
            raise ValueError("frame_duration_ms must be positive")

        self.current_frame: Optional[Frame] = None
        self.width = 0
        self.height = 0
        self.visible = True

        self.frames: Sequence[Optional[Frame]] = ()
        self.frame_duration_ms = frame_duration_ms
        self.running = False
        self.reverse = False
        self.loop = True
        self.last_frame_index = 0
        self.last_advance_time_ms = 0

        self.set_frame(frame)

    def set_frame(self, frame: Optional[Frame]):
        """Shows `frame`; a missing frame leaves the current one in place."""
        if frame is not None:
            self.current_frame = frame
            self.width = frame.get_width()
            self.height = frame.get_height()

    def set_frames(self, frames: Sequence[Optional[Frame]]):
        self.frames = tuple(frames)
        if not self.frames:
            self.stop()

    def start(self) -> bool:
        """Starts the animation. Returns False if there is nothing to run."""
        if self.frames and not self.running:
            self.running = True
            return True
        return False

    def stop(self) -> bool:
        if self.running:
            self.running = False
            return True
        return False

    def restart(self) -> bool:
        """Rewinds to the first frame, then starts."""
        self.stop()
        self.last_frame_index = 0
        if self.frames:
            self.set_frame(self.frames[0])
        return self.start()

    def advance(self, now_ms: int):
        """
        Moves to the next frame once `frame_duration_ms` has passed since
        the previous advance. Non-looping animations stop on their boundary.
        """
        if not self.running:
            return
        if not self.frames:
            self.stop()
            return
        if now_ms < self.last_advance_time_ms + self.frame_duration_ms:
            return

        index = self.last_frame_index
        max_index = len(self.frames) - 1

        if self.reverse:
            # Boundary is index 1: a looping run never lands on 0, a play-once run ends there.
            if self.last_frame_index - 1 < 1:
                if self.loop:
                    index = max_index
                else:
                    self.stop()
                    index = 0
            else:
                index = self.last_frame_index - 1
        else:
            if self.last_frame_index + 1 > max_index:
                if self.loop:
                    index = 0
                else:
                    self.stop()
            else:
                index = self.last_frame_index + 1

        self.last_frame_index = index
        self.last_advance_time_ms = now_ms

        frame = self.frames[index]
        if frame is None:
            logger.debug(f"No image in animation slot {index}; keeping current frame")
            return
        self.set_frame(frame)
