"""
game_loop.py: Fixed-period frame loop driving the simulation and the renderer.

Each iteration runs one simulation step and one render. When an iteration
overruns its frame period, extra simulation steps run without rendering until
the loop has caught up or MAX_FRAME_SKIPS is reached.
"""

import logging
import threading
import time
from enum import Enum
from typing import Callable, Optional

from .constants import MAX_FPS, MAX_FRAME_SKIPS
from .physics_engine import SheepEngine

logger = logging.getLogger(__name__)


class LoopState(Enum):
    RUNNING = "running"
    PAUSED = "paused"


class GameLoop:
    """
    Runs the engine on a dedicated worker thread. Every tick happens under
    `lock`; pause, resume, resize and shutdown take the same lock so they
    never interleave with a half-applied tick.
    """

    def __init__(self, engine: SheepEngine,
                 render: Optional[Callable[[], None]] = None,
                 fps: int = MAX_FPS,
                 max_frame_skips: int = MAX_FRAME_SKIPS,
                 clock: Callable[[], float] = time.monotonic):
        if fps <= 0:
            raise ValueError("fps must be positive")
        self.engine = engine
        self.render = render
        self.on_resize: Optional[Callable[[int, int], None]] = None
        self.frame_period = 1.0 / fps
        self.max_frame_skips = max_frame_skips
        self.clock = clock

        self.state = LoopState.RUNNING
        self.lock = threading.RLock()
        self.stop_requested = threading.Event()
        self.thread: Optional[threading.Thread] = None

        self.frames_rendered = 0
        self.frames_skipped = 0

    @property
    def is_running(self) -> bool:
        return self.thread is not None and self.thread.is_alive()

    def start(self):
        """Starts the worker thread."""
        if self.is_running:
            return
        self.stop_requested.clear()
        self.thread = threading.Thread(target=self._game_loop, name="game-loop", daemon=True)
        self.thread.start()

    def stop(self):
        """Signals the loop to exit and blocks until the worker has finished."""
        logger.info("Stopping game loop...")
        with self.lock:
            self.stop_requested.set()
        if self.thread is not None:
            self.thread.join()
        self.thread = None
        logger.info("Game loop stopped.")

    def pause(self):
        with self.lock:
            if self.state == LoopState.RUNNING:
                self.state = LoopState.PAUSED
                logger.info("Game paused")

    def unpause(self):
        with self.lock:
            if self.state != LoopState.RUNNING:
                self.state = LoopState.RUNNING
                logger.info("Game resumed")

    def set_surface_size(self, width: int, height: int):
        """Forwards new drawing surface dimensions to the renderer between ticks."""
        with self.lock:
            if self.on_resize is not None:
                self.on_resize(width, height)

    def _now_ms(self) -> int:
        return int(self.clock() * 1000)

    def run_frame(self) -> float:
        """
        One loop iteration: simulate (if running), render, then catch up
        when late. Returns the time left in this frame's budget, in seconds.
        """
        with self.lock:
            begin = self.clock()
            if self.state == LoopState.RUNNING:
                self.engine.step(self._now_ms())

            if self.render is not None:
                self.render()
            self.frames_rendered += 1

            sleep_time = self.frame_period - (self.clock() - begin)

            skipped = 0
            while (sleep_time < 0 and skipped < self.max_frame_skips
                   and self.state == LoopState.RUNNING):
                self.engine.step(self._now_ms())
                sleep_time += self.frame_period
                skipped += 1
            if skipped:
                self.frames_skipped += skipped
                logger.debug(f"Behind schedule; ran {skipped} updates without drawing")

        return sleep_time

    def _game_loop(self):
        """The main loop running at the fixed frame rate."""
        logger.info(f"Game loop started. Frame rate: {1 / self.frame_period:.0f} Hz.")
        while not self.stop_requested.is_set():
            sleep_time = self.run_frame()
            if sleep_time > 0 and self.stop_requested.wait(sleep_time):
                logger.debug("Frame wait interrupted by stop request")
