#!/usr/bin/env python3
"""
sheep_client.py

pygame shell around the simulation: window, tilt input (keyboard or
joystick), rendering, sound and the persisted preferences.
"""

import argparse
import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from typing import Optional

import pygame

from .constants import (
    BACKGROUND_IMAGE, DB_FILE, KEYBOARD_TILT, MAX_FPS, SCREEN_HEIGHT, SCREEN_WIDTH
)
from .data_models import AccelInput, GameEnvironment, GameMode, RenderState
from .game_loop import GameLoop, LoopState
from .images import ImageCache, draw_default_images
from .physics_engine import SheepEngine
from .prefs_db import Database
from .score import ScoreTracker
from .sound import Sound

logger = logging.getLogger(__name__)

TEXT_COLOR = (20, 20, 20)


class SheepClient:
    def __init__(self, mode: GameMode, width: int = SCREEN_WIDTH, height: int = SCREEN_HEIGHT,
                 db_file: str = DB_FILE, density: float = 1.0, rotation: int = 0,
                 assets: Optional[str] = None, muted: bool = False):
        pygame.init()
        self.screen = pygame.display.set_mode((width, height), pygame.RESIZABLE)
        pygame.display.set_caption(f"Sheep Bounce: {mode.name.title()}")
        self.font = pygame.font.Font(None, 40)

        # --- Persistence & Audio ---
        self.prefs = Database(db_file)
        # --mute only silences this session; the stored preference is untouched.
        self.sound = Sound(enabled=self.prefs.is_sound_enabled() and not muted)
        self.score_writer = ThreadPoolExecutor(max_workers=1, thread_name_prefix="score-writer")

        # --- Images ---
        self.images = ImageCache()
        if assets:
            self.images.load_dir(assets)
        draw_default_images(self.images, width, height)
        self.background = self.images.get(BACKGROUND_IMAGE)

        # --- Game Logic ---
        self.environment = GameEnvironment(density=density, rotation=rotation)
        self.accel = AccelInput()
        self.scores = ScoreTracker(self.prefs, mode, executor=self.score_writer)
        self.engine = SheepEngine(
            images=self.images,
            mode=mode,
            screen_width=width,
            screen_height=height,
            environment=self.environment,
            scores=self.scores,
            audio=self.sound,
            accel=self.accel,
        )
        self.loop = GameLoop(self.engine, render=self._draw_game)
        self.loop.on_resize = self._resize_background

        self.joystick: Optional[pygame.joystick.Joystick] = None
        if pygame.joystick.get_count() > 0:
            self.joystick = pygame.joystick.Joystick(0)
            logger.info(f"Using joystick for tilt: {self.joystick.get_name()}")

        self._draw_lock = threading.Lock()

    def run(self):
        """The main client execution loop; polls input while the game loop runs."""
        if self.sound.init():
            self.sound.play_music()
        self.loop.start()

        clock = pygame.time.Clock()
        running = True
        while running:
            clock.tick(MAX_FPS)

            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    running = self._handle_key(event.key)
                elif event.type == pygame.VIDEORESIZE:
                    self.loop.set_surface_size(event.w, event.h)

            self._sample_tilt()

        self.shutdown()

    def _handle_key(self, key: int) -> bool:
        if key == pygame.K_ESCAPE:
            return False
        if key == pygame.K_p:
            self.sound.play_click()
            if self.loop.state == LoopState.RUNNING:
                self.loop.pause()
                self.sound.pause_music()
            else:
                self.loop.unpause()
                self.sound.play_music()
        elif key == pygame.K_s:
            self._toggle_sound()
        elif key == pygame.K_e:
            with self.loop.lock:
                self.engine.explode()
        return True

    def _toggle_sound(self):
        enabled = not self.sound.enabled
        # Music stays off on the pause screen; unpause starts it.
        self.sound.set_enabled(enabled, resume_music=self.loop.state == LoopState.RUNNING)
        self.prefs.set_sound_enabled(enabled)

    def _sample_tilt(self):
        """Feeds the latest tilt into the engine. Joystick axes stand in for an accelerometer."""
        if self.joystick is not None:
            sample = [self.joystick.get_axis(i) * -KEYBOARD_TILT
                      for i in range(self.joystick.get_numaxes())]
            if len(sample) > self.environment.accel_axis:
                self.accel.set_from_sample(sample, self.environment)
                return

        keys = pygame.key.get_pressed()
        tilt = 0.0
        if keys[pygame.K_LEFT]:
            tilt += KEYBOARD_TILT
        if keys[pygame.K_RIGHT]:
            tilt -= KEYBOARD_TILT
        self.accel.set(tilt)

    def _resize_background(self, width: int, height: int):
        with self._draw_lock:
            if self.background is not None:
                self.background = pygame.transform.smoothscale(self.background, (width, height))

    def _draw_game(self):
        """Renders the current game state. Runs on the game loop thread."""
        state: RenderState = self.engine.render_state()
        screen = pygame.display.get_surface()
        if screen is None:
            return

        with self._draw_lock:
            if self.background is not None:
                screen.blit(self.background, (0, 0))
            else:
                screen.fill((135, 206, 235))

        for item in state.items:
            if item.frame is None:
                continue
            frame = pygame.transform.flip(item.frame, True, False) if item.mirrored else item.frame
            screen.blit(frame, (item.x, item.y))
            if item.icon is not None:
                icon_x = item.x + item.frame.get_width() // 2
                icon_y = item.y - item.icon.get_height()
                screen.blit(item.icon, (icon_x, icon_y))

        score_surf = self.font.render(state.score_text, True, TEXT_COLOR)
        screen.blit(score_surf, (30, 30))

        if self.loop.state == LoopState.PAUSED:
            paused = self.font.render("Paused - press P", True, TEXT_COLOR)
            screen.blit(paused, (screen.get_width() // 2 - paused.get_width() // 2,
                                 screen.get_height() // 2 - 20))

        pygame.display.flip()

    def shutdown(self):
        # The loop must be fully stopped before the display goes away.
        self.loop.stop()
        with self.loop.lock:
            self.engine.clean_up()
        self.sound.stop_music()
        self.score_writer.shutdown(wait=True)
        self.prefs.close()
        self.sound.release()
        pygame.quit()


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Bounce the sheep before they fall too far.")
    parser.add_argument("--mode", choices=[m.name.lower() for m in GameMode], default="normal")
    parser.add_argument("--width", type=int, default=SCREEN_WIDTH)
    parser.add_argument("--height", type=int, default=SCREEN_HEIGHT)
    parser.add_argument("--density", type=float, default=1.0,
                        help="movement scale for high resolution screens")
    parser.add_argument("--rotation", type=int, default=0,
                        help="display rotation used to pick the joystick tilt axis")
    parser.add_argument("--db", default=DB_FILE, help="preferences database file")
    parser.add_argument("--assets", help="directory of <name>.png images overriding the built-ins")
    parser.add_argument("--mute", action="store_true")
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    mode = GameMode[args.mode.upper()]
    print(f"Sheep Bounce ({mode.name.lower()}). Arrows tilt, P pause, S sound, E explode, Esc quit.")

    client = SheepClient(mode, width=args.width, height=args.height, db_file=args.db,
                         density=args.density, rotation=args.rotation,
                         assets=args.assets, muted=args.mute)
    try:
        client.run()
    except KeyboardInterrupt:
        client.shutdown()


if __name__ == "__main__":
    main()
