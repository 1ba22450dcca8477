"""
sound.py: Audio service used by the game session.

The simulation only calls into an `AudioService`; it never owns audio
state. `Sound` is the pygame mixer implementation with short generated
effects and a looping background tune.
"""

import array
import logging
import math
from typing import Dict, List, Optional, Protocol

import pygame

logger = logging.getLogger(__name__)

SAMPLE_RATE = 22050
AMPLITUDE = 9000


class AudioService(Protocol):
    def play_catch(self) -> None: ...

    def play_miss(self) -> None: ...

    def play_click(self) -> None: ...

    def play_music(self) -> None: ...

    def pause_music(self) -> None: ...

    def stop_music(self) -> None: ...

    def set_enabled(self, enabled: bool, resume_music: bool = True) -> None: ...


def _tone(freqs: List[float], duration: float, decay: float = 6.0) -> array.array:
    """Mono square-ish tone sweeping through `freqs`, with an exponential fade."""
    total = int(SAMPLE_RATE * duration)
    step = max(1, total // len(freqs))
    samples = array.array('h')
    for i in range(total):
        t = i / SAMPLE_RATE
        freq = freqs[min(i // step, len(freqs) - 1)]
        wave = 1 if (t * freq) % 1 < 0.5 else -1
        samples.append(int(wave * AMPLITUDE * math.exp(-decay * t)))
    return samples


def _noise_burst(duration: float) -> array.array:
    # Deterministic LCG noise keeps the effect identical between runs.
    total = int(SAMPLE_RATE * duration)
    samples = array.array('h')
    seed = 12345
    for i in range(total):
        seed = (seed * 1103515245 + 12345) & 0x7FFFFFFF
        level = (seed / 0x7FFFFFFF) * 2 - 1
        samples.append(int(level * AMPLITUDE * (1 - i / total)))
    return samples


MUSIC_NOTES = [262, 330, 392, 330, 294, 349, 440, 349]


class Sound:
    """pygame mixer audio, gated by a single enabled flag."""

    def __init__(self, enabled: bool = True):
        self.enabled = enabled
        self._initialized = False
        self._sounds: Dict[str, pygame.mixer.Sound] = {}
        self._music_channel: Optional[pygame.mixer.Channel] = None
        self._music_paused = False

    def init(self) -> bool:
        """Initializes the mixer and builds the effects. False if audio is unavailable."""
        try:
            pygame.mixer.init(SAMPLE_RATE, -16, 2, 1024)
        except pygame.error as e:
            logger.error(f"Failed to initialize audio: {e}")
            return False

        self._sounds["bounce"] = self._create_sound(_tone([440, 660, 880], 0.18))
        self._sounds["pop"] = self._create_sound(_noise_burst(0.2))
        self._sounds["button_click"] = self._create_sound(_tone([1200], 0.04, decay=30))
        music = array.array('h')
        for note in MUSIC_NOTES:
            music.extend(_tone([note], 0.25, decay=3))
        self._sounds["music"] = self._create_sound(music)
        self._initialized = True
        logger.info("Audio initialized")
        return True

    def _create_sound(self, samples: array.array) -> pygame.mixer.Sound:
        """Create a pygame Sound from mono samples (duplicated to stereo)."""
        stereo = array.array('h')
        for s in samples:
            stereo.append(s)
            stereo.append(s)
        return pygame.mixer.Sound(buffer=stereo)

    def _play(self, name: str):
        if not self._initialized or not self.enabled:
            return
        sound = self._sounds.get(name)
        if sound is None:
            logger.warning(f"Sound not found: {name}")
            return
        sound.play()

    def play_catch(self):
        self._play("bounce")

    def play_miss(self):
        self._play("pop")

    def play_click(self):
        self._play("button_click")

    def is_music_playing(self) -> bool:
        return (self._music_channel is not None
                and self._music_channel.get_busy() and not self._music_paused)

    def play_music(self):
        """Starts the tune from the top, or resumes it after a pause."""
        if not self._initialized or not self.enabled or self.is_music_playing():
            return
        if self._music_paused and self._music_channel is not None:
            self._music_channel.unpause()
        else:
            self._music_channel = self._sounds["music"].play(loops=-1)
        self._music_paused = False

    def pause_music(self):
        if self.enabled and self.is_music_playing():
            self._music_channel.pause()
            self._music_paused = True

    def stop_music(self):
        if self._music_channel is not None:
            self._music_channel.stop()
        self._music_channel = None
        self._music_paused = False

    def set_enabled(self, enabled: bool, resume_music: bool = True):
        """Gates every effect. Music resumes on enable only if `resume_music`."""
        if not enabled:
            self.pause_music()
        self.enabled = enabled
        if enabled and resume_music:
            self.play_music()
        logger.info(f"Sound {'enabled' if enabled else 'disabled'}")

    def release(self):
        if not self._initialized:
            return
        self.stop_music()
        self._sounds.clear()
        pygame.mixer.quit()
        self._initialized = False
