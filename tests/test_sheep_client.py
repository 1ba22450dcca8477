"""Client wiring: preferences and key handling, on SDL's dummy drivers."""

import pytest

from sheep_bounce.data_models import GameMode
from sheep_bounce.prefs_db import Database
from sheep_bounce.sheep_client import SheepClient, parse_args

from conftest import FakeAudio


@pytest.fixture
def db_file(tmp_path):
    return str(tmp_path / "prefs.db")


def open_client(db_file, **kwargs):
    return SheepClient(GameMode.EASY, width=320, height=240, db_file=db_file, **kwargs)


def test_mute_silences_only_this_session(db_file):
    client = open_client(db_file, muted=True)
    try:
        assert not client.sound.enabled
    finally:
        client.shutdown()

    prefs = Database(db_file)
    try:
        assert prefs.is_sound_enabled()
    finally:
        prefs.close()


def test_stored_preference_applies_without_mute(db_file):
    prefs = Database(db_file)
    prefs.set_sound_enabled(False)
    prefs.close()

    client = open_client(db_file)
    try:
        assert not client.sound.enabled
    finally:
        client.shutdown()


def test_sound_toggle_keeps_music_off_while_paused(db_file):
    client = open_client(db_file)
    audio = FakeAudio()
    audio.enabled = False
    client.sound = audio
    try:
        client.loop.pause()
        client._toggle_sound()
        assert audio.calls == [("enabled", True, False)]
        assert client.prefs.is_sound_enabled()

        client.loop.unpause()
        client._toggle_sound()
        client._toggle_sound()
        assert audio.calls[-1] == ("enabled", True, True)
    finally:
        client.shutdown()


def test_parse_args_defaults():
    args = parse_args([])
    assert args.mode == "normal"
    assert not args.mute
    assert parse_args(["--mode", "unfair", "--mute"]).mute
