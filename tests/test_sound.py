"""The audio service must be safe to call before (or without) a mixer."""

from sheep_bounce.sound import Sound


def test_calls_before_init_are_noops():
    sound = Sound()
    sound.play_catch()
    sound.play_miss()
    sound.play_click()
    sound.play_music()
    sound.pause_music()
    sound.stop_music()
    sound.release()
    assert not sound.is_music_playing()


def test_toggle_updates_the_flag():
    sound = Sound(enabled=True)
    sound.set_enabled(False)
    assert not sound.enabled
    sound.set_enabled(True)
    assert sound.enabled


def test_enable_can_leave_music_off():
    sound = Sound(enabled=False)
    started = []
    sound.play_music = lambda: started.append(True)

    sound.set_enabled(True, resume_music=False)
    assert sound.enabled
    assert started == []

    sound.set_enabled(False)
    sound.set_enabled(True)
    assert started == [True]
