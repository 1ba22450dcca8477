"""Tests for the SQLite preferences store."""

import pytest

from sheep_bounce.data_models import GameMode
from sheep_bounce.prefs_db import Database


@pytest.fixture
def db_path(tmp_path):
    return str(tmp_path / "prefs.db")


@pytest.fixture
def db(db_path):
    database = Database(db_path)
    yield database
    database.close()


def test_empty_database_reads_defaults(db):
    assert db.is_sound_enabled()
    for mode in GameMode:
        assert db.get_high_score(mode) == 0


def test_scores_are_kept_per_mode(db):
    db.set_high_score(GameMode.EASY, 4)
    db.set_high_score(GameMode.UNFAIR, 17)

    assert db.get_high_score(GameMode.EASY) == 4
    assert db.get_high_score(GameMode.NORMAL) == 0
    assert db.get_high_score(GameMode.UNFAIR) == 17


def test_single_row_is_updated_in_place(db):
    db.set_sound_enabled(False)
    db.set_high_score(GameMode.NORMAL, 3)
    db.set_high_score(GameMode.NORMAL, 8)

    count = db.conn.execute("SELECT COUNT(*) FROM gamePrefsData").fetchone()[0]
    assert count == 1
    assert not db.is_sound_enabled()
    assert db.get_high_score(GameMode.NORMAL) == 8


def test_values_survive_reopening(db_path):
    first = Database(db_path)
    first.set_sound_enabled(False)
    first.set_high_score(GameMode.NORMAL, 9)
    first.close()

    second = Database(db_path)
    try:
        assert not second.is_sound_enabled()
        assert second.get_high_score(GameMode.NORMAL) == 9
    finally:
        second.close()
