"""Tests for frame pacing, catch-up steps, pause and shutdown."""

import threading

import pytest

from sheep_bounce.game_loop import GameLoop, LoopState


class FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now


class StepRecorder:
    """Stands in for the engine and records the time of every step."""

    def __init__(self):
        self.steps = []

    def step(self, now_ms):
        self.steps.append(now_ms)


def make_loop(render_cost, fps=10, max_frame_skips=5):
    clock = FakeClock()
    engine = StepRecorder()
    renders = []

    def render():
        renders.append(clock.now)
        clock.now += render_cost

    loop = GameLoop(engine, render=render, fps=fps, max_frame_skips=max_frame_skips, clock=clock)
    return loop, engine, renders


def test_rejects_non_positive_fps():
    with pytest.raises(ValueError):
        GameLoop(StepRecorder(), fps=0)


def test_on_time_frame_steps_once_and_reports_slack():
    loop, engine, renders = make_loop(render_cost=0.02)

    sleep_time = loop.run_frame()

    assert engine.steps == [0]
    assert len(renders) == 1
    assert sleep_time == pytest.approx(0.08)
    assert loop.frames_skipped == 0


def test_late_frame_catches_up_without_rendering():
    loop, engine, renders = make_loop(render_cost=0.25)

    sleep_time = loop.run_frame()

    assert len(engine.steps) == 3
    assert engine.steps[1:] == [250, 250]
    assert len(renders) == 1
    assert loop.frames_skipped == 2
    assert sleep_time > 0


def test_catch_up_is_capped():
    loop, engine, renders = make_loop(render_cost=10.0)

    sleep_time = loop.run_frame()

    assert len(engine.steps) == 1 + 5
    assert loop.frames_skipped == 5
    assert sleep_time < 0


def test_paused_loop_renders_without_stepping():
    loop, engine, renders = make_loop(render_cost=10.0)
    loop.pause()
    assert loop.state == LoopState.PAUSED

    loop.run_frame()

    assert engine.steps == []
    assert len(renders) == 1

    loop.unpause()
    assert loop.state == LoopState.RUNNING
    loop.run_frame()
    assert len(engine.steps) == 6


def test_surface_size_reaches_the_renderer():
    loop, _, _ = make_loop(render_cost=0.0)
    sizes = []
    loop.on_resize = lambda w, h: sizes.append((w, h))

    loop.set_surface_size(1024, 600)
    assert sizes == [(1024, 600)]


def test_threaded_loop_starts_and_stops():
    stepped = threading.Event()

    class Engine:
        def step(self, now_ms):
            stepped.set()

    loop = GameLoop(Engine(), fps=200)
    loop.start()
    try:
        assert stepped.wait(2.0)
        assert loop.is_running
    finally:
        loop.stop()

    assert not loop.is_running
    assert loop.frames_rendered >= 1
