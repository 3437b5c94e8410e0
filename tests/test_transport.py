import random
from typing import List

import pytest
from hypothesis import given
from hypothesis import strategies as st

from config import AppConfig, TransportConfig
from context import SessionContext
from events.bus import Topic
from helpers import SCENARIO, TICK, RecordingPlayer, configure_hypo
from notes.patterns import PatternCatalog
from timeline.note_timeline import NoteTimeline
from transport.controller import TransportController
from transport.state import active_duration, note_duration, note_speed_for

configure_hypo()


def mk_transport(cfg: AppConfig = None):
    ctx = SessionContext(cfg=cfg or AppConfig())
    tl = NoteTimeline(ctx, RecordingPlayer())
    tr = TransportController(ctx, tl, PatternCatalog(rng=random.Random(1)))
    return ctx, tl, tr


@given(st.integers(0, 400), st.integers(0, 400), st.sampled_from(["ratio", "linear"]))
def test_speed_is_monotonic(t1: int, t2: int, mode: str) -> None:
    cfg = TransportConfig(speed_mode=mode)
    lo, hi = sorted((t1, t2))
    assert note_speed_for(lo, cfg) <= note_speed_for(hi, cfg)


def test_speed_formulas() -> None:
    ratio = TransportConfig()
    assert note_speed_for(60, ratio) == pytest.approx(1.0)
    assert note_speed_for(180, ratio) == pytest.approx(3.0)
    linear = TransportConfig(speed_mode="linear", min_speed=1.0, max_speed=3.0)
    assert note_speed_for(60, linear) == pytest.approx(1.0)
    assert note_speed_for(120, linear) == pytest.approx(2.0)
    assert note_speed_for(999, linear) == pytest.approx(3.0)
    with pytest.raises(ValueError):
        note_speed_for(100, TransportConfig(speed_mode="warp"))


def test_durations() -> None:
    assert note_duration(100) == pytest.approx(0.6)
    assert active_duration(120, TransportConfig()) == pytest.approx(0.5)
    assert active_duration(60, TransportConfig(active_mode="fixed", active_fixed_s=0.5)) == 0.5


def test_initial_state_is_paused() -> None:
    ctx, _, tr = mk_transport()
    assert not tr.is_playing
    assert ctx.state.tempo == 100
    assert ctx.state.note_speed == pytest.approx(100 / 60)


def test_play_pause_publish() -> None:
    ctx, _, tr = mk_transport()
    seen: List[bool] = []
    ctx.bus.subscribe(Topic.PLAY_STATE_CHANGED, seen.append)
    tr.play()
    assert tr.is_playing
    tr.pause()
    assert not tr.is_playing
    assert seen == [True, False]


@pytest.mark.parametrize("bpm, expected", [(30, 60), (60, 60), (120, 120), (180, 180), (500, 180)])
def test_set_tempo_clamps(bpm: int, expected: int) -> None:
    ctx, _, tr = mk_transport()
    seen: List[int] = []
    ctx.bus.subscribe(Topic.TEMPO_CHANGED, seen.append)
    assert tr.set_tempo(bpm) == expected
    assert ctx.state.tempo == expected
    assert ctx.state.note_speed == pytest.approx(expected / 60)
    assert seen == [expected]
    assert not tr.is_playing


def test_set_tempo_keeps_playing() -> None:
    ctx, _, tr = mk_transport()
    tr.play()
    tr.set_tempo(150)
    assert tr.is_playing


@pytest.mark.parametrize("was_playing", [False, True])
def test_replay_resets_and_plays(was_playing: bool) -> None:
    ctx, tl, tr = mk_transport()
    tl.load_pattern(SCENARIO)
    tr.play()
    for _ in range(400):
        ctx.scheduler.advance(TICK)
        tl.advance(ctx.state.note_speed)
    assert all(n.played for n in tl.notes)
    if not was_playing:
        tr.pause()
    tr.replay()
    assert tr.is_playing
    assert [n.x for n in tl.notes] == [tl.initial_x(i) for i in range(4)]
    assert not any(n.played or n.active for n in tl.notes)


def test_replay_without_pattern_still_plays() -> None:
    _, tl, tr = mk_transport()
    tr.replay()
    assert tr.is_playing
    assert tl.notes == []


@pytest.mark.parametrize("was_playing", [False, True])
def test_regenerate_leaves_play_state(was_playing: bool) -> None:
    ctx, tl, tr = mk_transport()
    if was_playing:
        tr.play()
    pattern = tr.regenerate_pattern()
    assert tl.current_pattern is pattern
    assert len(tl.notes) == len(pattern)
    assert tr.is_playing == was_playing


def test_regenerate_autoplay_option() -> None:
    cfg = AppConfig()
    cfg.transport.regenerate_autoplay = True
    _, _, tr = mk_transport(cfg)
    tr.regenerate_pattern()
    assert tr.is_playing
