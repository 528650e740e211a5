from __future__ import annotations

import json
import logging
from pathlib import Path

from colormerge.components.score_tracker import ScoreTracker
from colormerge.constants import SCOREBOARD_KEY, STORAGE_KEY
from colormerge.events.bus import EVENT_LEADERBOARD_CHANGED, EVENT_SCORE_CHANGED, EventBus
from colormerge.systems.score_storage_system import ScoreStorageSystem
from colormerge.utils.game_state import state_component
from colormerge.world import create_world


def _tracker(world) -> ScoreTracker:
    tracker = state_component(world, ScoreTracker)
    assert tracker is not None, "ScoreTracker component expected"
    return tracker


def _write(path: Path, payload) -> None:
    with path.open("w", encoding="utf-8") as handle:
        if isinstance(payload, str):
            handle.write(payload)
        else:
            json.dump(payload, handle)


def test_missing_file_loads_defaults(tmp_path) -> None:
    world = create_world(EventBus())
    ScoreStorageSystem(world, EventBus(), save_path=Path(tmp_path) / "scores.json")

    assert _tracker(world).best == 0
    assert _tracker(world).leaderboard == []


def test_loads_stored_scores(tmp_path) -> None:
    save_path = Path(tmp_path) / "scores.json"
    _write(save_path, {STORAGE_KEY: 512, SCOREBOARD_KEY: [40, "junk", 300, None, 12.7, -5]})
    world = create_world(EventBus())

    ScoreStorageSystem(world, EventBus(), save_path=save_path)

    tracker = _tracker(world)
    assert tracker.best == 512
    assert tracker.leaderboard == [300, 40, 12]


def test_malformed_file_loads_defaults_and_warns(tmp_path, caplog) -> None:
    save_path = Path(tmp_path) / "scores.json"
    _write(save_path, "{not json")
    world = create_world(EventBus())

    with caplog.at_level(logging.WARNING):
        ScoreStorageSystem(world, EventBus(), save_path=save_path)

    assert _tracker(world).best == 0
    assert "unreadable" in caplog.text


def test_unexpected_layout_loads_defaults(tmp_path) -> None:
    save_path = Path(tmp_path) / "scores.json"
    _write(save_path, [1, 2, 3])
    world = create_world(EventBus())

    ScoreStorageSystem(world, EventBus(), save_path=save_path)

    assert _tracker(world).best == 0
    assert _tracker(world).leaderboard == []


def test_non_numeric_best_and_non_list_board(tmp_path) -> None:
    save_path = Path(tmp_path) / "scores.json"
    _write(save_path, {STORAGE_KEY: "lots", SCOREBOARD_KEY: {"a": 1}})
    world = create_world(EventBus())

    ScoreStorageSystem(world, EventBus(), save_path=save_path)

    assert _tracker(world).best == 0
    assert _tracker(world).leaderboard == []


def test_saves_when_best_improves(tmp_path) -> None:
    save_path = Path(tmp_path) / "scores.json"
    world = create_world(EventBus())
    bus = EventBus()
    ScoreStorageSystem(world, bus, save_path=save_path, load_existing=False)

    _tracker(world).best = 64
    bus.emit(EVENT_SCORE_CHANGED, score=64, best=64, delta=64, new_best=True)

    with save_path.open("r", encoding="utf-8") as handle:
        payload = json.load(handle)
    assert payload[STORAGE_KEY] == 64


def test_no_save_without_new_best(tmp_path) -> None:
    save_path = Path(tmp_path) / "scores.json"
    bus = EventBus()
    ScoreStorageSystem(create_world(EventBus()), bus, save_path=save_path, load_existing=False)

    bus.emit(EVENT_SCORE_CHANGED, score=4, best=100, delta=4, new_best=False)

    assert not save_path.exists()


def test_saves_leaderboard_changes(tmp_path) -> None:
    save_path = Path(tmp_path) / "nested" / "scores.json"
    world = create_world(EventBus())
    bus = EventBus()
    ScoreStorageSystem(world, bus, save_path=save_path, load_existing=False)

    _tracker(world).leaderboard = [90, 30]
    bus.emit(EVENT_LEADERBOARD_CHANGED, leaderboard=[90, 30])

    with save_path.open("r", encoding="utf-8") as handle:
        payload = json.load(handle)
    assert payload[SCOREBOARD_KEY] == [90, 30]


def test_write_failure_is_logged(tmp_path, caplog) -> None:
    blocker = Path(tmp_path) / "blocker"
    blocker.write_text("file, not a directory", encoding="utf-8")
    system = ScoreStorageSystem(create_world(EventBus()), EventBus(), save_path=blocker / "scores.json", load_existing=False)

    with caplog.at_level(logging.WARNING):
        system.save_scores()

    assert "Could not save scores" in caplog.text


def test_default_save_path_lives_in_home() -> None:
    system = ScoreStorageSystem(create_world(EventBus()), EventBus(), load_existing=False)
    assert system.save_path.name == "scores.json"
    assert system.save_path.parent.name == ".color_merge"
