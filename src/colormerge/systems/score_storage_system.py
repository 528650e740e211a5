from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from esper import World

from colormerge.components.score_tracker import ScoreTracker
from colormerge.constants import SCOREBOARD_KEY, SCOREBOARD_SIZE, STORAGE_KEY
from colormerge.events.bus import (
    EVENT_LEADERBOARD_CHANGED,
    EVENT_SCORE_CHANGED,
    EventBus,
)
from colormerge.utils.game_state import state_component
from colormerge.utils.scoreboard import sanitize_best, sanitize_leaderboard

logger = logging.getLogger(__name__)


class ScoreStorageSystem:
    """Loads and persists the best score and leaderboard as a small JSON file.

    Unreadable or malformed data is replaced by defaults; loading never raises.
    """

    def __init__(
        self,
        world: World,
        event_bus: EventBus,
        *,
        save_path: Path | None = None,
        load_existing: bool = True,
        scoreboard_size: int = SCOREBOARD_SIZE,
    ) -> None:
        self.world = world
        self.event_bus = event_bus
        self.scoreboard_size = scoreboard_size
        self._save_path = Path(save_path) if save_path is not None else self._default_save_path()

        self.event_bus.subscribe(EVENT_SCORE_CHANGED, self._on_score_changed)
        self.event_bus.subscribe(EVENT_LEADERBOARD_CHANGED, self._on_leaderboard_changed)

        if load_existing:
            self.load_scores()

    @staticmethod
    def _default_save_path() -> Path:
        return Path.home() / ".color_merge" / "scores.json"

    @property
    def save_path(self) -> Path:
        return self._save_path

    def _tracker(self) -> ScoreTracker:
        tracker = state_component(self.world, ScoreTracker)
        if tracker is None:
            raise RuntimeError("ScoreTracker component not found")
        return tracker

    def read_payload(self) -> dict[str, Any]:
        try:
            with self._save_path.open("r", encoding="utf-8") as handle:
                payload = json.load(handle)
        except FileNotFoundError:
            return {}
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
            logger.warning("Ignoring unreadable score file %s: %s", self._save_path, exc)
            return {}
        if not isinstance(payload, dict):
            logger.warning("Ignoring score file %s with unexpected layout", self._save_path)
            return {}
        return payload

    def load_scores(self) -> None:
        tracker = self._tracker()
        payload = self.read_payload()
        tracker.best = max(tracker.best, sanitize_best(payload.get(STORAGE_KEY, 0)))
        tracker.leaderboard = sanitize_leaderboard(payload.get(SCOREBOARD_KEY, []), self.scoreboard_size)

    def save_scores(self) -> None:
        tracker = self._tracker()
        try:
            self._save_path.parent.mkdir(parents=True, exist_ok=True)
            with self._save_path.open("w", encoding="utf-8") as handle:
                json.dump({
                    STORAGE_KEY: tracker.best,
                    SCOREBOARD_KEY: list(tracker.leaderboard),
                }, handle, indent=2)
        except OSError as exc:
            logger.warning("Could not save scores to %s: %s", self._save_path, exc)

    def _on_score_changed(self, sender, **payload) -> None:
        if payload.get("new_best"):
            self.save_scores()

    def _on_leaderboard_changed(self, sender, **payload) -> None:
        self.save_scores()
