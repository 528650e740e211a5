from __future__ import annotations

from esper import World

from colormerge.components.animations import MergePulse, ScorePopup, SlideAnimation, SpawnPop
from colormerge.constants import (
    PULSE_DURATION_MS,
    POPUP_LIFETIME_MS,
    POPUP_STAGGER_MS,
    POPUP_TIERS,
    SLIDE_DURATION_MS,
)
from colormerge.events.bus import EVENT_GAME_STARTED, EVENT_TICK, EVENT_TURN_RESOLVED, EventBus

ANIMATION_TYPES = (SlideAnimation, MergePulse, SpawnPop, ScorePopup)


def popup_tier(points: int) -> str:
    for lower, tier in POPUP_TIERS:
        if points >= lower:
            return tier
    return "mid"


class AnimationSystem:
    """Drives timing of turn animations; each animation is its own entity.

    Slides, merge pulses and spawn pops advance ``progress`` from 0 to 1 and
    are removed when complete. Score popups start after a per-index stagger
    and live for a fixed lifetime.
    """

    def __init__(self, world: World, event_bus: EventBus):
        self.world = world
        self.event_bus = event_bus
        event_bus.subscribe(EVENT_TICK, self.on_tick)
        event_bus.subscribe(EVENT_TURN_RESOLVED, self.on_turn_resolved)
        event_bus.subscribe(EVENT_GAME_STARTED, self.on_game_started)

    def on_turn_resolved(self, sender, **kwargs):
        motion_map = kwargs.get('motion_map') or {}
        for motion in motion_map.values():
            if motion.displaced:
                self.world.create_entity(SlideAnimation(tile_id=motion.id, src=motion.from_pos, dst=motion.to_pos))
        for tile_id in sorted(kwargs.get('merged_ids') or ()):
            self.world.create_entity(MergePulse(tile_id=tile_id))
        spawned_id = kwargs.get('spawned_id')
        if spawned_id is not None:
            self.world.create_entity(SpawnPop(tile_id=spawned_id))
        for index, event in enumerate(kwargs.get('merge_events') or ()):
            self.world.create_entity(ScorePopup(
                row=event.row,
                col=event.col,
                points=event.points,
                tier=popup_tier(event.points),
                delay_ms=index * POPUP_STAGGER_MS,
            ))

    def on_game_started(self, sender, **kwargs):
        self.clear()

    def clear(self) -> None:
        doomed = set()
        for component_type in ANIMATION_TYPES:
            for ent, _ in self.world.get_component(component_type):
                doomed.add(ent)
        for ent in doomed:
            self.world.delete_entity(ent, immediate=True)

    def on_tick(self, sender, **kwargs):
        dt = kwargs.get('dt', 1/60)
        elapsed_ms = float(dt) * 1000.0
        finished = []
        for component_type, duration in (
            (SlideAnimation, SLIDE_DURATION_MS),
            (MergePulse, PULSE_DURATION_MS),
            (SpawnPop, PULSE_DURATION_MS),
        ):
            for ent, anim in self.world.get_component(component_type):
                anim.progress = min(1.0, anim.progress + elapsed_ms / duration)
                if anim.progress >= 1.0:
                    finished.append(ent)
        for ent, popup in self.world.get_component(ScorePopup):
            popup.age_ms += elapsed_ms
            if popup.age_ms >= popup.delay_ms + POPUP_LIFETIME_MS:
                finished.append(ent)
        for ent in finished:
            self.world.delete_entity(ent, immediate=True)

    def active_slide(self, tile_id: int) -> SlideAnimation | None:
        for _, anim in self.world.get_component(SlideAnimation):
            if anim.tile_id == tile_id:
                return anim
        return None

    def pulse_progress(self, tile_id: int) -> float | None:
        for component_type in (MergePulse, SpawnPop):
            for _, anim in self.world.get_component(component_type):
                if anim.tile_id == tile_id:
                    return anim.progress
        return None
