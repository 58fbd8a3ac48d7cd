from __future__ import annotations

import logging

from esper import World

from battlecore.components.health import Health
from battlecore.events.bus import (
    EventBus,
    EVENT_CURRENT_TARGET_CHANGED,
    EVENT_ENTITY_DEFEATED,
)
from battlecore.utils.battle_state import get_or_create_battle_context

logger = logging.getLogger(__name__)


class TargetSelectionSystem:
    """Keeps BattleContext.current_target pointing at a living enemy.

    Hands are played against the current target. When it is defeated the
    selection moves to the next living enemy in display order.
    """

    def __init__(self, world: World, event_bus: EventBus) -> None:
        self.world = world
        self.event_bus = event_bus
        event_bus.subscribe(EVENT_ENTITY_DEFEATED, self.on_entity_defeated)

    def living_enemies(self) -> list[int]:
        return [enemy for enemy in get_or_create_battle_context(self.world).enemies if self._is_alive(enemy)]

    def set_current_target(self, target_entity: int | None) -> bool:
        context = get_or_create_battle_context(self.world)
        if target_entity is not None:
            if target_entity not in context.enemies or not self._is_alive(target_entity):
                return False
        previous = context.current_target
        if previous == target_entity:
            return False
        context.current_target = target_entity
        logger.debug("Current target %s -> %s", previous, target_entity)
        self.event_bus.emit(
            EVENT_CURRENT_TARGET_CHANGED,
            previous_target=previous,
            target_entity=target_entity,
        )
        return True

    def cycle_target(self, step: int = 1) -> int | None:
        context = get_or_create_battle_context(self.world)
        enemies = context.enemies
        if not enemies:
            return None
        try:
            start = enemies.index(context.current_target)
        except ValueError:
            start = -1 if step > 0 else 0
        for offset in range(1, len(enemies) + 1):
            candidate = enemies[(start + step * offset) % len(enemies)]
            if self._is_alive(candidate):
                self.set_current_target(candidate)
                return candidate
        self.set_current_target(None)
        return None

    def on_entity_defeated(self, sender, **payload) -> None:
        entity = payload.get("entity")
        context = get_or_create_battle_context(self.world)
        if entity is None or entity != context.current_target:
            return
        self.cycle_target(1)

    def _is_alive(self, entity: int) -> bool:
        try:
            return self.world.component_for_entity(entity, Health).is_alive()
        except KeyError:
            return False
