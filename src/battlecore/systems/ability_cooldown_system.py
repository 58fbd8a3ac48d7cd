from __future__ import annotations

from esper import World

from battlecore.components.ability import Ability
from battlecore.components.ability_cooldown import AbilityCooldown
from battlecore.events.bus import (
    EventBus,
    EVENT_ABILITY_RESOLVED,
    EVENT_BATTLE_START,
)
from battlecore.utils.abilities import roster_abilities


class AbilityCooldownSystem:
    """Starts per-ability cooldown timers after a cast resolves.

    Ticking down happens once per turn end through TurnCycleSystem.
    """

    def __init__(self, world: World, event_bus: EventBus) -> None:
        self.world = world
        self.event_bus = event_bus
        event_bus.subscribe(EVENT_ABILITY_RESOLVED, self.on_ability_resolved)
        event_bus.subscribe(EVENT_BATTLE_START, self.on_battle_start)

    def on_ability_resolved(self, sender, **payload) -> None:
        ability_entity = payload.get("ability_entity")
        if ability_entity is None:
            return
        try:
            ability = self.world.component_for_entity(ability_entity, Ability)
        except KeyError:
            return
        self.ensure_state(ability_entity).start(ability.cooldown)

    def on_battle_start(self, sender, **payload) -> None:
        for _, ability_entity in roster_abilities(self.world):
            self.ensure_state(ability_entity).remaining_turns = 0

    def ensure_state(self, ability_entity: int) -> AbilityCooldown:
        try:
            return self.world.component_for_entity(ability_entity, AbilityCooldown)
        except KeyError:
            state = AbilityCooldown()
            self.world.add_component(ability_entity, state)
            return state
