from __future__ import annotations

from esper import World

from battlecore.components.pending_ability_target import PendingAbilityTarget
from battlecore.events.bus import (
    EventBus,
    EVENT_ABILITY_EXECUTE,
    EVENT_MANA_SPENT,
)
from battlecore.utils.abilities import owner_of_ability


class AbilityActivationSystem:
    """Bridges ability cost payment to ability execution.

    Once the ManaSystem confirms a spend, this system emits a dedicated
    execution event containing the pending targeting information.
    """

    def __init__(self, world: World, event_bus: EventBus) -> None:
        self.world = world
        self.event_bus = event_bus
        event_bus.subscribe(EVENT_MANA_SPENT, self.on_mana_spent)

    def on_mana_spent(self, sender, **payload) -> None:
        ability_entity = payload.get("ability_entity")
        if ability_entity is None:
            return
        try:
            pending: PendingAbilityTarget = self.world.component_for_entity(
                ability_entity, PendingAbilityTarget
            )
        except KeyError:
            return
        owner_entity = owner_of_ability(self.world, ability_entity)
        if owner_entity is None:
            owner_entity = pending.owner_entity
        self.event_bus.emit(
            EVENT_ABILITY_EXECUTE,
            ability_entity=ability_entity,
            owner_entity=owner_entity,
            pending=pending,
        )
