import logging

from esper import World

from battlecore.components.health import Health
from battlecore.events.bus import (
    EventBus,
    EVENT_ENTITY_DEFEATED,
    EVENT_HEALTH_CHANGED,
    EVENT_HEALTH_DAMAGE,
    EVENT_HEALTH_HEAL,
)

logger = logging.getLogger(__name__)


class HealthSystem:
    """Manages health state changes via events.

    Subscribes to EVENT_HEALTH_DAMAGE and EVENT_HEALTH_HEAL and applies
    changes to target entities. Emits EVENT_HEALTH_CHANGED after mutations
    and EVENT_ENTITY_DEFEATED when an entity drops to zero.
    """

    def __init__(self, world: World, event_bus: EventBus):
        self.world = world
        self.event_bus = event_bus
        self.event_bus.subscribe(EVENT_HEALTH_DAMAGE, self.on_health_damage)
        self.event_bus.subscribe(EVENT_HEALTH_HEAL, self.on_health_heal)

    def on_health_damage(self, sender, **kwargs):
        self._apply(kwargs, sign=-1)

    def on_health_heal(self, sender, **kwargs):
        self._apply(kwargs, sign=1)

    def _apply(self, payload: dict, *, sign: int) -> None:
        target_entity = payload.get('target_entity')
        amount = payload.get('amount', 0)
        source_owner = payload.get('source_owner')
        reason = payload.get('reason', 'unknown')
        if target_entity is None or not isinstance(amount, int) or amount <= 0:
            return
        try:
            health = self.world.component_for_entity(target_entity, Health)
        except KeyError:
            return
        if not health.is_alive():
            # The dead are neither damaged nor healed.
            return
        old_hp = health.current
        health.current += sign * amount
        health.clamp()
        delta = health.current - old_hp
        logger.debug("Entity %s health %s -> %s (%s)", target_entity, old_hp, health.current, reason)
        self.event_bus.emit(
            EVENT_HEALTH_CHANGED,
            entity=target_entity,
            current=health.current,
            max_hp=health.max_hp,
            delta=delta,
            reason=reason,
            source_owner=source_owner,
        )
        if old_hp > 0 and health.current == 0:
            self.event_bus.emit(
                EVENT_ENTITY_DEFEATED,
                entity=target_entity,
                reason=reason,
                source_owner=source_owner,
            )
