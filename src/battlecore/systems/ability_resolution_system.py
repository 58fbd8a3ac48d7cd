from __future__ import annotations

from concurrent.futures import Future
import itertools
import logging
from typing import Dict

from esper import World

from battlecore.components.ability import Ability
from battlecore.components.pending_ability_target import PendingAbilityTarget
from battlecore.events.bus import (
    EventBus,
    EVENT_ABILITY_EFFECT_APPLIED,
    EVENT_ABILITY_EFFECT_COMPLETED,
    EVENT_ABILITY_EXECUTE,
    EVENT_ABILITY_RESOLVED,
    EVENT_ANIMATION_COMPLETE,
)
from battlecore.systems.abilities.base import (
    ABILITY_EFFECT_ANIMATION,
    AbilityContext,
    AbilityResolver,
    EffectDrivenAbilityResolver,
)
from battlecore.systems.abilities.registry import create_resolver_registry
from battlecore.utils.abilities import owner_of_ability
from battlecore.utils.battle_state import get_or_create_battle_context, get_or_create_roster

logger = logging.getLogger(__name__)


class AbilityResolutionSystem:
    """Executes ability effects once activation signals a paid cast.

    Each cast gets a ``cast_id``. A resolver returning a Future leaves the
    cast in flight until that Future completes; EVENT_ABILITY_EFFECT_COMPLETED
    fires either way. Ledger and cooldown state never wait on the Future.
    """

    def __init__(
        self,
        world: World,
        event_bus: EventBus,
        resolvers: dict[str, AbilityResolver] | None = None,
    ) -> None:
        self.world = world
        self.event_bus = event_bus
        self._resolvers = create_resolver_registry(resolvers)
        self._default_resolver = EffectDrivenAbilityResolver()
        self._cast_ids = itertools.count(1)
        self._in_flight: Dict[int, Future] = {}
        event_bus.subscribe(EVENT_ABILITY_EXECUTE, self.on_execute)
        event_bus.subscribe(EVENT_ANIMATION_COMPLETE, self.on_animation_complete)

    @property
    def in_flight(self) -> Dict[int, Future]:
        return dict(self._in_flight)

    def on_execute(self, sender, **payload) -> None:
        ability_entity = payload.get("ability_entity")
        if ability_entity is None:
            return
        pending = payload.get("pending")
        if pending is None:
            try:
                pending = self.world.component_for_entity(ability_entity, PendingAbilityTarget)
            except KeyError:
                return
        try:
            ability = self.world.component_for_entity(ability_entity, Ability)
        except KeyError:
            return
        owner_entity = owner_of_ability(self.world, ability_entity)
        if owner_entity is None:
            owner_entity = payload.get("owner_entity") or pending.owner_entity
        cast_id = next(self._cast_ids)
        context = AbilityContext(
            world=self.world,
            event_bus=self.event_bus,
            ability_entity=ability_entity,
            ability=ability,
            pending=pending,
            owner_entity=owner_entity,
            active_hero=get_or_create_roster(self.world).active_hero(),
            battle=get_or_create_battle_context(self.world),
            cast_id=cast_id,
        )
        resolver = self._resolvers.get(ability.name, self._default_resolver)
        try:
            handle = resolver.resolve(context)
        except Exception:
            # Mana is already spent; the cast still resolves so the cooldown starts.
            logger.exception("Resolver %s failed for cast %s of %s", resolver.name, cast_id, ability.name)
            handle = None
        finally:
            self._clear_pending_target(ability_entity)

        self.event_bus.emit(
            EVENT_ABILITY_EFFECT_APPLIED,
            ability_entity=ability_entity,
            affected=list(context.scratchpad.get("affected", [])),
        )
        self.event_bus.emit(
            EVENT_ABILITY_RESOLVED,
            ability_entity=ability_entity,
            owner_entity=owner_entity,
            target_entity=pending.target_entity,
            cast_id=cast_id,
        )
        if handle is None:
            self._emit_completed(cast_id, ability_entity, owner_entity)
            return
        self._in_flight[cast_id] = handle
        logger.debug("Cast %s of ability %s in flight", cast_id, ability.name)
        handle.add_done_callback(
            lambda future: self._on_handle_done(cast_id, ability_entity, owner_entity, future)
        )

    def on_animation_complete(self, sender, **payload) -> None:
        if payload.get("kind") != ABILITY_EFFECT_ANIMATION:
            return
        meta = payload.get("meta") or {}
        handle = self._in_flight.get(meta.get("cast_id"))
        if handle is None or handle.done():
            return
        handle.set_result(None)

    def _on_handle_done(self, cast_id: int, ability_entity: int, owner_entity: int | None, future: Future) -> None:
        if self._in_flight.pop(cast_id, None) is None:
            return
        if future.cancelled():
            logger.warning("Effect handle for cast %s was cancelled", cast_id)
        elif future.exception() is not None:
            logger.error("Effect for cast %s failed", cast_id, exc_info=future.exception())
        self._emit_completed(cast_id, ability_entity, owner_entity)

    def _emit_completed(self, cast_id: int, ability_entity: int, owner_entity: int | None) -> None:
        self.event_bus.emit(
            EVENT_ABILITY_EFFECT_COMPLETED,
            ability_entity=ability_entity,
            owner_entity=owner_entity,
            cast_id=cast_id,
        )

    def _clear_pending_target(self, ability_entity: int) -> None:
        try:
            self.world.remove_component(ability_entity, PendingAbilityTarget)
        except KeyError:
            pass
