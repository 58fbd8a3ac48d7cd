from __future__ import annotations

import logging

from esper import World

from battlecore.components.ability import Ability
from battlecore.components.ability_target import AbilityTarget
from battlecore.components.enemy import Enemy
from battlecore.components.health import Health
from battlecore.components.pending_ability_target import PendingAbilityTarget
from battlecore.components.targeting_state import TargetingMode, TargetingState
from battlecore.events.bus import (
    EventBus,
    EVENT_ABILITY_ACTIVATE_REQUEST,
    EVENT_ABILITY_CAST_REJECTED,
    EVENT_ABILITY_TARGET_CANCELLED,
    EVENT_ABILITY_TARGET_MODE,
    EVENT_ABILITY_TARGET_SELECTED,
    EVENT_BATTLE_END,
    EVENT_INPUT_REJECTED,
    EVENT_MANA_SPEND_REQUEST,
    EVENT_TARGETING_MODE_CHANGED,
)
from battlecore.systems.ability_eligibility import CastEligibility, can_cast
from battlecore.utils.abilities import owner_of_ability, roster_abilities

logger = logging.getLogger(__name__)


class AbilityTargetingSystem:
    """Turns an ability selection into a cast against a validated target.

    IDLE --select_ability(eligible)--> AWAITING_TARGET
    AWAITING_TARGET --choose_target(valid)--> cast --> IDLE
    AWAITING_TARGET --cancel--> IDLE
    AWAITING_TARGET --select_ability(other)--> AWAITING_TARGET (previous discarded)

    The cast itself is a synchronous event chain: the spend request is paid by
    ManaSystem, AbilityActivationSystem emits the execute event, resolution
    runs the effect and the cooldown starts. By the time choose_target
    returns, the ledger and cooldown are final.
    """

    def __init__(self, world: World, event_bus: EventBus) -> None:
        self.world = world
        self.event_bus = event_bus
        event_bus.subscribe(EVENT_ABILITY_ACTIVATE_REQUEST, self.on_activate_request)
        event_bus.subscribe(EVENT_BATTLE_END, self.on_battle_end)

    @property
    def mode(self) -> TargetingMode:
        if self.current() is None:
            return TargetingMode.IDLE
        return TargetingMode.AWAITING_TARGET

    def current(self) -> TargetingState | None:
        for _, state in self.world.get_component(TargetingState):
            return state
        return None

    def select_ability(self, owner_entity: int, ability_entity: int) -> CastEligibility:
        if owner_of_ability(self.world, ability_entity) != owner_entity:
            return self._reject(owner_entity, ability_entity, "Ability not owned by a roster hero")
        result = can_cast(self.world, ability_entity)
        if not result.can_cast:
            return self._reject(owner_entity, ability_entity, result.reason)

        previous = self.current()
        if previous is not None:
            self._clear_targeting()
            self.event_bus.emit(
                EVENT_ABILITY_TARGET_CANCELLED,
                ability_entity=previous.ability_entity,
                owner_entity=previous.owner_entity,
                reason="reselected",
            )
        self.world.add_component(
            owner_entity,
            TargetingState(ability_entity=ability_entity, owner_entity=owner_entity),
        )
        logger.debug("Awaiting target for ability %s (owner %s)", ability_entity, owner_entity)
        self.event_bus.emit(
            EVENT_ABILITY_TARGET_MODE,
            ability_entity=ability_entity,
            owner_entity=owner_entity,
        )
        self._emit_mode_changed(ability_entity, owner_entity)
        return result

    def choose_target(self, target_entity: int | None) -> bool:
        """Resolve the pending ability against ``target_entity``.

        Returns True when the click was consumed (cast or ineligible cancel),
        False when it was ignored and the session stays open.
        """
        state = self.current()
        if state is None:
            return False
        ability_entity = state.ability_entity
        if not self._is_valid_target(ability_entity, target_entity):
            return False
        owner_entity = state.owner_entity
        try:
            ability = self.world.component_for_entity(ability_entity, Ability)
        except KeyError:
            self.cancel(reason="missing_ability")
            return True

        result = can_cast(self.world, ability_entity)
        if not result.can_cast:
            self.cancel(reason="ineligible")
            self.event_bus.emit(
                EVENT_ABILITY_CAST_REJECTED,
                ability_entity=ability_entity,
                owner_entity=owner_entity,
                reason=result.reason,
            )
            return True

        self._clear_targeting()
        self.world.add_component(
            ability_entity,
            PendingAbilityTarget(
                ability_entity=ability_entity,
                owner_entity=owner_entity,
                target_entity=target_entity,
            ),
        )
        try:
            self.event_bus.emit(
                EVENT_MANA_SPEND_REQUEST,
                owner_entity=owner_entity,
                cost=dict(ability.cost),
                ability_entity=ability_entity,
            )
            if self.world.has_component(ability_entity, PendingAbilityTarget):
                # Nothing consumed the pending target, so the spend did not go through.
                self.world.remove_component(ability_entity, PendingAbilityTarget)
                logger.warning("Cast of ability %s was not paid for; discarding", ability_entity)
            else:
                self.event_bus.emit(
                    EVENT_ABILITY_TARGET_SELECTED,
                    ability_entity=ability_entity,
                    owner_entity=owner_entity,
                    target_entity=target_entity,
                )
        finally:
            self._emit_mode_changed(None, None)
        return True

    def cancel(self, reason: str = "cancel") -> bool:
        state = self.current()
        if state is None:
            return False
        self._clear_targeting()
        logger.debug("Targeting for ability %s cancelled (%s)", state.ability_entity, reason)
        self.event_bus.emit(
            EVENT_ABILITY_TARGET_CANCELLED,
            ability_entity=state.ability_entity,
            owner_entity=state.owner_entity,
            reason=reason,
        )
        self._emit_mode_changed(None, None)
        return True

    def cast_by_index(self, index: int) -> CastEligibility | None:
        pairs = roster_abilities(self.world)
        if not isinstance(index, int) or not 0 <= index < len(pairs):
            logger.warning("No ability bound to index %r", index)
            self.event_bus.emit(
                EVENT_INPUT_REJECTED,
                kind="hotkey",
                key=index,
                reason="unknown_hotkey",
            )
            return None
        owner_entity, ability_entity = pairs[index]
        return self.select_ability(owner_entity, ability_entity)

    def has_usable_abilities(self) -> bool:
        return any(
            can_cast(self.world, ability_entity).can_cast
            for _, ability_entity in roster_abilities(self.world)
        )

    def on_activate_request(self, sender, **payload) -> None:
        ability_entity = payload.get("ability_entity")
        owner_entity = payload.get("owner_entity")
        if ability_entity is None:
            return
        if owner_entity is None:
            owner_entity = owner_of_ability(self.world, ability_entity)
            if owner_entity is None:
                return
        self.select_ability(owner_entity, ability_entity)

    def on_battle_end(self, sender, **payload) -> None:
        self.cancel(reason="battle_end")

    def _is_valid_target(self, ability_entity: int, target_entity: int | None) -> bool:
        if target_entity is None:
            return False
        try:
            health = self.world.component_for_entity(target_entity, Health)
        except KeyError:
            return False
        if not health.is_alive():
            return False
        try:
            target_type = self.world.component_for_entity(ability_entity, AbilityTarget).target_type
        except KeyError:
            return True
        if target_type == "enemy":
            return self.world.has_component(target_entity, Enemy)
        return True

    def _reject(self, owner_entity: int, ability_entity: int, reason: str | None) -> CastEligibility:
        logger.debug("Rejected ability %s: %s", ability_entity, reason)
        self.event_bus.emit(
            EVENT_ABILITY_CAST_REJECTED,
            ability_entity=ability_entity,
            owner_entity=owner_entity,
            reason=reason,
        )
        return CastEligibility(False, reason)

    def _emit_mode_changed(self, ability_entity: int | None, owner_entity: int | None) -> None:
        self.event_bus.emit(
            EVENT_TARGETING_MODE_CHANGED,
            mode=self.mode,
            ability_entity=ability_entity,
            owner_entity=owner_entity,
        )

    def _clear_targeting(self) -> None:
        for entity, _ in list(self.world.get_component(TargetingState)):
            self.world.remove_component(entity, TargetingState)
