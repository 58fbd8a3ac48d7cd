from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Mapping

from esper import World

from battlecore.components.ability import Ability
from battlecore.components.ability_cooldown import AbilityCooldown
from battlecore.components.mana_ledger import ManaLedger
from battlecore.components.pending_ability_target import PendingAbilityTarget
from battlecore.components.suit import Suit
from battlecore.components.targeting_state import TargetingMode
from battlecore.events.bus import (
    EventBus,
    EVENT_ABILITY_EFFECT_COMPLETED,
    EVENT_ABILITY_ELIGIBILITY_CHANGED,
    EVENT_ACTIVE_HERO_CHANGED,
    EVENT_BATTLE_START,
    EVENT_MANA_CHANGED,
    EVENT_ROSTER_CHANGED,
    EVENT_TARGETING_MODE_CHANGED,
)
from battlecore.utils.abilities import roster_abilities
from battlecore.utils.battle_state import get_or_create_ledger


@dataclass(frozen=True, slots=True)
class CastEligibility:
    can_cast: bool
    reason: str | None = None

    def __bool__(self) -> bool:
        return self.can_cast


def format_missing(missing: Mapping[Suit, int]) -> str:
    return "Need: " + ", ".join(f"{amount} {suit.symbol}" for suit, amount in missing.items())


def can_cast(world: World, ability_entity: int, ledger: ManaLedger | None = None) -> CastEligibility:
    """Cooldown first, then cost. Nothing else gates a cast."""
    try:
        ability = world.component_for_entity(ability_entity, Ability)
    except KeyError:
        return CastEligibility(False, "Unknown ability")
    remaining = cooldown_remaining(world, ability_entity)
    if remaining > 0:
        return CastEligibility(False, f"On cooldown: {remaining} turns")
    if ledger is None:
        ledger = get_or_create_ledger(world)
    missing = ledger.missing(ability.cost)
    if missing:
        return CastEligibility(False, format_missing(missing))
    return CastEligibility(True, None)


def cooldown_remaining(world: World, ability_entity: int) -> int:
    try:
        return world.component_for_entity(ability_entity, AbilityCooldown).remaining_turns
    except KeyError:
        return 0


def eligibility_entries(world: World) -> List[Dict[str, Any]]:
    """One entry per roster ability in hotkey order."""
    ledger = get_or_create_ledger(world)
    entries: List[Dict[str, Any]] = []
    for index, (hero_entity, ability_entity) in enumerate(roster_abilities(world)):
        try:
            ability = world.component_for_entity(ability_entity, Ability)
        except KeyError:
            continue
        result = can_cast(world, ability_entity, ledger)
        entries.append(
            {
                "index": index,
                "hero_entity": hero_entity,
                "ability_entity": ability_entity,
                "name": ability.name,
                "cost": dict(ability.cost),
                "cooldown": ability.cooldown,
                "remaining_turns": cooldown_remaining(world, ability_entity),
                "can_cast": result.can_cast,
                "reason": result.reason,
            }
        )
    return entries


def publish_eligibility(world: World, event_bus: EventBus) -> List[Dict[str, Any]]:
    entries = eligibility_entries(world)
    event_bus.emit(EVENT_ABILITY_ELIGIBILITY_CHANGED, entries=entries)
    return entries


class AbilityEligibilitySystem:
    """Re-publishes ability eligibility whenever its inputs change.

    Turn transitions publish through TurnCycleSystem; this system covers
    mana, roster, session close and effect-completion changes.
    """

    def __init__(self, world: World, event_bus: EventBus) -> None:
        self.world = world
        self.event_bus = event_bus
        event_bus.subscribe(EVENT_MANA_CHANGED, self.on_mana_changed)
        for event_name in (
            EVENT_ROSTER_CHANGED,
            EVENT_ACTIVE_HERO_CHANGED,
            EVENT_ABILITY_EFFECT_COMPLETED,
            EVENT_BATTLE_START,
        ):
            event_bus.subscribe(event_name, self.on_inputs_changed)
        event_bus.subscribe(EVENT_TARGETING_MODE_CHANGED, self.on_targeting_mode_changed)

    def on_inputs_changed(self, sender, **payload) -> None:
        publish_eligibility(self.world, self.event_bus)

    def on_mana_changed(self, sender, **payload) -> None:
        # A cast pays before its cooldown starts; the session close republishes.
        if self.world.get_component(PendingAbilityTarget):
            return
        publish_eligibility(self.world, self.event_bus)

    def on_targeting_mode_changed(self, sender, **payload) -> None:
        # Closing a session follows a cast, whose cooldown is now final.
        if payload.get("mode") == TargetingMode.IDLE:
            publish_eligibility(self.world, self.event_bus)
