from __future__ import annotations

import logging
from pathlib import Path
from typing import Sequence

from esper import World

from battlecore.components.health import Health
from battlecore.components.suit import Suit
from battlecore.events.bus import (
    EventBus,
    EVENT_BATTLE_END,
    EVENT_BATTLE_START,
    EVENT_ENTITY_DEFEATED,
    EVENT_ROUND_START,
    EVENT_TURN_END,
    EVENT_TURN_START,
)
from battlecore.factories.enemies import create_enemies
from battlecore.systems.abilities.base import AbilityResolver
from battlecore.systems.ability_activation_system import AbilityActivationSystem
from battlecore.systems.ability_cooldown_system import AbilityCooldownSystem
from battlecore.systems.ability_eligibility import AbilityEligibilitySystem
from battlecore.systems.ability_resolution_system import AbilityResolutionSystem
from battlecore.systems.ability_targeting_system import AbilityTargetingSystem
from battlecore.systems.damage_composition_system import DamageComposition, DamageCompositionSystem
from battlecore.systems.hand_resolution_system import HandResolutionSystem
from battlecore.systems.health_system import HealthSystem
from battlecore.systems.input import InputSystem
from battlecore.systems.mana_system import ManaSystem
from battlecore.systems.roster_system import RosterSystem
from battlecore.systems.target_selection_system import TargetSelectionSystem
from battlecore.systems.turn_cycle_system import TurnCycleSystem
from battlecore.utils.battle_state import get_or_create_battle_context, get_or_create_roster
from battlecore.utils.poker_hand import Card
from battlecore.world import create_world

logger = logging.getLogger(__name__)


class BattleCore:
    """One battle's world, event bus and systems.

    Systems that share an event are constructed so that state owners react
    before the systems that re-publish derived state (cooldowns are reset
    before eligibility is published, targets move before victory is checked).
    """

    def __init__(
        self,
        *,
        event_bus: EventBus | None = None,
        world: World | None = None,
        max_mana: int | None = None,
        roster_save_path: Path | None = None,
        resolvers: dict[str, AbilityResolver] | None = None,
    ) -> None:
        self.event_bus = event_bus or EventBus()
        self.world = world if world is not None else create_world()
        self.health = HealthSystem(self.world, self.event_bus)
        self.mana = ManaSystem(self.world, self.event_bus, max_mana=max_mana)
        self.cooldowns = AbilityCooldownSystem(self.world, self.event_bus)
        self.turns = TurnCycleSystem(self.world, self.event_bus)
        self.eligibility = AbilityEligibilitySystem(self.world, self.event_bus)
        self.activation = AbilityActivationSystem(self.world, self.event_bus)
        self.resolution = AbilityResolutionSystem(self.world, self.event_bus, resolvers)
        self.targeting = AbilityTargetingSystem(self.world, self.event_bus)
        self.targets = TargetSelectionSystem(self.world, self.event_bus)
        self.composer = DamageCompositionSystem(self.world, self.event_bus)
        self.hands = HandResolutionSystem(self.world, self.event_bus, self.composer, self.targets)
        self.roster = RosterSystem(self.world, self.event_bus, save_path=roster_save_path)
        self.input = InputSystem(self.event_bus, self.targeting, self.targets)
        self.event_bus.subscribe(EVENT_ENTITY_DEFEATED, self.on_entity_defeated)

    @property
    def active(self) -> bool:
        return get_or_create_battle_context(self.world).active

    @property
    def enemies(self) -> list[int]:
        return list(get_or_create_battle_context(self.world).enemies)

    def start_battle(self, enemy_slugs: Sequence[str]) -> list[int]:
        context = get_or_create_battle_context(self.world)
        if context.active:
            logger.warning("Battle already in progress; ignoring start")
            return list(context.enemies)
        if not get_or_create_roster(self.world).hero_entities:
            raise ValueError("Cannot start a battle with an empty party")
        if not enemy_slugs:
            raise ValueError("Cannot start a battle without enemies")
        for enemy in context.enemies:
            self.world.delete_entity(enemy, immediate=True)
        enemies = create_enemies(self.world, enemy_slugs)
        context.enemies = enemies
        context.current_target = enemies[0]
        context.active = True
        context.turn_number = 1
        context.round_number = 1
        logger.info("Battle started against %s", list(enemy_slugs))
        self.event_bus.emit(EVENT_BATTLE_START, enemies=list(enemies))
        self.event_bus.emit(EVENT_ROUND_START, round_number=1)
        self.event_bus.emit(EVENT_TURN_START, turn_number=1)
        return enemies

    def end_battle(self, reason: str | None = None) -> bool:
        context = get_or_create_battle_context(self.world)
        if not context.active:
            return False
        context.active = False
        logger.info("Battle ended (%s)", reason)
        self.event_bus.emit(EVENT_BATTLE_END, reason=reason)
        return True

    def play_hand(self, cards: Sequence[Card]) -> DamageComposition | None:
        return self.hands.play(cards)

    def end_turn(self) -> int:
        """End the current turn and begin the next; returns the new turn number."""
        context = get_or_create_battle_context(self.world)
        ended = context.turn_number
        self.event_bus.emit(EVENT_TURN_END, turn_number=ended)
        self.event_bus.emit(EVENT_TURN_START, turn_number=ended + 1)
        return context.turn_number

    def start_round(self) -> int:
        context = get_or_create_battle_context(self.world)
        self.event_bus.emit(EVENT_ROUND_START, round_number=context.round_number + 1)
        return context.round_number

    def credit(self, suit: Suit, amount: int = 1) -> int:
        return self.mana.credit(suit, amount)

    def on_entity_defeated(self, sender, **payload) -> None:
        context = get_or_create_battle_context(self.world)
        if not context.active:
            return
        if not any(self._is_alive(enemy) for enemy in context.enemies):
            self.end_battle("victory")
            return
        heroes = get_or_create_roster(self.world).hero_entities
        if heroes and not any(self._is_alive(hero) for hero in heroes):
            self.end_battle("defeat")

    def _is_alive(self, entity: int) -> bool:
        try:
            return self.world.component_for_entity(entity, Health).is_alive()
        except KeyError:
            return False
