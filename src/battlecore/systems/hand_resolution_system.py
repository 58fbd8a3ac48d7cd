from __future__ import annotations

import logging
from typing import Sequence

from esper import World

from battlecore.components.health import Health
from battlecore.events.bus import (
    EventBus,
    EVENT_HAND_PLAY_REQUEST,
    EVENT_HAND_PLAYED,
    EVENT_HEALTH_DAMAGE,
    EVENT_INPUT_REJECTED,
)
from battlecore.systems.damage_composition_system import DamageComposition, DamageCompositionSystem
from battlecore.systems.passives.base import build_context, execute_on_play
from battlecore.systems.target_selection_system import TargetSelectionSystem
from battlecore.utils.battle_state import get_or_create_battle_context, get_or_create_roster
from battlecore.utils.damage import base_damage_for
from battlecore.utils.poker_hand import Card, evaluate_hand

logger = logging.getLogger(__name__)


class HandResolutionSystem:
    """Plays a selection of cards against the current target.

    Flow for EVENT_HAND_PLAY_REQUEST(selected_cards):
      evaluate poker hand -> base damage -> compose across the roster ->
      on-play passive effects -> EVENT_HAND_PLAYED -> damage the current target.
    ManaSystem funds the ledger from EVENT_HAND_PLAYED.
    """

    def __init__(
        self,
        world: World,
        event_bus: EventBus,
        composer: DamageCompositionSystem,
        targets: TargetSelectionSystem,
    ) -> None:
        self.world = world
        self.event_bus = event_bus
        self.composer = composer
        self.targets = targets
        event_bus.subscribe(EVENT_HAND_PLAY_REQUEST, self.on_hand_play_request)

    def on_hand_play_request(self, sender, **payload) -> None:
        cards = payload.get("selected_cards") or []
        self.play(cards)

    def play(self, cards: Sequence[Card]) -> DamageComposition | None:
        context = get_or_create_battle_context(self.world)
        if not context.active:
            logger.debug("Ignoring hand played outside of a battle")
            return None
        if not 1 <= len(cards) <= 5:
            self.event_bus.emit(
                EVENT_INPUT_REJECTED,
                kind="hand",
                key=len(cards),
                reason="hand must contain 1 to 5 cards",
            )
            return None
        target_entity = context.current_target
        if not self._is_alive(target_entity):
            target_entity = self.targets.cycle_target(1)
        if target_entity is None:
            logger.debug("No living target for played hand")
            return None

        hand = evaluate_hand(cards)
        composition = self.composer.compose(base_damage_for(hand), hand, target_entity, cards)
        enemy_count = len(context.enemies) or 1
        for hero_entity in list(get_or_create_roster(self.world).hero_entities):
            ctx = build_context(
                self.world,
                hero_entity,
                hand,
                target_entity=target_entity,
                selected_cards=cards,
                enemy_count=enemy_count,
            )
            execute_on_play(self.world, hero_entity, ctx)
        self.event_bus.emit(
            EVENT_HAND_PLAYED,
            selected_cards=list(cards),
            hand=hand,
            target_entity=target_entity,
            damage=composition.final_damage,
        )
        # Damage lands after the mana credit; a defeat here may end the battle.
        self.event_bus.emit(
            EVENT_HEALTH_DAMAGE,
            source_owner=get_or_create_roster(self.world).active_hero(),
            target_entity=target_entity,
            amount=composition.final_damage,
            reason=hand.name,
        )
        return composition

    def _is_alive(self, entity: int | None) -> bool:
        if entity is None:
            return False
        try:
            return self.world.component_for_entity(entity, Health).is_alive()
        except KeyError:
            return False
