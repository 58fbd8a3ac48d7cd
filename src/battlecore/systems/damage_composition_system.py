from __future__ import annotations

from dataclasses import dataclass
import logging
import math
from typing import Sequence, Tuple

from esper import World

from battlecore.events.bus import (
    EventBus,
    EVENT_DAMAGE_COMPOSED,
    EVENT_HERO_PASSIVES_ACTIVATED,
)
from battlecore.systems.passives.base import build_context, calculate_multiplier
from battlecore.utils.battle_state import get_or_create_battle_context, get_or_create_roster
from battlecore.utils.poker_hand import Card, HandDescription

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class HeroContribution:
    hero_entity: int
    multiplier: float
    activated: bool
    activated_passives: Tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class DamageComposition:
    base_damage: int
    final_damage: int
    contributions: Tuple[HeroContribution, ...] = ()

    @property
    def total_multiplier(self) -> float:
        return math.prod(c.multiplier for c in self.contributions)


class DamageCompositionSystem:
    """Folds every roster hero's passive multiplier into a hand's base damage.

    Each hero is consulted exactly once, in roster order, and the product of
    their multipliers scales the base: ``floor(base * m1 * m2 * ...)``.
    Aggregating chained hands is left to the caller.
    """

    def __init__(self, world: World, event_bus: EventBus) -> None:
        self.world = world
        self.event_bus = event_bus

    def compose(
        self,
        base_damage: int,
        hand: HandDescription | None,
        target_entity: int | None = None,
        selected_cards: Sequence[Card] = (),
    ) -> DamageComposition:
        enemy_count = len(get_or_create_battle_context(self.world).enemies) or 1
        contributions: list[HeroContribution] = []
        product = 1.0
        for hero_entity in list(get_or_create_roster(self.world).hero_entities):
            ctx = build_context(
                self.world,
                hero_entity,
                hand,
                target_entity=target_entity,
                selected_cards=selected_cards,
                enemy_count=enemy_count,
            )
            multiplier, activated = calculate_multiplier(self.world, hero_entity, ctx)
            product *= multiplier
            contributions.append(
                HeroContribution(
                    hero_entity=hero_entity,
                    multiplier=multiplier,
                    activated=bool(activated),
                    activated_passives=tuple(activated),
                )
            )
            self.event_bus.emit(
                EVENT_HERO_PASSIVES_ACTIVATED,
                hero_entity=hero_entity,
                passives=list(activated),
                multiplier=multiplier,
            )
        composition = DamageComposition(
            base_damage=int(base_damage),
            final_damage=math.floor(base_damage * product),
            contributions=tuple(contributions),
        )
        logger.debug(
            "Composed %s -> %s (x%.3f) against %s",
            composition.base_damage,
            composition.final_damage,
            composition.total_multiplier,
            target_entity,
        )
        self.event_bus.emit(
            EVENT_DAMAGE_COMPOSED,
            composition=composition,
            target_entity=target_entity,
        )
        return composition
