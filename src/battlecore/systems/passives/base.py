from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Protocol, Sequence

from esper import World

from battlecore.components.health import Health
from battlecore.components.passive import (
    ActivatedPassives,
    HeroState,
    PassiveDefinition,
    PassiveList,
)
from battlecore.utils.poker_hand import Card, HandDescription


@dataclass(slots=True)
class PassiveContext:
    """Everything a passive may inspect while a hand is evaluated against a target."""

    world: World
    hero_entity: int
    hand: HandDescription | None
    target_entity: int | None = None
    target_health: Health | None = None
    selected_cards: Sequence[Card] = ()
    enemy_count: int = 1
    state: dict[str, Any] = field(default_factory=dict)


class PassiveTrigger(Protocol):
    """Decides whether a passive fires for the current hand."""

    name: str

    def matches(self, ctx: PassiveContext) -> bool:
        ...


class PassiveEffect(Protocol):
    """Contributes a damage multiplier and, once the hand is played, may mutate hero state."""

    name: str

    def multiplier(self, ctx: PassiveContext) -> float:
        ...

    def execute(self, ctx: PassiveContext) -> None:
        ...


def build_context(
    world: World,
    hero_entity: int,
    hand: HandDescription | None,
    *,
    target_entity: int | None = None,
    selected_cards: Sequence[Card] = (),
    enemy_count: int = 1,
) -> PassiveContext:
    target_health = None
    if target_entity is not None:
        try:
            target_health = world.component_for_entity(target_entity, Health)
        except KeyError:
            target_health = None
    return PassiveContext(
        world=world,
        hero_entity=hero_entity,
        hand=hand,
        target_entity=target_entity,
        target_health=target_health,
        selected_cards=tuple(selected_cards),
        enemy_count=max(1, int(enemy_count)),
        state=hero_state(world, hero_entity).values,
    )


def hero_state(world: World, hero_entity: int) -> HeroState:
    try:
        return world.component_for_entity(hero_entity, HeroState)
    except KeyError:
        state = HeroState()
        world.add_component(hero_entity, state)
        return state


def hero_passives(world: World, hero_entity: int) -> list[PassiveDefinition]:
    try:
        return list(world.component_for_entity(hero_entity, PassiveList).passives)
    except KeyError:
        return []


def is_triggered(passive: PassiveDefinition, ctx: PassiveContext) -> bool:
    return any(trigger.matches(ctx) for trigger in passive.triggers)


def calculate_multiplier(world: World, hero_entity: int, ctx: PassiveContext) -> tuple[float, list[str]]:
    """Product of every triggered passive's effect multipliers for one hero.

    Hero state is left untouched apart from the ActivatedPassives record;
    state-changing effects run later through ``execute_on_play``.
    """
    multiplier = 1.0
    activated: list[str] = []
    for passive in hero_passives(world, hero_entity):
        if not is_triggered(passive, ctx):
            continue
        passive_multiplier = math.prod(effect.multiplier(ctx) for effect in passive.effects)
        multiplier *= passive_multiplier
        activated.append(passive.name)
    world.add_component(hero_entity, ActivatedPassives(names=list(activated)))
    return multiplier, activated


def execute_on_play(world: World, hero_entity: int, ctx: PassiveContext) -> list[str]:
    """Run the state-changing half of every triggered passive, in passive order."""
    executed: list[str] = []
    for passive in hero_passives(world, hero_entity):
        if not is_triggered(passive, ctx):
            continue
        for effect in passive.effects:
            effect.execute(ctx)
        executed.append(passive.name)
    return executed
