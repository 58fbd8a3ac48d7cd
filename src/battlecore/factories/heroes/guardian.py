from __future__ import annotations

from typing import Iterable, Sequence

from esper import World

from battlecore.components.hero import Hero
from battlecore.components.passive import PassiveDefinition
from battlecore.systems.passives.effects import AddState, LinearStateMultiplier
from battlecore.systems.passives.triggers import HandRankTrigger, TargetHealthAtOrBelowTrigger
from battlecore.utils.poker_hand import HandRank
from .common import spawn_hero

DEFAULT_GUARDIAN_LOADOUT: Sequence[str] = ("heart_drain",)

ARMOR = "armor"

DEFENSIVE_STANCE = PassiveDefinition(
    name="Defensive Stance",
    description="Gain 1 Armor when playing High Card or One Pair.",
    triggers=(HandRankTrigger(ranks=frozenset({HandRank.HIGH_CARD, HandRank.ONE_PAIR})),),
    effects=(AddState(ARMOR, amount=1),),
)

FINISHING_BLOW = PassiveDefinition(
    name="Finishing Blow",
    description="+20% damage per Armor against enemies at or below 30% health.",
    triggers=(TargetHealthAtOrBelowTrigger(threshold=0.3),),
    effects=(LinearStateMultiplier(ARMOR, 0.2),),
)


def create_hero_guardian(
    world: World,
    *,
    ability_names: Iterable[str] | None = None,
    max_hp: int = 150,
) -> int:
    """Spawn the Guardian."""

    loadout = tuple(ability_names) if ability_names is not None else DEFAULT_GUARDIAN_LOADOUT
    return spawn_hero(
        world,
        hero=Hero(
            slug="guardian",
            name="The Guardian",
            hero_type="support",
            description="Builds armor with humble hands and finishes the weakened.",
        ),
        max_hp=max_hp,
        ability_names=loadout,
        passives=(DEFENSIVE_STANCE, FINISHING_BLOW),
        state={ARMOR: 0},
    )
