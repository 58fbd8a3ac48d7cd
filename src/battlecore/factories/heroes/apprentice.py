from __future__ import annotations

from typing import Iterable, Sequence

from esper import World

from battlecore.components.hero import Hero
from battlecore.components.passive import PassiveDefinition
from battlecore.systems.passives.effects import FlatMultiplier
from battlecore.systems.passives.triggers import HandRankTrigger
from battlecore.utils.poker_hand import HandRank
from .common import spawn_hero

DEFAULT_APPRENTICE_LOADOUT: Sequence[str] = ("mana_strike",)

PAIR_BONUS = PassiveDefinition(
    name="Pair Bonus",
    description="Pairs deal 50% more damage.",
    triggers=(HandRankTrigger(ranks=frozenset({HandRank.ONE_PAIR})),),
    effects=(FlatMultiplier(1.5),),
)


def create_hero_apprentice(
    world: World,
    *,
    ability_names: Iterable[str] | None = None,
    max_hp: int = 100,
) -> int:
    """Spawn the Apprentice, the starter hero."""

    loadout = tuple(ability_names) if ability_names is not None else DEFAULT_APPRENTICE_LOADOUT
    return spawn_hero(
        world,
        hero=Hero(
            slug="apprentice",
            name="Apprentice",
            hero_type="damage",
            description="A fledgling duelist who excels with pairs.",
        ),
        max_hp=max_hp,
        ability_names=loadout,
        passives=(PAIR_BONUS,),
    )
