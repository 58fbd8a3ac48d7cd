from __future__ import annotations

from typing import Iterable, Sequence

from esper import World

from battlecore.components.hero import Hero
from battlecore.components.passive import PassiveDefinition
from battlecore.systems.passives.effects import FlatMultiplier
from battlecore.systems.passives.triggers import FaceCardTrigger
from .common import spawn_hero

DEFAULT_POWER_HITTER_LOADOUT: Sequence[str] = ("spade_lance",)

HEAVY_HITTER = PassiveDefinition(
    name="Heavy Hitter",
    description="Hands containing a face card (J, Q, K, A) deal 40% more damage.",
    triggers=(FaceCardTrigger(),),
    effects=(FlatMultiplier(1.4),),
)


def create_hero_power_hitter(
    world: World,
    *,
    ability_names: Iterable[str] | None = None,
    max_hp: int = 100,
) -> int:
    """Spawn the Power Hitter."""

    loadout = tuple(ability_names) if ability_names is not None else DEFAULT_POWER_HITTER_LOADOUT
    return spawn_hero(
        world,
        hero=Hero(
            slug="power_hitter",
            name="The Power Hitter",
            hero_type="damage",
            description="Royalty in the hand means pain for the enemy.",
        ),
        max_hp=max_hp,
        ability_names=loadout,
        passives=(HEAVY_HITTER,),
    )
