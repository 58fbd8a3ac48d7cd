from __future__ import annotations

from typing import Iterable, Sequence

from esper import World

from battlecore.components.ability_list_owner import AbilityListOwner
from battlecore.components.health import Health
from battlecore.components.hero import Hero
from battlecore.components.passive import (
    ActivatedPassives,
    HeroState,
    PassiveDefinition,
    PassiveList,
)
from battlecore.factories.abilities import create_abilities


def spawn_hero(
    world: World,
    *,
    hero: Hero,
    max_hp: int,
    ability_names: Iterable[str],
    passives: Sequence[PassiveDefinition] = (),
    state: dict | None = None,
) -> int:
    """Create a hero entity with its ability entities, in loadout order."""
    ability_entities = create_abilities(world, tuple(ability_names))
    return world.create_entity(
        hero,
        Health(current=max_hp, max_hp=max_hp),
        AbilityListOwner(ability_entities=ability_entities),
        PassiveList(passives=list(passives)),
        HeroState(values=dict(state or {})),
        ActivatedPassives(),
    )
