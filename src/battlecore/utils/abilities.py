from __future__ import annotations

from esper import World

from battlecore.components.ability_list_owner import AbilityListOwner
from battlecore.utils.battle_state import get_or_create_roster


def roster_abilities(world: World) -> list[tuple[int, int]]:
    """Flatten (hero_entity, ability_entity) pairs in roster order, then ability order.

    This ordering backs the ability hotkeys and the eligibility entries, so it
    must stay stable for a given roster.
    """
    pairs: list[tuple[int, int]] = []
    for hero_entity in get_or_create_roster(world).hero_entities:
        try:
            owner = world.component_for_entity(hero_entity, AbilityListOwner)
        except KeyError:
            continue
        pairs.extend((hero_entity, ability_entity) for ability_entity in owner.ability_entities)
    return pairs


def owner_of_ability(world: World, ability_entity: int) -> int | None:
    for hero_entity, candidate in roster_abilities(world):
        if candidate == ability_entity:
            return hero_entity
    return None
