from __future__ import annotations

from typing import Dict, Iterable, Sequence

from esper import World

from battlecore.battle import BattleCore
from battlecore.components.ability import Ability
from battlecore.components.ability_list_owner import AbilityListOwner
from battlecore.components.health import Health
from battlecore.components.hero import Hero
from battlecore.components.passive import ActivatedPassives, HeroState, PassiveDefinition, PassiveList
from battlecore.components.suit import Suit
from battlecore.events.bus import EventBus
from battlecore.utils.battle_state import get_or_create_ledger, get_or_create_roster
from battlecore.utils.poker_hand import Card

_SUIT_LETTERS = {"S": Suit.SPADES, "H": Suit.HEARTS, "D": Suit.DIAMONDS, "C": Suit.CLUBS}


def make_core(
    heroes: Sequence[str] = ("apprentice",),
    enemies: Sequence[str] | None = ("goblin",),
    **kwargs,
) -> BattleCore:
    """Build a BattleCore with the given party; starts a battle when enemies are given."""

    core = BattleCore(**kwargs)
    for slug in heroes:
        core.roster.add_hero(slug)
    if enemies:
        core.start_battle(enemies)
    return core


def cards(spec: str) -> list[Card]:
    """Parse "AS 10H 2C" into cards (rank followed by suit letter)."""

    return [Card(token[:-1], _SUIT_LETTERS[token[-1]]) for token in spec.split()]


def fund(world: World, amounts: Dict[Suit, int]) -> None:
    ledger = get_or_create_ledger(world)
    for suit, amount in amounts.items():
        ledger.credit(suit, amount)


def capture(bus: EventBus, event_name: str) -> list[dict]:
    captured: list[dict] = []
    bus.subscribe(event_name, lambda s, **k: captured.append(k))
    return captured


def find_ability(world: World, hero_entity: int, name: str) -> int:
    owner = world.component_for_entity(hero_entity, AbilityListOwner)
    for ability_entity in owner.ability_entities:
        if world.component_for_entity(ability_entity, Ability).name == name:
            return ability_entity
    raise LookupError(name)


def add_bare_hero(
    world: World,
    slug: str,
    *,
    ability_entities: Iterable[int] = (),
    passives: Sequence[PassiveDefinition] = (),
    max_hp: int = 100,
) -> int:
    """Append a hand-built hero to the roster, bypassing the catalogue."""

    hero_entity = world.create_entity(
        Hero(slug=slug, name=slug.title()),
        Health(current=max_hp, max_hp=max_hp),
        AbilityListOwner(ability_entities=list(ability_entities)),
        PassiveList(passives=list(passives)),
        HeroState(),
        ActivatedPassives(),
    )
    get_or_create_roster(world).hero_entities.append(hero_entity)
    return hero_entity
