import pytest

from battlecore.components.health import Health
from battlecore.components.passive import ActivatedPassives, PassiveDefinition
from battlecore.events.bus import (
    EventBus,
    EVENT_DAMAGE_COMPOSED,
    EVENT_HERO_PASSIVES_ACTIVATED,
)
from battlecore.systems.damage_composition_system import DamageCompositionSystem
from battlecore.systems.passives.effects import FlatMultiplier
from battlecore.systems.passives.triggers import HandRankTrigger
from battlecore.utils.poker_hand import HandRank, evaluate_hand
from battlecore.world import create_world
from tests.helpers import add_bare_hero, capture, cards


def _pair_passive(name, value):
    return PassiveDefinition(
        name=name,
        description="",
        triggers=(HandRankTrigger(ranks=frozenset({HandRank.ONE_PAIR})),),
        effects=(FlatMultiplier(value),),
    )


@pytest.fixture
def setup():
    bus = EventBus()
    world = create_world()
    composer = DamageCompositionSystem(world, bus)
    return world, bus, composer


def test_multipliers_compose_multiplicatively_across_roster(setup):
    world, bus, composer = setup
    first = add_bare_hero(world, "first", passives=(_pair_passive("Sharp", 1.5),))
    second = add_bare_hero(world, "second", passives=(_pair_passive("Keen", 2.0),))
    hand = evaluate_hand(cards("7S 7H"))

    result = composer.compose(100, hand, None, cards("7S 7H"))

    assert result.base_damage == 100
    assert result.final_damage == 300
    assert result.total_multiplier == 3.0
    assert [c.hero_entity for c in result.contributions] == [first, second]
    assert [c.multiplier for c in result.contributions] == [1.5, 2.0]
    assert all(c.activated for c in result.contributions)


def test_untriggered_heroes_contribute_one(setup):
    world, bus, composer = setup
    hero = add_bare_hero(world, "first", passives=(_pair_passive("Sharp", 1.5),))
    result = composer.compose(40, evaluate_hand(cards("KS")), None, cards("KS"))
    assert result.final_damage == 40
    assert result.contributions[0].multiplier == 1.0
    assert result.contributions[0].activated is False
    assert world.component_for_entity(hero, ActivatedPassives).names == []


def test_final_damage_is_floored(setup):
    world, bus, composer = setup
    add_bare_hero(world, "first", passives=(_pair_passive("Sharp", 1.5),))
    result = composer.compose(11, evaluate_hand(cards("2S 2H")), None, cards("2S 2H"))
    assert result.final_damage == 16


def test_activated_passives_are_recorded_on_hero(setup):
    world, bus, composer = setup
    hero = add_bare_hero(
        world,
        "first",
        passives=(_pair_passive("Sharp", 1.5), _pair_passive("Keen", 1.0)),
    )
    result = composer.compose(10, evaluate_hand(cards("2S 2H")), None, cards("2S 2H"))
    assert world.component_for_entity(hero, ActivatedPassives).names == ["Sharp", "Keen"]
    assert result.contributions[0].activated_passives == ("Sharp", "Keen")


def test_each_hero_is_consulted_once_and_events_published(setup):
    world, bus, composer = setup
    first = add_bare_hero(world, "first", passives=(_pair_passive("Sharp", 1.5),))
    second = add_bare_hero(world, "second")
    target = world.create_entity(Health(current=10, max_hp=10))
    per_hero = capture(bus, EVENT_HERO_PASSIVES_ACTIVATED)
    composed = capture(bus, EVENT_DAMAGE_COMPOSED)

    result = composer.compose(20, evaluate_hand(cards("2S 2H")), target, cards("2S 2H"))

    assert [event["hero_entity"] for event in per_hero] == [first, second]
    assert per_hero[0]["passives"] == ["Sharp"]
    assert per_hero[1]["passives"] == []
    assert composed == [{"composition": result, "target_entity": target}]


def test_empty_roster_leaves_base_damage(setup):
    world, bus, composer = setup
    assert composer.compose(55, None).final_damage == 55
