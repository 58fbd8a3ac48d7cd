import logging

import pytest

from battlecore.components.ability_cooldown import AbilityCooldown
from battlecore.events.bus import (
    EventBus,
    EVENT_ABILITY_ELIGIBILITY_CHANGED,
    EVENT_TURN_END,
    EVENT_TURN_START,
)
from battlecore.factories.abilities import create_ability_by_name
from battlecore.systems.turn_cycle_system import TurnCycleSystem
from battlecore.world import create_world
from tests.helpers import add_bare_hero, capture


@pytest.fixture
def setup():
    bus = EventBus()
    world = create_world()
    system = TurnCycleSystem(world, bus)
    abilities = [create_ability_by_name(world, "spade_lance") for _ in range(3)]
    add_bare_hero(world, "tester", ability_entities=abilities)
    for ability_entity, remaining in zip(abilities, (0, 2, 5)):
        world.component_for_entity(ability_entity, AbilityCooldown).remaining_turns = remaining
    return world, bus, system, abilities


def _remaining(world, abilities):
    return [world.component_for_entity(a, AbilityCooldown).remaining_turns for a in abilities]


def test_turn_end_reduces_each_cooldown_once_floored_at_zero(setup):
    world, bus, system, abilities = setup
    system.on_turn_end()
    assert _remaining(world, abilities) == [0, 1, 4]


def test_direct_turn_end_calls_always_tick(setup):
    world, bus, system, abilities = setup
    system.on_turn_end()
    system.on_turn_end()
    assert _remaining(world, abilities) == [0, 0, 3]


def test_repeated_turn_end_event_for_same_turn_is_ignored(setup, caplog):
    world, bus, system, abilities = setup
    with caplog.at_level(logging.WARNING, logger="battlecore.systems.turn_cycle_system"):
        bus.emit(EVENT_TURN_END, turn_number=4)
        bus.emit(EVENT_TURN_END, turn_number=4)
    assert _remaining(world, abilities) == [0, 1, 4]
    assert "already ended" in caplog.text
    bus.emit(EVENT_TURN_END, turn_number=5)
    assert _remaining(world, abilities) == [0, 0, 3]


def test_turn_start_republishes_without_mutation(setup):
    world, bus, system, abilities = setup
    published = capture(bus, EVENT_ABILITY_ELIGIBILITY_CHANGED)
    bus.emit(EVENT_TURN_START, turn_number=2)
    assert _remaining(world, abilities) == [0, 2, 5]
    assert len(published) == 1
    assert [entry["remaining_turns"] for entry in published[0]["entries"]] == [0, 2, 5]


def test_turn_end_publishes_after_ticking(setup):
    world, bus, system, abilities = setup
    published = capture(bus, EVENT_ABILITY_ELIGIBILITY_CHANGED)
    system.on_turn_end()
    assert [entry["remaining_turns"] for entry in published[-1]["entries"]] == [0, 1, 4]


def test_core_end_turn_advances_turn_number():
    from tests.helpers import make_core

    core = make_core(heroes=("power_hitter",), enemies=("goblin",))
    assert core.end_turn() == 2
    assert core.end_turn() == 3
