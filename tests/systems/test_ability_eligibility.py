import pytest

from battlecore.components.ability_cooldown import AbilityCooldown
from battlecore.components.suit import Suit
from battlecore.events.bus import EVENT_ABILITY_ELIGIBILITY_CHANGED
from battlecore.systems.ability_eligibility import can_cast, eligibility_entries
from battlecore.utils.battle_state import get_or_create_roster
from tests.helpers import capture, find_ability, fund, make_core


def _hero(core):
    return get_or_create_roster(core.world).hero_entities[0]


def test_affordable_and_ready_can_cast(core):
    lance = find_ability(core.world, _hero(core), "spade_lance")
    fund(core.world, {Suit.SPADES: 2, Suit.HEARTS: 1})
    result = can_cast(core.world, lance)
    assert result.can_cast is True
    assert result.reason is None


def test_cooldown_blocks_even_when_affordable(core):
    lance = find_ability(core.world, _hero(core), "spade_lance")
    fund(core.world, {Suit.SPADES: 5, Suit.HEARTS: 5})
    core.world.component_for_entity(lance, AbilityCooldown).remaining_turns = 2
    result = can_cast(core.world, lance)
    assert result.can_cast is False
    assert result.reason == "On cooldown: 2 turns"


def test_missing_mana_reason_lists_missing_amounts_in_cost_order(core):
    lance = find_ability(core.world, _hero(core), "spade_lance")
    fund(core.world, {Suit.SPADES: 1})
    result = can_cast(core.world, lance)
    assert result.can_cast is False
    assert result.reason == "Need: 1 ♠, 1 ♥"


def test_cooldown_reason_takes_precedence_over_cost(core):
    lance = find_ability(core.world, _hero(core), "spade_lance")
    core.world.component_for_entity(lance, AbilityCooldown).remaining_turns = 1
    assert can_cast(core.world, lance).reason == "On cooldown: 1 turns"


def test_entries_follow_roster_then_ability_order():
    core = make_core(heroes=("power_hitter", "analyst"), enemies=("goblin",))
    names = [entry["name"] for entry in eligibility_entries(core.world)]
    assert names == ["spade_lance", "heart_drain"]
    assert [entry["index"] for entry in eligibility_entries(core.world)] == [0, 1]


def test_mana_change_republishes_eligibility(core):
    published = capture(core.event_bus, EVENT_ABILITY_ELIGIBILITY_CHANGED)
    core.credit(Suit.SPADES, 2)
    core.credit(Suit.HEARTS, 1)
    assert len(published) == 2
    assert published[-1]["entries"][0]["can_cast"] is True
    assert published[0]["entries"][0]["reason"] == "Need: 1 ♥"


def test_cast_never_publishes_the_cast_ability_as_castable(core):
    lance = find_ability(core.world, _hero(core), "spade_lance")
    fund(core.world, {Suit.SPADES: 4, Suit.HEARTS: 2})
    core.targeting.select_ability(_hero(core), lance)
    published = capture(core.event_bus, EVENT_ABILITY_ELIGIBILITY_CHANGED)

    core.targeting.choose_target(core.enemies[0])

    assert published
    for event in published:
        entry = next(e for e in event["entries"] if e["ability_entity"] == lance)
        assert (entry["can_cast"], entry["remaining_turns"]) == (False, 3)


@pytest.mark.parametrize("remaining", [0, 1, 3])
@pytest.mark.parametrize("spades", [0, 1, 2, 5])
@pytest.mark.parametrize("hearts", [0, 1, 4])
def test_can_cast_is_false_exactly_on_cooldown_or_unaffordable(core, remaining, spades, hearts):
    lance = find_ability(core.world, _hero(core), "spade_lance")
    core.world.component_for_entity(lance, AbilityCooldown).remaining_turns = remaining
    fund(core.world, {Suit.SPADES: spades, Suit.HEARTS: hearts})
    affordable = spades >= 2 and hearts >= 1
    assert can_cast(core.world, lance).can_cast is (remaining == 0 and affordable)
