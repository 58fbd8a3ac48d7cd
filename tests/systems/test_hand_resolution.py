from battlecore.components.health import Health
from battlecore.components.suit import Suit
from battlecore.events.bus import (
    EVENT_BATTLE_END,
    EVENT_HAND_PLAY_REQUEST,
    EVENT_HAND_PLAYED,
    EVENT_HEALTH_DAMAGE,
    EVENT_INPUT_REJECTED,
    EVENT_MANA_CHANGED,
)
from battlecore.utils.battle_state import get_or_create_battle_context, get_or_create_ledger
from tests.helpers import capture, cards, make_core


def test_hand_credits_mana_and_damages_target(core):
    goblin = core.enemies[0]
    changed = capture(core.event_bus, EVENT_MANA_CHANGED)

    core.event_bus.emit(EVENT_HAND_PLAY_REQUEST, selected_cards=cards("2S 2H 9S"))

    ledger = get_or_create_ledger(core.world)
    assert ledger.balance(Suit.SPADES) == 2
    assert ledger.balance(Suit.HEARTS) == 1
    assert changed[-1]["source"] == "hand_played"
    assert core.world.component_for_entity(goblin, Health).current == 50 - 21


def test_hand_played_precedes_damage(core):
    order = []
    core.event_bus.subscribe(EVENT_HAND_PLAYED, lambda s, **k: order.append("played"))
    core.event_bus.subscribe(EVENT_HEALTH_DAMAGE, lambda s, **k: order.append(("damage", k["reason"])))
    core.play_hand(cards("KS"))
    assert order == ["played", ("damage", "High Card")]


def test_hand_size_must_be_one_to_five(core):
    rejected = capture(core.event_bus, EVENT_INPUT_REJECTED)
    assert core.play_hand([]) is None
    assert core.play_hand(cards("2S 3S 4S 5S 6S 7S")) is None
    assert [event["kind"] for event in rejected] == ["hand", "hand"]
    assert sum(get_or_create_ledger(core.world).snapshot().values()) == 0


def test_hand_outside_battle_is_ignored():
    core = make_core(heroes=("apprentice",), enemies=None)
    played = capture(core.event_bus, EVENT_HAND_PLAYED)
    assert core.play_hand(cards("KS")) is None
    assert played == []
    assert sum(get_or_create_ledger(core.world).snapshot().values()) == 0


def test_defeated_target_moves_to_next_enemy():
    core = make_core(heroes=("apprentice",), enemies=("goblin", "orc"))
    goblin, orc = core.enemies
    core.world.component_for_entity(goblin, Health).current = 5

    core.play_hand(cards("KS"))

    assert core.world.component_for_entity(goblin, Health).current == 0
    assert get_or_create_battle_context(core.world).current_target == orc
    assert core.active

    core.play_hand(cards("QS"))
    assert core.world.component_for_entity(orc, Health).current < 80


def test_dead_current_target_is_skipped_before_play():
    core = make_core(heroes=("apprentice",), enemies=("goblin", "orc"))
    goblin, orc = core.enemies
    core.world.component_for_entity(goblin, Health).current = 0

    core.play_hand(cards("KS"))

    assert get_or_create_battle_context(core.world).current_target == orc
    assert core.world.component_for_entity(orc, Health).current == 80 - 11


def test_victory_ends_battle_and_resets_mana(core):
    ended = capture(core.event_bus, EVENT_BATTLE_END)
    goblin = core.enemies[0]
    core.world.component_for_entity(goblin, Health).current = 1

    core.play_hand(cards("KS KH"))

    assert ended == [{"reason": "victory"}]
    assert not core.active
    assert sum(get_or_create_ledger(core.world).snapshot().values()) == 0
