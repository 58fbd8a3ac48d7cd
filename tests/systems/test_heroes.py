from battlecore.components.health import Health
from battlecore.components.passive import ActivatedPassives
from battlecore.factories.heroes.analyst import PLAYED_SPADES_FLAG, TEARS
from battlecore.factories.heroes.guardian import ARMOR
from battlecore.systems.passives.base import hero_state
from battlecore.utils.poker_hand import evaluate_hand
from tests.helpers import cards, make_core


def _hp(core, entity):
    return core.world.component_for_entity(entity, Health).current


def test_apprentice_pair_bonus():
    core = make_core(heroes=("apprentice",), enemies=("goblin",))
    hero = core.roster.roster.hero_entities[0]
    goblin = core.enemies[0]

    result = core.play_hand(cards("2S 2H"))

    assert result.base_damage == 20
    assert result.final_damage == 30
    assert _hp(core, goblin) == 20
    assert core.world.component_for_entity(hero, ActivatedPassives).names == ["Pair Bonus"]


def test_apprentice_bonus_ignores_other_hands():
    core = make_core(heroes=("apprentice",), enemies=("goblin",))
    result = core.play_hand(cards("KS"))
    assert result.final_damage == result.base_damage == 11


def test_power_hitter_face_card_bonus():
    core = make_core(heroes=("power_hitter",), enemies=("goblin",))
    result = core.play_hand(cards("KS"))
    assert result.base_damage == 11
    assert result.final_damage == 15


def test_power_hitter_without_face_cards():
    core = make_core(heroes=("power_hitter",), enemies=("goblin",))
    result = core.play_hand(cards("9S"))
    assert result.final_damage == result.base_damage


def test_analyst_tears_accumulate_per_enemy_once_per_round():
    core = make_core(heroes=("analyst",), enemies=("goblin", "orc"))
    analyst = core.roster.roster.hero_entities[0]
    state = hero_state(core.world, analyst).values

    first = core.play_hand(cards("3S"))
    assert first.final_damage == 3
    assert state[TEARS] == 2
    assert state[PLAYED_SPADES_FLAG] is True

    second = core.play_hand(cards("4S"))
    assert second.final_damage == 4
    assert state[TEARS] == 2


def test_analyst_exploit_weakness_consumes_tears():
    core = make_core(heroes=("analyst",), enemies=("goblin", "orc"))
    analyst = core.roster.roster.hero_entities[0]
    state = hero_state(core.world, analyst).values
    core.play_hand(cards("3S"))

    result = core.play_hand(cards("5S 5H 5D"))

    assert result.base_damage == 57
    assert result.final_damage == 75
    assert state[TEARS] == 0


def test_analyst_flag_clears_on_round_start():
    core = make_core(heroes=("analyst",), enemies=("goblin", "orc"))
    analyst = core.roster.roster.hero_entities[0]
    state = hero_state(core.world, analyst).values
    core.play_hand(cards("3S"))

    assert core.start_round() == 2
    assert PLAYED_SPADES_FLAG not in state

    core.play_hand(cards("4S"))
    assert state[TEARS] == 4


def test_guardian_finishing_blow_scales_with_armor():
    core = make_core(heroes=("guardian",), enemies=("goblin",))
    guardian = core.roster.roster.hero_entities[0]
    goblin = core.enemies[0]
    hero_state(core.world, guardian).values[ARMOR] = 5
    core.world.component_for_entity(goblin, Health).current = 15

    hand = evaluate_hand(cards("2S 2H 3D 3C"))
    result = core.composer.compose(100, hand, goblin, cards("2S 2H 3D 3C"))

    assert result.final_damage == 200


def test_guardian_finishing_blow_needs_weakened_target():
    core = make_core(heroes=("guardian",), enemies=("goblin",))
    guardian = core.roster.roster.hero_entities[0]
    hero_state(core.world, guardian).values[ARMOR] = 5
    hand = evaluate_hand(cards("2S 2H 3D 3C"))
    result = core.composer.compose(100, hand, core.enemies[0], cards("2S 2H 3D 3C"))
    assert result.final_damage == 100


def test_guardian_defensive_stance_gains_armor_on_play():
    core = make_core(heroes=("guardian",), enemies=("troll",))
    guardian = core.roster.roster.hero_entities[0]
    state = hero_state(core.world, guardian).values

    core.play_hand(cards("KS"))
    core.play_hand(cards("7S 7H"))
    core.play_hand(cards("7D 7C 8S 8H"))

    assert state[ARMOR] == 2


def test_compose_does_not_mutate_hero_state():
    core = make_core(heroes=("guardian",), enemies=("goblin",))
    guardian = core.roster.roster.hero_entities[0]
    core.composer.compose(10, evaluate_hand(cards("KS")), core.enemies[0], cards("KS"))
    assert hero_state(core.world, guardian).values[ARMOR] == 0
