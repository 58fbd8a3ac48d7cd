from __future__ import annotations

from typing import Iterable, Sequence

from esper import World

from battlecore.components.hero import Hero
from battlecore.components.passive import PassiveDefinition
from battlecore.components.suit import Suit
from battlecore.systems.passives.effects import AddState, CompoundingStateMultiplier, SetState
from battlecore.systems.passives.triggers import FirstSuitThisRoundTrigger, MinimumHandRankTrigger
from battlecore.utils.poker_hand import HandRank
from .common import spawn_hero

DEFAULT_ANALYST_LOADOUT: Sequence[str] = ("heart_drain",)

TEARS = "tears"
PLAYED_SPADES_FLAG = "played_spades_this_round"

TEAR_ANALYSIS = PassiveDefinition(
    name="Tear Analysis",
    description="The first Spades hand each round applies 1 Tear per enemy.",
    triggers=(FirstSuitThisRoundTrigger(suit=Suit.SPADES, flag=PLAYED_SPADES_FLAG),),
    effects=(
        AddState(TEARS, amount=1, per_enemy=True),
        SetState(PLAYED_SPADES_FLAG, True),
    ),
)

EXPLOIT_WEAKNESS = PassiveDefinition(
    name="Exploit Weakness",
    description="Three of a Kind or better consumes all Tears for x1.15 damage each.",
    triggers=(MinimumHandRankTrigger(minimum=HandRank.THREE_OF_A_KIND),),
    effects=(
        CompoundingStateMultiplier(TEARS, 1.15),
        SetState(TEARS, 0),
    ),
)


def create_hero_analyst(
    world: World,
    *,
    ability_names: Iterable[str] | None = None,
    max_hp: int = 80,
) -> int:
    """Spawn the Analyst, who banks Tears and cashes them in on strong hands."""

    loadout = tuple(ability_names) if ability_names is not None else DEFAULT_ANALYST_LOADOUT
    return spawn_hero(
        world,
        hero=Hero(
            slug="analyst",
            name="The Analyst",
            hero_type="damage",
            description="Studies every weakness before exploiting it.",
        ),
        max_hp=max_hp,
        ability_names=loadout,
        passives=(TEAR_ANALYSIS, EXPLOIT_WEAKNESS),
        state={TEARS: 0},
    )
