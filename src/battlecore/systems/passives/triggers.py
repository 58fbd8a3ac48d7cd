from __future__ import annotations

from dataclasses import dataclass
from typing import FrozenSet

from battlecore.components.suit import Suit
from battlecore.systems.passives.base import PassiveContext
from battlecore.utils.poker_hand import HandRank


@dataclass(frozen=True, slots=True)
class HandRankTrigger:
    """Fires when the evaluated hand has one of the given ranks."""

    ranks: FrozenSet[HandRank]
    name: str = "hand_rank"

    def matches(self, ctx: PassiveContext) -> bool:
        return ctx.hand is not None and ctx.hand.rank in self.ranks


@dataclass(frozen=True, slots=True)
class MinimumHandRankTrigger:
    minimum: HandRank
    name: str = "minimum_hand_rank"

    def matches(self, ctx: PassiveContext) -> bool:
        return ctx.hand is not None and ctx.hand.rank >= self.minimum


@dataclass(frozen=True, slots=True)
class FaceCardTrigger:
    name: str = "face_card"

    def matches(self, ctx: PassiveContext) -> bool:
        return any(card.is_face for card in ctx.selected_cards)


@dataclass(frozen=True, slots=True)
class FirstSuitThisRoundTrigger:
    """Fires on the first hand of the round containing ``suit``.

    The per-round flag lives in hero state under ``flag`` and is cleared on
    round start.
    """

    suit: Suit
    flag: str
    name: str = "first_suit_this_round"

    def matches(self, ctx: PassiveContext) -> bool:
        if ctx.state.get(self.flag):
            return False
        return any(card.suit == self.suit for card in ctx.selected_cards)


@dataclass(frozen=True, slots=True)
class TargetHealthAtOrBelowTrigger:
    threshold: float
    name: str = "target_health_at_or_below"

    def matches(self, ctx: PassiveContext) -> bool:
        if ctx.target_health is None or ctx.target_health.max_hp <= 0:
            return False
        return ctx.target_health.fraction() <= self.threshold
