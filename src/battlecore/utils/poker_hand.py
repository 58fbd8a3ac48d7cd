"""Poker hand evaluation for played cards.

A hand is 1 to 5 cards. Flushes and straights need all five cards; the
ace-low straight (A-2-3-4-5) ranks with a high card of 5.
"""
from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Sequence, Tuple

from battlecore.components.suit import Suit


class HandRank(IntEnum):
    HIGH_CARD = 1
    ONE_PAIR = 2
    TWO_PAIR = 3
    THREE_OF_A_KIND = 4
    STRAIGHT = 5
    FLUSH = 6
    FULL_HOUSE = 7
    FOUR_OF_A_KIND = 8
    STRAIGHT_FLUSH = 9
    ROYAL_FLUSH = 10


HAND_NAMES = {
    HandRank.HIGH_CARD: "High Card",
    HandRank.ONE_PAIR: "One Pair",
    HandRank.TWO_PAIR: "Two Pair",
    HandRank.THREE_OF_A_KIND: "Three of a Kind",
    HandRank.STRAIGHT: "Straight",
    HandRank.FLUSH: "Flush",
    HandRank.FULL_HOUSE: "Full House",
    HandRank.FOUR_OF_A_KIND: "Four of a Kind",
    HandRank.STRAIGHT_FLUSH: "Straight Flush",
    HandRank.ROYAL_FLUSH: "Royal Flush",
}

RANK_VALUES = {
    "2": 2, "3": 3, "4": 4, "5": 5, "6": 6, "7": 7, "8": 8, "9": 9, "10": 10,
    "J": 11, "Q": 12, "K": 13, "A": 14,
}
FACE_RANKS = frozenset({"J", "Q", "K", "A"})


@dataclass(frozen=True, slots=True)
class Card:
    rank: str
    suit: Suit

    @property
    def value(self) -> int:
        return RANK_VALUES[self.rank]

    @property
    def is_face(self) -> bool:
        return self.rank in FACE_RANKS

    def __str__(self) -> str:
        return f"{self.rank}{self.suit.symbol}"


@dataclass(frozen=True, slots=True)
class HandDescription:
    rank: HandRank
    name: str
    tie_breakers: Tuple[int, ...] = field(default_factory=tuple)
    cards: Tuple[Card, ...] = field(default_factory=tuple)


def evaluate_hand(cards: Sequence[Card]) -> HandDescription:
    if not 1 <= len(cards) <= 5:
        raise ValueError("A poker hand must contain between 1 and 5 cards")
    ordered = tuple(sorted(cards, key=lambda card: card.value, reverse=True))
    rank, tie_breakers = _classify(ordered)
    return HandDescription(rank=rank, name=HAND_NAMES[rank], tie_breakers=tie_breakers, cards=ordered)


def _classify(cards: Tuple[Card, ...]) -> tuple[HandRank, Tuple[int, ...]]:
    values = [card.value for card in cards]
    counts = Counter(values)
    # Highest multiplicity first, then highest value.
    groups = sorted(counts.items(), key=lambda item: (item[1], item[0]), reverse=True)
    is_flush = len(cards) == 5 and len({card.suit for card in cards}) == 1
    straight_high = _straight_high_card(values)

    if is_flush and straight_high is not None:
        if straight_high == 14:
            return HandRank.ROYAL_FLUSH, (14,)
        return HandRank.STRAIGHT_FLUSH, (straight_high,)
    if groups[0][1] == 4:
        return HandRank.FOUR_OF_A_KIND, tuple(value for value, _ in groups)
    if len(cards) == 5 and groups[0][1] == 3 and groups[1][1] == 2:
        return HandRank.FULL_HOUSE, (groups[0][0], groups[1][0])
    if is_flush:
        return HandRank.FLUSH, tuple(values)
    if straight_high is not None:
        return HandRank.STRAIGHT, (straight_high,)
    if groups[0][1] == 3:
        kickers = sorted((v for v in values if v != groups[0][0]), reverse=True)
        return HandRank.THREE_OF_A_KIND, (groups[0][0], *kickers)
    pairs = [value for value, count in groups if count == 2]
    if len(pairs) == 2:
        kickers = [v for v in values if v not in pairs]
        return HandRank.TWO_PAIR, (*sorted(pairs, reverse=True), *kickers)
    if len(pairs) == 1:
        kickers = sorted((v for v in values if v != pairs[0]), reverse=True)
        return HandRank.ONE_PAIR, (pairs[0], *kickers)
    return HandRank.HIGH_CARD, tuple(values)


def _straight_high_card(values: list[int]) -> int | None:
    unique = sorted(set(values), reverse=True)
    if len(unique) != 5:
        return None
    if unique == [14, 5, 4, 3, 2]:
        return 5
    if unique[0] - unique[4] == 4:
        return unique[0]
    return None
