from __future__ import annotations

import math

from battlecore.constants import (
    FALLBACK_HAND_DAMAGE,
    HAND_DAMAGE_TABLE,
    KICKER_CARD_BONUS,
    PRIMARY_CARD_BONUS,
)
from battlecore.utils.poker_hand import HandDescription, HandRank


def base_damage_for(hand: HandDescription) -> int:
    """Table damage for the hand's rank plus a bonus for its important card values."""
    base = HAND_DAMAGE_TABLE.get(int(hand.rank), FALLBACK_HAND_DAMAGE)
    return math.floor(base + card_value_bonus(hand))


def card_value_bonus(hand: HandDescription) -> float:
    values = [v for v in hand.tie_breakers if isinstance(v, int) and 2 <= v <= 14]
    if not values:
        return 0.0
    if hand.rank == HandRank.HIGH_CARD:
        return max(0, values[0] - 2) * PRIMARY_CARD_BONUS
    bonus = max(0, values[0] - 2) * PRIMARY_CARD_BONUS
    for kicker in values[1:3]:
        bonus += max(0, kicker - 2) * KICKER_CARD_BONUS
    return bonus
