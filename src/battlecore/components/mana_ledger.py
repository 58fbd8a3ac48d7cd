from dataclasses import dataclass, field
from typing import Dict, Mapping

from battlecore.components.suit import Suit
from battlecore.constants import MAX_MANA


def _empty_counts() -> Dict[Suit, int]:
    return {suit: 0 for suit in Suit}


@dataclass(slots=True)
class ManaLedger:
    """Per-suit mana shared by the whole party for the current battle.

    counts: mapping of Suit -> amount, always within [0, max_mana].
    Spending a multi-suit cost is all-or-nothing.
    """
    counts: Dict[Suit, int] = field(default_factory=_empty_counts)
    max_mana: int = MAX_MANA

    def balance(self, suit: Suit) -> int:
        return self.counts.get(suit, 0)

    def credit(self, suit: Suit, amount: int = 1) -> int:
        """Add mana clamped at max_mana; returns the amount actually gained."""
        if amount <= 0:
            return 0
        before = self.counts.get(suit, 0)
        self.counts[suit] = min(self.max_mana, before + amount)
        return self.counts[suit] - before

    def debit(self, suit: Suit, amount: int) -> bool:
        if amount < 0:
            return False
        if self.counts.get(suit, 0) < amount:
            return False
        self.counts[suit] = self.counts.get(suit, 0) - amount
        return True

    def missing(self, cost: Mapping[Suit, int]) -> Dict[Suit, int]:
        return {s: n - self.counts.get(s, 0) for s, n in cost.items() if self.counts.get(s, 0) < n}

    def can_afford(self, cost: Mapping[Suit, int]) -> bool:
        return all(self.counts.get(s, 0) >= n for s, n in cost.items())

    def spend(self, cost: Mapping[Suit, int]) -> Dict[Suit, int]:
        """Attempt to spend cost; returns missing dict if insufficient else empty dict."""
        missing = self.missing(cost)
        if missing:
            return missing
        for s, n in cost.items():
            self.counts[s] -= n
        return {}

    def reset(self) -> None:
        for suit in Suit:
            self.counts[suit] = 0

    def snapshot(self) -> Dict[Suit, int]:
        return {suit: self.counts.get(suit, 0) for suit in Suit}
