from __future__ import annotations

from enum import Enum


class Suit(Enum):
    """The four mana suits. Closed set; a played card funds exactly one of them."""

    SPADES = "♠"
    HEARTS = "♥"
    DIAMONDS = "♦"
    CLUBS = "♣"

    @property
    def symbol(self) -> str:
        return self.value

    @classmethod
    def from_card_suit(cls, suit) -> Suit | None:
        """Map a card face suit ("Spades", "♠", Suit.SPADES) onto a member."""
        if isinstance(suit, Suit):
            return suit
        if not isinstance(suit, str) or not suit:
            return None
        try:
            return cls(suit)
        except ValueError:
            pass
        return _CARD_SUIT_NAMES.get(suit.strip().lower())


_CARD_SUIT_NAMES = {
    "spades": Suit.SPADES,
    "hearts": Suit.HEARTS,
    "diamonds": Suit.DIAMONDS,
    "clubs": Suit.CLUBS,
}
