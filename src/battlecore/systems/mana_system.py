from __future__ import annotations

import logging
from typing import Dict, Iterable, Mapping

from esper import World

from battlecore.components.mana_ledger import ManaLedger
from battlecore.components.suit import Suit
from battlecore.events.bus import (
    EventBus,
    EVENT_BATTLE_END,
    EVENT_BATTLE_START,
    EVENT_HAND_PLAYED,
    EVENT_MANA_CHANGED,
    EVENT_MANA_INSUFFICIENT,
    EVENT_MANA_SPEND_REQUEST,
    EVENT_MANA_SPENT,
)
from battlecore.utils.battle_state import get_or_create_ledger

logger = logging.getLogger(__name__)


class ManaSystem:
    """Funds the party's per-suit mana from played cards and pays ability costs.

    Logic:
      - On EVENT_HAND_PLAYED: credit one unit per card to the card's suit, rank ignored.
      - On EVENT_MANA_SPEND_REQUEST: spend the full cost or emit insufficient; never partially.
      - On EVENT_BATTLE_START / EVENT_BATTLE_END: zero every suit.
    Every mutation that changes a balance publishes EVENT_MANA_CHANGED.
    """

    def __init__(self, world: World, event_bus: EventBus, *, max_mana: int | None = None) -> None:
        self.world = world
        self.event_bus = event_bus
        ledger = get_or_create_ledger(world)
        if max_mana is not None:
            ledger.max_mana = int(max_mana)
        event_bus.subscribe(EVENT_HAND_PLAYED, self.on_hand_played)
        event_bus.subscribe(EVENT_MANA_SPEND_REQUEST, self.on_spend_request)
        event_bus.subscribe(EVENT_BATTLE_START, self.on_battle_start)
        event_bus.subscribe(EVENT_BATTLE_END, self.on_battle_end)

    @property
    def ledger(self) -> ManaLedger:
        return get_or_create_ledger(self.world)

    def credit(self, suit: Suit, amount: int = 1, *, source: str = "credit") -> int:
        if amount < 0:
            logger.debug("Rejected negative credit of %s %s", amount, suit)
            return 0
        gained = self.ledger.credit(suit, amount)
        if gained:
            self._emit_changed({suit: gained}, source=source)
        logger.debug("Credited %s%s (requested %s)", gained, suit.symbol, amount)
        return gained

    def debit(self, suit: Suit, amount: int, *, source: str = "debit") -> bool:
        if amount < 0:
            return False
        if not self.ledger.debit(suit, amount):
            logger.debug("Refused debit of %s%s", amount, suit.symbol)
            return False
        if amount:
            self._emit_changed({suit: -amount}, source=source)
        return True

    def spend(self, cost: Mapping[Suit, int], *, source: str = "spend") -> Dict[Suit, int]:
        """All-or-nothing multi-suit debit; returns what is missing (empty on success)."""
        # Negative entries never refund mana.
        payable = {suit: int(n) for suit, n in cost.items() if int(n) > 0}
        missing = self.ledger.spend(payable)
        if missing:
            return missing
        self._emit_changed({suit: -n for suit, n in payable.items()}, source=source)
        return {}

    def reset(self, *, source: str = "reset") -> None:
        ledger = self.ledger
        before = ledger.snapshot()
        ledger.reset()
        self._emit_changed({suit: -n for suit, n in before.items()}, source=source)

    def on_hand_played(self, sender, **payload) -> None:
        cards: Iterable = payload.get("selected_cards") or []
        gains: Dict[Suit, int] = {}
        ledger = self.ledger
        for card in cards:
            suit = Suit.from_card_suit(getattr(card, "suit", card))
            if suit is None:
                logger.debug("Skipping card with unknown suit: %r", card)
                continue
            gained = ledger.credit(suit, 1)
            if gained:
                gains[suit] = gains.get(suit, 0) + gained
        if gains:
            self._emit_changed(gains, source="hand_played")

    def on_spend_request(self, sender, **payload) -> None:
        owner_entity = payload.get("owner_entity")
        cost: Mapping[Suit, int] = payload.get("cost") or {}
        ability_entity = payload.get("ability_entity")
        if owner_entity is None:
            return
        missing = self.spend(cost, source="ability_spend")
        if missing:
            logger.debug("Insufficient mana for ability %s: missing %s", ability_entity, missing)
            self.event_bus.emit(
                EVENT_MANA_INSUFFICIENT,
                owner_entity=owner_entity,
                cost=dict(cost),
                missing=missing,
                ability_entity=ability_entity,
            )
            return
        self.event_bus.emit(
            EVENT_MANA_SPENT,
            owner_entity=owner_entity,
            cost=dict(cost),
            ability_entity=ability_entity,
        )

    def on_battle_start(self, sender, **payload) -> None:
        self.reset(source="battle_start")

    def on_battle_end(self, sender, **payload) -> None:
        self.reset(source="battle_end")

    def _emit_changed(self, delta: Mapping[Suit, int], *, source: str) -> None:
        normalized = {suit: int(n) for suit, n in delta.items() if int(n) != 0}
        if not normalized:
            return
        self.event_bus.emit(
            EVENT_MANA_CHANGED,
            counts=self.ledger.snapshot(),
            delta=normalized,
            source=source,
        )
