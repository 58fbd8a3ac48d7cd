from __future__ import annotations

import logging

from esper import World

from battlecore.components.ability_cooldown import AbilityCooldown
from battlecore.events.bus import (
    EventBus,
    EVENT_BATTLE_START,
    EVENT_ROUND_START,
    EVENT_TURN_END,
    EVENT_TURN_START,
)
from battlecore.systems.ability_eligibility import publish_eligibility
from battlecore.systems.passives.base import hero_state
from battlecore.utils.abilities import roster_abilities
from battlecore.utils.battle_state import (
    get_or_create_battle_context,
    get_or_create_roster,
    get_or_create_turn_state,
)

logger = logging.getLogger(__name__)

# Hero-state keys cleared at the start of every round.
ROUND_SCOPED_FLAGS = ("played_spades_this_round",)


class TurnCycleSystem:
    """Ticks ability cooldowns once per turn end and re-publishes eligibility.

    Flow:
      - on_turn_start: re-publish eligibility; nothing is mutated.
      - on_turn_end: reduce every roster ability's cooldown exactly once, in
        roster then ability order, then re-publish.
    Calling on_turn_end directly always ticks. The EVENT_TURN_END path
    ignores a second delivery for the same turn number.
    """

    def __init__(self, world: World, event_bus: EventBus) -> None:
        self.world = world
        self.event_bus = event_bus
        get_or_create_turn_state(world)
        event_bus.subscribe(EVENT_TURN_START, self.on_turn_start_event)
        event_bus.subscribe(EVENT_TURN_END, self.on_turn_end_event)
        event_bus.subscribe(EVENT_ROUND_START, self.on_round_start_event)
        event_bus.subscribe(EVENT_BATTLE_START, self.on_battle_start)

    def on_turn_start(self) -> None:
        publish_eligibility(self.world, self.event_bus)

    def on_turn_end(self) -> None:
        for _, ability_entity in roster_abilities(self.world):
            try:
                cooldown = self.world.component_for_entity(ability_entity, AbilityCooldown)
            except KeyError:
                continue
            cooldown.reduce()
        publish_eligibility(self.world, self.event_bus)

    def on_round_start(self, round_number: int | None = None) -> None:
        context = get_or_create_battle_context(self.world)
        context.round_number = round_number if round_number is not None else context.round_number + 1
        for hero_entity in list(get_or_create_roster(self.world).hero_entities):
            values = hero_state(self.world, hero_entity).values
            for flag in ROUND_SCOPED_FLAGS:
                values.pop(flag, None)

    def on_turn_start_event(self, sender, **payload) -> None:
        turn_number = payload.get("turn_number")
        state = get_or_create_turn_state(self.world)
        if turn_number is not None:
            state.last_started_turn = turn_number
            get_or_create_battle_context(self.world).turn_number = turn_number
        self.on_turn_start()

    def on_turn_end_event(self, sender, **payload) -> None:
        turn_number = payload.get("turn_number")
        state = get_or_create_turn_state(self.world)
        if turn_number is not None:
            if state.last_ended_turn == turn_number:
                logger.warning("Turn %s already ended; ignoring repeated end", turn_number)
                return
            state.last_ended_turn = turn_number
        self.on_turn_end()

    def on_round_start_event(self, sender, **payload) -> None:
        self.on_round_start(payload.get("round_number"))

    def on_battle_start(self, sender, **payload) -> None:
        state = get_or_create_turn_state(self.world)
        state.last_started_turn = None
        state.last_ended_turn = None

