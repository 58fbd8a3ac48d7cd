from __future__ import annotations

from esper import World

from battlecore.components.battle_context import BattleContext
from battlecore.components.hero_roster import HeroRoster
from battlecore.components.mana_ledger import ManaLedger
from battlecore.components.turn_state import TurnState


def _singleton(world: World, component_type):
    existing = list(world.get_component(component_type))
    if existing:
        return existing[0][1]
    return None


def get_or_create_ledger(world: World) -> ManaLedger:
    """Return the shared ManaLedger component, creating it if absent."""
    ledger = _singleton(world, ManaLedger)
    if ledger is None:
        ledger = ManaLedger()
        world.create_entity(ledger)
    return ledger


def get_or_create_roster(world: World) -> HeroRoster:
    """Return the shared HeroRoster component, creating it if absent."""
    roster = _singleton(world, HeroRoster)
    if roster is None:
        roster = HeroRoster()
        world.create_entity(roster)
    return roster


def get_or_create_battle_context(world: World) -> BattleContext:
    """Return the shared BattleContext component, creating it if absent."""
    context = _singleton(world, BattleContext)
    if context is None:
        context = BattleContext()
        world.create_entity(context)
    return context


def get_or_create_turn_state(world: World) -> TurnState:
    """Return the shared TurnState component, creating it if absent."""
    state = _singleton(world, TurnState)
    if state is None:
        state = TurnState()
        world.create_entity(state)
    return state
