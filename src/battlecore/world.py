from esper import World

from battlecore.components.battle_context import BattleContext
from battlecore.components.hero_roster import HeroRoster
from battlecore.components.mana_ledger import ManaLedger
from battlecore.components.turn_state import TurnState
from battlecore.constants import MAX_MANA, MAX_PARTY_SIZE


def create_world(*, max_mana: int = MAX_MANA, max_party_size: int = MAX_PARTY_SIZE) -> World:
    """Create a world holding the battle singletons on one state entity.

    Heroes are added through RosterSystem and enemies through
    BattleCore.start_battle, so the world starts with an empty party.
    """
    world = World()
    world.create_entity(
        ManaLedger(max_mana=max_mana),
        HeroRoster(max_size=max_party_size),
        BattleContext(),
        TurnState(),
    )
    return world
