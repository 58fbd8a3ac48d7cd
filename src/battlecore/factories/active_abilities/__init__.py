"""Factory helpers for hero active abilities."""

from .heart_drain import create_ability_heart_drain
from .mana_strike import create_ability_mana_strike
from .spade_lance import create_ability_spade_lance

__all__ = [
    "create_ability_heart_drain",
    "create_ability_mana_strike",
    "create_ability_spade_lance",
]
