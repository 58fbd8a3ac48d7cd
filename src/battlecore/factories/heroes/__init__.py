"""Hero factory helpers."""

from .analyst import DEFAULT_ANALYST_LOADOUT, create_hero_analyst
from .apprentice import DEFAULT_APPRENTICE_LOADOUT, create_hero_apprentice
from .guardian import DEFAULT_GUARDIAN_LOADOUT, create_hero_guardian
from .power_hitter import DEFAULT_POWER_HITTER_LOADOUT, create_hero_power_hitter

__all__ = [
    "DEFAULT_ANALYST_LOADOUT",
    "create_hero_analyst",
    "DEFAULT_APPRENTICE_LOADOUT",
    "create_hero_apprentice",
    "DEFAULT_GUARDIAN_LOADOUT",
    "create_hero_guardian",
    "DEFAULT_POWER_HITTER_LOADOUT",
    "create_hero_power_hitter",
]
