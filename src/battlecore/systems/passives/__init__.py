from battlecore.systems.passives.base import (
    PassiveContext,
    PassiveEffect,
    PassiveTrigger,
    build_context,
    calculate_multiplier,
    execute_on_play,
    hero_state,
)

__all__ = [
    "PassiveContext",
    "PassiveEffect",
    "PassiveTrigger",
    "build_context",
    "calculate_multiplier",
    "execute_on_play",
    "hero_state",
]
