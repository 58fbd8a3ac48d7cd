from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, List, Tuple

if TYPE_CHECKING:
    from battlecore.systems.passives.base import PassiveEffect, PassiveTrigger


@dataclass(slots=True)
class PassiveDefinition:
    """A hero passive: fires when any trigger matches, then every effect applies."""

    name: str
    description: str
    triggers: Tuple["PassiveTrigger", ...] = ()
    effects: Tuple["PassiveEffect", ...] = ()


@dataclass(slots=True)
class PassiveList:
    """Ordered passives owned by a hero entity."""

    passives: List[PassiveDefinition] = field(default_factory=list)


@dataclass(slots=True)
class HeroState:
    """Hero-local counters (armor, tears, per-round flags)."""

    values: Dict[str, Any] = field(default_factory=dict)


@dataclass(slots=True)
class ActivatedPassives:
    """Passive names that activated during the most recent damage composition."""

    names: List[str] = field(default_factory=list)
