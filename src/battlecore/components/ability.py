from dataclasses import dataclass, field
from typing import Dict, Any

from battlecore.components.suit import Suit

@dataclass(slots=True)
class Ability:
    """Represents a hero-owned active ability.

    Fields:
      name: Display / reference name.
      kind: Semantic category (e.g., 'active').
      cost: Mapping of Suit to mana consumed when cast.
      description: Text description of the ability effect (for UI display).
      params: Arbitrary configuration values read by resolvers.
      cooldown: Number of turns the ability is unavailable after a cast.
    """
    name: str
    kind: str
    cost: Dict[Suit, int]
    description: str = ""
    params: Dict[str, Any] = field(default_factory=dict)
    cooldown: int = 0
