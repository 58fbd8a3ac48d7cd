from dataclasses import dataclass, field
from typing import List

@dataclass(slots=True)
class AbilityListOwner:
    """Associates a hero entity with its ordered active ability entity ids."""
    ability_entities: List[int] = field(default_factory=list)
