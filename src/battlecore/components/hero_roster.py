from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from battlecore.constants import MAX_PARTY_SIZE


@dataclass
class HeroRoster:
    """Tracks the ordered party of hero entities along with the active slot."""

    hero_entities: List[int] = field(default_factory=list)
    active_index: int = 0
    max_size: int = MAX_PARTY_SIZE

    def active_hero(self) -> int | None:
        if not self.hero_entities:
            return None
        return self.hero_entities[min(self.active_index, len(self.hero_entities) - 1)]

    def has_space(self) -> bool:
        return len(self.hero_entities) < self.max_size
