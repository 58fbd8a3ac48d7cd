from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass(slots=True)
class BattleContext:
    """Singleton describing the battle in progress.

    enemies: enemy entities in display order.
    current_target: enemy currently targeted by hand plays.
    active: True between battle start and battle end.
    """

    enemies: List[int] = field(default_factory=list)
    current_target: Optional[int] = None
    active: bool = False
    turn_number: int = 0
    round_number: int = 0
