from dataclasses import dataclass
from typing import Optional


@dataclass(slots=True)
class TurnState:
    """Tracks turn-level bookkeeping shared across systems."""

    last_started_turn: Optional[int] = None
    last_ended_turn: Optional[int] = None
