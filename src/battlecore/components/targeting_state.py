from dataclasses import dataclass
from enum import Enum, auto


class TargetingMode(Enum):
    IDLE = auto()
    AWAITING_TARGET = auto()


@dataclass(slots=True)
class TargetingState:
    """Marks that input is being interpreted as a target click.

    At most one instance exists in the world. Its presence is the
    AWAITING_TARGET mode; its absence is IDLE.

    Fields:
      ability_entity: the ability awaiting a target.
      owner_entity: the hero that owns it.
    """
    ability_entity: int
    owner_entity: int
