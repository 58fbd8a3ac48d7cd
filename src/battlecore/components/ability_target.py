from dataclasses import dataclass

@dataclass(slots=True)
class AbilityTarget:
    """Targeting specification for an ability.

    target_type: 'enemy' restricts targets to Enemy entities; anything else accepts any living entity.
    """
    target_type: str
