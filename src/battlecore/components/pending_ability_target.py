from dataclasses import dataclass


@dataclass(slots=True)
class PendingAbilityTarget:
    """A paid-for cast waiting for resolution; removed once the resolver runs."""

    ability_entity: int
    owner_entity: int
    target_entity: int | None = None
