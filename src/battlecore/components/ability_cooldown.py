from dataclasses import dataclass


@dataclass(slots=True)
class AbilityCooldown:
    """Tracks per-ability cooldown state in turns remaining."""

    remaining_turns: int = 0

    def start(self, cooldown: int) -> None:
        self.remaining_turns = max(0, int(cooldown))

    def reduce(self) -> None:
        if self.remaining_turns > 0:
            self.remaining_turns -= 1
