from dataclasses import dataclass

@dataclass
class Health:
    """Hit points for heroes and enemies; zero means defeated."""

    current: int
    max_hp: int

    def clamp(self) -> None:
        self.current = max(0, min(self.current, self.max_hp))

    def is_alive(self) -> bool:
        return self.current > 0

    def fraction(self) -> float:
        if self.max_hp <= 0:
            return 0.0
        return self.current / self.max_hp
