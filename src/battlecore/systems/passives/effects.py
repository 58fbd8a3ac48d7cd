from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from battlecore.systems.passives.base import PassiveContext


@dataclass(frozen=True, slots=True)
class FlatMultiplier:
    value: float
    name: str = "flat_multiplier"

    def multiplier(self, ctx: PassiveContext) -> float:
        return self.value

    def execute(self, ctx: PassiveContext) -> None:
        return


@dataclass(frozen=True, slots=True)
class CompoundingStateMultiplier:
    """``per_unit ** state[key]``, e.g. 1.15 per stored tear."""

    key: str
    per_unit: float
    name: str = "compounding_state_multiplier"

    def multiplier(self, ctx: PassiveContext) -> float:
        return self.per_unit ** int(ctx.state.get(self.key, 0) or 0)

    def execute(self, ctx: PassiveContext) -> None:
        return


@dataclass(frozen=True, slots=True)
class LinearStateMultiplier:
    """``1 + per_unit * state[key]``, e.g. +20% per armor stack."""

    key: str
    per_unit: float
    name: str = "linear_state_multiplier"

    def multiplier(self, ctx: PassiveContext) -> float:
        return 1.0 + self.per_unit * int(ctx.state.get(self.key, 0) or 0)

    def execute(self, ctx: PassiveContext) -> None:
        return


@dataclass(frozen=True, slots=True)
class AddState:
    key: str
    amount: int = 1
    per_enemy: bool = False
    name: str = "add_state"

    def multiplier(self, ctx: PassiveContext) -> float:
        return 1.0

    def execute(self, ctx: PassiveContext) -> None:
        gained = self.amount * (ctx.enemy_count if self.per_enemy else 1)
        ctx.state[self.key] = int(ctx.state.get(self.key, 0) or 0) + gained


@dataclass(frozen=True, slots=True)
class SetState:
    key: str
    value: Any
    name: str = "set_state"

    def multiplier(self, ctx: PassiveContext) -> float:
        return 1.0

    def execute(self, ctx: PassiveContext) -> None:
        ctx.state[self.key] = self.value
