from __future__ import annotations

from esper import World

from battlecore.components.ability import Ability
from battlecore.components.ability_cooldown import AbilityCooldown
from battlecore.components.ability_effect import AbilityEffectSpec, AbilityEffects
from battlecore.components.ability_target import AbilityTarget
from battlecore.components.suit import Suit


def create_ability_heart_drain(world: World) -> int:
    return world.create_entity(
        Ability(
            name="heart_drain",
            kind="active",
            cost={Suit.HEARTS: 3},
            description="Drain 15 health from an enemy and heal the active hero for 10.",
            params={"damage": 15, "heal": 10},
            cooldown=2,
        ),
        AbilityTarget(target_type="enemy"),
        AbilityEffects(
            effects=(
                AbilityEffectSpec(
                    slug="damage",
                    target="pending_target",
                    metadata={"amount": 15, "reason": "heart_drain"},
                    param_overrides={"amount": "damage"},
                ),
                AbilityEffectSpec(
                    slug="heal",
                    target="active_hero",
                    metadata={"amount": 10, "reason": "heart_drain"},
                    param_overrides={"amount": "heal"},
                ),
            )
        ),
        AbilityCooldown(),
    )
