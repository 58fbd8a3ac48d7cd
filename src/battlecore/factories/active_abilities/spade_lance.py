from __future__ import annotations

from esper import World

from battlecore.components.ability import Ability
from battlecore.components.ability_cooldown import AbilityCooldown
from battlecore.components.ability_effect import AbilityEffectSpec, AbilityEffects
from battlecore.components.ability_target import AbilityTarget
from battlecore.components.suit import Suit


def create_ability_spade_lance(world: World) -> int:
    return world.create_entity(
        Ability(
            name="spade_lance",
            kind="active",
            cost={Suit.SPADES: 2, Suit.HEARTS: 1},
            description="Pierce an enemy for 40 damage.",
            params={"damage": 40},
            cooldown=3,
        ),
        AbilityTarget(target_type="enemy"),
        AbilityEffects(
            effects=(
                AbilityEffectSpec(
                    slug="damage",
                    target="pending_target",
                    metadata={"amount": 40, "reason": "spade_lance"},
                    param_overrides={"amount": "damage"},
                ),
            )
        ),
        AbilityCooldown(),
    )
