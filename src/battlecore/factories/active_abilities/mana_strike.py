from __future__ import annotations

from esper import World

from battlecore.components.ability import Ability
from battlecore.components.ability_cooldown import AbilityCooldown
from battlecore.components.ability_effect import AbilityEffectSpec, AbilityEffects
from battlecore.components.ability_target import AbilityTarget
from battlecore.components.suit import Suit


def create_ability_mana_strike(world: World) -> int:
    return world.create_entity(
        Ability(
            name="mana_strike",
            kind="active",
            cost={Suit.SPADES: 1, Suit.HEARTS: 1, Suit.DIAMONDS: 1, Suit.CLUBS: 1},
            description="Channel all suit energies to deal 25 damage to an enemy.",
            params={"damage": 25, "animated": True},
            cooldown=0,
        ),
        AbilityTarget(target_type="enemy"),
        AbilityEffects(
            effects=(
                AbilityEffectSpec(
                    slug="damage",
                    target="pending_target",
                    metadata={"amount": 25, "reason": "mana_strike"},
                    param_overrides={"amount": "damage"},
                ),
            )
        ),
        AbilityCooldown(),
    )
