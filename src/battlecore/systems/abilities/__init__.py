from battlecore.systems.abilities.base import (
    AbilityContext,
    AbilityResolver,
    EffectDrivenAbilityResolver,
)
from battlecore.systems.abilities.registry import (
    clear_registered_resolvers,
    create_resolver_registry,
    register_resolver,
    register_resolvers,
)

__all__ = [
    "AbilityContext",
    "AbilityResolver",
    "EffectDrivenAbilityResolver",
    "clear_registered_resolvers",
    "create_resolver_registry",
    "register_resolver",
    "register_resolvers",
]
