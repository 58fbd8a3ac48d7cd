from __future__ import annotations

from typing import Dict, Iterable

from battlecore.systems.abilities.base import AbilityResolver

_registry: Dict[str, AbilityResolver] = {}


def register_resolver(resolver: AbilityResolver) -> None:
    """Register a resolver for the ability whose name matches ``resolver.name``."""

    _registry[resolver.name] = resolver


def register_resolvers(resolvers: Iterable[AbilityResolver]) -> None:
    for resolver in resolvers:
        register_resolver(resolver)


def create_resolver_registry(overrides: Dict[str, AbilityResolver] | None = None) -> Dict[str, AbilityResolver]:
    """Registered resolvers with per-core overrides on top.

    Abilities without an entry fall back to the effect-driven resolver.
    """

    combined: Dict[str, AbilityResolver] = dict(_registry)
    if overrides:
        combined.update(overrides)
    return combined


def clear_registered_resolvers() -> None:
    _registry.clear()


__all__ = [
    "clear_registered_resolvers",
    "create_resolver_registry",
    "register_resolver",
    "register_resolvers",
]
