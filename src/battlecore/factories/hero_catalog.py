from __future__ import annotations

from typing import Callable, Dict, List

from esper import World

from battlecore.factories import heroes

_HERO_BUILDERS: Dict[str, Callable[..., int]] = {
    name[len("create_hero_") :]: getattr(heroes, name)
    for name in heroes.__all__
    if name.startswith("create_hero_")
}


def available_hero_slugs() -> List[str]:
    return sorted(_HERO_BUILDERS)


def create_hero_by_name(world: World, slug: str, **overrides) -> int:
    try:
        builder = _HERO_BUILDERS[slug]
    except KeyError as exc:
        raise ValueError(f"Unknown hero '{slug}'") from exc
    return builder(world, **overrides)
