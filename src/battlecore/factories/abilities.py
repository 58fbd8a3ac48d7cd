from __future__ import annotations

import importlib
import pkgutil
from typing import Callable, Dict, Iterable, List, Sequence, Tuple, cast

from esper import World

from battlecore.components.ability import Ability

ABILITY_FACTORY_PACKAGES: Tuple[str, ...] = (
    "battlecore.factories.active_abilities",
)


def _discover_ability_builders() -> Dict[str, Callable[[World], int]]:
    builders: Dict[str, Callable[[World], int]] = {}
    for package_name in ABILITY_FACTORY_PACKAGES:
        package = importlib.import_module(package_name)
        for module in _iter_modules(package_name, package):
            for attr_name in dir(module):
                if not attr_name.startswith("create_ability_"):
                    continue
                factory = getattr(module, attr_name)
                if not callable(factory):
                    continue
                ability_name = attr_name[len("create_ability_") :]
                builders.setdefault(ability_name, cast(Callable[[World], int], factory))
    return builders


def _iter_modules(package_name: str, package) -> Iterable:
    yield package
    package_path = getattr(package, "__path__", None)
    if not package_path:
        return
    for module_info in pkgutil.iter_modules(package_path):
        if module_info.name.startswith("__"):
            continue
        yield importlib.import_module(f"{package_name}.{module_info.name}")


_ABILITY_BUILDERS: Dict[str, Callable[[World], int]] = _discover_ability_builders()


def available_ability_names() -> List[str]:
    return sorted(_ABILITY_BUILDERS)


def create_ability_by_name(world: World, name: str) -> int:
    try:
        builder = _ABILITY_BUILDERS[name]
    except KeyError as exc:
        raise ValueError(f"Unknown ability '{name}'") from exc
    return builder(world)


def create_abilities(world: World, names: Sequence[str]) -> List[int]:
    """Create abilities in the given order, which becomes the owner's ability order."""
    return [create_ability_by_name(world, name) for name in names]


def ability_names(world: World, ability_entities: Sequence[int]) -> List[str]:
    names: List[str] = []
    for ability_entity in ability_entities:
        try:
            names.append(world.component_for_entity(ability_entity, Ability).name)
        except KeyError:
            continue
    return names
