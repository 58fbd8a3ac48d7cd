from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Sequence

from esper import World

from battlecore.components.enemy import Enemy
from battlecore.components.health import Health


@dataclass(frozen=True, slots=True)
class EnemyTemplate:
    slug: str
    name: str
    max_hp: int


ENEMY_TEMPLATES: Dict[str, EnemyTemplate] = {
    "goblin": EnemyTemplate("goblin", "Goblin", 50),
    "orc": EnemyTemplate("orc", "Orc", 80),
    "troll": EnemyTemplate("troll", "Troll", 120),
}


def create_enemy(world: World, slug: str, *, max_hp: int | None = None) -> int:
    try:
        template = ENEMY_TEMPLATES[slug]
    except KeyError as exc:
        raise ValueError(f"Unknown enemy '{slug}'") from exc
    hp = template.max_hp if max_hp is None else max_hp
    return world.create_entity(
        Enemy(slug=template.slug, name=template.name),
        Health(current=hp, max_hp=hp),
    )


def create_enemies(world: World, slugs: Sequence[str]) -> List[int]:
    return [create_enemy(world, slug) for slug in slugs]
