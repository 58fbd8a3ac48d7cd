from dataclasses import dataclass


@dataclass
class Enemy:
    """Marks an entity as an enemy that abilities and hands can target."""
    slug: str
    name: str
