from dataclasses import dataclass


@dataclass
class Hero:
    """Identifies a party hero with metadata for display."""
    slug: str
    name: str
    hero_type: str = "damage"  # 'damage', 'support', 'hybrid'
    description: str = ""
