from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Iterable, List, Sequence

from esper import World

from battlecore.components.ability_list_owner import AbilityListOwner
from battlecore.components.hero import Hero
from battlecore.components.hero_roster import HeroRoster
from battlecore.constants import DEFAULT_ROSTER
from battlecore.events.bus import (
    EventBus,
    EVENT_ACTIVE_HERO_CHANGED,
    EVENT_ROSTER_CHANGED,
)
from battlecore.factories.hero_catalog import create_hero_by_name
from battlecore.utils.battle_state import get_or_create_battle_context, get_or_create_roster

logger = logging.getLogger(__name__)


class RosterSystem:
    """Owns party composition: up to three distinct heroes and the active slot.

    Membership is frozen while a battle is active; switching the active hero
    is allowed at any time. The composition persists as
    ``{"heroes": [slug, ...], "active_index": int}``.
    """

    def __init__(
        self,
        world: World,
        event_bus: EventBus,
        *,
        save_path: Path | None = None,
    ) -> None:
        self.world = world
        self.event_bus = event_bus
        self._save_path = Path(save_path) if save_path is not None else None
        get_or_create_roster(world)

    @property
    def roster(self) -> HeroRoster:
        return get_or_create_roster(self.world)

    def slugs(self) -> List[str]:
        return [self._slug(hero_entity) for hero_entity in self.roster.hero_entities]

    def hero_entity_for(self, slug: str) -> int | None:
        for hero_entity in self.roster.hero_entities:
            if self._slug(hero_entity) == slug:
                return hero_entity
        return None

    def add_hero(self, slug: str) -> bool:
        if self._battle_active("add hero"):
            return False
        roster = self.roster
        if self.hero_entity_for(slug) is not None:
            raise ValueError(f"Hero '{slug}' is already in the party")
        if not roster.has_space():
            raise ValueError(f"Party is full ({roster.max_size} heroes)")
        hero_entity = create_hero_by_name(self.world, slug)
        roster.hero_entities.append(hero_entity)
        logger.debug("Added hero %s as entity %s", slug, hero_entity)
        self._emit_roster_changed()
        return True

    def remove_hero(self, slug: str) -> bool:
        if self._battle_active("remove hero"):
            return False
        hero_entity = self.hero_entity_for(slug)
        if hero_entity is None:
            return False
        roster = self.roster
        active_before = roster.active_hero()
        roster.hero_entities.remove(hero_entity)
        self._delete_hero(hero_entity)
        if active_before == hero_entity or roster.active_index >= len(roster.hero_entities):
            roster.active_index = 0
        elif active_before is not None:
            roster.active_index = roster.hero_entities.index(active_before)
        self._emit_roster_changed()
        if active_before != roster.active_hero():
            self._emit_active_changed()
        return True

    def reorder(self, slugs: Sequence[str]) -> bool:
        if self._battle_active("reorder heroes"):
            return False
        if sorted(slugs) != sorted(self.slugs()):
            raise ValueError("Reorder must list every party hero exactly once")
        roster = self.roster
        active_before = roster.active_hero()
        roster.hero_entities[:] = [self.hero_entity_for(slug) for slug in slugs]
        if active_before is not None:
            roster.active_index = roster.hero_entities.index(active_before)
        self._emit_roster_changed()
        return True

    def set_active(self, index: int) -> bool:
        roster = self.roster
        if not 0 <= index < len(roster.hero_entities):
            return False
        if roster.active_index == index:
            return False
        roster.active_index = index
        self._emit_active_changed()
        return True

    def clear(self) -> bool:
        if self._battle_active("clear party"):
            return False
        roster = self.roster
        for hero_entity in list(roster.hero_entities):
            self._delete_hero(hero_entity)
        roster.hero_entities.clear()
        roster.active_index = 0
        self._emit_roster_changed()
        return True

    def load(self, path: Path | None = None) -> List[str]:
        """Rebuild the party from disk; a missing or corrupt file yields the default party."""
        target = Path(path) if path is not None else self._save_path
        slugs: Iterable[str] = DEFAULT_ROSTER
        active_index = 0
        if target is not None:
            try:
                with target.open("r", encoding="utf-8") as handle:
                    payload = json.load(handle)
            except FileNotFoundError:
                logger.info("No roster save at %s; using default party", target)
            except json.JSONDecodeError:
                logger.warning("Roster save at %s is corrupt; using default party", target)
            else:
                if isinstance(payload, dict) and isinstance(payload.get("heroes"), list):
                    slugs = [slug for slug in payload["heroes"] if isinstance(slug, str)]
                    try:
                        active_index = int(payload.get("active_index", 0))
                    except (TypeError, ValueError):
                        active_index = 0
        self._rebuild(slugs, active_index)
        return self.slugs()

    def save(self, path: Path | None = None) -> None:
        target = Path(path) if path is not None else self._save_path
        if target is None:
            raise ValueError("No roster save path configured")
        target.parent.mkdir(parents=True, exist_ok=True)
        with target.open("w", encoding="utf-8") as handle:
            json.dump(
                {"heroes": self.slugs(), "active_index": self.roster.active_index},
                handle,
                indent=2,
            )

    def _rebuild(self, slugs: Iterable[str], active_index: int) -> None:
        if self._battle_active("load party"):
            return
        roster = self.roster
        for hero_entity in list(roster.hero_entities):
            self._delete_hero(hero_entity)
        roster.hero_entities.clear()
        for slug in slugs:
            if len(roster.hero_entities) >= roster.max_size:
                logger.warning("Dropping hero %s from save: party is full", slug)
                break
            if self.hero_entity_for(slug) is not None:
                continue
            try:
                roster.hero_entities.append(create_hero_by_name(self.world, slug))
            except ValueError:
                logger.warning("Skipping unknown hero %r in roster save", slug)
        if not 0 <= active_index < len(roster.hero_entities):
            active_index = 0
        roster.active_index = active_index
        self._emit_roster_changed()
        self._emit_active_changed()

    def _delete_hero(self, hero_entity: int) -> None:
        try:
            owner = self.world.component_for_entity(hero_entity, AbilityListOwner)
        except KeyError:
            owner = None
        if owner is not None:
            for ability_entity in owner.ability_entities:
                self.world.delete_entity(ability_entity, immediate=True)
        self.world.delete_entity(hero_entity, immediate=True)

    def _slug(self, hero_entity: int) -> str:
        try:
            return self.world.component_for_entity(hero_entity, Hero).slug
        except KeyError:
            return ""

    def _battle_active(self, action: str) -> bool:
        if get_or_create_battle_context(self.world).active:
            logger.warning("Cannot %s while a battle is in progress", action)
            return True
        return False

    def _emit_roster_changed(self) -> None:
        roster = self.roster
        self.event_bus.emit(
            EVENT_ROSTER_CHANGED,
            hero_entities=list(roster.hero_entities),
            active_index=roster.active_index,
        )

    def _emit_active_changed(self) -> None:
        roster = self.roster
        self.event_bus.emit(
            EVENT_ACTIVE_HERO_CHANGED,
            hero_entity=roster.active_hero(),
            active_index=roster.active_index,
        )
