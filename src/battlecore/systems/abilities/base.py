from __future__ import annotations

from concurrent.futures import Future
from dataclasses import dataclass, field
from typing import Any, Protocol

from esper import World

from battlecore.components.ability import Ability
from battlecore.components.ability_effect import AbilityEffectSpec, AbilityEffects
from battlecore.components.battle_context import BattleContext
from battlecore.components.pending_ability_target import PendingAbilityTarget
from battlecore.events.bus import (
    EventBus,
    EVENT_ANIMATION_START,
    EVENT_HEALTH_DAMAGE,
    EVENT_HEALTH_HEAL,
)

ABILITY_EFFECT_ANIMATION = "ability_effect"


@dataclass(slots=True)
class AbilityContext:
    """Execution context shared by ability resolvers."""

    world: World
    event_bus: EventBus
    ability_entity: int
    ability: Ability
    pending: PendingAbilityTarget
    owner_entity: int | None
    active_hero: int | None
    battle: BattleContext
    cast_id: int
    scratchpad: dict[str, Any] = field(default_factory=dict)


class AbilityResolver(Protocol):
    """Interface implemented by concrete ability resolvers.

    ``resolve`` returns None when the effect finished synchronously, or a
    Future that completes once presentation has played the effect out.
    """

    name: str

    def resolve(self, ctx: AbilityContext) -> Future | None:
        ...


class EffectDrivenAbilityResolver:
    """Default resolver for abilities defined via AbilityEffects.

    Supported effect slugs: ``damage`` and ``heal``. When the ability's params
    set ``animated``, an animation request is emitted and a Future is handed
    back for the presentation layer to complete.
    """

    name = "effect_driven"

    def resolve(self, ctx: AbilityContext) -> Future | None:
        affected = self._apply_declared_effects(ctx)
        ctx.scratchpad["affected"] = affected
        if not ctx.ability.params.get("animated"):
            return None
        handle: Future = Future()
        handle.set_running_or_notify_cancel()
        ctx.event_bus.emit(
            EVENT_ANIMATION_START,
            kind=ABILITY_EFFECT_ANIMATION,
            items=list(affected),
            meta={
                "cast_id": ctx.cast_id,
                "ability_entity": ctx.ability_entity,
                "ability_name": ctx.ability.name,
                "handle": handle,
            },
        )
        return handle

    def _apply_declared_effects(self, ctx: AbilityContext) -> list[int]:
        affected: list[int] = []
        for spec in self._collect_effect_specs(ctx):
            target = self._select_effect_target(ctx, spec)
            if target is None:
                continue
            metadata = self._build_effect_metadata(ctx, spec)
            event_name = EVENT_HEALTH_HEAL if spec.slug == "heal" else EVENT_HEALTH_DAMAGE
            ctx.event_bus.emit(
                event_name,
                source_owner=metadata.get("source_owner"),
                target_entity=target,
                amount=int(metadata.get("amount", 0)),
                reason=metadata.get("reason", spec.slug),
            )
            if target not in affected:
                affected.append(target)
        return affected

    def _collect_effect_specs(self, ctx: AbilityContext) -> tuple[AbilityEffectSpec, ...]:
        try:
            component = ctx.world.component_for_entity(ctx.ability_entity, AbilityEffects)
        except KeyError:
            return ()
        return component.effects

    def _select_effect_target(self, ctx: AbilityContext, spec: AbilityEffectSpec) -> int | None:
        match spec.target:
            case "pending_target":
                return ctx.pending.target_entity
            case "active_hero":
                return ctx.active_hero
            case "owner":
                return ctx.owner_entity
            case _:
                return None

    def _build_effect_metadata(self, ctx: AbilityContext, spec: AbilityEffectSpec) -> dict[str, Any]:
        metadata = dict(spec.metadata)
        params = ctx.ability.params if isinstance(ctx.ability.params, dict) else {}
        for key, param_key in spec.param_overrides.items():
            if param_key in params:
                metadata[key] = params[param_key]
        if ctx.owner_entity is not None:
            metadata.setdefault("source_owner", ctx.owner_entity)
        metadata.setdefault("reason", ctx.ability.name)
        return metadata
