from blinker import Signal
from typing import Dict

class EventBus:
    """Simple event bus leveraging blinker Signal objects.

    Receivers are invoked synchronously and in the order they subscribed, so
    presentation handlers always observe the post-mutation state produced by
    the systems that subscribed before them.
    """
    def __init__(self):
        self._signals: Dict[str, Signal] = {}

    def subscribe(self, name: str, fn):
        sig = self._signals.setdefault(name, Signal(name))
        # Use weak=False to retain strong reference to bound methods so systems not kept in a variable still receive events.
        sig.connect(fn, weak=False)

    def unsubscribe(self, name: str, fn):
        sig = self._signals.get(name)
        if sig:
            sig.disconnect(fn)

    def emit(self, name: str, **payload):
        sig = self._signals.get(name)
        if not sig or not sig.receivers:
            return
        # Signal.receivers preserves connection order; blinker's own send() does not.
        for receiver in list(sig.receivers.values()):
            receiver(self, **payload)


# ============================================================================
# INPUT & INTERACTION
# ============================================================================
EVENT_MOUSE_PRESS = "mouse_press"                  # payload: x, y, button
EVENT_HOTKEY_PRESSED = "hotkey_pressed"            # payload: key=str
EVENT_TARGET_CLICK = "target_click"                # payload: target_entity=int|None
EVENT_CANCEL_GESTURE = "cancel_gesture"            # payload: source=str
EVENT_INPUT_REJECTED = "input_rejected"            # payload: kind=str, key=Any, reason=str


# ============================================================================
# CARDS & HANDS
# ============================================================================
EVENT_HAND_PLAY_REQUEST = "hand_play_request"      # payload: selected_cards=list[Card]
EVENT_HAND_PLAYED = "hand_played"                  # payload: selected_cards=list[Card], hand=HandDescription|None, target_entity=int|None, damage=int


# ============================================================================
# RESOURCES & MANA
# ============================================================================
EVENT_MANA_CHANGED = "mana_changed"                # payload: counts=dict[Suit,int], delta=dict[Suit,int], source=str
EVENT_MANA_SPEND_REQUEST = "mana_spend_request"    # payload: owner_entity=int, cost=dict[Suit,int], ability_entity=int|None
EVENT_MANA_SPENT = "mana_spent"                    # payload: owner_entity=int, cost=dict[Suit,int], ability_entity=int|None
EVENT_MANA_INSUFFICIENT = "mana_insufficient"      # payload: owner_entity=int, cost=dict[Suit,int], missing=dict[Suit,int], ability_entity=int|None


# ============================================================================
# ABILITIES
# ============================================================================
EVENT_ABILITY_ACTIVATE_REQUEST = "ability_activate_request"          # payload: ability_entity=int, owner_entity=int
EVENT_ABILITY_CAST_REJECTED = "ability_cast_rejected"                # payload: ability_entity=int, owner_entity=int, reason=str
EVENT_ABILITY_TARGET_MODE = "ability_target_mode"                    # payload: ability_entity=int, owner_entity=int
EVENT_ABILITY_TARGET_SELECTED = "ability_target_selected"            # payload: ability_entity=int, owner_entity=int, target_entity=int
EVENT_ABILITY_TARGET_CANCELLED = "ability_target_cancelled"          # payload: ability_entity=int, owner_entity=int, reason=str
EVENT_TARGETING_MODE_CHANGED = "targeting_mode_changed"              # payload: mode=TargetingMode, ability_entity=int|None, owner_entity=int|None
EVENT_ABILITY_EXECUTE = "ability_execute"                            # payload: ability_entity=int, owner_entity=int|None, pending=PendingAbilityTarget
EVENT_ABILITY_RESOLVED = "ability_resolved"                          # payload: ability_entity=int, owner_entity=int|None, target_entity=int|None, cast_id=int
EVENT_ABILITY_EFFECT_APPLIED = "ability_effect_applied"              # payload: ability_entity=int, affected=list[int]
EVENT_ABILITY_EFFECT_COMPLETED = "ability_effect_completed"          # payload: ability_entity=int, owner_entity=int|None, cast_id=int
EVENT_ABILITY_ELIGIBILITY_CHANGED = "ability_eligibility_changed"    # payload: entries=list[dict]


# ============================================================================
# ANIMATION
# ============================================================================
EVENT_ANIMATION_START = "animation_start"          # payload: kind=str, items=list, meta=dict
EVENT_ANIMATION_COMPLETE = "animation_complete"    # payload: kind=str, items=list, meta=dict


# ============================================================================
# HEROES & DAMAGE COMPOSITION
# ============================================================================
EVENT_ROSTER_CHANGED = "roster_changed"                        # payload: hero_entities=list[int], active_index=int
EVENT_ACTIVE_HERO_CHANGED = "active_hero_changed"              # payload: hero_entity=int|None, active_index=int
EVENT_HERO_PASSIVES_ACTIVATED = "hero_passives_activated"      # payload: hero_entity=int, passives=list[str], multiplier=float
EVENT_DAMAGE_COMPOSED = "damage_composed"                      # payload: composition=DamageComposition, target_entity=int|None


# ============================================================================
# HEALTH & TARGETS
# ============================================================================
EVENT_HEALTH_DAMAGE = "health_damage"                  # payload: source_owner=int|None, target_entity=int, amount=int, reason=str
EVENT_HEALTH_HEAL = "health_heal"                      # payload: source_owner=int|None, target_entity=int, amount=int, reason=str
EVENT_HEALTH_CHANGED = "health_changed"                # payload: entity=int, current=int, max_hp=int, delta=int
EVENT_ENTITY_DEFEATED = "entity_defeated"              # payload: entity=int, reason=str|None, source_owner=int|None
EVENT_CURRENT_TARGET_CHANGED = "current_target_changed"  # payload: previous_target=int|None, target_entity=int|None


# ============================================================================
# TURN SYSTEM
# ============================================================================
EVENT_TURN_START = "turn_start"        # payload: turn_number=int|None
EVENT_TURN_END = "turn_end"            # payload: turn_number=int|None
EVENT_ROUND_START = "round_start"      # payload: round_number=int


# ============================================================================
# BATTLE LIFECYCLE
# ============================================================================
EVENT_BATTLE_START = "battle_start"    # payload: enemies=list[int]
EVENT_BATTLE_END = "battle_end"        # payload: reason=str|None
