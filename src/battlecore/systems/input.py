import logging

from battlecore.constants import (
    ABILITY_HOTKEYS,
    CANCEL_KEYS,
    MOUSE_BUTTON_SECONDARY,
)
from battlecore.events.bus import (
    EventBus,
    EVENT_CANCEL_GESTURE,
    EVENT_HOTKEY_PRESSED,
    EVENT_INPUT_REJECTED,
    EVENT_MOUSE_PRESS,
    EVENT_TARGET_CLICK,
)

logger = logging.getLogger(__name__)


class InputSystem:
    """Maps logical input events onto targeting and target selection.

    Presentation translates raw device input into these events; pixel hit
    testing never reaches the core.
      - "1".."9": cast the ability at that flattened index.
      - "escape"/"esc", secondary mouse button, cancel gesture: cancel targeting.
      - target click: completes a pending cast, otherwise picks the current target.
    """

    def __init__(self, event_bus: EventBus, targeting, targets):
        self.event_bus = event_bus
        self.targeting = targeting
        self.targets = targets
        self.event_bus.subscribe(EVENT_HOTKEY_PRESSED, self.on_hotkey_pressed)
        self.event_bus.subscribe(EVENT_TARGET_CLICK, self.on_target_click)
        self.event_bus.subscribe(EVENT_CANCEL_GESTURE, self.on_cancel_gesture)
        self.event_bus.subscribe(EVENT_MOUSE_PRESS, self.on_mouse_press)

    def on_hotkey_pressed(self, sender, **kwargs):
        key = kwargs.get('key')
        normalized = key.strip().lower() if isinstance(key, str) else None
        if normalized in CANCEL_KEYS:
            self.targeting.cancel(reason="escape")
            return
        index = ABILITY_HOTKEYS.get(normalized)
        if index is None:
            logger.warning("Unknown hotkey %r", key)
            self.event_bus.emit(
                EVENT_INPUT_REJECTED,
                kind="hotkey",
                key=key,
                reason="unknown_hotkey",
            )
            return
        self.targeting.cast_by_index(index)

    def on_target_click(self, sender, **kwargs):
        target_entity = kwargs.get('target_entity')
        if self.targeting.choose_target(target_entity):
            return
        # Not consumed by a pending cast; treat as a plain target pick.
        if target_entity is not None:
            self.targets.set_current_target(target_entity)

    def on_cancel_gesture(self, sender, **kwargs):
        self.targeting.cancel(reason=kwargs.get('source') or "cancel")

    def on_mouse_press(self, sender, **kwargs):
        if kwargs.get('button') != MOUSE_BUTTON_SECONDARY:
            return
        self.targeting.cancel(reason="right_click")
