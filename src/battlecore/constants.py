MAX_MANA = 10
MAX_PARTY_SIZE = 3

# Default party used when no roster save exists.
DEFAULT_ROSTER = ("apprentice",)

# Logical hotkeys. Number keys are 1-indexed on the keyboard and map onto the
# 0-indexed flattened ability list (roster order, then per-hero order).
ABILITY_HOTKEYS = {str(n): n - 1 for n in range(1, 10)}
CANCEL_KEYS = frozenset({"escape", "esc"})

# Mouse button ids as reported by the presentation layer (1 = left, 4 = right).
MOUSE_BUTTON_PRIMARY = 1
MOUSE_BUTTON_SECONDARY = 4

# Base damage per poker hand rank (1 = High Card .. 10 = Royal Flush).
HAND_DAMAGE_TABLE = {
    1: 3,
    2: 20,
    3: 35,
    4: 55,
    5: 75,
    6: 90,
    7: 125,
    8: 160,
    9: 250,
    10: 500,
}
FALLBACK_HAND_DAMAGE = 5

# Card value bonus weights applied on top of the table.
PRIMARY_CARD_BONUS = 0.75
KICKER_CARD_BONUS = 0.25
