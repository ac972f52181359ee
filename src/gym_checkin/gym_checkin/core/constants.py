"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

CHECK_IN_HOLD_SECONDS = 2
RESET_HOLD_SECONDS = 5

DEFAULT_MASTER_PASSCODE = "cheer123"

DEFAULT_TEAMS = ("Sparkle Squad", "Power Pumas", "Victory Vipers", "Cheer Comets")
DEFAULT_CLASSES = ("Tumble Basics", "Jump & Stunt Drills", "Flexibility Fusion", "Routine Polish")

ALL = "All"
DATETIME_LOCAL_FORMAT = "%Y-%m-%dT%H:%M"
