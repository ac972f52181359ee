import os

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "gym_checkin_test"),
}

MASTER_PASSCODE = "cheer123"

TEAMS = ("Sparkle Squad", "Power Pumas", "Victory Vipers", "Cheer Comets")
CLASSES = ("Tumble Basics", "Jump & Stunt Drills", "Flexibility Fusion", "Routine Polish")

CHECK_IN_HOLD_SECONDS = 2
RESET_HOLD_SECONDS = 5

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

AUTO_INIT_DB = False
AUTO_SEED_DB = False
