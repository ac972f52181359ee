import os

from config import env_list

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "gym_checkin"),
}

# Shared coach passcode for approvals, edits and log corrections.
MASTER_PASSCODE = os.getenv("MASTER_PASSCODE", "cheer123")

TEAMS = env_list("TEAMS", ("Sparkle Squad", "Power Pumas", "Victory Vipers", "Cheer Comets"))
CLASSES = env_list("CLASSES", ("Tumble Basics", "Jump & Stunt Drills", "Flexibility Fusion", "Routine Polish"))

CHECK_IN_HOLD_SECONDS = int(os.getenv("CHECK_IN_HOLD_SECONDS", "2"))
RESET_HOLD_SECONDS = int(os.getenv("RESET_HOLD_SECONDS", "5"))

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
# Optional: also seed the demo roster on startup
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))
