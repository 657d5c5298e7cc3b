"""
Giveaway Bot Configuration
All configurable parameters for the giveaway system
"""

import os

# Command surface
COMMAND_PREFIX = os.getenv("COMMAND_PREFIX", ".")
JOIN_BUTTON_CUSTOM_ID = "participate_giveaway"

# Region used for end-time parsing (fixed offset, no DST)
# Nigeria / West Africa Time is UTC+1 all year round
REGION_UTC_OFFSET_HOURS = float(os.getenv("REGION_UTC_OFFSET_HOURS", "1"))
REGION_LABEL = os.getenv("REGION_LABEL", "WAT")

# Expiry sweeper interval (in seconds)
SWEEP_INTERVAL_SECONDS = int(os.getenv("SWEEP_INTERVAL_SECONDS", "60"))

# Multi-step item creation prompt
ITEM_SESSION_TIMEOUT_MINUTES = int(os.getenv("ITEM_SESSION_TIMEOUT_MINUTES", "10"))
SKIP_KEYWORD = "skip"
CANCEL_KEYWORD = "cancel"

# Liveness endpoint
HEALTH_PORT = int(os.getenv("PORT", "3000"))

# Embed colors
ACTIVE_COLOR = 0x00AE86
ENDED_COLOR = 0xFF0000
CANCELLED_COLOR = 0x808080


def get_admin_ids():
    """Return the set of admin user IDs from BOT_ADMIN_IDS (comma separated)"""
    raw = os.getenv("BOT_ADMIN_IDS", "")
    return {part.strip() for part in raw.split(",") if part.strip()}


def is_admin(user_id) -> bool:
    """Check if a user ID is on the admin allow-list"""
    return str(user_id) in get_admin_ids()


def get_database_url():
    """
    Resolve the SQLAlchemy database URL

    Falls back to a local SQLite file when DATABASE_URL is not set and
    rewrites Heroku-style postgres:// URLs for SQLAlchemy.
    """
    database_url = os.getenv("DATABASE_URL", "")
    if not database_url:
        database_url = "sqlite:///giveaways.db"
    if database_url.startswith("postgres://"):
        database_url = database_url.replace("postgres://", "postgresql://", 1)
    return database_url
