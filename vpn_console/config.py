"""Configuration management."""

import os


# Bot Configuration
BOT_TOKEN = os.getenv("BOT_TOKEN", "")
BOT_ADMINS = os.getenv("BOT_ADMINS", "")
LOG_LEVEL = os.getenv("LOG_LEVEL", "info").lower()

# Panel Configuration
PANEL_HOST = os.getenv("PANEL_HOST", "wg-panel")
PANEL_PORT = os.getenv("PANEL_PORT", "8080")
PANEL_USERNAME = os.getenv("PANEL_USERNAME", "")
PANEL_PASSWORD = os.getenv("PANEL_PASSWORD", "")
PANEL_TOTP = os.getenv("PANEL_TOTP", "")

# Tuning
STATS_POLL_INTERVAL = float(os.getenv("STATS_POLL_INTERVAL", "10"))
REQUEST_TIMEOUT = float(os.getenv("REQUEST_TIMEOUT", "10"))

# Derived Configuration
PANEL_URL = os.getenv("PANEL_URL", f"http://{PANEL_HOST}:{PANEL_PORT}")


def admin_ids(raw: str = None) -> list[int]:
    """Parse comma separated Telegram user ids."""
    if raw is None:
        raw = os.getenv("BOT_ADMINS", BOT_ADMINS)
    return [
        int(uid.strip())
        for uid in raw.split(",")
        if uid.strip()
    ]
