"""
VSL Player service configuration.
"""
import os
from pathlib import Path

# Service settings
SERVICE_NAME = "vsl-player"
SERVICE_VERSION = "1.0.0"
SERVICE_PORT = int(os.getenv("PORT", 6010))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# Paths
BASE_DIR = Path(__file__).parent.parent

# Persistence
DATABASE_URL = os.getenv("DATABASE_URL", f"sqlite:///{BASE_DIR / 'vsl_player.db'}")

# Sessions (simulated local login)
SESSION_TTL_SECONDS = int(os.getenv("SESSION_TTL_SECONDS", 12 * 60 * 60))

# Player defaults
DEFAULT_ACCENT_COLOR = os.getenv("DEFAULT_ACCENT_COLOR", "#2563eb")
DEFAULT_LOCALE = os.getenv("DEFAULT_LOCALE", "pt")
SUPPORTED_LOCALES = ["pt", "en"]
DEFAULT_VIDEO_URL = "https://commondatastorage.googleapis.com/gtv-videos-bucket/sample/BigBuckBunny.mp4"
MIN_RETENTION_EXPONENT = 0.1
MAX_RETENTION_EXPONENT = 1.0
