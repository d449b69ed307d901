"""Configuration and constants for the scripture reader."""

import os
from pathlib import Path

from . import __version__


# Base paths
BASE_DIR = Path(__file__).parent.parent
DATA_DIR = Path(os.getenv("SCRIPTURE_READER_DATA_DIR", str(BASE_DIR / "data")))

APP_NAME = "Vida com Propósito"
APP_VERSION = __version__


# Durable store keys
PREFERENCES_KEY = "preferences"
FONT_SIZE_KEY = "fontSize"
LAST_READ_KEY = "lastRead"
FAVORITES_KEY = "favorites"

STORE_KEYS = [PREFERENCES_KEY, FONT_SIZE_KEY, LAST_READ_KEY, FAVORITES_KEY]


# Remote content provider
BIBLE_API_URL = os.getenv("SCRIPTURE_READER_API_URL", "https://bible-api.com")
TRANSLATION = "almeida"
REQUEST_TIMEOUT = 15  # seconds
USER_AGENT = f"ScriptureReader/{APP_VERSION}"


# Navigation tabs, in display order
TABS = ["bible", "planner", "favorites", "settings", "login"]
DEFAULT_TAB = "bible"


# Font size names and their point sizes
FONT_SIZES = {
    "pequena": 15,
    "média": 19,
    "grande": 23,
}
DEFAULT_FONT_SIZE = "média"
