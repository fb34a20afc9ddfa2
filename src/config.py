import os
from dotenv import load_dotenv

load_dotenv()


def _env_float(name: str, default: float) -> float:
    try:
        return float(os.getenv(name, default))
    except (TypeError, ValueError):
        return default


def _env_int(name: str, default: int) -> int:
    try:
        return int(os.getenv(name, default))
    except (TypeError, ValueError):
        return default


def _env_flag(name: str, default: str = "1") -> bool:
    return str(os.getenv(name, default)).strip().lower() in {"1", "true", "yes"}


# OpenAI Configuration
OPENAI_API_KEY = os.getenv("OPENAI_API_KEY")
MODEL_NAME = os.getenv("MODEL_NAME", "gpt-4o-search-preview")
WEB_SEARCH_ENABLED = _env_flag("WEB_SEARCH_ENABLED")

# Data Dragon
DDRAGON_BASE_URL = os.getenv("DDRAGON_BASE_URL", "https://ddragon.leagueoflegends.com").rstrip("/")
DDRAGON_LOCALE = os.getenv("DDRAGON_LOCALE", "en_US")
DDRAGON_FALLBACK_VERSION = "14.1.1"

# HTTP tuning
HTTP_TIMEOUT_S = _env_float("HTTP_TIMEOUT_S", 10.0)
HTTP_RETRIES = _env_int("HTTP_RETRIES", 2)
HTTP_BACKOFF_S = _env_float("HTTP_BACKOFF_S", 0.2)

# Shown for characters that are not in the catalog
PLACEHOLDER_AVATAR_URL = "https://ui-avatars.com/api/?name={name}&background=0D8ABC&color=fff"

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
