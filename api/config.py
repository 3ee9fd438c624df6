"""Application configuration and constants."""
import os
from pathlib import Path


def _parse_int_env(name: str, default: int) -> int:
    """Parse integer from environment variable."""
    raw = os.environ.get(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _parse_bool_env(name: str, default: bool) -> bool:
    """Parse boolean from environment variable ("1", "true", "yes", "on")."""
    raw = os.environ.get(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


# Directories
QUESTIONS_DIR = Path(
    os.environ.get("QUESTIONS_DIR", Path.cwd() / "data" / "questions")
)
QUESTIONS_DIR.mkdir(parents=True, exist_ok=True)

# Sync queue
SYNC_DEBOUNCE_MS = _parse_int_env("SYNC_DEBOUNCE_MS", 1000)
SYNC_MAX_WORKERS = _parse_int_env("SYNC_MAX_WORKERS", 4)

# Markdown
DEFAULT_CODE_LANGUAGE = os.environ.get("DEFAULT_CODE_LANGUAGE", "javascript")
ENABLE_CODE_FORMATTING = _parse_bool_env("ENABLE_CODE_FORMATTING", True)

# Logging
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")
