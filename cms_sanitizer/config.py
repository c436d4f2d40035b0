from functools import lru_cache
import os

from dotenv import load_dotenv

load_dotenv()

DEFAULT_MAX_DEPTH = 256


@lru_cache()
def get_max_depth() -> int:
    """Get the deepest element nesting the sanitizer renders as markup."""
    raw_value = os.getenv("SANITIZER_MAX_DEPTH", str(DEFAULT_MAX_DEPTH))

    try:
        max_depth = int(raw_value)
    except ValueError:
        raise ValueError(
            f"Invalid SANITIZER_MAX_DEPTH: {raw_value}. Must be an integer"
        ) from None

    if max_depth < 1:
        raise ValueError(f"Invalid SANITIZER_MAX_DEPTH: {raw_value}. Must be at least 1")

    return max_depth


@lru_cache()
def get_log_level() -> str:
    """Get the log level name for the package logger."""
    return os.getenv("LOG_LEVEL", "INFO").upper()
