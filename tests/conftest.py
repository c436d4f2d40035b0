import os
import sys

import pytest

# Add the project root to the path so imports work
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from cms_sanitizer.config import get_log_level, get_max_depth
from cms_sanitizer.security.sanitizer import HTMLSanitizer, get_default_sanitizer


@pytest.fixture(autouse=True)
def reset_cached_config():
    """Clear memoised configuration so each test sees its own environment."""
    get_max_depth.cache_clear()
    get_log_level.cache_clear()
    get_default_sanitizer.cache_clear()
    yield
    get_max_depth.cache_clear()
    get_log_level.cache_clear()
    get_default_sanitizer.cache_clear()


@pytest.fixture
def sanitizer():
    """Create a sanitizer with the default depth limit."""
    return HTMLSanitizer(max_depth=256)
