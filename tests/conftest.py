"""Root pytest configuration.

Test Structure:
    tests/
    ├── nexar/                 # Client library tests
    │   ├── unit/              # Fast, isolated tests (in-memory fakes, respx)
    │   └── integration/       # Several layers wired together over respx
    ├── nexar_config/          # Settings tests
    └── shared/                # Shared fixtures and utilities
"""

from pathlib import Path

import pytest
from dotenv import load_dotenv

from nexar_config import clear_settings_cache

PROJECT_ROOT = Path(__file__).resolve().parents[1]

# Load .env.dev for tests (same as local development)
CONFIG_DIR = PROJECT_ROOT / "config"
if (CONFIG_DIR / ".env.dev").exists():
    load_dotenv(CONFIG_DIR / ".env.dev")
elif (CONFIG_DIR / ".env").exists():
    load_dotenv(CONFIG_DIR / ".env")


@pytest.fixture(autouse=True)
def _fresh_settings():
    """Never leak cached settings between tests."""
    clear_settings_cache()
    yield
    clear_settings_cache()
