"""Shared test configuration"""

import os

# Settings are read at import time; point them at SQLite before any app module loads
os.environ.setdefault("DATABASE_URL_OVERRIDE", "sqlite://")
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")
