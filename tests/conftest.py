"""Pytest configuration shared across test modules."""

import os

os.environ.pop("DIGESTER_CONFIG", None)
os.environ.setdefault("DIGESTER_LOG_LEVEL", "WARNING")
