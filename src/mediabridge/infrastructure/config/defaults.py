"""Hardcoded default configuration values."""

from __future__ import annotations

from typing import Any

DEFAULT_CONFIG: dict[str, Any] = {
    "app_name": "mediabridge",
    "environment": "dev",
    "extensions": {
        "extension_dir": "./extensions",
    },
    "http": {
        "timeout_seconds": 15.0,
        "follow_redirects": True,
    },
    "playwright": {
        "headless": True,
        "timeout_ms": 30_000,
    },
    "logging": {
        "level": "INFO",
        "format": None,  # Derived from environment in schema.py
    },
    "extractors": {
        "timeout_seconds": 15.0,
    },
}
