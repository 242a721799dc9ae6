"""Core configuration and shared infrastructure."""

from chargen.core.config import Settings, get_settings
from chargen.core.limiter import limiter

__all__ = [
    "Settings",
    "get_settings",
    "limiter",
]
