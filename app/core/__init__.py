"""Core: config, constants, and application bootstrap.

Single place for settings, shared constants, lifespan and error mapping.
"""

from app.core.config import Settings, get_settings

__all__ = ["Settings", "get_settings"]
