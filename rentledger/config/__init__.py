"""Configuration package."""

from rentledger.config.settings import Settings, settings

__all__ = ["Settings", "settings"]
