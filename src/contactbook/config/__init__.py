"""Configuration module."""

from contactbook.config.manager import ConfigManager

__all__ = ["ConfigManager"]
