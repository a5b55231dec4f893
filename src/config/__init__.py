"""
Configuration module for the outfit recommender.

Usage:
    from config import get_settings

    settings = get_settings()
    catalog = settings.catalog_path
"""

from config.settings import MAX_EPSILON, Settings, get_settings, get_settings_for_testing

__all__ = ["MAX_EPSILON", "Settings", "get_settings", "get_settings_for_testing"]
