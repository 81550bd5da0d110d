"""Configuration for keynav."""

from .settings import NavigationSettings, load_settings

__all__ = ["NavigationSettings", "load_settings"]
