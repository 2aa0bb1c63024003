"""Configuration for tzresolver."""

from .settings import TzResolverSettings, get_settings, reset_settings

__all__ = ["TzResolverSettings", "get_settings", "reset_settings"]
