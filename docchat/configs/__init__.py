"""
Typed settings loaded from the environment and .env, one class per concern.
"""

from docchat.configs.settings import Settings, get_settings

__all__ = ["Settings", "get_settings"]
