"""Core configuration and factory components."""

from case_insight.core.config import Settings, get_settings
from case_insight.core.factory import ComponentFactory, get_factory

__all__ = [
    "Settings",
    "get_settings",
    "ComponentFactory",
    "get_factory",
]
