"""Core configuration and factory components."""

from figscript.core.config import Settings, get_settings
from figscript.core.factory import ComponentFactory, get_factory

__all__ = [
    "Settings",
    "get_settings",
    "ComponentFactory",
    "get_factory",
]
