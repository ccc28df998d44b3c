"""Configuration package for the interview service."""
from .registry import COMPLETION_KEY, bind_model, get_model, is_bound
from .routes import LlmRoute, route_from_settings
from .settings import Settings, settings

__all__ = [
    "COMPLETION_KEY",
    "bind_model",
    "get_model",
    "is_bound",
    "LlmRoute",
    "route_from_settings",
    "Settings",
    "settings",
]
