"""Configuration for the Megaport API client."""

from .environments import EnvironmentConfig, EnvironmentName
from .settings import Settings

__all__ = ["EnvironmentConfig", "EnvironmentName", "Settings"]
