"""Configuration module for the user pool client."""
from .settings import PoolSettings, build_pool, load_settings

__all__ = ["PoolSettings", "build_pool", "load_settings"]
