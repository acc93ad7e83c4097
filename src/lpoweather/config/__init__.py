"""
Configuration management with typed Pydantic models.

Provides the feed locations and logging settings, loadable from YAML.
"""

from lpoweather.config.loader import load_config
from lpoweather.config.settings import (
    AppConfig,
    FetchConfig,
    LoggingConfig,
    Quantity,
)

__all__ = [
    "AppConfig",
    "FetchConfig",
    "LoggingConfig",
    "Quantity",
    "load_config",
]
