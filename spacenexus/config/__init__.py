"""Configuration management for the Space Nexus blog aggregator."""

from .loader import Config, load_config, load_sources, save_config, save_sources
from .models import ConfigModel, FetchConfig, LoggingConfig, SourceConfig
from .sources import default_sources

__all__ = [
    "Config",
    "ConfigModel",
    "FetchConfig",
    "LoggingConfig",
    "SourceConfig",
    "default_sources",
    "load_config",
    "load_sources",
    "save_config",
    "save_sources",
]
