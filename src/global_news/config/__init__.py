"""Configuration module for Global News."""

from global_news.config.factory import create_controller, create_from_config, create_source
from global_news.config.loader import get_default_config_path, load_config
from global_news.config.models import (
    ControllerConfig,
    DisplayConfig,
    GlobalNewsConfig,
    LoggingConfig,
    NewsAPISourceConfig,
    SourceConfig,
)

__all__ = [
    "ControllerConfig",
    "DisplayConfig",
    "GlobalNewsConfig",
    "LoggingConfig",
    "NewsAPISourceConfig",
    "SourceConfig",
    "create_controller",
    "create_from_config",
    "create_source",
    "get_default_config_path",
    "load_config",
]
