"""Factory functions to create components from configuration."""

from pathlib import Path

from global_news.config.models import GlobalNewsConfig, NewsAPISourceConfig, SourceConfig
from global_news.controller import NewsFetchController
from global_news.run_logger import RunLogger
from global_news.search.base import NewsSource
from global_news.search.newsapi import NewsAPISource


def create_source(config: SourceConfig, *, api_key: str | None = None) -> NewsSource:
    """Create a news source from config."""
    if isinstance(config, NewsAPISourceConfig):
        return NewsAPISource(
            api_key=api_key,
            api_key_env=config.api_key_env,
            base_url=config.base_url,
            timeout=config.timeout,
        )
    msg = f"Unknown source config type: {type(config)}"
    raise ValueError(msg)


def create_controller(
    config: GlobalNewsConfig,
    *,
    source: NewsSource | None = None,
    country: str | None = None,
    run_logger: RunLogger | None = None,
) -> NewsFetchController:
    """Create a fetch controller, building the source from config unless given."""
    return NewsFetchController(
        source if source is not None else create_source(config.source),
        country=country or config.controller.country,
        fallback_query=config.controller.fallback_query,
        run_logger=run_logger,
    )


def create_from_config(
    config: GlobalNewsConfig,
    *,
    country_override: str | None = None,
    log_override: bool | None = None,
    log_dir_override: str | None = None,
) -> tuple[NewsFetchController, RunLogger | None]:
    """Create a ready-to-mount controller from root config.

    Args:
        config: Root configuration.
        country_override: Initial country instead of the configured one.
        log_override: Override the config's logging.enabled setting.
        log_dir_override: Override the config's logging.log_dir setting.

    Returns:
        Tuple of (controller, run_logger).
        run_logger is None if logging is disabled.
    """
    log_enabled = log_override if log_override is not None else config.logging.enabled
    log_dir = Path(log_dir_override if log_dir_override is not None else config.logging.log_dir)

    run_logger: RunLogger | None = None
    if log_enabled:
        run_logger = RunLogger(log_dir=log_dir, enabled=True)

    controller = create_controller(config, country=country_override, run_logger=run_logger)
    return (controller, run_logger)
