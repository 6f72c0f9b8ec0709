"""Pydantic configuration models for Global News components."""

from typing import Annotated, Literal

from pydantic import BaseModel, Field, field_validator

from global_news.data import DEFAULT_COUNTRY, Country

# ============================================================
# Source Configs
# ============================================================


class NewsAPISourceConfig(BaseModel):
    """Configuration for NewsAPISource."""

    type: Literal["newsapi"] = "newsapi"
    base_url: str = "https://newsapi.org"
    timeout: float = 30.0
    api_key_env: str = "NEWSAPI_KEY"

    model_config = {"frozen": True}


SourceConfig = Annotated[
    NewsAPISourceConfig,
    Field(discriminator="type"),
]


# ============================================================
# Controller Config
# ============================================================


class ControllerConfig(BaseModel):
    """Initial selection and fallback behaviour of the fetch controller."""

    country: str = DEFAULT_COUNTRY.value
    fallback_query: str = "latest"

    model_config = {"frozen": True}

    @field_validator("country")
    @classmethod
    def country_must_be_known(cls, v: str) -> str:
        return Country(v.lower()).value

    @field_validator("fallback_query")
    @classmethod
    def fallback_must_not_be_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("fallback_query must not be empty")
        return v


# ============================================================
# Display Config
# ============================================================


class DisplayConfig(BaseModel):
    """Text shown by the view."""

    description_placeholder: str = "No description available."
    footer: str = "Global News Aggregator"

    model_config = {"frozen": True}


# ============================================================
# Logging Config
# ============================================================


class LoggingConfig(BaseModel):
    """Configuration for session logging."""

    enabled: bool = False
    log_dir: str = "logs"

    model_config = {"frozen": True}


# ============================================================
# Root Config
# ============================================================


class GlobalNewsConfig(BaseModel):
    """Root configuration for Global News."""

    source: NewsAPISourceConfig = Field(default_factory=NewsAPISourceConfig)
    controller: ControllerConfig = Field(default_factory=ControllerConfig)
    display: DisplayConfig = Field(default_factory=DisplayConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = {"frozen": True}
