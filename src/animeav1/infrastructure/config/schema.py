"""Pydantic configuration models with validation."""

from __future__ import annotations

from string import Formatter
from typing import Any, Literal, Optional

from pydantic import (
    AliasChoices,
    AliasPath,
    BaseModel,
    Field,
    field_validator,
    model_validator,
)
from pydantic_settings import BaseSettings, SettingsConfigDict

from animeav1.application.site import (
    DEFAULT_BASE_URL,
    DEFAULT_CDN_URL,
    DEFAULT_EPISODE_TITLE,
    format_episode_title,
)

Environment = Literal["dev", "test", "prod"]
LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR"]
LogFormat = Literal["json", "console"]


def _strip_trailing_slash(value: Any) -> Any:
    if isinstance(value, str):
        return value.rstrip("/")
    return value


class AppConfig(BaseModel):
    """
    Canonical application configuration (validated, final).

    Note:
    - YAML is expected to be sectioned (site/http/logging).
    - Environment variables are handled by EnvOverrides(BaseSettings) to allow strict
      precedence control (defaults < YAML < ENV < CLI) in load.py.
    """

    # General
    app_name: str = Field(default="animeav1", description="Application name.")
    environment: Environment = Field(
        default="dev",
        description="Runtime environment (affects defaults like log format).",
    )

    # Target site (YAML section: site.*)
    site_base_url: str = Field(
        default=DEFAULT_BASE_URL,
        validation_alias=AliasChoices(
            "site_base_url",
            AliasPath("site", "base_url"),
        ),
        description="Origin serving page data and media pages.",
    )
    site_cdn_url: str = Field(
        default=DEFAULT_CDN_URL,
        validation_alias=AliasChoices(
            "site_cdn_url",
            AliasPath("site", "cdn_url"),
        ),
        description="Origin serving cover and backdrop images.",
    )
    episode_title_template: str = Field(
        default=DEFAULT_EPISODE_TITLE,
        validation_alias=AliasChoices(
            "episode_title_template",
            AliasPath("site", "episode_title_template"),
        ),
        description="Title for episodes without one; must contain '{number}'.",
    )

    # HTTP client (YAML section: http.*)
    http_timeout_seconds: float = Field(
        default=15.0,
        validation_alias=AliasChoices(
            "http_timeout_seconds",
            AliasPath("http", "timeout_seconds"),
        ),
        description="HTTP timeout in seconds for page-data requests.",
    )
    http_follow_redirects: bool = Field(
        default=True,
        validation_alias=AliasChoices(
            "http_follow_redirects",
            AliasPath("http", "follow_redirects"),
        ),
        description="Whether HTTP client follows redirects.",
    )
    http_user_agent: str = Field(
        default=(
            "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
            "AppleWebKit/537.36 (KHTML, like Gecko) "
            "Chrome/131.0.0.0 Safari/537.36"
        ),
        validation_alias=AliasChoices(
            "http_user_agent",
            AliasPath("http", "user_agent"),
        ),
        description="User-Agent for outgoing HTTP requests.",
    )

    # Logging (YAML section: logging.*)
    log_level: LogLevel = Field(
        default="INFO",
        validation_alias=AliasChoices(
            "log_level",
            AliasPath("logging", "level"),
        ),
        description="Log level.",
    )
    log_format: Optional[LogFormat] = Field(
        default=None,
        validation_alias=AliasChoices(
            "log_format",
            AliasPath("logging", "format"),
        ),
        description=(
            "Log renderer format (console/json). If unset, derived from environment."
        ),
    )

    @field_validator("site_base_url", "site_cdn_url", mode="before")
    @classmethod
    def _validate_urls(cls, v: Any) -> Any:
        v = _strip_trailing_slash(v)
        if isinstance(v, str) and not v.startswith(("http://", "https://")):
            raise ValueError(f"URL must start with http:// or https://, got: {v!r}")
        return v

    @field_validator("episode_title_template")
    @classmethod
    def _validate_title_template(cls, v: str) -> str:
        # Rendered for whole and fractional numbers alike.
        for sample in (1, 1.5):
            try:
                format_episode_title(v, sample)
            except (KeyError, IndexError, ValueError, TypeError, AttributeError) as exc:
                raise ValueError(
                    f"episode_title_template cannot be formatted: {exc!r}"
                ) from exc
        if "number" not in {name for _, name, _, _ in Formatter().parse(v) if name}:
            raise ValueError("episode_title_template must contain a {number} field")
        return v

    @field_validator("http_timeout_seconds")
    @classmethod
    def _validate_http_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("http_timeout_seconds must be > 0")
        return v

    @model_validator(mode="after")
    def _derive_defaults(self) -> "AppConfig":
        # Default log format: console in dev/test, json in prod.
        if self.log_format is None:
            self.log_format = "json" if self.environment == "prod" else "console"
        return self

    def to_sectioned_dict(self) -> dict[str, Any]:
        """
        Dump configuration in the sectioned shape used by config.yaml/docs.
        """
        return {
            "app_name": self.app_name,
            "environment": self.environment,
            "site": {
                "base_url": self.site_base_url,
                "cdn_url": self.site_cdn_url,
                "episode_title_template": self.episode_title_template,
            },
            "http": {
                "timeout_seconds": self.http_timeout_seconds,
                "follow_redirects": self.http_follow_redirects,
                "user_agent": self.http_user_agent,
            },
            "logging": {"level": self.log_level, "format": self.log_format},
        }


class EnvOverrides(BaseSettings):
    """
    Environment-variable overrides (all optional).

    Intended usage:
    - load.py creates EnvOverrides() to read ANIMEAV1_* variables,
      converts to dict of set values, merges into YAML/defaults,
      then validates AppConfig.

    Supported env var examples (flat, explicit):
    - ANIMEAV1_SITE_BASE_URL
    - ANIMEAV1_HTTP_TIMEOUT_SECONDS
    - ANIMEAV1_LOG_LEVEL
    """

    model_config = SettingsConfigDict(
        env_prefix="ANIMEAV1_",
        extra="ignore",
        case_sensitive=False,
    )

    app_name: Optional[str] = None
    environment: Optional[Environment] = None

    site_base_url: Optional[str] = None
    site_cdn_url: Optional[str] = None
    episode_title_template: Optional[str] = None

    http_timeout_seconds: Optional[float] = None
    http_follow_redirects: Optional[bool] = None
    http_user_agent: Optional[str] = None

    log_level: Optional[LogLevel] = None
    log_format: Optional[LogFormat] = None

    def to_update_dict(self) -> dict[str, Any]:
        """
        Return only values that were actually provided (non-None), for merging.
        """
        return self.model_dump(exclude_none=True)
