"""Runtime configuration loaded from the environment (and an optional ``.env``)."""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from app.services.errors import ConfigurationError


class Settings(BaseSettings):
    """Contentful delivery API settings."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    contentful_space_id: str = Field(default="", description="Contentful space ID")
    contentful_access_token: str = Field(default="", description="Delivery API access token")
    # ENVIRONMENT_NAME wins over CONTENTFUL_ENVIRONMENT when both are set.
    environment_name: str = Field(default="", description="Contentful environment (preferred)")
    contentful_environment: str = Field(default="master", description="Contentful environment")
    contentful_graphql_url: str = Field(
        default="https://graphql.contentful.com/content/v1/spaces",
        description="Base URL of the GraphQL content API",
    )
    default_locale: str = Field(default="en-US", description="Locale used when none is requested")
    request_timeout: float = Field(default=15.0, gt=0, description="HTTP timeout in seconds")
    user_agent: str = Field(default="content-graph-client/1.0")
    content_model: Literal["web", "mobile"] = Field(
        default="web", description="Which navigation/footer content model the space uses"
    )

    @property
    def environment(self) -> str:
        return self.environment_name.strip() or self.contentful_environment.strip() or "master"

    @property
    def endpoint(self) -> str:
        """Full GraphQL endpoint for the configured space and environment.

        Raises:
            ConfigurationError: if no space ID is configured.
        """
        space_id = self.contentful_space_id.strip()
        if not space_id:
            raise ConfigurationError("CONTENTFUL_SPACE_ID is not configured.")
        return f"{self.contentful_graphql_url.rstrip('/')}/{space_id}/environments/{self.environment}"

    @property
    def authorization(self) -> str:
        token = self.contentful_access_token.strip()
        if not token:
            raise ConfigurationError("CONTENTFUL_ACCESS_TOKEN is not configured.")
        return f"Bearer {token}"


@lru_cache
def get_settings() -> Settings:
    return Settings()
