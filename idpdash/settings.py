"""Process-wide configuration, read once from the environment."""

import os
from functools import lru_cache

from pydantic import BaseModel, ConfigDict, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class JiraConfig(BaseModel):
    """Connection details for the upstream issue tracker."""

    model_config = ConfigDict(frozen=True)

    base_url: str | None = None
    email: str | None = None
    api_token: SecretStr | None = None
    user_agent: str = "idpdash/0.1 (local)"

    @property
    def has_credentials(self) -> bool:
        return bool(self.email) and self.api_token is not None and bool(self.api_token.get_secret_value())

    @property
    def is_configured(self) -> bool:
        return bool(self.base_url) and self.has_credentials


class IdpSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=os.environ.get("BACKEND_ENV_PATH", ".env"),
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    # Server
    host: str = "127.0.0.1"
    port: int = 3001
    cors_origin: str = "http://localhost:5173"
    log_level: str = "INFO"

    # Only the literal "true" turns mock mode on
    backend_mock: str = "true"

    # Jira
    jira_base_url: str | None = None
    jira_email: str | None = None
    jira_api_token: SecretStr | None = None
    jira_user_agent: str = "idpdash/0.1 (local)"

    @field_validator("jira_base_url")
    @classmethod
    def _check_base_url(cls, value: str | None) -> str | None:
        if value is None or not value.strip():
            return None
        value = value.strip()
        if not value.startswith(("http://", "https://")):
            raise ValueError("JIRA_BASE_URL must be an http(s) URL")
        return value

    @property
    def mock_mode(self) -> bool:
        return self.backend_mock.strip().lower() == "true"

    def jira(self) -> JiraConfig:
        return JiraConfig(
            base_url=self.jira_base_url,
            email=self.jira_email or None,
            api_token=self.jira_api_token,
            user_agent=self.jira_user_agent,
        )


@lru_cache(maxsize=1)
def get_settings() -> IdpSettings:
    """Return the settings for this process, built on first use."""
    return IdpSettings()
