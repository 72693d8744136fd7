"""Configuration for the issue browser CLI.

Configuration is loaded from:
- environment variables
- and a local `.env` file (if present)

The pre-underscore names (`JIRAUSER`, `JIRAPASS`, `JIRAURL`) are accepted as
aliases so existing shell profiles keep working.
"""

from __future__ import annotations

from typing import Literal

from pydantic import AliasChoices, Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class BrowserSettings(BaseSettings):
    """Settings for the issue browser.

    Environment variables:
    - JIRA_USER
    - JIRA_PASSWORD
    - JIRA_URL
    - JIRA_TIMEOUT (optional)
    - LOG_LEVEL    (optional)
    - LOG_FORMAT   (optional, "text" or "json")

    Notes:
        Pydantic-settings supports overriding the env file in tests via:
        `BrowserSettings(_env_file=path_to_env)`.
    """

    jira_user: str = Field(
        default="",
        validation_alias=AliasChoices("JIRA_USER", "JIRAUSER", "jira_user"),
        description="Username for basic authentication",
    )
    jira_password: str = Field(
        default="",
        validation_alias=AliasChoices("JIRA_PASSWORD", "JIRAPASS", "jira_password"),
        description="Password (or API token) for basic authentication",
    )
    jira_url: str = Field(
        default="",
        validation_alias=AliasChoices("JIRA_URL", "JIRAURL", "jira_url"),
        description="Jira REST API base URL, e.g. https://jira.example.com/rest/api/2",
    )

    request_timeout: float = Field(
        default=30.0,
        gt=0,
        validation_alias=AliasChoices("JIRA_TIMEOUT", "request_timeout"),
        description="Timeout in seconds for each Jira request",
    )

    log_level: str = Field(
        default="INFO",
        validation_alias=AliasChoices("LOG_LEVEL", "log_level"),
        description="Root logging level",
    )
    log_format: Literal["text", "json"] = Field(
        default="text",
        validation_alias=AliasChoices("LOG_FORMAT", "log_format"),
        description="Log line format",
    )

    model_config = SettingsConfigDict(
        env_prefix="",
        env_file=".env",
        extra="ignore",
    )

    @model_validator(mode="after")
    def _require_jira_access(self) -> BrowserSettings:
        if not self.jira_user.strip() or not self.jira_password.strip():
            raise ValueError("both JIRA user and password should be set to auth")
        if not self.jira_url.strip():
            raise ValueError("URL for JIRA endpoint needs to be provided")
        return self
