# -*- coding: utf-8 -*-
"""Location: ./e2e_provisioning/config.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

Provisioning configuration.

All settings can be overridden via environment variables with the E2E_ prefix.
For example: E2E_BASE_URL=http://localhost:3030, E2E_FAKER_SEED=42
"""

# Standard
from functools import lru_cache
from pathlib import Path
from typing import Any, Literal, Optional

# Third-Party
from pydantic import Field, field_validator, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


def _empty_string_to_none(value: Any) -> Any:
    """Treat empty optional env vars as unset (None).

    Args:
        value: The raw value from the environment variable.

    Returns:
        None if the value is an empty string, otherwise the original value.
    """
    if isinstance(value, str) and value.strip() == "":
        return None
    return value


class Settings(BaseSettings):
    """Connection and data-synthesis settings for a provisioning session."""

    base_url: str = Field(default="http://localhost:3030", description="Backend base URL")
    graphql_path: str = Field(default="/api/graphql", description="Path of the GraphQL endpoint, relative to base_url")
    api_token: Optional[SecretStr] = Field(default=None, description="Bearer token sent with every GraphQL request")
    database_url: str = Field(default="postgresql+psycopg://goalert@localhost:5432/goalert", description="SQLAlchemy URL used for raw batch inserts")
    fixtures_dir: Path = Field(default=Path("tests/fixtures"), description="Directory holding <name>.json fixtures")
    profile_fixture: str = Field(default="profile", description="Fixture name of the active test subject")
    request_timeout: float = Field(default=30.0, gt=0, description="HTTP transport timeout in seconds")
    faker_seed: Optional[int] = Field(default=None, description="Seed for reproducible synthesized values")
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "WARNING"

    @field_validator("api_token", "faker_seed", mode="before")
    @classmethod
    def empty_string_to_none(cls, value: Any) -> Any:
        """Delegate to shared validator."""
        return _empty_string_to_none(value)

    model_config = SettingsConfigDict(env_prefix="E2E_", env_file=".env", env_file_encoding="utf-8", extra="ignore")


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance.

    Returns:
        Settings: The provisioning settings, read once from the environment.
    """
    return Settings()
