"""Application settings for Courseven service."""

from functools import lru_cache
from typing import Literal, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DATABASE_SEGMENT = "/database"


def normalise_database_url(value: str) -> str:
    """Return the table store base URL ending in ``/database``."""

    trimmed = value.strip().rstrip("/")
    if trimmed.endswith(DATABASE_SEGMENT):
        return trimmed
    if DATABASE_SEGMENT in trimmed:
        return trimmed[: trimmed.index(DATABASE_SEGMENT) + len(DATABASE_SEGMENT)]
    return f"{trimmed}{DATABASE_SEGMENT}"


class Settings(BaseSettings):
    """Environment-driven configuration values."""

    model_config = SettingsConfigDict(
        env_prefix="COURSEVEN_",
        env_file=".env",
        case_sensitive=False,
    )

    auth_base_url: str = Field(
        default="https://roble-api.openlab.uninorte.edu.co/auth",
        description="Base URL of the authentication service.",
    )
    database_base_url: str = Field(
        default="https://roble-api.openlab.uninorte.edu.co/database",
        description="Base URL of the remote table store.",
    )
    database_name: str = Field(
        default="courseven_66a52df881",
        min_length=1,
        description="Project database name on the remote table store.",
    )
    readonly_email: Optional[str] = None
    readonly_password: Optional[str] = None
    request_timeout_seconds: float = Field(default=20.0, gt=0)

    table_backend: Literal["remote", "local"] = Field(
        default="remote",
        description="Use the remote table store or a local SQLAlchemy database.",
    )
    database_url: str = Field(
        default="sqlite:///./courseven.db",
        description="SQLAlchemy database URL used when table_backend is 'local'.",
    )

    max_courses_per_teacher: int = Field(default=3, ge=1)
    tolerate_assessment_read_errors: bool = Field(
        default=True,
        description="Treat HTTP 500 on assessment reads as an empty result.",
    )
    refresh_ttl_seconds: float = Field(default=30.0, ge=0)
    log_level: str = "INFO"

    @field_validator("database_base_url")
    @classmethod
    def _normalise_database_url(cls, value: str) -> str:
        return normalise_database_url(value)

    @field_validator("auth_base_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.strip().rstrip("/")

    @property
    def database_fallback_url(self) -> str:
        """Base URL without the ``/database`` segment, tried once on 404."""

        if self.database_base_url.endswith(DATABASE_SEGMENT):
            return self.database_base_url[: -len(DATABASE_SEGMENT)]
        return self.database_base_url


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached settings instance."""

    return Settings()
