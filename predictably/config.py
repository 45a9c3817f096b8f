"""Application configuration."""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class RedisSettings(BaseModel):
    """Redis configuration."""

    url: str = "redis://localhost:6379/0"

    # Max connections held by the client pool
    max_connections: int = 20


class GameSettings(BaseModel):
    """Game rules configuration."""

    # Inclusive vote/prediction scale
    scale_min: int = -10
    scale_max: int = 10

    # A prediction within this distance of the crowd average is correct
    correct_threshold: float = 2.0

    # User keys expire after this many days without activity
    user_data_ttl_days: int = 30

    # Voting window for new questions, in hours
    default_ttl_hours: int = 24
    min_ttl_hours: int = 1
    max_ttl_hours: int = 168

    min_question_length: int = 10

    # Closed questions older than this are purged by the cleanup job
    retention_days: int = 30

    @model_validator(mode="after")
    def validate_scale(self) -> "GameSettings":
        """Ensure the scale is a non-empty range."""
        if self.scale_min >= self.scale_max:
            raise ValueError("scale_min must be lower than scale_max")
        if self.min_ttl_hours > self.max_ttl_hours:
            raise ValueError("min_ttl_hours must not exceed max_ttl_hours")
        return self


class IdentitySettings(BaseModel):
    """Identity collaborator configuration."""

    # Header set by the hosting platform with the current user's id
    header_name: str = "X-User-Id"


class ObservabilitySettings(BaseModel):
    """Logfire configuration.

    With neither a token nor ``send_to_logfire`` set, telemetry only goes to
    the console.
    """

    logfire_token: str | None = None
    send_to_logfire: bool | None = None


# Written by the image build; absent in local checkouts
VERSION_FILE = Path("/app/version.txt")


def read_git_sha(version_file: Path = VERSION_FILE) -> str:
    """Commit SHA baked into the image, or "unknown"."""
    try:
        return version_file.read_text().strip() or "unknown"
    except OSError:
        return "unknown"


class Settings(BaseSettings):
    """Settings for the API and its jobs.

    Nested values are overridden with ``__``:

        REDIS__URL=redis://cache:6379/0
        GAME__CORRECT_THRESHOLD=1.5
        IDENTITY__HEADER_NAME=X-Player-Id
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_nested_delimiter="__",
        extra="ignore",
    )

    environment: Literal["test", "development", "staging", "production"] = "development"
    debug: bool = False
    git_sha: str = "unknown"

    host: str = "localhost"
    port: int = 8000

    redis: RedisSettings = RedisSettings()
    game: GameSettings = GameSettings()
    identity: IdentitySettings = IdentitySettings()
    observability: ObservabilitySettings = ObservabilitySettings()

    @model_validator(mode="after")
    def stamp_version(self) -> "Settings":
        """Take the SHA from the version file unless one was configured."""
        if self.git_sha == "unknown":
            self.git_sha = read_git_sha()
        return self
