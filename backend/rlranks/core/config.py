"""Configuration settings for the rank resolution service."""

from typing import List

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .enums import Playlist

# Load environment variables from .env file
load_dotenv()


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Live tracker configuration
    tracker_base_url: str = Field(
        default="https://api.tracker.gg/api/v2/rocket-league/standard/profile",
        description="Profile endpoint prefix; platform code and account id are appended",
    )
    tracker_timeout_seconds: float = Field(default=10.0, gt=0)
    tracker_user_agent: str = Field(
        default=(
            "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/605.1.15 "
            "(KHTML, like Gecko) Version/15.2 Safari/605.1.15"
        )
    )
    tracker_origin: str = Field(default="https://rocketleague.tracker.network")
    tracker_referer: str = Field(default="https://rocketleague.tracker.network/")

    # Resolution configuration
    provider_timeout_seconds: float = Field(
        default=15.0,
        gt=0,
        description="Deadline for a single provider attempt inside a resolution",
    )
    default_playlists: str = Field(
        default="",
        description="Comma-separated playlist whitelist; empty means all playlists count",
    )

    # Store configuration
    database_url: str = Field(default="sqlite+aiosqlite:///./rlranks.db")
    store_scope: str = Field(default="global", min_length=1)

    # Application Configuration
    debug: bool = Field(default=False)
    log_level: str = Field(default="INFO")

    @field_validator("default_playlists")
    @classmethod
    def validate_default_playlists(cls, v: str) -> str:
        """Reject unknown playlist names at startup instead of at query time."""
        for name in (item.strip() for item in v.split(",")):
            if name:
                Playlist.parse(name)
        return v

    @property
    def default_playlist_list(self) -> List[Playlist]:
        """Get the default playlist whitelist as a list of playlists."""
        return [
            Playlist.parse(name.strip())
            for name in self.default_playlists.split(",")
            if name.strip()
        ]

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        env_prefix="",
        extra="ignore",
    )


def get_settings() -> Settings:
    """Get application settings instance."""
    return Settings()


# Create a global settings instance lazily
settings: Settings | None = None


def get_global_settings() -> Settings:
    """Get or create the global settings instance."""
    global settings
    if settings is None:
        settings = get_settings()
    return settings
