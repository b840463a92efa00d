import logging

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """Application settings loaded from environment variables or .env file."""

    # Server Configuration
    host: str = Field("0.0.0.0", description="Interface the HTTP server binds to.")
    port: int = Field(
        3000,  # Default value if not in .env
        ge=1,
        le=65535,
        description="Port the HTTP server listens on.",
    )

    # Agent Metadata
    agent_name: str = Field("nhl-stats-agent", description="Name reported on /health.")
    agent_version: str = Field("1.0.0", description="Version reported on /health.")
    agent_description: str = Field(
        "Live NHL hockey stats, standings, and player data. Real-time scores, "
        "league leaders, team rosters, and comprehensive reports from the "
        "official NHL API.",
        description="Human-readable description of the agent.",
    )

    # Upstream Sources
    nhl_api_base_url: str = Field(
        "https://api-web.nhle.com/v1", description="Base URL of the NHL web API."
    )
    espn_api_base_url: str = Field(
        "https://site.api.espn.com/apis/site/v2/sports/hockey/nhl",
        description="Base URL of ESPN's NHL site API.",
    )
    user_agent: str = Field(
        "Mozilla/5.0 (compatible; NHLStatsAgent/1.0)",
        description="User-Agent header sent with every upstream request.",
    )

    # Team Lookup
    strict_team_lookup: bool = Field(
        False,
        description="Reject team names missing from the alias table instead of guessing an abbreviation.",
    )

    # Logging Configuration
    log_level: str = Field(
        "INFO", description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)."
    )

    # Pydantic Settings Configuration
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )


def load_settings() -> AppSettings:
    """Loads and validates application settings."""
    try:
        settings = AppSettings()
        log_level_upper = settings.log_level.upper()
        # Validate log_level even if loaded from .env
        if log_level_upper not in ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]:
            logging.warning(
                f"Invalid LOG_LEVEL '{settings.log_level}' found in .env or default. Using INFO."
            )
            settings.log_level = "INFO"
        else:
            settings.log_level = log_level_upper
        return settings
    except Exception as e:
        logging.exception(f"Error loading application settings: {e}")
        raise SystemExit("Failed to load application settings. Exiting.")


settings: AppSettings = load_settings()
