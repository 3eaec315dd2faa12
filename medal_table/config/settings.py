import logging
from typing import Optional

from pydantic import Field, HttpUrl
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_USER_AGENT = "Mozilla/5.0 (MedalTable/1.0; +https://example.com/medal-table)"


class AppSettings(BaseSettings):
    """Application settings loaded from environment variables or .env file."""

    # Server Configuration
    port: int = Field(3000, ge=1, le=65535, description="Port the HTTP server listens on.")
    host: str = Field("0.0.0.0", description="Address the HTTP server binds to.")
    static_dir: str = Field("public", description="Directory of front-end assets.")
    games_code: str = Field(
        "OWG2026", description="Tournament identifier, informational only."
    )

    # Upstream Sources
    api_url: HttpUrl = Field(
        "https://site.api.espn.com/apis/v2/sports/olympics/winter/2026/medals",
        description="Structured medal standings endpoint (JSON).",
    )
    source_url: HttpUrl = Field(
        "https://www.espn.com/olympics/winter/2026/medals",
        description="Primary HTML medals page.",
    )
    wiki_url: HttpUrl = Field(
        "https://en.wikipedia.org/wiki/2026_Winter_Olympics_medal_table",
        description="Secondary wiki-style medal table page.",
    )
    pamedia_api_key: Optional[str] = Field(
        None, description="Access token sent to the structured endpoint."
    )

    # Transport Configuration
    user_agent: str = Field(DEFAULT_USER_AGENT, description="User-Agent for requests.")
    request_timeout: float = Field(
        15.0, gt=0, description="Timeout in seconds for one direct HTTP attempt."
    )
    http_max_attempts: int = Field(
        2, ge=1, description="Direct HTTP attempts before the curl fallback."
    )
    curl_path: str = Field("curl", description="Executable used for the CLI fallback.")
    curl_timeout: float = Field(
        20.0, gt=0, description="Timeout in seconds for one curl invocation."
    )
    curl_max_output_bytes: int = Field(
        10 * 1024 * 1024, gt=0, description="Maximum captured curl output."
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
        validate_default=True,
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
