"""Application configuration using Pydantic Settings.

Environment variables are loaded with the COUNCIL_ prefix, e.g.
COUNCIL_DEBATE_CYCLE_LIMIT=10.
"""

from functools import lru_cache

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    The three council_* values are read by the session controller when a
    session is created and on every debate step.
    """

    # Service configuration
    service_name: str = "council-session"
    port: int = 8090
    environment: str = Field(default="development", description="Runtime environment")
    log_level: str = Field(default="INFO", description="Logging level")

    # Council session behaviour
    interactive_mode_enabled: bool = Field(
        default=True,
        description="Default for interactiveMode when a request omits it",
    )
    debate_cycle_limit: int = Field(
        default=10,
        gt=0,
        description="Maximum debate cycles for a standard session",
    )
    extended_debate_cycle_limit: int = Field(
        default=20,
        gt=0,
        description="Maximum debate cycles when extended debate was requested",
    )

    model_config = SettingsConfigDict(
        env_prefix="COUNCIL_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @model_validator(mode="after")
    def _check_debate_limits(self) -> "Settings":
        if self.extended_debate_cycle_limit < self.debate_cycle_limit:
            raise ValueError(
                "extended_debate_cycle_limit must be >= debate_cycle_limit"
            )
        return self


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    Returns:
        Settings: Application settings singleton
    """
    return Settings()
