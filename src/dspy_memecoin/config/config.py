"""Application configuration module."""

from typing import Any, Literal, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings using Pydantic BaseSettings.

    Automatically reads from environment variables and an optional ``.env`` file.
    """

    # Application settings
    app_name: str = "DSPy Meme Coin Creator"
    app_version: str = "0.1.0"
    app_env: str = "development"
    log_level: str = "INFO"
    log_json: bool = False
    log_file: Optional[str] = None

    # API settings
    api_prefix: str = "/api/v1"
    cors_origins: list[str] = ["*"]

    # Local state persistence
    state_database_url: str = "sqlite:///./memecoin_state.db"

    # OpenAI / DSPy settings
    openai_api_key: Optional[str] = None
    dspy_model: str = "gpt-3.5-turbo"
    dspy_selection_temperature: float = 0.7
    dspy_caption_temperature: float = 0.8
    dspy_max_tokens: int = 100

    # Template rotation
    batch_reset_fraction: float = Field(0.5, ge=0.0, le=1.0)
    max_batch_sessions: int = Field(1000, ge=1)

    # Analytics
    trending_limit: int = 10
    top_memes_limit: int = 10

    # IPFS settings
    pinata_jwt: Optional[str] = None
    pinata_api_key: Optional[str] = None
    pinata_secret_key: Optional[str] = None
    ipfs_gateway: str = "https://gateway.pinata.cloud/ipfs/"
    ipfs_timeout_seconds: float = 30.0

    # Coin settings
    app_public_url: str = "https://meme-coin-creator.vercel.app"
    default_chain_id: int = 8453
    default_theme: Literal["light", "dark"] = "light"

    @field_validator("state_database_url", mode="before")
    @classmethod
    def validate_state_database_url(cls, v: Any) -> Any:
        """Fall back to the local SQLite file when the URL is blank."""
        if not v:
            return "sqlite:///./memecoin_state.db"
        return v

    @field_validator("ipfs_gateway")
    @classmethod
    def validate_ipfs_gateway(cls, v: str) -> str:
        """Gateway URLs are joined with CIDs, so they must end with a slash."""
        return v if v.endswith("/") else f"{v}/"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


# Create settings instance
settings = Settings()
