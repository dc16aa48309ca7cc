from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional
from dotenv import load_dotenv
from functools import lru_cache
import logging

# Load environment variables
load_dotenv()

class Settings(BaseSettings):
    # Twitter consumer credentials (OAuth 1.0a)
    TWITTER_CONSUMER_KEY: str = ""
    TWITTER_CONSUMER_SECRET: str = ""
    TWITTER_CALLBACK_URL: str = "oob"

    # HTTP transport
    HTTP_TIMEOUT: float = 30.0

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    LOG_FILE: Optional[str] = "twitter_login.log"

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        level = value.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Invalid log level: {value}")
        return level

    @field_validator("HTTP_TIMEOUT")
    @classmethod
    def validate_timeout(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("HTTP_TIMEOUT must be positive")
        return value

    @property
    def consumer_credentials(self) -> dict:
        """Get the consumer key/secret pair used to sign requests."""
        return {
            "key": self.TWITTER_CONSUMER_KEY,
            "secret": self.TWITTER_CONSUMER_SECRET,
        }

# Create cached settings instance
@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
