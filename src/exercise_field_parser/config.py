"""Configuration settings for the exercise field parser API."""
import os
from typing import List, Literal


EnvironmentType = Literal["development", "staging", "production"]

DEFAULT_CORS_ORIGINS = "http://localhost:3000,http://localhost:3001"


class Settings:
    """Application settings."""

    # Environment
    ENVIRONMENT: EnvironmentType = "development"

    # HTTP
    CORS_ORIGINS: List[str] = []
    MAX_TEXT_LENGTH: int = 2000  # exercise descriptions are short; reject pastes of whole programs
    HOST: str = "0.0.0.0"
    PORT: int = 8000

    def __init__(self):
        # Environment
        env = os.getenv("ENVIRONMENT", "development").lower()
        if env in ("development", "staging", "production"):
            self.ENVIRONMENT = env  # type: ignore
        else:
            self.ENVIRONMENT = "development"

        # HTTP
        origins = os.getenv("CORS_ORIGINS", DEFAULT_CORS_ORIGINS)
        self.CORS_ORIGINS = [o.strip() for o in origins.split(",") if o.strip()]

        try:
            self.MAX_TEXT_LENGTH = int(os.getenv("MAX_TEXT_LENGTH", "2000"))
        except ValueError:
            self.MAX_TEXT_LENGTH = 2000

        self.HOST = os.getenv("HOST", "0.0.0.0")
        try:
            self.PORT = int(os.getenv("PORT", "8000"))
        except ValueError:
            self.PORT = 8000

    @property
    def is_development(self) -> bool:
        return self.ENVIRONMENT == "development"


settings = Settings()
