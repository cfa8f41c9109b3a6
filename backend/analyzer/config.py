"""Configuration settings for the event analyzer"""

from pydantic_settings import BaseSettings
from typing import Optional


class Settings(BaseSettings):
    """Application settings"""

    # API Settings
    API_V1_STR: str = "/api/v1"
    PROJECT_NAME: str = "Event Analyzer"
    VERSION: str = "1.0.0"
    SERVICE_NAME: str = "event-analyzer"
    ENVIRONMENT: str = "production"

    # Database Settings
    POSTGRES_USER: str = "analyzer"
    POSTGRES_PASSWORD: str = "analyzer_pass"
    POSTGRES_HOST: str = "postgres"
    POSTGRES_PORT: int = 5432
    POSTGRES_DB: str = "analyzer"
    DATABASE_URL_OVERRIDE: Optional[str] = None
    DB_POOL_SIZE: int = 10
    DB_MAX_OVERFLOW: int = 20

    @property
    def DATABASE_URL(self) -> str:
        if self.DATABASE_URL_OVERRIDE:
            return self.DATABASE_URL_OVERRIDE
        return f"postgresql://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}@{self.POSTGRES_HOST}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}"

    # Recommendation Settings
    NEIGHBOR_COUNT: int = 5  # Neighbors consulted per candidate when predicting a score
    MAX_RESULTS_LIMIT: int = 1000  # Upper bound accepted on the HTTP surface

    # Rate limiting
    RATE_LIMIT_ENABLED: bool = True
    RATE_LIMIT_DEFAULT: str = "100/minute"
    RATE_LIMIT_STORAGE_URI: str = "memory://"

    # Logging
    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"
        case_sensitive = True


settings = Settings()
