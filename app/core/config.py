from functools import lru_cache
from typing import List
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    APP_NAME: str = Field(default="Product Catalog")
    APP_VERSION: str = Field(default="0.1.0")
    APP_DESCRIPTION: str = Field(default="API for managing the product catalog")
    ENV: str = Field(default="development",
                     description="Environment of the application like development, production, etc.")
    API_PREFIX: str = Field(default="/api")
    DATABASE_URL: str = Field(default="sqlite+aiosqlite:///./products.db",
                              description="async Database URL")
    DB_ECHO: bool = Field(default=False, description="Echo SQL statements")
    INIT_DB: bool = Field(default=True, description="Create tables on startup")
    CORS_ORIGINS: List[str] = Field(default=["http://localhost:5173", "http://localhost:8080"])
    LOG_LEVEL: str = Field(default="INFO")
    HOST: str = Field(default="0.0.0.0")
    PORT: int = Field(default=9090, description="Port the catalog front end expects")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )


settings = Settings()


@lru_cache
def get_settings() -> Settings:
    return settings
