from functools import lru_cache
from fastapi import Request
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    ENV: str = "local"
    API_VERSION: str = "dev"
    DB_HOST: str = "db"
    DB_PORT: int = 5432
    DB_USER: str = "postgres"
    DB_PASSWORD: str = "postgres"
    DB_NAME: str = "liftlog"

    # Full URL wins over the parts above (tests point this at SQLite)
    DATABASE_URL_OVERRIDE: str | None = None
    # Alembic owns the schema in prod; dev/test can let the app create it
    CREATE_TABLES: bool = False

    LOG_LEVEL: str = "INFO"
    ALLOW_ORIGINS: str = "*"

    # Analytics windows (days)
    RECENT_DAYS_DEFAULT: int = 30
    HISTORY_DAYS_DEFAULT: int = 180

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    @property
    def DATABASE_URL(self) -> str:
        if self.DATABASE_URL_OVERRIDE:
            return self.DATABASE_URL_OVERRIDE
        return (
            f"postgresql+psycopg://{self.DB_USER}:{self.DB_PASSWORD}"
            f"@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"
        )

    @property
    def allow_origins(self) -> list[str]:
        return [o.strip() for o in self.ALLOW_ORIGINS.split(",") if o.strip()]

@lru_cache
def get_settings() -> Settings:
    return Settings()

def app_settings(request: Request) -> Settings:
    """Settings the running app was built with (tests build their own)."""
    return request.app.state.settings
