import os
from pydantic_settings import BaseSettings
from typing import List

class Settings(BaseSettings):
    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./reservas.db")
    HOST: str = "0.0.0.0"
    PORT: int = 29990
    LOG_LEVEL: str = "info"
    CORS_ORIGINS: List[str] = ["*"]
    STATIC_DIR: str = "public"
    CREATE_TABLES_ON_STARTUP: bool = True

    LIST_LIMIT: int = 10
    # update skips the create checks unless this is on
    VALIDATE_UPDATES: bool = False

    RATE_LIMIT_ENABLED: bool = True
    RATE_LIMIT_WINDOW_SECONDS: int = 2 * 60
    RATE_LIMIT_MAX_REQUESTS: int = 125
    RATE_LIMIT_MESSAGE: str = "¡Ja! No puedes tirar mi server."

    class Config:
        env_file = ".env"
        case_sensitive = True

    @property
    def database_url(self) -> str:
        # Render/Heroku style URLs use postgres://, SQLAlchemy wants postgresql://
        if self.DATABASE_URL.startswith("postgres://"):
            return self.DATABASE_URL.replace("postgres://", "postgresql://", 1)
        return self.DATABASE_URL

settings = Settings()
