from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List

class Settings(BaseSettings):
    DATABASE_URL: str = "postgresql://postgres:postgres@db:5432/books"
    FRONTEND_ORIGINS: str = "*"
    LOG_LEVEL: str = "INFO"

    # Create the books table on startup (no migration tooling)
    CREATE_TABLES: bool = False

    HOST: str = "0.0.0.0"
    PORT: int = 8000

    @property
    def allow_origins(self) -> List[str]:
        return [origin.strip() for origin in self.FRONTEND_ORIGINS.split(",") if origin.strip()]

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

settings = Settings()
