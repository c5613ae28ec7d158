from pydantic_settings import BaseSettings
from typing import List

class Settings(BaseSettings):
    # 🎯 Application
    APP_NAME: str = "Cartelera API"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False

    # 🌐 Server
    HOST: str = '0.0.0.0'
    PORT: int = 8000

    # 🗄️ Storage backend: sql | redis | memory
    STORAGE_BACKEND: str = "sql"

    # SQL key-value table
    DATABASE_URL: str = "sqlite:///./cartelera.db"
    DB_ECHO: bool = False

    # 🔴 Redis
    REDIS_URL: str = "redis://localhost:6379/0"
    REDIS_KEY_PREFIX: str = "cartelera:"

    # 🔑 Storage keys
    GENRES_KEY: str = "genres"
    MOVIES_KEY: str = "movies"
    EDIT_MOVIE_KEY: str = "editMovieId"

    # 🔒 CORS
    ALLOWED_ORIGINS: str = "*"

    # 📊 Logging
    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"
        extra = 'ignore'

    @property
    def allowed_origins_list(self) -> List[str]:
        """Parse ALLOWED_ORIGINS string into list"""
        return [origin.strip() for origin in self.ALLOWED_ORIGINS.split(',')]

    @property
    def storage_backend(self) -> str:
        """Normalized backend name"""
        return self.STORAGE_BACKEND.strip().lower()

settings = Settings()
