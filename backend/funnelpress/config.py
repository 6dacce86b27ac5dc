from pydantic_settings import BaseSettings
from typing import List


class Settings(BaseSettings):
    PROJECT_NAME: str = "FunnelPress"
    VERSION: str = "0.1.0"
    ENVIRONMENT: str = "development"

    API_V1_STR: str = "/api/v1"

    DATABASE_URL: str
    REDIS_URL: str = "redis://localhost:6379/0"

    # Create tables and register built-in widgets on startup.
    # Disable when the schema is managed by Alembic.
    AUTO_INIT_DB: bool = True

    JWT_SECRET: str
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24 * 7

    # Secret used to key the visitor fingerprint hash. Never commit a value.
    VISITOR_HASH_SALT: str
    VISITOR_HASH_LENGTH: int = 16
    SESSION_COOKIE_NAME: str = "fp_sid"

    # Widget render cache (Redis)
    WIDGET_RENDER_CACHE_ENABLED: bool = True
    WIDGET_RENDER_CACHE_SECONDS: int = 300

    CORS_ORIGINS: str = "http://localhost:3000"

    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"
        case_sensitive = True

    @property
    def cors_origins_list(self) -> List[str]:
        if isinstance(self.CORS_ORIGINS, str):
            return [o.strip() for o in self.CORS_ORIGINS.split(",")]
        return self.CORS_ORIGINS


settings = Settings()
