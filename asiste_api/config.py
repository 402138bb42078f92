"""Application configuration via environment variables."""

from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    # App
    debug: bool = False
    environment: str = "production"

    # CORS
    frontend_url: str = "http://localhost:5173"

    # Data store (SQLAlchemy URL; aiomysql in production)
    database_url: str = "mysql+aiomysql://root:@localhost:3306/asistecare"
    db_pool_size: int = 10

    # Admin tokens
    jwt_secret: str = "fallback-secret"
    token_ttl_hours: int = 24

    # SMTP notifications, skipped when smtp_user or contact_email is empty
    smtp_host: str = ""
    smtp_port: int = 587
    smtp_secure: bool = False
    smtp_user: str = ""
    smtp_pass: str = ""
    contact_email: str = ""

    model_config = {"env_file": ".env", "extra": "ignore"}

    @property
    def is_development(self) -> bool:
        return self.environment == "development"


@lru_cache
def get_settings() -> Settings:
    return Settings()
