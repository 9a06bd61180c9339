import secrets
from typing import List, Optional

from pydantic import ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import ConfigurationError


class Settings(BaseSettings):
    app_name: str = "Video Sharing Service"
    mongo_uri: str
    mongo_db: str = "vidshare"
    users_collection: str = "users"
    videos_collection: str = "videos"
    mongo_max_pool_size: int = 10
    mongo_connect_timeout_seconds: float = 10.0
    secret_key: str = secrets.token_urlsafe(32)  # sessions do not survive a restart unless set
    session_cookie_name: str = "session-token"
    session_max_age_seconds: int = 30 * 24 * 60 * 60
    bcrypt_rounds: int = 10
    login_path: str = "/login"
    imagekit_public_key: Optional[str] = None
    imagekit_private_key: Optional[str] = None
    imagekit_url_endpoint: Optional[str] = None
    cors_origins: List[str] = ["*"]
    log_level: str = "INFO"

    model_config = SettingsConfigDict(env_file=".env", env_prefix="APP_", case_sensitive=False)

    @field_validator("mongo_uri")
    @classmethod
    def _require_mongo_uri(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("MongoDB connection string must not be blank")
        return value


def load_settings(**overrides) -> Settings:
    """Build settings from the environment, failing loudly when they are unusable."""
    try:
        return Settings(**overrides)
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid configuration: {exc}") from exc


settings = load_settings()
