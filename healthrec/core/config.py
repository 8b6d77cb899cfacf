from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings

INSECURE_JWT_SECRET = "your-secret-key-change-me-in-production"


class Settings(BaseSettings):
    app_name: str = Field("Health Records API", env="APP_NAME")
    app_version: str = Field("0.1.0", env="APP_VERSION")
    environment: str = Field("development", env="ENVIRONMENT")

    jwt_secret: str = Field(INSECURE_JWT_SECRET, env="JWT_SECRET")
    token_ttl_seconds: int = Field(default=3600, ge=1, env="TOKEN_TTL_SECONDS")
    bcrypt_rounds: int = Field(default=12, ge=4, le=31, env="BCRYPT_ROUNDS")

    redis_url: str = Field("redis://localhost:6379/0", env="REDIS_URL")
    redis_timeout_seconds: float = Field(default=5.0, gt=0, env="REDIS_TIMEOUT_SECONDS")

    user_ttl_seconds: int = Field(default=24 * 3600, ge=1, env="USER_TTL_SECONDS")
    record_ttl_seconds: int = Field(default=30 * 24 * 3600, ge=1, env="RECORD_TTL_SECONDS")
    stats_ttl_seconds: int = Field(default=3600, ge=1, env="STATS_TTL_SECONDS")

    max_request_body_size: int = Field(default=10 * 1024 * 1024, ge=1, env="MAX_REQUEST_BODY_SIZE")
    require_https: bool = Field(default=True, env="REQUIRE_HTTPS")
    allowed_origins: List[str] = Field(default=["https://localhost:8443"], env="ALLOWED_ORIGINS")

    class Config:
        env_file = ".env"
        extra = "ignore"

    @property
    def uses_insecure_secret(self) -> bool:
        return self.jwt_secret == INSECURE_JWT_SECRET
