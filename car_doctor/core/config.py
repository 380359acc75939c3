"""Application configuration"""

from typing import List
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")

    # API
    API_PREFIX: str = "/api"
    PROJECT_NAME: str = "Car Doctor API"
    VERSION: str = "0.1.0"
    DEBUG: bool = False

    # Server
    SERVER_HOST: str = "0.0.0.0"
    SERVER_PORT: int = 5000

    # Security
    JWT_SECRET: str
    JWT_ALGORITHM: str = "HS256"
    JWT_EXPIRATION_MINUTES: int = 60  # 1 hour

    # Session cookie
    # WHY: Development posture; flip COOKIE_SECURE on behind HTTPS.
    COOKIE_NAME: str = "token"
    COOKIE_SECURE: bool = False

    # Database
    MONGO_URL: str = "mongodb://localhost:27017"
    MONGO_DB_NAME: str = "Car-Doctor"
    # How long a query waits for a reachable server before failing
    MONGO_SERVER_SELECTION_TIMEOUT_MS: int = 5000
    SERVICES_COLLECTION: str = "services"
    CHECKOUTS_COLLECTION: str = "checkOuts"

    # Token revocation
    TOKEN_REVOCATION_ENABLED: bool = False
    REDIS_URL: str = "redis://localhost:6379/0"

    # Logging
    LOG_LEVEL: str = "INFO"
    REQUEST_LOGGING: bool = True

    # CORS
    # Comma-separated list, e.g. "http://localhost:5173,https://cardoctor.example"
    CORS_ORIGINS: str = "http://localhost:5173"

    @property
    def cors_origins_list(self) -> List[str]:
        """Split CORS_ORIGINS into individual origins, dropping blanks."""
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]

    @property
    def jwt_expiration_seconds(self) -> int:
        """Token lifetime in seconds, used for the cookie Max-Age."""
        return self.JWT_EXPIRATION_MINUTES * 60


settings = Settings()
