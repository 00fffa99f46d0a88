import os
from enum import Enum
from dotenv import load_dotenv

from .errors import ConfigurationError


class Environment(str, Enum):
    DEV = "dev"
    STAGING = "staging"
    PRODUCTION = "production"

    @classmethod
    def parse(cls, name: str | None) -> "Environment":
        key = (name or "dev").strip().lower()
        aliases = {"stg": cls.STAGING, "service": cls.PRODUCTION}
        if key in aliases:
            return aliases[key]
        try:
            return cls(key)
        except ValueError:
            raise ConfigurationError(
                f"Unknown API environment '{name}'. Must be one of: dev, staging (stg), production (service)"
            ) from None

    @property
    def slug(self) -> str:
        """Name of the environment in the upstream Cognito pool identifiers."""
        if self is Environment.DEV:
            return "dev"
        if self is Environment.STAGING:
            return "stg"
        if self is Environment.PRODUCTION:
            return "service"
        raise ConfigurationError(f"No upstream mapping for environment {self!r}")

    @property
    def token_endpoint(self) -> str:
        return f"https://service-platform-api-{self.slug}-dep.auth.ap-northeast-1.amazoncognito.com/oauth2/token"

    @property
    def scope(self) -> str:
        return f"service-platform-api-{self.slug}-dep-resource/api.auth"

    @property
    def authenticated(self) -> bool:
        return self is not Environment.DEV


class Config:
    load_dotenv()

    DEBUG = os.getenv("DEBUG", "true").lower() == "true"
    CORS_ORIGINS = os.getenv("CORS_ORIGINS", "*")
    PORT = int(os.getenv("PORT", "3000"))

    # Entorno del proceso (equivalente a NODE_ENV), se expone en /health
    APP_ENV = os.getenv("APP_ENV", "development")

    # Upstream data API
    API_BASE_URL = os.getenv("API_BASE_URL", "http://localhost:8080/dep-webapi")
    API_ENVIRONMENT = os.getenv("API_ENVIRONMENT", "dev")
    API_TIMEOUT_SECONDS = float(os.getenv("API_TIMEOUT_SECONDS", "20"))

    # Client credentials (no se usan en dev)
    API_CLIENT_ID = os.getenv("API_CLIENT_ID")
    API_CLIENT_SECRET = os.getenv("API_CLIENT_SECRET")

    # Token explícito opcional; evita el intercambio inicial
    API_TOKEN = os.getenv("API_TOKEN")
