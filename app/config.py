from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv

load_dotenv()


def _split(value: str) -> list[str]:
    return [v.strip() for v in value.split(",") if v.strip()]


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore", frozen=True)

    # Server
    PORT: int = 8080
    APP_MODE: str = "debug"
    LOG_LEVEL: str = "INFO"

    # Database
    DATABASE_URI: str = "postgresql://localhost:5432/tasks_db"
    DATABASE_NAME: str = "tasks_db"
    DATABASE_TIMEOUT: int = 10

    # Security
    JWT_SECRET: str
    JWT_ALGORITHM: str = "HS256"
    JWT_EXPIRY_MINUTES: int = 15
    CSRF_SECRET: str

    # Cookies
    AUTH_COOKIE: bool = True
    COOKIE_DOMAIN: str = "localhost"
    COOKIE_SECURE: bool = False
    COOKIE_HTTP_ONLY: bool = True
    COOKIE_SAME_SITE: str = "Strict"

    # Rate limiting (declared, not enforced)
    RATE_LIMIT_REQUESTS: int = 100
    RATE_LIMIT_WINDOW: int = 60

    # CORS
    CORS_ALLOWED_ORIGINS: str = "http://localhost:5173"
    CORS_ALLOWED_METHODS: str = "GET,POST,PUT,DELETE,OPTIONS"
    CORS_ALLOWED_HEADERS: str = "Content-Type,Authorization,X-CSRF-Token"
    CORS_EXPOSE_HEADERS: str = ""
    CORS_ALLOW_CREDENTIALS: bool = True
    CORS_MAX_AGE: int = 3600

    @field_validator("JWT_SECRET", "CSRF_SECRET")
    @classmethod
    def required_secret(cls, v: str, info) -> str:
        if not v:
            raise ValueError(f"{info.field_name} is required")
        return v

    @field_validator("DATABASE_URI")
    @classmethod
    def required_uri(cls, v: str) -> str:
        if not v:
            raise ValueError("DATABASE_URI is required")
        return v

    @property
    def async_database_uri(self) -> str:
        # Ensure we use the async driver
        uri = self.DATABASE_URI
        if uri.startswith("postgresql://"):
            return uri.replace("postgresql://", "postgresql+asyncpg://", 1)
        if uri.startswith("sqlite://"):
            return uri.replace("sqlite://", "sqlite+aiosqlite://", 1)
        return uri

    @property
    def is_release(self) -> bool:
        return self.APP_MODE == "release"

    @property
    def cors_allowed_origins(self) -> list[str]:
        return _split(self.CORS_ALLOWED_ORIGINS)

    @property
    def cors_allowed_methods(self) -> list[str]:
        return _split(self.CORS_ALLOWED_METHODS)

    @property
    def cors_allowed_headers(self) -> list[str]:
        return _split(self.CORS_ALLOWED_HEADERS)

    @property
    def cors_expose_headers(self) -> list[str]:
        return _split(self.CORS_EXPOSE_HEADERS)


settings = Settings()
