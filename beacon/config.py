from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

load_dotenv()


class Settings(BaseSettings):
    # Application settings
    app_name: str = "Pixel Beacon"
    app_version: str = "1.0.0"
    debug: bool = False
    environment: str = "development"

    # Database settings
    database_url: str = "sqlite+aiosqlite:///./pulse.db"
    create_tables_on_startup: bool = True

    # Server settings
    host: str = "0.0.0.0"
    port: int = Field(default=8080, ge=1, le=65535)

    # Logging settings
    log_level: str = "INFO"
    log_json: bool = True
    log_file: str | None = None

    # Honor X-Forwarded-For / X-Real-IP when resolving the caller address
    trust_forwarded_headers: bool = True

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    @field_validator("database_url")
    @classmethod
    def use_async_sqlite_driver(cls, value: str) -> str:
        """Upgrade sync-style URLs (``sqlite:pulse.db``, ``postgres://...``) to their async drivers."""
        for prefix in ("postgres://", "postgresql://"):
            if value.startswith(prefix):
                return "postgresql+asyncpg://" + value[len(prefix):]
        if value.startswith("sqlite+"):
            return value
        if value.startswith("sqlite://"):
            return "sqlite+aiosqlite://" + value[len("sqlite://"):]
        if value.startswith("sqlite:"):
            return "sqlite+aiosqlite:///" + value[len("sqlite:"):]
        return value


settings = Settings()
