from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional
from pydantic import field_validator

class Settings(BaseSettings):
    # Database settings
    POSTGRES_USER: str = 'sellersync_user'
    POSTGRES_PASSWORD: str = 'sellersync_pass'
    POSTGRES_DB: str = 'sellersync'
    POSTGRES_HOST: str = 'postgres'
    POSTGRES_PORT: int = 5432

    # Full SQLAlchemy URL, takes precedence over the POSTGRES_* parts
    DATABASE_URL: Optional[str] = None

    # JWT settings
    APP_SECRET_STRING: str = 'change-this-secret-before-deploying-sellersync'
    ALGORITHM: str = 'HS256'
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 24 * 60

    # Pagination
    DEFAULT_PAGE_SIZE: int = 100
    MAX_PAGE_SIZE: int = 1000

    # Reports
    MONTHLY_TREND_MONTHS: int = 6
    RECENT_PAYMENTS_LIMIT: int = 10

    # Environment
    ENVIRONMENT: str = "development"
    DEBUG: bool = False

    @property
    def database_url(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return (
            f"postgresql+psycopg2://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}"
            f"@{self.POSTGRES_HOST}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}"
        )

    @property
    def is_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")

    model_config = SettingsConfigDict(
        extra="allow",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True
    )

    @field_validator("DEBUG", mode="before")
    @classmethod
    def parse_debug(cls, v):
        if isinstance(v, str):
            return v.lower().strip('"').strip("'") in ("true", "1", "yes", "on")
        return bool(v)

settings = Settings()
