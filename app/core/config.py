from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    # In-memory SQLite by default: state is rebuilt from seed data on every start.
    database_url: str = Field("sqlite+aiosqlite:///:memory:", alias="DATABASE_URL")

    jwt_secret_key: str = Field("change-me-in-production", alias="JWT_SECRET_KEY")
    jwt_algorithm: str = Field("HS256", alias="JWT_ALGORITHM")
    access_token_expire_minutes: int = Field(60 * 12, alias="ACCESS_TOKEN_EXPIRE_MINUTES")

    seed_demo_data: bool = Field(True, alias="SEED_DEMO_DATA")
    demo_user_password: str = Field("password123", alias="DEMO_USER_PASSWORD")

    library_loan_days: int = Field(14, alias="LIBRARY_LOAN_DAYS")
    library_fine_per_day: int = Field(5, alias="LIBRARY_FINE_PER_DAY")

    log_level: str = Field("INFO", alias="LOG_LEVEL")
    cors_origins: str = Field("*", alias="CORS_ORIGINS")

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"

    @property
    def cors_origin_list(self) -> list[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]


settings = Settings()
