"""
Configuration module - loads all env vars using pydantic-settings.
This is the SINGLE SOURCE OF TRUTH for all config values.
"""

from functools import lru_cache
from typing import List, Optional
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # PostgreSQL
    postgres_host: str = "localhost"
    postgres_port: int = 5432
    postgres_user: str = "skillshub_user"
    postgres_password: str = "password"
    postgres_db: str = "skillshub_db"

    # Full URL override (sqlite:// in tests)
    database_url: Optional[str] = None

    # Session cookie (signed JWT wrapping the DB session token)
    jwt_secret_key: str = "change-this-secret"
    jwt_algorithm: str = "HS256"
    session_max_age_days: int = 7

    # Email OTP
    otp_expire_minutes: int = 10

    # Email delivery: 'console', 'smtp' or 'sendgrid'
    email_provider: str = "console"
    smtp_host: str = "smtp.gmail.com"
    smtp_port: int = 587
    smtp_user: Optional[str] = None
    smtp_password: Optional[str] = None
    email_from_name: str = "Salone SkillsHub"
    email_from_address: str = "noreply@skillshub.sl"
    sendgrid_api_key: Optional[str] = None

    # Object storage (AWS S3 or any S3-compatible endpoint)
    aws_access_key_id: Optional[str] = None
    aws_secret_access_key: Optional[str] = None
    aws_region: str = "us-east-1"
    s3_endpoint: Optional[str] = None
    s3_force_path_style: bool = False
    s3_bucket_name: str = "salone-skillshub-files"
    cdn_url: Optional[str] = None
    use_in_memory_storage: bool = False

    # Uploads
    max_file_size: int = 5 * 1024 * 1024
    allowed_file_types: str = (
        "application/pdf,application/msword,"
        "application/vnd.openxmlformats-officedocument.wordprocessingml.document,"
        "image/jpeg,image/jpg,image/png,image/webp,text/plain"
    )

    # App
    environment: str = "development"
    debug: bool = False
    log_level: str = "INFO"

    @property
    def postgres_url(self) -> str:
        """Construct PostgreSQL connection URL"""
        return (
            f"postgresql://{self.postgres_user}:{self.postgres_password}"
            f"@{self.postgres_host}:{self.postgres_port}/{self.postgres_db}"
        )

    @property
    def sqlalchemy_url(self) -> str:
        return self.database_url or self.postgres_url

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"

    @property
    def allowed_file_type_list(self) -> List[str]:
        return [t.strip() for t in self.allowed_file_types.split(",") if t.strip()]

    # Pydantic v2 config
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )


@lru_cache()
def get_settings() -> Settings:
    return Settings()
