from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field
from typing import Optional

class Settings(BaseSettings):
    database_url: str = Field(..., alias="DATABASE_URL")
    database_ssl: bool = Field(default=True, alias="DATABASE_SSL")

    cron_secret: Optional[str] = Field(default=None, alias="CRON_SECRET")

    resend_api_key: Optional[str] = Field(default=None, alias="RESEND_API_KEY")
    resend_from: Optional[str] = Field(default=None, alias="RESEND_FROM")

    cloudinary_cloud_name: Optional[str] = Field(default=None, alias="CLOUDINARY_CLOUD_NAME")
    cloudinary_api_key: Optional[str] = Field(default=None, alias="CLOUDINARY_API_KEY")
    cloudinary_api_secret: Optional[str] = Field(default=None, alias="CLOUDINARY_API_SECRET")

    bcrypt_rounds: int = Field(default=10, alias="BCRYPT_ROUNDS")
    pending_retention_hours: int = Field(default=24, alias="PENDING_RETENTION_HOURS")
    max_verification_attempts: int = Field(default=5, alias="MAX_VERIFICATION_ATTEMPTS")

    allowed_origins: str = Field(
        default="http://localhost:3000,http://127.0.0.1:3000",
        alias="ALLOWED_ORIGINS",
    )

    http_timeout: float = 15.0

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

settings = Settings()
