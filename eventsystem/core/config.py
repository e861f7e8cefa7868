from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    database_url: str = Field(alias="DATABASE_URL")

    # Frontend URL allowed by CORS
    frontend_url: str | None = Field(default=None, alias="FRONTEND_URL")

    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # Media store (any S3-compatible endpoint)
    media_bucket: str = Field(default="venuepic", alias="MEDIA_BUCKET")
    media_endpoint_url: str | None = Field(default=None, alias="MEDIA_ENDPOINT_URL")
    media_access_key_id: str | None = Field(default=None, alias="MEDIA_ACCESS_KEY_ID")
    media_secret_access_key: str | None = Field(
        default=None, alias="MEDIA_SECRET_ACCESS_KEY"
    )
    media_region: str = Field(default="us-east-1", alias="MEDIA_REGION")
    media_create_bucket: bool = Field(default=False, alias="MEDIA_CREATE_BUCKET")
    media_url_ttl_seconds: int = Field(default=3600, alias="MEDIA_URL_TTL_SECONDS")

    @field_validator(
        "frontend_url",
        "media_endpoint_url",
        "media_access_key_id",
        "media_secret_access_key",
        mode="before",
    )
    @classmethod
    def empty_str_to_none(cls, v: str | None) -> str | None:
        """Convert empty strings to None for optional string fields."""
        if v == "":
            return None
        return v

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        return v.upper()

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


settings = Settings()
