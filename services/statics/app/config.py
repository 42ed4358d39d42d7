"""Statics configuration via environment variables."""

from functools import lru_cache

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ServerSettings(BaseModel):
    """HTTP listener settings."""

    host: str = "0.0.0.0"
    port: int = Field(default=8010, ge=0, le=65535)
    acao: str = Field(default="*", description="Access-Control-Allow-Origin value")
    max_body_size: int | None = Field(
        default=None,
        gt=0,
        description="Upper bound for POST /images bodies in bytes (unbounded if unset)",
    )
    graceful_timeout: int = Field(default=30, ge=0)


class JwtSettings(BaseModel):
    """JWT verification settings."""

    public_key_path: str = "keys/jwt_public_key.pem"
    leeway: int = Field(default=60, ge=0, description="Clock leeway in seconds")


class S3Settings(BaseModel):
    """Object store settings."""

    key: str | None = None
    secret: str | None = None
    region: str = "us-east-1"
    bucket: str = "statics"
    endpoint_url: str | None = None  # LocalStack/MinIO
    public_url: str | None = None  # CDN or bucket host the returned URLs point at


class ClientSettings(BaseModel):
    """Outbound HTTP client tuning."""

    http_client_retries: int = Field(default=3, ge=0)
    http_client_buffer_size: int = Field(default=10, gt=0)


class GraylogSettings(BaseModel):
    """GELF log shipping settings (disabled unless host is set)."""

    host: str | None = None
    port: int = Field(default=12201, ge=1, le=65535)


class SentrySettings(BaseModel):
    """Error telemetry settings."""

    dsn: str | None = None
    environment: str = "development"


class Settings(BaseSettings):
    """Statics service configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="STATICS_",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    # Service settings
    service_name: str = "statics"
    log_level: str = "INFO"
    log_json: bool = True

    server: ServerSettings = Field(default_factory=ServerSettings)
    jwt: JwtSettings = Field(default_factory=JwtSettings)
    s3: S3Settings = Field(default_factory=S3Settings)
    client: ClientSettings = Field(default_factory=ClientSettings)
    sentry: SentrySettings = Field(default_factory=SentrySettings)
    graylog: GraylogSettings = Field(default_factory=GraylogSettings)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
