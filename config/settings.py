"""Application settings and configuration."""

import logging
from functools import lru_cache
from pathlib import Path
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class StorageConfig(BaseModel):
    """Immutable storage configuration handed to the storage backends.

    Built once at startup from Settings so that backends never reach
    for global configuration on their own.
    """

    model_config = ConfigDict(frozen=True)

    backend: Literal["local", "s3"] = "local"

    # Local disk backend
    local_root: Path = Path("data/uploads")
    url_prefix: str = "/contacts/image/"

    # Object store backend
    bucket_name: Optional[str] = None
    region: Optional[str] = None
    access_key: Optional[str] = None
    secret_key: Optional[str] = None
    endpoint_url: Optional[str] = None
    cdn_url: str = ""
    temp_dir: Path = Path("data/tmp")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application metadata
    app_name: str = Field(
        default="Contacts API",
        description="Application name"
    )
    app_version: str = Field(
        default="0.1.0",
        description="Application version"
    )
    environment: Literal["local", "dev", "stage", "prod"] = Field(
        default="local",
        description="Deployment environment"
    )
    debug: bool = Field(
        default=False,
        description="Enable debug mode"
    )

    # API Configuration
    cors_origins: list[str] = Field(
        default=["*"],
        description="Allowed CORS origins"
    )

    # Storage Configuration (for contact photos)
    storage_type: Literal["local", "s3"] = Field(
        default="local",
        description="Storage backend type for contact photos"
    )
    storage_root: Path = Field(
        default=Path("data/uploads"),
        description="Root directory for local storage"
    )
    storage_url_prefix: str = Field(
        default="/contacts/image/",
        description="URL path prefix under which local photos are served"
    )
    storage_temp_dir: Path = Field(
        default=Path("data/tmp"),
        description="Staging directory for uploads to object storage"
    )

    # Object storage (S3-compatible)
    s3_bucket_name: Optional[str] = Field(
        default=None,
        description="Bucket holding contact photos"
    )
    s3_region: Optional[str] = Field(
        default=None,
        description="Bucket region"
    )
    s3_access_key: Optional[str] = Field(
        default=None,
        description="Access key (falls back to the default credential chain)"
    )
    s3_secret_key: Optional[str] = Field(
        default=None,
        description="Secret key (falls back to the default credential chain)"
    )
    s3_endpoint_url: Optional[str] = Field(
        default=None,
        description="Custom endpoint for S3-compatible services such as MinIO"
    )
    cdn_url: str = Field(
        default="",
        description="Base URL prepended to object keys for public photo URLs"
    )

    @field_validator("storage_root", "storage_temp_dir", mode="before")
    @classmethod
    def resolve_storage_path(cls, v: str | Path) -> Path:
        """Ensure storage directories are Path objects."""
        if isinstance(v, str):
            return Path(v)
        return v

    # Database Configuration
    database_url: str = Field(
        default="sqlite:///data/db.sqlite3",
        description="Database connection URL"
    )
    database_echo: bool = Field(
        default=False,
        description="Echo SQL statements (for debugging)"
    )

    # Logging Configuration
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level"
    )
    log_format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Log message format"
    )
    log_json: bool = Field(
        default=False,
        description="Output logs in JSON format"
    )
    log_file: Optional[Path] = Field(
        default=None,
        description="Path to log file (if None, logs to stdout only)"
    )

    # Upload Configuration
    max_upload_size: int = Field(
        default=5 * 1024 * 1024,  # 5MB
        description="Maximum photo upload size in bytes"
    )
    allowed_photo_extensions: list[str] = Field(
        default=[".jpg", ".jpeg", ".png"],
        description="Accepted photo file extensions"
    )

    @property
    def log_level_numeric(self) -> int:
        """Get numeric log level."""
        return getattr(logging, self.log_level)

    def storage_config(self) -> StorageConfig:
        """Build the storage configuration value for the backend factory."""
        return StorageConfig(
            backend=self.storage_type,
            local_root=self.storage_root,
            url_prefix=self.storage_url_prefix,
            bucket_name=self.s3_bucket_name,
            region=self.s3_region,
            access_key=self.s3_access_key,
            secret_key=self.s3_secret_key,
            endpoint_url=self.s3_endpoint_url,
            cdn_url=self.cdn_url,
            temp_dir=self.storage_temp_dir,
        )

    def configure_logging(self) -> None:
        """Configure logging based on settings."""
        import sys

        handlers: list[logging.Handler] = []

        console_handler = logging.StreamHandler(sys.stdout)
        handlers.append(console_handler)

        if self.log_file:
            self.log_file.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(self.log_file)
            handlers.append(file_handler)

        if self.log_json:
            import json

            class JSONFormatter(logging.Formatter):
                def format(self, record: logging.LogRecord) -> str:
                    log_obj = {
                        "timestamp": self.formatTime(record),
                        "level": record.levelname,
                        "logger": record.name,
                        "message": record.getMessage(),
                        "module": record.module,
                        "function": record.funcName,
                        "line": record.lineno,
                    }
                    if record.exc_info:
                        log_obj["exception"] = self.formatException(record.exc_info)
                    return json.dumps(log_obj)

            formatter = JSONFormatter()
        else:
            formatter = logging.Formatter(self.log_format)

        for handler in handlers:
            handler.setFormatter(formatter)

        logging.basicConfig(
            level=self.log_level_numeric,
            handlers=handlers,
            force=True,
        )

        if self.debug:
            logging.getLogger("contacts_api").setLevel(logging.DEBUG)
        else:
            # Reduce noise from third-party libraries
            logging.getLogger("botocore").setLevel(logging.WARNING)
            logging.getLogger("boto3").setLevel(logging.WARNING)
            logging.getLogger("urllib3").setLevel(logging.WARNING)


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings."""
    return Settings()
