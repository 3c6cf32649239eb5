"""Application configuration."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # MinIO / S3
    S3_ENDPOINT: str = "http://localhost:9000"
    S3_ACCESS_KEY: str = "minioadmin"
    S3_SECRET_KEY: str = "minioadmin"
    S3_REGION: str | None = None

    # Logging
    LOG_LEVEL: str = "INFO"

    # Demo run (scripts/demo.py)
    DEMO_BUCKET: str = "cloudstore-demo"
    DEMO_LOCAL_FILE: str = "demo-upload.txt"
    DEMO_DOWNLOAD_PATH: str = "demo-download.txt"
    DEMO_UPLOAD_KEY: str = "tests/demo-upload.txt"
    DEMO_COPY_KEY: str = "tests/demo-copy.txt"
    DEMO_MOVE_KEY: str = "moved/demo-move.txt"

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")


# Shared instance for scripts and the storage accessor
settings = Settings()
