from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Supabase configuration
    SUPABASE_URL: str | None = None
    DATABASE_URL: str | None = None
    SUPABASE_SERVICE_ROLE_KEY: str | None = None
    JWT_SECRET: str | None = None

    # Application URLs
    APP_BASE_URL: str = "http://localhost:8001"  # Default for development
    FRONTEND_URL: str | None = None
    CORS_ORIGINS: list[str] = ["*"]

    # Storage buckets
    VIDEO_BUCKET: str = "videos"
    SCREENSHOT_BUCKET: str = "screenshots"
    SIGNED_URL_EXPIRES_IN: int = 3600  # 1 hour

    # Upload limits
    MAX_VIDEO_UPLOAD_BYTES: int = 500 * 1024 * 1024  # 500MB
    ALLOWED_VIDEO_MIME_TYPES: list[str] = [
        "video/mp4",
        "video/webm",
        "video/quicktime",
    ]

    # Player time-update polling (YouTube backend)
    PLAYER_POLL_PLAYING_SECONDS: float = 0.25
    PLAYER_POLL_PAUSED_SECONDS: float = 0.5

    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
    )


settings = Settings()
