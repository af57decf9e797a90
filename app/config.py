"""Application configuration using pydantic-settings."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Server
    port: int = 8080
    host: str = "0.0.0.0"

    # Logging
    log_level: str = "INFO"

    # HTTP Settings
    http_timeout: float = 30.0  # seconds
    user_agent: str = "image-proxy/1.0"

    # Image Settings
    output_quality: int = 90  # JPEG/WebP re-encode quality
    max_image_pixels: int = 89_478_485  # Pillow decompression bomb limit
    slow_transform_seconds: float = 2.0

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


# Global settings instance
settings = Settings()
