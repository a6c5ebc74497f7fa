"""
Application configuration management.
"""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Settings loaded from ``JITC_``-prefixed environment variables."""

    # Logging
    log_level: str = "INFO"
    json_logs: bool = True

    # Loader defaults, overridable per invocation
    debug: bool = False
    stats: bool = False

    # Batch processing
    max_workers: int = 4

    class Config:
        env_prefix = "JITC_"
        env_file = ".env"
        case_sensitive = False


# Global settings instance
settings = Settings()
