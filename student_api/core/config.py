import logging

from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """
    Application settings with environment variable support.

    All settings can be configured via .env file or environment variables.
    Command line flags of the server and the seed utility take precedence.
    """

    # =============================================================================
    # APPLICATION
    # =============================================================================
    PROJECT_NAME: str = "Student Management API"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False

    # =============================================================================
    # SERVER
    # =============================================================================
    HOST: str = "0.0.0.0"
    PORT: int = 8080
    SERVE_SWAGGER: bool = True

    # =============================================================================
    # SQLITE DATABASE
    # =============================================================================
    DATABASE_PATH: str = "./students.db"
    DB_ECHO_SQL: bool = False

    # Probe read/write access and run a test transaction before serving
    STRICT_STORAGE_CHECKS: bool = True

    # =============================================================================
    # LOGGING
    # =============================================================================
    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="allow"
    )


# Create global settings instance
settings = Settings()


def log_config(config: Settings = settings) -> None:
    """Log the effective configuration."""
    logger.info("=" * 60)
    logger.info(f"Project Name: {config.PROJECT_NAME}")
    logger.info(f"Version: {config.APP_VERSION}")
    logger.info(f"Debug Mode: {config.DEBUG}")
    logger.info("-" * 60)
    logger.info(f"Listen Address: {config.HOST}:{config.PORT}")
    logger.info(f"Database Path: {config.DATABASE_PATH}")
    logger.info(f"Strict Storage Checks: {config.STRICT_STORAGE_CHECKS}")
    logger.info(f"Serve Swagger: {config.SERVE_SWAGGER}")
    logger.info(f"Echo SQL: {config.DB_ECHO_SQL}")
    logger.info("=" * 60)
