# awesome-referrals/backend/referrals/config.py

import logging
from typing import Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Manages application-wide settings loaded from the environment or a .env file.
    """
    model_config = SettingsConfigDict(env_file='.env', env_ignore_empty=True, extra='ignore')

    # --- Core Application Settings ---
    APP_ENV: str = "dev"
    APP_VERSION: str = "1.0.0"
    HOST: str = "0.0.0.0"
    PORT: int = 8000
    FRONTEND_BASE_URL: str = "http://localhost:3000"

    # --- JWT (HS256) Authentication ---
    JWT_SECRET: str = "your_jwt_secret_key"
    JWT_ALGORITHM: str = "HS256"
    JWT_EXPIRATION_MINUTES: int = 60
    BCRYPT_ROUNDS: int = 12

    # --- Database ---
    # The default URL is a process-local in-memory database: a restart loses
    # every user, referral, saved job and conversation.
    DATABASE_URL: str = "sqlite://"
    SEED_DEMO_DATA: bool = True

    # --- Logging ---
    LOG_LEVEL: str = "INFO"
    LOG_FILE: Optional[str] = None

    @field_validator('LOG_LEVEL')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        valid_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
        if v.upper() not in valid_levels:
            raise ValueError(f'Log level must be one of: {valid_levels}')
        return v.upper()


def setup_logging(settings: Settings) -> logging.Logger:
    """Set up the package logger based on settings."""
    logger = logging.getLogger('referrals')
    logger.setLevel(getattr(logging, settings.LOG_LEVEL))

    # Clear existing handlers so repeated imports don't duplicate output
    logger.handlers.clear()

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if settings.LOG_FILE:
        try:
            file_handler = logging.FileHandler(settings.LOG_FILE, encoding='utf-8')
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)
        except OSError as e:
            logger.warning(f"Could not set up file logging: {e}")

    return logger


settings = Settings()
