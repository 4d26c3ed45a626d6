"""
Configuration settings for the Bank Statement Expense Tracker.
Centralized configuration management for the application.
"""

import os
from pathlib import Path
from typing import Optional

class Config:
    """Application configuration class."""

    # Application Settings
    APP_NAME = "Bank Statement Expense Tracker"
    VERSION = "1.0.0"

    # File Upload Settings
    MAX_FILE_SIZE_MB: int = int(os.getenv("MAX_FILE_SIZE_MB", "10"))
    MAX_FILE_SIZE_BYTES: int = MAX_FILE_SIZE_MB * 1024 * 1024
    ALLOWED_FILE_TYPES: list[str] = [".pdf"]

    # Storage Settings
    EXPENSES_CSV_PATH: Path = Path(os.getenv("EXPENSES_CSV_PATH", "./expenses.csv"))
    LOG_DIR: Path = Path(os.getenv("LOG_DIR", "./logs"))

    # Extraction Settings
    # When true, a draft still open at end of text (no DR/CR line seen) is emitted as a debit.
    TREAT_UNTYPED_TRAILING_AS_DEBIT: bool = (
        os.getenv("TREAT_UNTYPED_TRAILING_AS_DEBIT", "false").lower() == "true"
    )

    # Logging Settings
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    LOG_DATE_FORMAT: str = "%Y-%m-%d %H:%M:%S"
    # Written under LOG_DIR when set
    LOG_FILE: str = os.getenv("LOG_FILE", "")

    # API Settings
    API_HOST: str = os.getenv("API_HOST", "0.0.0.0")
    API_PORT: int = int(os.getenv("API_PORT", os.getenv("PORT", "3000")))
    CORS_ORIGINS: list[str] = [
        origin.strip() for origin in os.getenv("CORS_ORIGINS", "*").split(",") if origin.strip()
    ]

    @classmethod
    def ensure_directories(cls):
        """Ensure required directories exist."""
        cls.LOG_DIR.mkdir(parents=True, exist_ok=True)

    @classmethod
    def get_log_path(cls, filename: str) -> Path:
        """Get full path for log file."""
        cls.ensure_directories()
        return cls.LOG_DIR / filename

    @classmethod
    def validate_file(cls, filename: str, file_size: int) -> tuple[bool, Optional[str]]:
        """
        Validate uploaded file.

        Returns:
            tuple: (is_valid, error_message)
        """
        # Check file type
        if not any(filename.lower().endswith(ext) for ext in cls.ALLOWED_FILE_TYPES):
            return False, f"Invalid file type. Allowed types: {', '.join(cls.ALLOWED_FILE_TYPES)}"

        # Check file size
        if file_size > cls.MAX_FILE_SIZE_BYTES:
            size_mb = file_size / (1024 * 1024)
            return False, f"File too large ({size_mb:.2f} MB). Maximum: {cls.MAX_FILE_SIZE_MB} MB"

        # Check if empty
        if file_size == 0:
            return False, "File is empty"

        return True, None


# Create a singleton instance
config = Config()
