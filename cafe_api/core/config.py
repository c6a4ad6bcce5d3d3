"""
Application Configuration Module

Centralizes all configuration using environment variables with Pydantic Settings.
Supports three modes:
    - DEVELOPMENT: Local waiter testing, interactive docs enabled
    - STAGING: Pre-production trial run in the café
    - PRODUCTION: Live service, interactive docs disabled

Usage:
    from cafe_api.core.config import get_settings

    settings = get_settings()
    store_path = settings.database_path

Author: Cafe API Maintainers
Version: 1.0.0
"""

import logging
import sys
from enum import Enum
from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class EnvironmentMode(str, Enum):
    """
    Application environment modes.

    Attributes:
        DEVELOPMENT: Local testing with seeded data
        PRODUCTION: Live café service
        STAGING: Pre-production run against a copy of the live store
    """
    DEVELOPMENT = "development"
    PRODUCTION = "production"
    STAGING = "staging"


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings can be overridden via environment variables or .env file.

    Attributes:
        env_mode: Current environment (development/production/staging)
        debug: Enable verbose logging and error details

        # API Configuration
        api_host: Host to bind the API server
        api_port: Port for the API server

        # Document store
        data_directory: Directory holding the JSON store and exports
        database_filename: Name of the JSON document
        store_lock_timeout: Seconds to wait for the store file lock

        # Business Configuration
        cafe_name: Display name for the café
        tax_rate: Flat tax rate applied to bills (decimal)
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ==========================================================================
    # ENVIRONMENT
    # ==========================================================================

    env_mode: EnvironmentMode = Field(
        default=EnvironmentMode.DEVELOPMENT,
        description="Application environment mode"
    )
    debug: bool = Field(
        default=False,
        description="Enable debug mode with verbose logging"
    )

    # ==========================================================================
    # APPLICATION
    # ==========================================================================

    app_name: str = Field(
        default="Cafe Waiter Order Taking API",
        description="Application display name"
    )
    app_version: str = Field(
        default="1.0.0",
        description="Application version"
    )
    api_host: str = Field(
        default="0.0.0.0",
        description="API server host"
    )
    api_port: int = Field(
        default=3000,
        description="API server port"
    )

    # ==========================================================================
    # DOCUMENT STORE
    # ==========================================================================

    data_directory: str = Field(
        default="data",
        description="Directory for data files"
    )
    database_filename: str = Field(
        default="db.json",
        description="JSON document holding tables, menu, orders and bills"
    )
    store_lock_timeout: int = Field(
        default=30,
        description="Seconds to wait for the store file lock"
    )
    seed_on_startup: bool = Field(
        default=True,
        description="Write default tables and menu when the store is missing"
    )

    # ==========================================================================
    # BILL LEDGER
    # ==========================================================================

    export_bills_to_excel: bool = Field(
        default=True,
        description="Append every created bill to the Excel ledger"
    )
    bills_excel_filename: str = Field(
        default="bills.xlsx",
        description="Excel ledger filename"
    )

    # ==========================================================================
    # BUSINESS CONFIGURATION
    # ==========================================================================

    cafe_name: str = Field(
        default="Corner Café",
        description="Café display name"
    )
    tax_rate: float = Field(
        default=0.10,
        description="Tax rate as decimal (10%)"
    )

    # ==========================================================================
    # VALIDATORS
    # ==========================================================================

    @field_validator("env_mode", mode="before")
    @classmethod
    def validate_env_mode(cls, v: str) -> EnvironmentMode:
        """Convert string to EnvironmentMode enum."""
        if isinstance(v, EnvironmentMode):
            return v
        try:
            return EnvironmentMode(v.lower())
        except ValueError:
            valid = [e.value for e in EnvironmentMode]
            raise ValueError(f"Invalid env_mode. Must be one of: {valid}")

    @field_validator("tax_rate")
    @classmethod
    def validate_tax_rate(cls, v: float) -> float:
        if not 0 <= v < 1:
            raise ValueError("tax_rate must be a decimal between 0 and 1")
        return v

    # ==========================================================================
    # COMPUTED PROPERTIES
    # ==========================================================================

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.env_mode == EnvironmentMode.DEVELOPMENT

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.env_mode == EnvironmentMode.PRODUCTION

    @property
    def data_path(self) -> Path:
        return Path(self.data_directory)

    @property
    def database_path(self) -> Path:
        """Full path of the JSON document store."""
        return self.data_path / self.database_filename

    @property
    def bills_excel_path(self) -> Path:
        return self.data_path / self.bills_excel_filename


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached application settings.

    Settings are loaded once per process. Call ``get_settings.cache_clear()``
    after changing the environment to reload them.

    Returns:
        Settings: Configured application settings

    Example:
        >>> settings = get_settings()
        >>> print(settings.tax_rate)
        0.1
    """
    return Settings()


# =============================================================================
# LOGGING CONFIGURATION
# =============================================================================

def setup_logging(level: int = logging.INFO) -> logging.Logger:
    """
    Configure application-wide logging.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR)

    Returns:
        Configured package logger
    """
    settings = get_settings()

    if settings.debug:
        level = logging.DEBUG

    log_format = "%(asctime)s │ %(levelname)-8s │ %(name)-25s │ %(message)s"
    date_format = "%Y-%m-%d %H:%M:%S"

    logging.basicConfig(
        level=level,
        format=log_format,
        datefmt=date_format,
        handlers=[logging.StreamHandler(sys.stdout)],
    )

    # Reduce noise from third-party libraries
    logging.getLogger("filelock").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)

    return logging.getLogger("cafe_api")
