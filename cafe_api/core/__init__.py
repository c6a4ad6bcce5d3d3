"""
Core module initialization.
Exports configuration, logging utilities and domain exceptions.
"""

from cafe_api.core.config import get_settings, setup_logging, Settings, EnvironmentMode
from cafe_api.core.exceptions import (
    CafeError,
    RecordNotFoundError,
    StoreError,
    StoreUnavailableError,
    UnknownCollectionError,
    InvalidOrderError,
    TableOccupiedError,
    OrderNotActiveError,
)

__all__ = [
    "get_settings",
    "setup_logging",
    "Settings",
    "EnvironmentMode",
    "CafeError",
    "RecordNotFoundError",
    "StoreError",
    "StoreUnavailableError",
    "UnknownCollectionError",
    "InvalidOrderError",
    "TableOccupiedError",
    "OrderNotActiveError",
]
