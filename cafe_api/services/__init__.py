"""
                        Services Module

Business logic on top of the JSON document store.

Services:
    - order_service: tables, menu, orders and bills
    - billing: bill lines and totals
    - excel_manager: file-locked Excel bill ledger
    - seed: default tables and menu

Usage:
    from cafe_api.services import get_order_service

    service = get_order_service()
    tables = service.list_tables()
"""

import logging
from functools import lru_cache

from cafe_api.core.config import get_settings
from cafe_api.database import get_store
from cafe_api.services.excel_manager import BillLedger
from cafe_api.services.order_service import OrderService

logger = logging.getLogger(__name__)


@lru_cache()
def get_order_service() -> OrderService:
    """
    Get the configured order service instance.

    Wired to the configured document store and, when enabled, the Excel
    bill ledger. Cached so every request shares one instance.

    Returns:
        OrderService: Configured order service
    """
    settings = get_settings()

    ledger = None
    if settings.export_bills_to_excel:
        ledger = BillLedger(
            settings.bills_excel_path,
            lock_timeout=settings.store_lock_timeout,
        )

    service = OrderService(
        store=get_store(),
        tax_rate=settings.tax_rate,
        ledger=ledger,
    )
    logger.info(
        f"Order Service: store={service.store.path}, tax_rate={service.tax_rate}, "
        f"ledger={'on' if ledger else 'off'}"
    )
    return service


def reset_order_service() -> None:
    """
    Clear the cached order service and store.

    The next call to get_order_service() rebuilds both from current settings.
    """
    get_order_service.cache_clear()
    get_store.cache_clear()
    logger.debug("Order service cache cleared")


__all__ = [
    "get_order_service",
    "reset_order_service",
    "OrderService",
    "BillLedger",
]
