"""
Bill Ledger Excel Export with File Locking

Appends every created bill to an Excel workbook so the café owner can
reconcile the day's takings.

Author: Cafe API Maintainers
Version: 1.0.0
"""

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any

import pandas as pd
from filelock import FileLock, Timeout

logger = logging.getLogger(__name__)


class BillLedger:
    """Excel ledger of bills, one row per bill."""

    BILL_COLUMNS = [
        "bill_id",
        "order_id",
        "table_id",
        "date_time",
        "customer_name",
        "customer_phone",
        "items",
        "item_count",
        "subtotal",
        "tax",
        "total",
        "exported_at",
    ]

    def __init__(self, file_path: Path, lock_timeout: int = 30):
        self.file_path = Path(file_path)
        self.lock_path = self.file_path.with_name(self.file_path.name + ".lock")
        self.lock_timeout = lock_timeout

    def _ensure_data_dir(self) -> None:
        """Create data directory if needed."""
        data_dir = self.file_path.parent
        if not data_dir.exists():
            data_dir.mkdir(parents=True, exist_ok=True)
            logger.info(f"Created data directory: {data_dir}")

    def _load_or_create_df(self) -> pd.DataFrame:
        """Load existing ledger or create new DataFrame."""
        if self.file_path.exists():
            try:
                return pd.read_excel(self.file_path, engine="openpyxl")
            except Exception as e:
                logger.warning(f"Error reading {self.file_path}: {e}")
                return pd.DataFrame(columns=self.BILL_COLUMNS)
        return pd.DataFrame(columns=self.BILL_COLUMNS)

    def export_bill(self, bill_data: dict[str, Any], table_id: Any = None) -> dict[str, Any]:
        """
        Append a bill to the ledger under the file lock.

        Args:
            bill_data: Bill record in its stored camelCase shape
            table_id: Table the billed order was placed at

        Returns:
            Result dict with success flag, message and export time
        """
        self._ensure_data_dir()

        bill_id = bill_data.get("id", 0)
        result = {
            "success": False,
            "message": "",
            "bill_id": bill_id,
            "exported_at": None,
        }

        try:
            lock = FileLock(str(self.lock_path), timeout=self.lock_timeout)

            with lock:
                logger.debug(f"Lock acquired for Bill #{bill_id}")

                df = self._load_or_create_df()

                export_time = datetime.now().isoformat()
                items = bill_data.get("items", [])
                new_row = {
                    "bill_id": bill_id,
                    "order_id": bill_data.get("orderId"),
                    "table_id": table_id,
                    "date_time": bill_data.get("createdAt", export_time),
                    "customer_name": bill_data.get("customerName"),
                    "customer_phone": bill_data.get("customerPhone"),
                    "items": json.dumps(items, ensure_ascii=False),
                    "item_count": sum(item.get("quantity", 0) for item in items),
                    "subtotal": bill_data.get("subtotal"),
                    "tax": bill_data.get("tax"),
                    "total": bill_data.get("total"),
                    "exported_at": export_time,
                }

                if df.empty:
                    df = pd.DataFrame([new_row], columns=self.BILL_COLUMNS)
                else:
                    df = pd.concat([df, pd.DataFrame([new_row])], ignore_index=True)
                df.to_excel(str(self.file_path), index=False, engine="openpyxl")

                logger.info(f"Bill #{bill_id} exported to Excel")

                result["success"] = True
                result["message"] = f"Bill #{bill_id} exported"
                result["exported_at"] = export_time

            logger.debug(f"Lock released for Bill #{bill_id}")

        except Timeout:
            result["message"] = f"Lock timeout ({self.lock_timeout}s)"
            logger.error(f"Lock timeout for Bill #{bill_id}")

        except Exception as e:
            result["message"] = str(e)
            logger.exception(f"Error exporting Bill #{bill_id}")

        return result

    def get_all_bills(self) -> list[dict[str, Any]]:
        """Get all ledger rows."""
        if not self.file_path.exists():
            return []

        try:
            df = pd.read_excel(self.file_path, engine="openpyxl")
            return df.to_dict("records")
        except Exception as e:
            logger.error(f"Error reading bill ledger: {e}")
            return []

    def clear_all(self) -> bool:
        """Delete the ledger and its lock file."""
        try:
            for f in (self.file_path, self.lock_path):
                if f.exists():
                    f.unlink()
            logger.info("Bill ledger cleared")
            return True
        except OSError as e:
            logger.error(f"Error clearing bill ledger: {e}")
            return False
