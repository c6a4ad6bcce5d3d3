"""
JSON Document Store

Keeps every collection (tables, foodItems, orders, bills) in one flat JSON
document. Each store call is a single locked read-modify-write of the file;
there are no multi-call transactions, so the last write wins.
"""

import json
import logging
import os
from functools import lru_cache
from pathlib import Path
from typing import Any, Optional

from filelock import FileLock, Timeout

from cafe_api.core.config import get_settings
from cafe_api.core.exceptions import (
    RecordNotFoundError,
    StoreError,
    StoreUnavailableError,
    UnknownCollectionError,
)

logger = logging.getLogger(__name__)

COLLECTIONS = ("tables", "foodItems", "orders", "bills")


class DocumentStore:
    """File-locked JSON document with json-server style collections."""

    def __init__(self, path: Path, lock_timeout: int = 30):
        self.path = Path(path)
        self.lock_path = self.path.with_name(self.path.name + ".lock")
        self.lock_timeout = lock_timeout

    def __repr__(self):
        return f"<DocumentStore {self.path}>"

    # =========================================================================
    # FILE ACCESS
    # =========================================================================

    def _ensure_data_dir(self) -> None:
        """Create data directory if needed."""
        if not self.path.parent.exists():
            self.path.parent.mkdir(parents=True, exist_ok=True)
            logger.info(f"Created data directory: {self.path.parent}")

    def _lock(self) -> FileLock:
        self._ensure_data_dir()
        return FileLock(str(self.lock_path), timeout=self.lock_timeout)

    def _load(self) -> dict[str, list[dict[str, Any]]]:
        """Read the document, filling in any missing collection."""
        if not self.path.exists():
            document = {}
        else:
            try:
                with open(self.path, "r", encoding="utf-8") as f:
                    document = json.load(f)
            except (OSError, json.JSONDecodeError) as e:
                raise StoreError(f"Cannot read {self.path}: {e}") from e

        if not isinstance(document, dict):
            raise StoreError(f"{self.path} does not hold a JSON object")

        for name in COLLECTIONS:
            document.setdefault(name, [])
        return document

    def _dump(self, document: dict[str, Any]) -> None:
        """Write to a temp file and move it over the document."""
        tmp_path = self.path.with_name(self.path.name + ".tmp")
        try:
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump(document, f, indent=2, ensure_ascii=False)
            os.replace(tmp_path, self.path)
        except OSError as e:
            raise StoreError(f"Cannot write {self.path}: {e}") from e

    def _read(self) -> dict[str, list[dict[str, Any]]]:
        try:
            with self._lock():
                return self._load()
        except Timeout as e:
            logger.error(f"Lock timeout reading {self.path}")
            raise StoreUnavailableError(f"Lock timeout ({self.lock_timeout}s)") from e

    def _mutate(self, collection: str, change) -> dict[str, Any]:
        """Run ``change(records)`` under the lock and persist the result."""
        _check_collection(collection)
        try:
            with self._lock():
                document = self._load()
                result = change(document[collection])
                self._dump(document)
                return result
        except Timeout as e:
            logger.error(f"Lock timeout writing {collection} in {self.path}")
            raise StoreUnavailableError(f"Lock timeout ({self.lock_timeout}s)") from e

    # =========================================================================
    # QUERIES
    # =========================================================================

    def exists(self) -> bool:
        return self.path.exists()

    def counts(self) -> dict[str, int]:
        """Record count per collection. Fails if the document is unreadable."""
        document = self._read()
        return {name: len(document[name]) for name in COLLECTIONS}

    def query(self, collection: str, **filters: Any) -> list[dict[str, Any]]:
        """All records whose fields equal every given filter."""
        _check_collection(collection)
        records = self._read()[collection]
        return [
            record for record in records
            if all(record.get(field) == value for field, value in filters.items())
        ]

    def get(self, collection: str, record_id: int) -> dict[str, Any]:
        _check_collection(collection)
        return _find(self._read()[collection], collection, record_id)

    # =========================================================================
    # WRITES
    # =========================================================================

    def insert(self, collection: str, record: dict[str, Any]) -> dict[str, Any]:
        """Append a record with the next free integer id."""
        def change(records):
            new_record = {**record, "id": _next_id(records)}
            records.append(new_record)
            return new_record

        created = self._mutate(collection, change)
        logger.debug(f"Inserted {collection} #{created['id']}")
        return created

    def patch(self, collection: str, record_id: int, changes: dict[str, Any]) -> dict[str, Any]:
        """Shallow-merge ``changes`` into a record."""
        def change(records):
            existing = _find(records, collection, record_id)
            existing.update({k: v for k, v in changes.items() if k != "id"})
            return existing

        updated = self._mutate(collection, change)
        logger.debug(f"Patched {collection} #{record_id}: {sorted(changes)}")
        return updated

    def replace(self, collection: str, record_id: int, record: dict[str, Any]) -> dict[str, Any]:
        """Swap a whole record, keeping its id."""
        def change(records):
            existing = _find(records, collection, record_id)
            index = records.index(existing)
            records[index] = {**record, "id": existing["id"]}
            return records[index]

        return self._mutate(collection, change)

    def seed(self, document: dict[str, list[dict[str, Any]]]) -> bool:
        """
        Write an initial document if none exists yet.

        Returns:
            True if the document was written, False if one already existed
        """
        try:
            with self._lock():
                if self.path.exists():
                    return False
                seeded = {name: list(document.get(name, [])) for name in COLLECTIONS}
                self._dump(seeded)
        except Timeout as e:
            raise StoreUnavailableError(f"Lock timeout ({self.lock_timeout}s)") from e

        logger.info(
            f"Seeded {self.path} with "
            + ", ".join(f"{len(seeded[name])} {name}" for name in COLLECTIONS)
        )
        return True

    def clear(self) -> None:
        """Delete the document and its lock file."""
        for f in (self.path, self.lock_path):
            if f.exists():
                f.unlink()
        logger.info(f"Store cleared: {self.path}")


def _check_collection(collection: str) -> None:
    if collection not in COLLECTIONS:
        raise UnknownCollectionError(collection)


def _find(records: list[dict[str, Any]], collection: str, record_id: int) -> dict[str, Any]:
    for record in records:
        if record.get("id") == record_id:
            return record
    raise RecordNotFoundError(collection, record_id)


def _next_id(records: list[dict[str, Any]]) -> int:
    return max((r.get("id", 0) for r in records), default=0) + 1


@lru_cache()
def get_store(path: Optional[str] = None) -> DocumentStore:
    """
    Get the configured document store.

    Cached so every request shares one instance per path.
    """
    settings = get_settings()
    return DocumentStore(
        Path(path) if path else settings.database_path,
        lock_timeout=settings.store_lock_timeout,
    )


def init_db(seed_document: Optional[dict[str, list[dict[str, Any]]]] = None) -> DocumentStore:
    """
    Prepare the store at application startup.

    Seeds the default tables and menu when the document does not exist.
    """
    store = get_store()
    if seed_document is not None and store.seed(seed_document):
        logger.info("✅ Store seeded with default tables and menu")
    else:
        logger.info(f"✅ Store loaded: {store.counts()}")
    return store
