"""
Domain Exceptions

Raised by the document store and the order service. The HTTP layer maps
every one of them to the same generic 500 response; the type only shows up
in the logs.
"""


class CafeError(Exception):
    """Base class for all café backend errors."""


class RecordNotFoundError(CafeError):
    """A record id does not exist in its collection."""

    def __init__(self, collection: str, record_id: int):
        self.collection = collection
        self.record_id = record_id
        super().__init__(f"{collection} #{record_id} not found")


class StoreError(CafeError):
    """The JSON document could not be read or written."""


class StoreUnavailableError(StoreError):
    """The store file lock could not be acquired in time."""


class UnknownCollectionError(StoreError):
    def __init__(self, collection: str):
        self.collection = collection
        super().__init__(f"Unknown collection: {collection}")


class InvalidOrderError(CafeError):
    """An order operation is not allowed in the current state."""


class TableOccupiedError(InvalidOrderError):
    def __init__(self, table_id: int, order_id: int):
        self.table_id = table_id
        self.order_id = order_id
        super().__init__(f"Table #{table_id} already has active order #{order_id}")


class OrderNotActiveError(InvalidOrderError):
    def __init__(self, order_id: int, status: str):
        self.order_id = order_id
        self.status = status
        super().__init__(f"Order #{order_id} is {status}, not active")
