"""
Repository pattern for inventory data access.

Holds records in memory for the lifetime of one session. Nothing is
written to disk.
"""

import logging
from dataclasses import replace
from typing import List

from .models import InventoryRecord

logger = logging.getLogger(__name__)

DEFAULT_CAPACITY = 100


class InventoryError(Exception):
    """Base class for rejected inventory operations."""


class DuplicateIdError(InventoryError):
    """Raised when adding a record whose id is already stored."""

    def __init__(self, record_id: int):
        super().__init__(f"A product with ID {record_id} already exists")
        self.record_id = record_id


class CapacityExceededError(InventoryError):
    """Raised when adding to a repository that is already full."""

    def __init__(self, capacity: int):
        super().__init__(f"Inventory is full ({capacity} products)")
        self.capacity = capacity


class RecordNotFoundError(InventoryError):
    """Raised when no record matches the requested id."""

    def __init__(self, record_id: int):
        super().__init__(f"Product with ID {record_id} not found")
        self.record_id = record_id


class NegativeStockError(InventoryError):
    """Raised when a stock change would take quantity below zero."""

    def __init__(self, record_id: int, quantity: int, delta: int):
        super().__init__(
            f"Cannot apply change of {delta} to product {record_id} "
            f"with quantity {quantity}: stock cannot be negative"
        )
        self.record_id = record_id
        self.quantity = quantity
        self.delta = delta


class InventoryRepository:
    """Bounded, insertion-ordered store of inventory records.

    Ids are unique and records are never removed once added.
    """

    def __init__(self, capacity: int = DEFAULT_CAPACITY):
        """Initialize an empty repository.

        Args:
            capacity: Maximum number of records the store accepts
        """
        if capacity <= 0:
            raise ValueError("capacity must be > 0")
        self._capacity = capacity
        self._records: List[InventoryRecord] = []

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def is_full(self) -> bool:
        return len(self._records) >= self._capacity

    def __len__(self) -> int:
        return len(self._records)

    def add_product(self, record: InventoryRecord) -> None:
        """Append a new record.

        Raises:
            CapacityExceededError: If the store is full
            DuplicateIdError: If a record with the same id exists
        """
        if self.is_full:
            logger.warning("Rejected product %d: inventory at capacity %d", record.id, self._capacity)
            raise CapacityExceededError(self._capacity)
        if self._index_of(record.id) != -1:
            logger.warning("Rejected product %d: duplicate id", record.id)
            raise DuplicateIdError(record.id)

        self._records.append(record)
        logger.debug("Added product %d (%s)", record.id, record.name)

    def find_by_id(self, record_id: int) -> InventoryRecord:
        """Return the record with the given id.

        Raises:
            RecordNotFoundError: If no record matches
        """
        index = self._index_of(record_id)
        if index == -1:
            raise RecordNotFoundError(record_id)
        return self._records[index]

    def update_stock(self, record_id: int, delta: int) -> int:
        """Apply a quantity change, keeping the record in its list position.

        Args:
            record_id: Id of the record to change
            delta: Positive to add stock, negative to remove it

        Returns:
            The new quantity

        Raises:
            RecordNotFoundError: If no record matches
            NegativeStockError: If the result would be below zero
        """
        index = self._index_of(record_id)
        if index == -1:
            raise RecordNotFoundError(record_id)

        record = self._records[index]
        new_quantity = record.quantity + delta
        if new_quantity < 0:
            logger.warning("Rejected stock change %d for product %d", delta, record_id)
            raise NegativeStockError(record_id, record.quantity, delta)

        self._records[index] = replace(record, quantity=new_quantity)
        logger.debug("Product %d quantity is now %d", record_id, new_quantity)
        return new_quantity

    def list_all(self) -> List[InventoryRecord]:
        """Return all records in insertion order."""
        return list(self._records)

    def _index_of(self, record_id: int) -> int:
        for i, record in enumerate(self._records):
            if record.id == record_id:
                return i
        return -1
