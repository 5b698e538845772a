"""
Data models for storage layer.

Defines the inventory record kept by the in-memory repository.
"""

from dataclasses import dataclass, field

MAX_NAME_LENGTH = 50


class InvalidRecordError(ValueError):
    """Raised when a record violates a field constraint."""


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


@dataclass(frozen=True)
class InventoryRecord:
    """Immutable snapshot of a single product keyed by a unique integer id.

    A stock update replaces the stored record with a new one rather than
    changing it in place.
    """
    id: int
    name: str
    quantity: int
    price: float
    max_name_length: int = field(default=MAX_NAME_LENGTH, repr=False, compare=False)

    def __post_init__(self):
        """Validate field types and constraints."""
        if not _is_int(self.id):
            raise InvalidRecordError(f"id must be an integer, got {self.id!r}")
        if not isinstance(self.name, str):
            raise InvalidRecordError(f"name must be a string, got {self.name!r}")
        if not self.name.strip():
            raise InvalidRecordError("name cannot be empty")
        if len(self.name) > self.max_name_length:
            raise InvalidRecordError(
                f"name must be at most {self.max_name_length} characters"
            )
        if not _is_int(self.quantity):
            raise InvalidRecordError(f"quantity must be an integer, got {self.quantity!r}")
        if self.quantity < 0:
            raise InvalidRecordError("quantity cannot be negative")
        if not (_is_int(self.price) or isinstance(self.price, float)):
            raise InvalidRecordError(f"price must be a number, got {self.price!r}")
        if self.price < 0:
            raise InvalidRecordError("price cannot be negative")
