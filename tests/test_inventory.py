"""
Unit tests for inventory records and the in-memory repository.
"""

from dataclasses import FrozenInstanceError

import pytest

from lab_tools.storage.models import InventoryRecord, InvalidRecordError
from lab_tools.storage.repository import (
    CapacityExceededError,
    DuplicateIdError,
    InventoryError,
    InventoryRepository,
    NegativeStockError,
    RecordNotFoundError,
)


def make_record(record_id=1, name="Widget", quantity=10, price=2.5):
    return InventoryRecord(id=record_id, name=name, quantity=quantity, price=price)


class TestInventoryRecord:
    """Test record validation."""

    def test_valid_record(self):
        """Test a well-formed record is accepted."""
        record = make_record()
        assert record.id == 1
        assert record.name == "Widget"

    @pytest.mark.parametrize("name", ["", "   "])
    def test_empty_name_rejected(self, name):
        """Test blank names are rejected."""
        with pytest.raises(InvalidRecordError, match="name cannot be empty"):
            make_record(name=name)

    def test_name_length_bounded(self):
        """Test names longer than the limit are rejected."""
        make_record(name="x" * 50)
        with pytest.raises(InvalidRecordError, match="at most 50"):
            make_record(name="x" * 51)

    def test_custom_name_limit(self):
        """Test the name limit can be configured per record."""
        with pytest.raises(InvalidRecordError, match="at most 5"):
            InventoryRecord(id=1, name="Gadget", quantity=1, price=1.0, max_name_length=5)

    def test_negative_quantity_rejected(self):
        """Test negative starting quantity is rejected."""
        with pytest.raises(InvalidRecordError, match="quantity"):
            make_record(quantity=-1)

    def test_negative_price_rejected(self):
        """Test negative price is rejected."""
        with pytest.raises(InvalidRecordError, match="price"):
            make_record(price=-0.01)

    def test_name_limit_not_part_of_equality(self):
        """Test records compare on their data fields only."""
        a = InventoryRecord(id=1, name="A", quantity=1, price=1.0, max_name_length=10)
        b = InventoryRecord(id=1, name="A", quantity=1, price=1.0)
        assert a == b

    def test_record_is_immutable(self):
        """Test fields cannot be reassigned after creation."""
        record = make_record(quantity=3)

        with pytest.raises(FrozenInstanceError):
            record.quantity = -5

        assert record.quantity == 3

    def test_integer_price_accepted(self):
        """Test a whole-number price is a valid number."""
        assert make_record(price=4).price == 4

    @pytest.mark.parametrize("overrides,message", [
        ({"name": 123}, "name must be a string"),
        ({"name": None}, "name must be a string"),
        ({"record_id": "1"}, "id must be an integer"),
        ({"record_id": True}, "id must be an integer"),
        ({"quantity": 2.5}, "quantity must be an integer"),
        ({"quantity": "10"}, "quantity must be an integer"),
        ({"price": "2.50"}, "price must be a number"),
        ({"price": None}, "price must be a number"),
    ])
    def test_wrong_field_types_rejected(self, overrides, message):
        """Test fields of the wrong type raise InvalidRecordError."""
        with pytest.raises(InvalidRecordError, match=message):
            make_record(**overrides)


class TestAddProduct:
    """Test inserting records."""

    def test_add_and_list_in_insertion_order(self):
        """Test records are listed in the order they were added."""
        repository = InventoryRepository()
        repository.add_product(make_record(3, "C"))
        repository.add_product(make_record(1, "A"))
        repository.add_product(make_record(2, "B"))

        assert [r.id for r in repository.list_all()] == [3, 1, 2]
        assert len(repository) == 3

    def test_duplicate_id_rejected_and_size_unchanged(self):
        """Test adding an existing id fails without changing the store."""
        repository = InventoryRepository()
        repository.add_product(make_record(7, "First"))

        with pytest.raises(DuplicateIdError) as excinfo:
            repository.add_product(make_record(7, "Second"))

        assert excinfo.value.record_id == 7
        assert len(repository) == 1
        assert repository.find_by_id(7).name == "First"

    def test_capacity_exceeded(self):
        """Test the store refuses records beyond its capacity."""
        repository = InventoryRepository(capacity=2)
        repository.add_product(make_record(1))
        repository.add_product(make_record(2))
        assert repository.is_full

        with pytest.raises(CapacityExceededError) as excinfo:
            repository.add_product(make_record(3))

        assert excinfo.value.capacity == 2
        assert len(repository) == 2

    def test_capacity_checked_before_duplicate(self):
        """Test a full store reports capacity even for a duplicate id."""
        repository = InventoryRepository(capacity=1)
        repository.add_product(make_record(1))

        with pytest.raises(CapacityExceededError):
            repository.add_product(make_record(1))

    def test_default_capacity(self):
        """Test the default capacity is one hundred records."""
        repository = InventoryRepository()
        for i in range(100):
            repository.add_product(make_record(i))

        with pytest.raises(CapacityExceededError):
            repository.add_product(make_record(100))

    def test_invalid_capacity(self):
        """Test a non-positive capacity is rejected."""
        with pytest.raises(ValueError, match="capacity must be > 0"):
            InventoryRepository(capacity=0)

    def test_errors_share_a_base_class(self):
        """Test callers can catch every rejection with one type."""
        for error_type in (DuplicateIdError, CapacityExceededError,
                           RecordNotFoundError, NegativeStockError):
            assert issubclass(error_type, InventoryError)


class TestFindById:
    """Test lookups."""

    def test_found(self):
        """Test an existing record is returned."""
        repository = InventoryRepository()
        record = make_record(5, "Bolt")
        repository.add_product(record)

        assert repository.find_by_id(5) is record

    def test_not_found(self):
        """Test an unknown id raises RecordNotFoundError."""
        repository = InventoryRepository()

        with pytest.raises(RecordNotFoundError, match="ID 42 not found"):
            repository.find_by_id(42)


class TestUpdateStock:
    """Test stock changes."""

    def test_positive_delta(self):
        """Test adding stock returns the new quantity."""
        repository = InventoryRepository()
        repository.add_product(make_record(1, quantity=10))

        assert repository.update_stock(1, 5) == 15
        assert repository.find_by_id(1).quantity == 15

    def test_remove_all_stock_reaches_zero(self):
        """Test removing exactly the quantity leaves zero."""
        repository = InventoryRepository()
        repository.add_product(make_record(1, quantity=10))

        assert repository.update_stock(1, -10) == 0
        assert repository.find_by_id(1).quantity == 0

    def test_overdraw_rejected_and_quantity_unchanged(self):
        """Test removing more than is in stock fails without change."""
        repository = InventoryRepository()
        repository.add_product(make_record(1, quantity=10))

        with pytest.raises(NegativeStockError) as excinfo:
            repository.update_stock(1, -11)

        assert excinfo.value.quantity == 10
        assert excinfo.value.delta == -11
        assert repository.find_by_id(1).quantity == 10

    def test_unknown_id(self):
        """Test updating a missing record raises RecordNotFoundError."""
        repository = InventoryRepository()

        with pytest.raises(RecordNotFoundError):
            repository.update_stock(99, 1)

    def test_list_all_returns_a_copy(self):
        """Test mutating the returned list does not affect the store."""
        repository = InventoryRepository()
        repository.add_product(make_record(1))

        listed = repository.list_all()
        listed.clear()

        assert len(repository) == 1

    def test_returned_records_cannot_bypass_stock_rules(self):
        """Test records handed out by lookups cannot be driven negative."""
        repository = InventoryRepository()
        repository.add_product(make_record(1, quantity=10))

        with pytest.raises(FrozenInstanceError):
            repository.find_by_id(1).quantity = -5
        with pytest.raises(FrozenInstanceError):
            repository.list_all()[0].quantity = -5

        assert repository.find_by_id(1).quantity == 10

    def test_update_replaces_record_in_position(self):
        """Test an update keeps the insertion order and leaves old snapshots alone."""
        repository = InventoryRepository()
        repository.add_product(make_record(1, "A", quantity=1))
        repository.add_product(make_record(2, "B", quantity=2))
        repository.add_product(make_record(3, "C", quantity=3))
        before = repository.find_by_id(2)

        repository.update_stock(2, 5)

        assert [r.id for r in repository.list_all()] == [1, 2, 3]
        assert repository.find_by_id(2) == make_record(2, "B", quantity=7)
        assert before.quantity == 2
