"""Unit tests for the in-memory receipt store."""

from concurrent.futures import ThreadPoolExecutor
from dataclasses import replace
from decimal import Decimal
from uuid import UUID, uuid4

import pytest

from receipt_processor.domain.errors import InvalidIdentifierError, ReceiptNotFoundError
from receipt_processor.domain.models import Item, Receipt
from receipt_processor.infrastructure.store import ReceiptStore, parse_identifier


class TestReceiptStore:
    """Test cases for ReceiptStore."""

    @pytest.fixture
    def store(self):
        """Empty receipt store."""
        return ReceiptStore()

    def test_submit_returns_uuid(self, store, target_receipt):
        """Test that submission hands out a UUID."""
        receipt_id = store.submit(target_receipt)

        assert isinstance(receipt_id, UUID)
        assert receipt_id.version == 4

    def test_round_trip(self, store, target_receipt):
        """Test that a looked-up receipt equals the submitted one."""
        receipt_id = store.submit(target_receipt)

        stored = store.lookup(receipt_id)

        assert stored == target_receipt
        assert stored.id == receipt_id
        assert stored.items == target_receipt.items

    def test_lookup_by_string(self, store, target_receipt):
        """Test lookup by the canonical string form."""
        receipt_id = store.submit(target_receipt)

        assert store.lookup(str(receipt_id)).id == receipt_id

    def test_submit_leaves_original_untouched(self, store, target_receipt):
        """Test that the submitted instance keeps no id."""
        store.submit(target_receipt)

        assert target_receipt.id is None

    def test_submit_replaces_existing_id(self, store, target_receipt):
        """Test that a preassigned id is never trusted."""
        preassigned = uuid4()

        receipt_id = store.submit(replace(target_receipt, id=preassigned))

        assert receipt_id != preassigned
        assert preassigned not in store

    def test_same_receipt_twice_gets_two_ids(self, store, target_receipt):
        """Test that every submission is a new receipt."""
        first = store.submit(target_receipt)
        second = store.submit(target_receipt)

        assert first != second
        assert len(store) == 2

    def test_lookup_unknown_id(self, store):
        """Test looking up an id that was never issued."""
        with pytest.raises(ReceiptNotFoundError) as exc_info:
            store.lookup(str(uuid4()))

        assert exc_info.value.status_code == 404

    @pytest.mark.parametrize("identifier", ["not-a-uuid", "", "1234", "../etc/passwd"])
    def test_lookup_malformed_id(self, store, identifier):
        """Test looking up an id that is not a UUID."""
        with pytest.raises(InvalidIdentifierError) as exc_info:
            store.lookup(identifier)

        assert exc_info.value.status_code == 400

    def test_contains(self, store, target_receipt):
        """Test membership by UUID, string and malformed input."""
        receipt_id = store.submit(target_receipt)

        assert receipt_id in store
        assert str(receipt_id) in store
        assert uuid4() not in store
        assert "garbage" not in store

    def test_parse_identifier_accepts_uuid(self):
        """Test that UUID instances pass through unchanged."""
        value = uuid4()

        assert parse_identifier(value) is value

    def test_concurrent_submissions_get_distinct_ids(self, store):
        """Test that concurrent submissions never lose or share an id."""
        count = 1000
        receipts = [
            Receipt(
                retailer=f"Store {n}",
                purchase_date="2022-01-01",
                purchase_time="13:01",
                total=Decimal("1.00"),
                items=(Item("Soda", Decimal("1.00")),),
            )
            for n in range(count)
        ]

        with ThreadPoolExecutor(max_workers=50) as executor:
            ids = list(executor.map(store.submit, receipts))

        assert len(set(ids)) == count
        assert len(store) == count
        for receipt_id, receipt in zip(ids, receipts):
            assert store.lookup(receipt_id) == receipt

    def test_lookups_during_submissions(self, store, target_receipt):
        """Test that ids are visible to other threads once submit returns."""

        def submit_then_lookup(_):
            receipt_id = store.submit(target_receipt)
            return store.lookup(str(receipt_id)).id == receipt_id

        with ThreadPoolExecutor(max_workers=32) as executor:
            results = list(executor.map(submit_then_lookup, range(500)))

        assert all(results)
        assert len(store) == 500
