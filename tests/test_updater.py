"""Tests for owner amendments and the audit record."""

import pytest

from agriledger.errors import ErrorKind
from agriledger.registry.state import DataUpdate

from sample_data import FARMER, STRANGER, make_submission


@pytest.fixture
def populated(bound_registry, clock):
    clock.advance(5)
    assert bound_registry.register(make_submission(metadata="Old metadata"), FARMER).ok
    return bound_registry


class TestUpdate:
    def test_updates_metadata_successfully(self, populated, clock):
        clock.advance(3)
        result = populated.update(0, "New metadata", 100, FARMER)
        assert result.ok

        entry = populated.get_by_id(0)
        assert entry.metadata == "New metadata"
        assert entry.price == 100
        assert entry.timestamp == 8

        assert populated.get_update(0) == DataUpdate(
            update_metadata="New metadata",
            update_price=100,
            update_timestamp=8,
            updater=FARMER,
        )

    def test_immutable_fields_untouched(self, populated):
        before = populated.get_by_id(0)
        populated.update(0, "New metadata", 100, FARMER)
        after = populated.get_by_id(0)
        assert after.data_hash == before.data_hash
        assert after.owner == before.owner
        assert after.coordinates == before.coordinates
        assert after.id == before.id
        assert after.status is True

    def test_latest_update_replaces_record(self, populated, clock):
        populated.update(0, "First", 10, FARMER)
        clock.advance()
        populated.update(0, "Second", 20, FARMER)
        record = populated.get_update(0)
        assert record.update_metadata == "Second"
        assert record.update_price == 20
        assert record.update_timestamp == 6

    def test_non_owner_rejected(self, populated, oracle):
        oracle.grant(STRANGER)
        result = populated.update(0, "Hijacked", 1, STRANGER)
        assert result.error == ErrorKind.NOT_OWNER
        entry = populated.get_by_id(0)
        assert entry.metadata == "Old metadata"
        assert entry.price == 50
        assert populated.get_update(0) is None

    def test_unknown_id(self, populated):
        assert populated.update(99, "New metadata", 1, FARMER).error == ErrorKind.DATA_NOT_FOUND

    def test_not_found_reported_before_ownership(self, populated):
        assert populated.update(99, "x", 1, STRANGER).error == ErrorKind.DATA_NOT_FOUND

    def test_ownership_reported_before_field_errors(self, populated):
        assert populated.update(0, "", -1, STRANGER).error == ErrorKind.NOT_OWNER

    def test_invalid_metadata(self, populated):
        assert populated.update(0, "", 10, FARMER).error == ErrorKind.INVALID_METADATA
        assert populated.get_by_id(0).metadata == "Old metadata"

    def test_invalid_price(self, populated):
        assert populated.update(0, "Fine", -1, FARMER).error == ErrorKind.INVALID_PRICE
        assert populated.get_update(0) is None

    def test_update_charges_no_fee(self, populated, sink):
        populated.update(0, "New metadata", 100, FARMER)
        assert len(sink.transfers) == 1

    def test_owner_can_update_after_losing_authority(self, populated, oracle):
        oracle.revoke(FARMER)
        assert populated.update(0, "Still mine", 5, FARMER).ok
