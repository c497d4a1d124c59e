"""Tests for submission and amendment validation."""

import pytest

from agriledger.catalog import CropType, DataFormat, DataType, SensorType
from agriledger.errors import ErrorKind
from agriledger.registry.loader import load_snapshot
from agriledger.registry.state import Coordinates, DataUpdate, RegistryState
from agriledger.registry.validator import (
    check_integrity,
    validate_amendment,
    validate_submission,
)

from sample_data import FIXTURES, make_submission


def _check(submission, next_id=0, max_entries=10000):
    return validate_submission(submission, next_id, max_entries)


class TestValidateSubmission:
    def test_valid_submission_passes(self):
        result = _check(make_submission())
        assert result.ok

    def test_resolves_enum_strings(self):
        fields = _check(make_submission()).value
        assert fields.crop_type is CropType.WHEAT
        assert fields.data_type is DataType.NDVI
        assert fields.sensor_type is SensorType.DRONE
        assert fields.format is DataFormat.TIFF

    def test_accepts_enum_members(self):
        result = _check(make_submission(crop_type=CropType.SOYBEAN, format=DataFormat.JPEG))
        assert result.ok
        assert result.value.crop_type is CropType.SOYBEAN

    def test_capacity_reached(self):
        result = _check(make_submission(), next_id=5, max_entries=5)
        assert result.error == ErrorKind.MAX_ENTRIES_EXCEEDED

    def test_capacity_one_below_ceiling(self):
        assert _check(make_submission(), next_id=4, max_entries=5).ok

    @pytest.mark.parametrize("data_hash,ok", [
        ("", False),
        ("a", True),
        ("a" * 64, True),
        ("a" * 65, False),
    ])
    def test_data_hash_bounds(self, data_hash, ok):
        result = _check(make_submission(data_hash=data_hash))
        assert result.ok is ok
        if not ok:
            assert result.error == ErrorKind.INVALID_DATA_HASH

    @pytest.mark.parametrize("metadata,ok", [
        ("", False),
        ("m" * 500, True),
        ("m" * 501, False),
    ])
    def test_metadata_bounds(self, metadata, ok):
        result = _check(make_submission(metadata=metadata))
        assert result.ok is ok
        if not ok:
            assert result.error == ErrorKind.INVALID_METADATA

    @pytest.mark.parametrize("location,ok", [
        ("", False),
        ("l" * 100, True),
        ("l" * 101, False),
    ])
    def test_location_bounds(self, location, ok):
        result = _check(make_submission(location=location))
        assert result.ok is ok
        if not ok:
            assert result.error == ErrorKind.INVALID_LOCATION

    def test_invalid_crop_type(self):
        assert _check(make_submission(crop_type="invalid")).error == ErrorKind.INVALID_CROP_TYPE

    def test_crop_type_is_case_sensitive(self):
        assert _check(make_submission(crop_type="Wheat")).error == ErrorKind.INVALID_CROP_TYPE

    @pytest.mark.parametrize("capture_date,ok", [(0, False), (-1, False), (1, True)])
    def test_capture_date_must_be_positive(self, capture_date, ok):
        result = _check(make_submission(capture_date=capture_date))
        assert result.ok is ok
        if not ok:
            assert result.error == ErrorKind.INVALID_CAPTURE_DATE

    @pytest.mark.parametrize("price,ok", [(0, True), (-1, False)])
    def test_price_non_negative(self, price, ok):
        result = _check(make_submission(price=price))
        assert result.ok is ok
        if not ok:
            assert result.error == ErrorKind.INVALID_PRICE

    def test_price_rejects_non_integer(self):
        assert _check(make_submission(price="50")).error == ErrorKind.INVALID_PRICE

    def test_invalid_data_type(self):
        assert _check(make_submission(data_type="lidar")).error == ErrorKind.INVALID_DATA_TYPE

    @pytest.mark.parametrize("resolution,ok", [
        (0, False),
        (1, True),
        (10000, True),
        (10001, False),
    ])
    def test_resolution_bounds(self, resolution, ok):
        result = _check(make_submission(resolution=resolution))
        assert result.ok is ok
        if not ok:
            assert result.error == ErrorKind.INVALID_RESOLUTION

    @pytest.mark.parametrize("lat,lon,ok", [
        (90, 180, True),
        (-90, -180, True),
        (90.0001, 0, False),
        (-90.0001, 0, False),
        (0, 180.0001, False),
        (0, -181, False),
    ])
    def test_coordinate_bounds(self, lat, lon, ok):
        result = _check(make_submission(coordinates=Coordinates(lat=lat, lon=lon)))
        assert result.ok is ok
        if not ok:
            assert result.error == ErrorKind.INVALID_COORDINATES

    def test_invalid_sensor_type(self):
        assert _check(make_submission(sensor_type="balloon")).error == ErrorKind.INVALID_SENSOR_TYPE

    def test_invalid_format(self):
        assert _check(make_submission(format="png")).error == ErrorKind.INVALID_DATA_FORMAT


class TestCheckOrder:
    def test_capacity_reported_before_fields(self):
        result = _check(make_submission(data_hash="", metadata=""), next_id=1, max_entries=1)
        assert result.error == ErrorKind.MAX_ENTRIES_EXCEEDED

    def test_hash_reported_before_metadata(self):
        result = _check(make_submission(data_hash="", metadata=""))
        assert result.error == ErrorKind.INVALID_DATA_HASH

    def test_price_reported_before_data_type(self):
        result = _check(make_submission(price=-5, data_type="bogus"))
        assert result.error == ErrorKind.INVALID_PRICE

    def test_coordinates_reported_before_format(self):
        result = _check(make_submission(coordinates=Coordinates(lat=100, lon=0), format="png"))
        assert result.error == ErrorKind.INVALID_COORDINATES


class TestValidateAmendment:
    def test_valid_amendment(self):
        assert validate_amendment("New metadata", 0).ok

    def test_empty_metadata(self):
        assert validate_amendment("", 10).error == ErrorKind.INVALID_METADATA

    def test_metadata_too_long(self):
        assert validate_amendment("m" * 501, 10).error == ErrorKind.INVALID_METADATA

    def test_negative_price(self):
        assert validate_amendment("ok", -1).error == ErrorKind.INVALID_PRICE


class TestIntegrity:
    def test_fixture_snapshot_passes(self):
        state = RegistryState.from_dict(load_snapshot(FIXTURES / "registry-minimal.json")["registry"])
        result = check_integrity(state)
        assert result.passed
        assert result.total_entries == 2
        assert "All checks passed." in result.summary()

    def test_empty_state_passes(self):
        assert check_integrity(RegistryState()).passed

    def test_detects_gap_in_ids(self):
        state = RegistryState.from_dict(load_snapshot(FIXTURES / "registry-minimal.json")["registry"])
        state.next_data_id = 3
        result = check_integrity(state)
        assert not result.passed
        assert any("missing entry" in e for e in result.errors)

    def test_detects_foreign_updater(self):
        state = RegistryState.from_dict(load_snapshot(FIXTURES / "registry-minimal.json")["registry"])
        state.updates[1] = DataUpdate("Thermal pass, paddies", 80, 4, "ST9NOBODY")
        result = check_integrity(state)
        assert any("is not owner" in e for e in result.errors)

    def test_detects_stale_hash_index(self):
        state = RegistryState.from_dict(load_snapshot(FIXTURES / "registry-minimal.json")["registry"])
        state.ids_by_hash["ghost"] = 7
        result = check_integrity(state)
        assert any("unknown id 7" in e for e in result.errors)

    def test_detects_burn_address_binding(self):
        state = RegistryState(authority_contract="SP000000000000000000002Q6VF78")
        assert not check_integrity(state).passed
