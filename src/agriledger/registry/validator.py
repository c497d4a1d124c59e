"""Field validation for submissions and amendments, plus state integrity checks."""

from __future__ import annotations

from dataclasses import dataclass, field, replace

from agriledger.catalog import (
    BURN_ADDRESS,
    LAT_RANGE,
    LON_RANGE,
    MAX_HASH_LENGTH,
    MAX_LOCATION_LENGTH,
    MAX_METADATA_LENGTH,
    MAX_RESOLUTION,
    CropType,
    DataFormat,
    DataType,
    SensorType,
    parse_member,
)
from agriledger.errors import ErrorKind, Result
from agriledger.registry.state import Coordinates, DataSubmission, RegistryState


def _is_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_number(value: object) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _bounded_text(value: object, limit: int) -> bool:
    return isinstance(value, str) and 0 < len(value) <= limit


def valid_data_hash(value: object) -> bool:
    return _bounded_text(value, MAX_HASH_LENGTH)


def valid_metadata(value: object) -> bool:
    return _bounded_text(value, MAX_METADATA_LENGTH)


def valid_location(value: object) -> bool:
    return _bounded_text(value, MAX_LOCATION_LENGTH)


def valid_capture_date(value: object) -> bool:
    return _is_int(value) and value > 0


def valid_price(value: object) -> bool:
    return _is_int(value) and value >= 0


def valid_resolution(value: object) -> bool:
    return _is_int(value) and 0 < value <= MAX_RESOLUTION


def valid_coordinates(value: object) -> bool:
    if not isinstance(value, Coordinates):
        return False
    if not (_is_number(value.lat) and _is_number(value.lon)):
        return False
    return (
        LAT_RANGE[0] <= value.lat <= LAT_RANGE[1]
        and LON_RANGE[0] <= value.lon <= LON_RANGE[1]
    )


def validate_submission(
    submission: DataSubmission,
    next_data_id: int,
    max_data_entries: int,
) -> Result:
    """Run the submission checks in their fixed order.

    Only the first failing check is reported. Hash uniqueness is not
    checked here since it needs the hash index.

    Args:
        submission: Candidate fields.
        next_data_id: Id the entry would receive.
        max_data_entries: Capacity ceiling.

    Returns:
        Success carrying the submission with enumerated fields resolved to
        catalog members, or the first failing ErrorKind.
    """
    if next_data_id >= max_data_entries:
        return Result.failure(ErrorKind.MAX_ENTRIES_EXCEEDED)
    if not valid_data_hash(submission.data_hash):
        return Result.failure(ErrorKind.INVALID_DATA_HASH)
    if not valid_metadata(submission.metadata):
        return Result.failure(ErrorKind.INVALID_METADATA)
    if not valid_location(submission.location):
        return Result.failure(ErrorKind.INVALID_LOCATION)

    crop_type = parse_member(CropType, submission.crop_type)
    if crop_type is None:
        return Result.failure(ErrorKind.INVALID_CROP_TYPE)
    if not valid_capture_date(submission.capture_date):
        return Result.failure(ErrorKind.INVALID_CAPTURE_DATE)
    if not valid_price(submission.price):
        return Result.failure(ErrorKind.INVALID_PRICE)

    data_type = parse_member(DataType, submission.data_type)
    if data_type is None:
        return Result.failure(ErrorKind.INVALID_DATA_TYPE)
    if not valid_resolution(submission.resolution):
        return Result.failure(ErrorKind.INVALID_RESOLUTION)
    if not valid_coordinates(submission.coordinates):
        return Result.failure(ErrorKind.INVALID_COORDINATES)

    sensor_type = parse_member(SensorType, submission.sensor_type)
    if sensor_type is None:
        return Result.failure(ErrorKind.INVALID_SENSOR_TYPE)
    data_format = parse_member(DataFormat, submission.format)
    if data_format is None:
        return Result.failure(ErrorKind.INVALID_DATA_FORMAT)

    return Result.success(replace(
        submission,
        crop_type=crop_type,
        data_type=data_type,
        sensor_type=sensor_type,
        format=data_format,
    ))


def validate_amendment(new_metadata: object, new_price: object) -> Result:
    """Check the two owner-mutable fields of an update."""
    if not valid_metadata(new_metadata):
        return Result.failure(ErrorKind.INVALID_METADATA)
    if not valid_price(new_price):
        return Result.failure(ErrorKind.INVALID_PRICE)
    return Result.success()


@dataclass
class IntegrityResult:
    """Result of a registry state integrity check."""

    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    total_entries: int = 0

    @property
    def passed(self) -> bool:
        return len(self.errors) == 0

    def summary(self) -> str:
        lines = [f"Registry Integrity: {self.total_entries} entries checked"]
        if self.errors:
            lines.append(f"ERRORS ({len(self.errors)}):")
            for e in self.errors:
                lines.append(f"  {e}")
        if self.warnings:
            lines.append(f"WARNINGS ({len(self.warnings)}):")
            for w in self.warnings:
                lines.append(f"  {w}")
        if self.passed and not self.warnings:
            lines.append("All checks passed.")
        return "\n".join(lines)


def check_integrity(state: RegistryState) -> IntegrityResult:
    """Check a (typically freshly loaded) state against the registry invariants.

    Checks:
    - Entry ids form the contiguous range [0, next_data_id)
    - Hash index is injective and agrees with the entries
    - Every stored field passes field validation
    - Audit records point at existing entries and were made by the owner
    - Authority contract is not the burn address
    - Capacity ceiling is respected

    Args:
        state: Registry state to inspect.

    Returns:
        IntegrityResult with errors and warnings.
    """
    result = IntegrityResult(total_entries=len(state.entries))

    expected_ids = set(range(state.next_data_id))
    actual_ids = set(state.entries)
    for missing in sorted(expected_ids - actual_ids):
        result.errors.append(f"id {missing}: missing entry below next_data_id={state.next_data_id}")
    for extra in sorted(actual_ids - expected_ids):
        result.errors.append(f"id {extra}: entry at or beyond next_data_id={state.next_data_id}")

    seen_hashes: dict[str, int] = {}
    for entry_id, entry in sorted(state.entries.items()):
        if entry.id != entry_id:
            result.errors.append(f"id {entry_id}: stored under wrong key (entry says {entry.id})")

        if entry.data_hash in seen_hashes:
            result.errors.append(
                f"id {entry_id}: duplicate data_hash '{entry.data_hash}' "
                f"(also id {seen_hashes[entry.data_hash]})"
            )
        seen_hashes[entry.data_hash] = entry_id

        if state.ids_by_hash.get(entry.data_hash) != entry_id:
            result.errors.append(f"id {entry_id}: hash index does not resolve '{entry.data_hash}'")

        submission = DataSubmission(
            data_hash=entry.data_hash,
            metadata=entry.metadata,
            location=entry.location,
            crop_type=entry.crop_type,
            capture_date=entry.capture_date,
            price=entry.price,
            data_type=entry.data_type,
            resolution=entry.resolution,
            coordinates=entry.coordinates,
            sensor_type=entry.sensor_type,
            format=entry.format,
        )
        # Capacity is checked once below, not per entry
        field_check = validate_submission(submission, 0, 1)
        if not field_check.ok:
            result.errors.append(f"id {entry_id}: invalid field ({field_check.error.label})")

        if not entry.status:
            result.warnings.append(f"id {entry_id}: status is false")

    for data_hash, entry_id in state.ids_by_hash.items():
        if entry_id not in state.entries:
            result.errors.append(f"hash '{data_hash}': points at unknown id {entry_id}")

    for entry_id, update in sorted(state.updates.items()):
        entry = state.entries.get(entry_id)
        if entry is None:
            result.errors.append(f"update {entry_id}: no matching entry")
            continue
        if update.updater != entry.owner:
            result.errors.append(f"update {entry_id}: updater '{update.updater}' is not owner '{entry.owner}'")
        if update.update_metadata != entry.metadata or update.update_price != entry.price:
            result.warnings.append(f"update {entry_id}: audit record differs from current entry")

    if state.authority_contract == BURN_ADDRESS:
        result.errors.append("authority_contract: bound to the burn address")
    if state.next_data_id > state.max_data_entries:
        result.errors.append(
            f"next_data_id={state.next_data_id} exceeds max_data_entries={state.max_data_entries}"
        )
    if state.upload_fee < 0:
        result.errors.append(f"upload_fee: negative value {state.upload_fee}")

    return result
