"""Registration workflow: validate, authorize, deduplicate, charge, commit."""

from __future__ import annotations

import logging

from agriledger.errors import ErrorKind, Result
from agriledger.ledger import AuthorityOracle, FeeSink, LedgerClock, charge_fee
from agriledger.registry.state import DataEntry, DataSubmission, RegistryState
from agriledger.registry.validator import validate_submission

logger = logging.getLogger(__name__)


def register_data(
    state: RegistryState,
    submission: DataSubmission,
    caller: str,
    oracle: AuthorityOracle,
    sink: FeeSink,
    clock: LedgerClock,
) -> Result:
    """Register a new data entry.

    Every check runs before the fee is charged, and the entry is only
    committed after the fee transfer succeeds. A failure at any step
    leaves the state untouched.

    Args:
        state: Registry state (mutated on success).
        submission: Candidate fields.
        caller: Principal submitting the data.
        oracle: Answers whether the caller is a verified authority.
        sink: Moves the upload fee.
        clock: Source of the ledger height stamped on the entry.

    Returns:
        Success carrying the new entry id, or the first triggered ErrorKind.
    """
    checked = validate_submission(submission, state.next_data_id, state.max_data_entries)
    if not checked.ok:
        logger.debug("Rejected %r: %s", submission.data_hash, checked.error.label)
        return checked
    fields: DataSubmission = checked.value

    if not oracle.is_verified_authority(caller):
        logger.info("Rejected %r: %s is not a verified authority", fields.data_hash, caller)
        return Result.failure(ErrorKind.NOT_AUTHORIZED)

    if fields.data_hash in state.ids_by_hash:
        logger.info("Rejected %r: hash already registered", fields.data_hash)
        return Result.failure(ErrorKind.DATA_ALREADY_EXISTS)

    recipient = state.authority_contract
    if recipient is None:
        logger.info("Rejected %r: no authority contract bound", fields.data_hash)
        return Result.failure(ErrorKind.AUTHORITY_NOT_VERIFIED)

    charged = charge_fee(sink, state.upload_fee, caller, recipient)
    if not charged.ok:
        return charged

    entry = DataEntry(
        id=state.next_data_id,
        data_hash=fields.data_hash,
        metadata=fields.metadata,
        location=fields.location,
        crop_type=fields.crop_type,
        capture_date=fields.capture_date,
        price=fields.price,
        timestamp=clock.current_height(),
        owner=caller,
        data_type=fields.data_type,
        resolution=fields.resolution,
        coordinates=fields.coordinates,
        sensor_type=fields.sensor_type,
        format=fields.format,
        status=True,
    )
    state.commit_entry(entry)
    logger.info(
        "Registered id=%d hash=%r owner=%s fee=%d -> %s",
        entry.id, entry.data_hash, caller, state.upload_fee, recipient,
    )
    return Result.success(entry.id)
