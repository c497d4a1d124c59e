"""Owner amendments to an entry's metadata and price, with audit record."""

from __future__ import annotations

import logging
from dataclasses import replace

from agriledger.errors import ErrorKind, Result
from agriledger.ledger import LedgerClock
from agriledger.registry.state import DataUpdate, RegistryState
from agriledger.registry.validator import validate_amendment

logger = logging.getLogger(__name__)


def update_entry(
    state: RegistryState,
    entry_id: int,
    new_metadata: str,
    new_price: int,
    caller: str,
    clock: LedgerClock,
) -> Result:
    """Amend metadata and price on an entry owned by the caller.

    Args:
        state: Registry state (mutated on success).
        entry_id: Id of the entry to amend.
        new_metadata: Replacement metadata.
        new_price: Replacement price.
        caller: Principal requesting the change.
        clock: Source of the ledger height for the new timestamp.

    Returns:
        Success (value True), or DataNotFound / NotOwner / a field error.
    """
    entry = state.entries.get(entry_id)
    if entry is None:
        return Result.failure(ErrorKind.DATA_NOT_FOUND)

    if caller != entry.owner:
        logger.info("Rejected update of id=%d: %s is not the owner", entry_id, caller)
        return Result.failure(ErrorKind.NOT_OWNER)

    checked = validate_amendment(new_metadata, new_price)
    if not checked.ok:
        return checked

    height = clock.current_height()
    state.entries[entry_id] = replace(entry, metadata=new_metadata, price=new_price, timestamp=height)
    # Latest amendment replaces any earlier record
    state.updates[entry_id] = DataUpdate(
        update_metadata=new_metadata,
        update_price=new_price,
        update_timestamp=height,
        updater=caller,
    )
    logger.info("Updated id=%d: price %d -> %d", entry_id, entry.price, new_price)
    return Result.success()
