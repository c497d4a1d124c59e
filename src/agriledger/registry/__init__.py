"""Registry module — state, validation, workflows, and queries."""

from agriledger.registry.admin import bind_authority_contract, set_upload_fee
from agriledger.registry.loader import load_snapshot, new_snapshot, save_snapshot
from agriledger.registry.query import (
    data_count,
    exists_by_hash,
    get_by_hash,
    get_by_id,
    get_update,
    list_entries,
)
from agriledger.registry.registration import register_data
from agriledger.registry.state import (
    Coordinates,
    DataEntry,
    DataSubmission,
    DataUpdate,
    RegistryState,
)
from agriledger.registry.updater import update_entry
from agriledger.registry.validator import check_integrity, validate_amendment, validate_submission

__all__ = [
    "bind_authority_contract",
    "set_upload_fee",
    "load_snapshot",
    "new_snapshot",
    "save_snapshot",
    "data_count",
    "exists_by_hash",
    "get_by_hash",
    "get_by_id",
    "get_update",
    "list_entries",
    "register_data",
    "Coordinates",
    "DataEntry",
    "DataSubmission",
    "DataUpdate",
    "RegistryState",
    "update_entry",
    "check_integrity",
    "validate_amendment",
    "validate_submission",
]
