"""Read-only queries on the registry. Unknown keys yield None, never an error."""

from __future__ import annotations

from agriledger.catalog import CropType, DataType, SensorType, parse_member
from agriledger.registry.state import DataEntry, DataUpdate, RegistryState


def data_count(state: RegistryState) -> int:
    """Number of entries ever registered (ids are never reused or deleted)."""
    return state.next_data_id


def exists_by_hash(state: RegistryState, data_hash: str) -> bool:
    return data_hash in state.ids_by_hash


def get_by_id(state: RegistryState, entry_id: int) -> DataEntry | None:
    return state.entries.get(entry_id)


def get_by_hash(state: RegistryState, data_hash: str) -> DataEntry | None:
    entry_id = state.ids_by_hash.get(data_hash)
    if entry_id is None:
        return None
    return get_by_id(state, entry_id)


def get_update(state: RegistryState, entry_id: int) -> DataUpdate | None:
    """Latest audit record for an entry, if it was ever amended."""
    return state.updates.get(entry_id)


def list_entries(
    state: RegistryState,
    owner: str | None = None,
    crop_type: CropType | str | None = None,
    data_type: DataType | str | None = None,
    sensor_type: SensorType | str | None = None,
) -> list[DataEntry]:
    """List entries in id order with optional filters.

    Args:
        state: Registry state.
        owner: Filter by owning principal.
        crop_type: Filter by crop type.
        data_type: Filter by data product type.
        sensor_type: Filter by sensor platform.

    Returns:
        Matching entries. An unrecognised enum filter matches nothing.
    """
    crop = parse_member(CropType, crop_type) if crop_type else None
    dtype = parse_member(DataType, data_type) if data_type else None
    sensor = parse_member(SensorType, sensor_type) if sensor_type else None

    results = []
    for _, entry in sorted(state.entries.items()):
        if owner and entry.owner != owner:
            continue
        if crop_type and entry.crop_type != crop:
            continue
        if data_type and entry.data_type != dtype:
            continue
        if sensor_type and entry.sensor_type != sensor:
            continue
        results.append(entry)
    return results
