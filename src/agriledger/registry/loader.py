"""Load and save registry snapshots (registry.json)."""

import json
from pathlib import Path

from agriledger.catalog import DEFAULT_MAX_DATA_ENTRIES, DEFAULT_UPLOAD_FEE
from agriledger.paths import state_path

SNAPSHOT_VERSION = 1


def new_snapshot(
    max_data_entries: int = DEFAULT_MAX_DATA_ENTRIES,
    upload_fee: int = DEFAULT_UPLOAD_FEE,
    authority_contract: str | None = None,
) -> dict:
    """Build an empty snapshot with the given configuration."""
    return {
        "version": SNAPSHOT_VERSION,
        "registry": {
            "next_data_id": 0,
            "max_data_entries": max_data_entries,
            "upload_fee": upload_fee,
            "authority_contract": authority_contract,
            "entries": [],
            "updates": {},
        },
        "ledger": {"height": 0, "transfers": []},
    }


def load_snapshot(path: Path | str | None = None) -> dict:
    """Load registry.json from disk.

    Args:
        path: Path to snapshot file. Defaults to the configured state path.

    Returns:
        Parsed snapshot dict.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        ValueError: If the file is not a snapshot of a supported version.
    """
    snapshot_path = Path(path) if path else state_path()
    with open(snapshot_path) as f:
        data = json.load(f)

    if not isinstance(data, dict) or "registry" not in data:
        raise ValueError(f"{snapshot_path} is not a registry snapshot")
    version = data.get("version")
    if version != SNAPSHOT_VERSION:
        raise ValueError(f"{snapshot_path}: unsupported snapshot version {version!r}")
    data.setdefault("ledger", {"height": 0, "transfers": []})
    return data


def save_snapshot(data: dict, path: Path | str | None = None) -> None:
    """Write registry.json back to disk with consistent formatting.

    Args:
        data: Snapshot dict to write.
        path: Path to write to. Defaults to the configured state path.
    """
    snapshot_path = Path(path) if path else state_path()
    snapshot_path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = snapshot_path.with_suffix(snapshot_path.suffix + ".tmp")
    with open(tmp_path, "w") as f:
        json.dump(data, f, indent=2)
        f.write("\n")
    tmp_path.replace(snapshot_path)
