"""Registry state: entries, audit records, hash index, and configuration."""

from __future__ import annotations

from dataclasses import dataclass, field

from agriledger.catalog import (
    DEFAULT_MAX_DATA_ENTRIES,
    DEFAULT_UPLOAD_FEE,
    CropType,
    DataFormat,
    DataType,
    SensorType,
)


@dataclass(frozen=True)
class Coordinates:
    lat: float
    lon: float

    def to_dict(self) -> dict:
        return {"lat": self.lat, "lon": self.lon}

    @classmethod
    def from_dict(cls, data: dict) -> "Coordinates":
        return cls(lat=data["lat"], lon=data["lon"])


@dataclass(frozen=True)
class DataSubmission:
    """Candidate fields for a new entry, as supplied by the caller.

    Enumerated fields may hold either catalog members or raw strings;
    validation resolves them.
    """

    data_hash: str
    metadata: str
    location: str
    crop_type: CropType | str
    capture_date: int
    price: int
    data_type: DataType | str
    resolution: int
    coordinates: Coordinates
    sensor_type: SensorType | str
    format: DataFormat | str


@dataclass(frozen=True)
class DataEntry:
    """One committed data submission."""

    id: int
    data_hash: str
    metadata: str
    location: str
    crop_type: CropType
    capture_date: int
    price: int
    timestamp: int
    owner: str
    data_type: DataType
    resolution: int
    coordinates: Coordinates
    sensor_type: SensorType
    format: DataFormat
    status: bool = True

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "data_hash": self.data_hash,
            "metadata": self.metadata,
            "location": self.location,
            "crop_type": self.crop_type.value,
            "capture_date": self.capture_date,
            "price": self.price,
            "timestamp": self.timestamp,
            "owner": self.owner,
            "data_type": self.data_type.value,
            "resolution": self.resolution,
            "coordinates": self.coordinates.to_dict(),
            "sensor_type": self.sensor_type.value,
            "format": self.format.value,
            "status": self.status,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "DataEntry":
        return cls(
            id=data["id"],
            data_hash=data["data_hash"],
            metadata=data["metadata"],
            location=data["location"],
            crop_type=CropType(data["crop_type"]),
            capture_date=data["capture_date"],
            price=data["price"],
            timestamp=data["timestamp"],
            owner=data["owner"],
            data_type=DataType(data["data_type"]),
            resolution=data["resolution"],
            coordinates=Coordinates.from_dict(data["coordinates"]),
            sensor_type=SensorType(data["sensor_type"]),
            format=DataFormat(data["format"]),
            status=data.get("status", True),
        )


@dataclass(frozen=True)
class DataUpdate:
    """Audit record of the most recent amendment to an entry."""

    update_metadata: str
    update_price: int
    update_timestamp: int
    updater: str

    def to_dict(self) -> dict:
        return {
            "update_metadata": self.update_metadata,
            "update_price": self.update_price,
            "update_timestamp": self.update_timestamp,
            "updater": self.updater,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "DataUpdate":
        return cls(
            update_metadata=data["update_metadata"],
            update_price=data["update_price"],
            update_timestamp=data["update_timestamp"],
            updater=data["updater"],
        )


@dataclass
class RegistryState:
    """Everything the registry persists.

    Three keyed collections (entries by id, updates by id, id by hash)
    plus the configuration record.
    """

    next_data_id: int = 0
    max_data_entries: int = DEFAULT_MAX_DATA_ENTRIES
    upload_fee: int = DEFAULT_UPLOAD_FEE
    authority_contract: str | None = None
    entries: dict[int, DataEntry] = field(default_factory=dict)
    updates: dict[int, DataUpdate] = field(default_factory=dict)
    ids_by_hash: dict[str, int] = field(default_factory=dict)

    def commit_entry(self, entry: DataEntry) -> None:
        """Insert a new entry into both stores and advance the id counter."""
        self.entries[entry.id] = entry
        self.ids_by_hash[entry.data_hash] = entry.id
        self.next_data_id = entry.id + 1

    def to_dict(self) -> dict:
        return {
            "next_data_id": self.next_data_id,
            "max_data_entries": self.max_data_entries,
            "upload_fee": self.upload_fee,
            "authority_contract": self.authority_contract,
            "entries": [e.to_dict() for _, e in sorted(self.entries.items())],
            "updates": {str(k): u.to_dict() for k, u in sorted(self.updates.items())},
        }

    @classmethod
    def from_dict(cls, data: dict) -> "RegistryState":
        entries = [DataEntry.from_dict(e) for e in data.get("entries", [])]
        return cls(
            next_data_id=data.get("next_data_id", len(entries)),
            max_data_entries=data.get("max_data_entries", DEFAULT_MAX_DATA_ENTRIES),
            upload_fee=data.get("upload_fee", DEFAULT_UPLOAD_FEE),
            authority_contract=data.get("authority_contract"),
            entries={e.id: e for e in entries},
            updates={int(k): DataUpdate.from_dict(u) for k, u in data.get("updates", {}).items()},
            ids_by_hash={e.data_hash: e.id for e in entries},
        )
