"""DataRegistry: the single serialization point for all registry operations.

Every operation, mutating or not, runs under one re-entrant lock so that
the capacity check, hash deduplication, fee charge and commit of a
registration are observed as one atomic step by concurrent callers.

Usage:
    registry = DataRegistry(
        oracle=StaticAuthorityOracle(["ST1FARM"]),
        sink=RecordingFeeSink(),
        clock=BlockCounter(),
    )
    registry.bind_authority_contract("ST2AUTH")
    result = registry.register(submission, caller="ST1FARM")
    if result.ok:
        entry = registry.get_by_id(result.value)
"""

from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import Iterator

from agriledger.errors import Result
from agriledger.ledger import (
    AuthorityOracle,
    BlockCounter,
    FeeSink,
    FeeTransfer,
    LedgerClock,
    RecordingFeeSink,
)
from agriledger.registry import admin, query
from agriledger.registry.loader import SNAPSHOT_VERSION
from agriledger.registry.registration import register_data
from agriledger.registry.state import DataEntry, DataSubmission, DataUpdate, RegistryState
from agriledger.registry.updater import update_entry
from agriledger.registry.validator import IntegrityResult, check_integrity


class DataRegistry:
    """Registry core bound to its state and ledger collaborators."""

    def __init__(
        self,
        oracle: AuthorityOracle,
        sink: FeeSink,
        clock: LedgerClock,
        state: RegistryState | None = None,
    ):
        self.state = state if state is not None else RegistryState()
        self.oracle = oracle
        self.sink = sink
        self.clock = clock
        self._lock = threading.RLock()

    @contextmanager
    def _serialized(self) -> Iterator[RegistryState]:
        with self._lock:
            yield self.state

    # ── Workflows ────────────────────────────────────────────────

    def register(self, submission: DataSubmission, caller: str) -> Result:
        with self._serialized() as state:
            return register_data(state, submission, caller, self.oracle, self.sink, self.clock)

    def update(self, entry_id: int, new_metadata: str, new_price: int, caller: str) -> Result:
        with self._serialized() as state:
            return update_entry(state, entry_id, new_metadata, new_price, caller, self.clock)

    def bind_authority_contract(self, principal: str) -> Result:
        with self._serialized() as state:
            return admin.bind_authority_contract(state, principal)

    def set_upload_fee(self, new_fee: int) -> Result:
        with self._serialized() as state:
            return admin.set_upload_fee(state, new_fee)

    # ── Queries ──────────────────────────────────────────────────

    def count(self) -> int:
        with self._serialized() as state:
            return query.data_count(state)

    def exists_by_hash(self, data_hash: str) -> bool:
        with self._serialized() as state:
            return query.exists_by_hash(state, data_hash)

    def get_by_id(self, entry_id: int) -> DataEntry | None:
        with self._serialized() as state:
            return query.get_by_id(state, entry_id)

    def get_by_hash(self, data_hash: str) -> DataEntry | None:
        with self._serialized() as state:
            return query.get_by_hash(state, data_hash)

    def get_update(self, entry_id: int) -> DataUpdate | None:
        with self._serialized() as state:
            return query.get_update(state, entry_id)

    def list_entries(self, **filters) -> list[DataEntry]:
        with self._serialized() as state:
            return query.list_entries(state, **filters)

    def check_integrity(self) -> IntegrityResult:
        with self._serialized() as state:
            return check_integrity(state)

    # ── Snapshots ────────────────────────────────────────────────

    @classmethod
    def from_snapshot(cls, snapshot: dict, oracle: AuthorityOracle) -> "DataRegistry":
        """Rebuild a registry from a snapshot dict, with in-process ledger collaborators.

        Raises:
            ValueError: If an entry, audit record, or transfer is malformed.
        """
        ledger = snapshot.get("ledger", {})
        try:
            state = RegistryState.from_dict(snapshot["registry"])
            transfers = [FeeTransfer.from_dict(t) for t in ledger.get("transfers", [])]
        except (KeyError, TypeError, AttributeError) as e:
            raise ValueError(f"Malformed registry snapshot: {type(e).__name__}: {e}") from e
        return cls(
            oracle=oracle,
            sink=RecordingFeeSink(transfers),
            clock=BlockCounter(ledger.get("height", 0)),
            state=state,
        )

    def to_snapshot(self) -> dict:
        """Serialize state, plus ledger height and transfers when they are in-process."""
        with self._serialized() as state:
            ledger: dict = {"height": self.clock.current_height(), "transfers": []}
            if isinstance(self.sink, RecordingFeeSink):
                ledger["transfers"] = [t.to_dict() for t in self.sink.transfers]
            return {
                "version": SNAPSHOT_VERSION,
                "registry": state.to_dict(),
                "ledger": ledger,
            }
