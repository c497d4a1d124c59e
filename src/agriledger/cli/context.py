"""Shared helpers for CLI commands: config, snapshot, and registry wiring."""

import argparse
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from filelock import FileLock

from agriledger.config import RegistryConfig, load_config
from agriledger.ledger import StaticAuthorityOracle
from agriledger.paths import state_path as _default_state_path
from agriledger.registry.loader import load_snapshot, save_snapshot
from agriledger.registry.state import DataEntry
from agriledger.service import DataRegistry


def resolve_config(args: argparse.Namespace) -> RegistryConfig:
    return load_config(getattr(args, "config", None))


def resolve_state_path(args: argparse.Namespace, config: RegistryConfig) -> Path:
    raw = getattr(args, "state", None) or config.state_path
    return Path(raw).expanduser() if raw else _default_state_path()


def open_registry(args: argparse.Namespace) -> tuple[DataRegistry, Path]:
    """Load the snapshot named by args/config and wrap it in a DataRegistry."""
    config = resolve_config(args)
    path = resolve_state_path(args, config)
    snapshot = load_snapshot(path)
    oracle = StaticAuthorityOracle(config.verified_authorities)
    return DataRegistry.from_snapshot(snapshot, oracle), path


def persist(registry: DataRegistry, path: Path) -> None:
    save_snapshot(registry.to_snapshot(), path)


def snapshot_lock(path: Path) -> FileLock:
    """Inter-process lock guarding one snapshot file."""
    path.parent.mkdir(parents=True, exist_ok=True)
    return FileLock(f"{path}.lock")


@contextmanager
def edit_registry(args: argparse.Namespace) -> Iterator[tuple[DataRegistry, Path]]:
    """Open the registry for a read-modify-write, holding the snapshot lock.

    The lock is held from load until the block exits, so a command that
    persists inside the block never overwrites another writer's commit.
    """
    config = resolve_config(args)
    path = resolve_state_path(args, config)
    with snapshot_lock(path):
        snapshot = load_snapshot(path)
        oracle = StaticAuthorityOracle(config.verified_authorities)
        yield DataRegistry.from_snapshot(snapshot, oracle), path


def require_caller(args: argparse.Namespace) -> str | None:
    caller = getattr(args, "caller", None)
    if not caller:
        print("ERROR: --caller (or AGRILEDGER_CALLER) is required for this command")
    return caller


def print_entry(entry: DataEntry) -> None:
    title = f"#{entry.id}  {entry.data_hash}"
    print(f"\n  {title}")
    print(f"  {'─' * max(len(title), 40)}")
    for key, value in entry.to_dict().items():
        if key in ("id", "data_hash"):
            continue
        if isinstance(value, dict):
            value = ", ".join(f"{k}={v}" for k, v in value.items())
        print(f"  {key + ':':<20}{value}")
    print()
