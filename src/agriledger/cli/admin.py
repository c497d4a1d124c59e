"""Administrative CLI commands."""

import argparse

from agriledger.ledger import StaticAuthorityOracle
from agriledger.registry.loader import new_snapshot
from agriledger.service import DataRegistry
from agriledger.cli.context import (
    edit_registry,
    open_registry,
    persist,
    resolve_config,
    resolve_state_path,
    snapshot_lock,
)


def cmd_init(args: argparse.Namespace) -> int:
    config = resolve_config(args)
    path = resolve_state_path(args, config)

    snapshot = new_snapshot(
        max_data_entries=args.max_entries if args.max_entries is not None else config.max_data_entries,
        upload_fee=args.fee if args.fee is not None else config.upload_fee,
    )
    registry = DataRegistry.from_snapshot(snapshot, StaticAuthorityOracle(config.verified_authorities))
    if config.authority_contract:
        result = registry.bind_authority_contract(config.authority_contract)
        if not result.ok:
            print(f"ERROR: cannot bind authority contract from config: {result.describe()}")
            return 1

    with snapshot_lock(path):
        if path.exists() and not args.force:
            print(f"ERROR: {path} already exists (use --force to overwrite)")
            return 1
        persist(registry, path)

    print(f"  Initialised registry at {path}")
    return 0


def cmd_admin_bind(args: argparse.Namespace) -> int:
    with edit_registry(args) as (registry, path):
        result = registry.bind_authority_contract(args.principal)
        if not result.ok:
            print(f"  Binding failed: {result.describe()}")
            return 1
        persist(registry, path)

    print(f"  Authority contract bound to {args.principal}.")
    return 0


def cmd_admin_set_fee(args: argparse.Namespace) -> int:
    with edit_registry(args) as (registry, path):
        result = registry.set_upload_fee(args.fee)
        if not result.ok:
            print(f"  Fee change failed: {result.describe()}")
            return 1
        persist(registry, path)

    print(f"  Upload fee set to {args.fee}.")
    return 0


def cmd_admin_status(args: argparse.Namespace) -> int:
    registry, path = open_registry(args)
    state = registry.state
    collected = sum(t.amount for t in getattr(registry.sink, "transfers", []))

    print("\n  Agriledger Registry")
    print(f"  {'═' * 50}")
    print(f"    Snapshot:            {path}")
    print(f"    Ledger height:       {registry.clock.current_height()}")
    print(f"    Entries:             {registry.count()}/{state.max_data_entries}")
    print(f"    Amended entries:     {len(state.updates)}")
    print(f"    Upload fee:          {state.upload_fee}")
    print(f"    Authority contract:  {state.authority_contract or '<unbound>'}")
    print(f"    Fees collected:      {collected}")
    print()
    return 0


def cmd_admin_check(args: argparse.Namespace) -> int:
    registry, _ = open_registry(args)
    result = registry.check_integrity()
    print(result.summary())
    return 0 if result.passed else 1
