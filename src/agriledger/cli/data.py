"""Data entry CLI commands."""

import argparse

from agriledger.registry.state import Coordinates, DataSubmission
from agriledger.cli.context import (
    edit_registry,
    open_registry,
    persist,
    print_entry,
    require_caller,
)


def cmd_data_register(args: argparse.Namespace) -> int:
    caller = require_caller(args)
    if not caller:
        return 1

    submission = DataSubmission(
        data_hash=args.hash,
        metadata=args.metadata,
        location=args.location,
        crop_type=args.crop,
        capture_date=args.capture_date,
        price=args.price,
        data_type=args.data_type,
        resolution=args.resolution,
        coordinates=Coordinates(lat=args.lat, lon=args.lon),
        sensor_type=args.sensor,
        format=args.format,
    )
    with edit_registry(args) as (registry, path):
        registry.clock.advance()
        result = registry.register(submission, caller)
        if not result.ok:
            print(f"  Registration failed: {result.describe()}")
            return 1
        persist(registry, path)

    print(f"  Registered '{args.hash}' as id {result.value}.")
    return 0


def cmd_data_update(args: argparse.Namespace) -> int:
    caller = require_caller(args)
    if not caller:
        return 1

    with edit_registry(args) as (registry, path):
        registry.clock.advance()
        result = registry.update(args.id, args.metadata, args.price, caller)
        if not result.ok:
            print(f"  Update failed: {result.describe()}")
            return 1
        persist(registry, path)

    print(f"  Updated id {args.id}.")
    return 0


def cmd_data_show(args: argparse.Namespace) -> int:
    registry, _ = open_registry(args)
    entry = registry.get_by_id(args.id)
    if entry is None:
        print(f"ERROR: Entry {args.id} not found in registry")
        return 1
    print_entry(entry)
    return 0


def cmd_data_show_hash(args: argparse.Namespace) -> int:
    registry, _ = open_registry(args)
    entry = registry.get_by_hash(args.hash)
    if entry is None:
        print(f"ERROR: Hash '{args.hash}' not found in registry")
        return 1
    print_entry(entry)
    return 0


def cmd_data_exists(args: argparse.Namespace) -> int:
    registry, _ = open_registry(args)
    exists = registry.exists_by_hash(args.hash)
    print("yes" if exists else "no")
    return 0 if exists else 1


def cmd_data_count(args: argparse.Namespace) -> int:
    registry, _ = open_registry(args)
    print(registry.count())
    return 0


def cmd_data_list(args: argparse.Namespace) -> int:
    registry, _ = open_registry(args)
    results = registry.list_entries(
        owner=args.owner,
        crop_type=args.crop,
        data_type=args.data_type,
        sensor_type=args.sensor,
    )

    if not results:
        print("No entries match the given filters.")
        return 0

    print(f"\n  {'Id':>5} {'Hash':<24} {'Crop':<9} {'Type':<8} {'Sensor':<10} {'Price':>8}  Owner")
    print(f"  {'─' * 84}")
    for entry in results:
        print(
            f"  {entry.id:>5} {entry.data_hash[:24]:<24} {entry.crop_type.value:<9} "
            f"{entry.data_type.value:<8} {entry.sensor_type.value:<10} {entry.price:>8}  {entry.owner}"
        )
    print(f"\n  {len(results)} entr{'y' if len(results) == 1 else 'ies'}")
    return 0


def cmd_data_history(args: argparse.Namespace) -> int:
    registry, _ = open_registry(args)
    if registry.get_by_id(args.id) is None:
        print(f"ERROR: Entry {args.id} not found in registry")
        return 1
    update = registry.get_update(args.id)
    if update is None:
        print(f"  Entry {args.id} has never been amended.")
        return 0
    print(f"  Last amended at height {update.update_timestamp} by {update.updater}")
    print(f"  metadata: {update.update_metadata}")
    print(f"  price:    {update.update_price}")
    return 0
