"""Unified CLI for the agriledger data registry.

Usage:
    agriledger init [--max-entries N] [--fee N] [--force]
    agriledger data register <hash> --metadata M --location L --crop C
                             --capture-date D --price P --data-type T
                             --resolution R --lat X --lon Y --sensor S --format F
    agriledger data update <id> --metadata M --price P
    agriledger data show <id>
    agriledger data show-hash <hash>
    agriledger data exists <hash>
    agriledger data count
    agriledger data list [--owner X] [--crop X] [--data-type X] [--sensor X]
    agriledger data history <id>
    agriledger admin bind-authority <principal>
    agriledger admin set-fee <fee>
    agriledger admin status
    agriledger admin check
"""

import argparse
import logging
import os
import sys

import yaml

from agriledger.catalog import CropType, DataFormat, DataType, SensorType, enum_values
from agriledger.cli.admin import (
    cmd_admin_bind,
    cmd_admin_check,
    cmd_admin_set_fee,
    cmd_admin_status,
    cmd_init,
)
from agriledger.cli.data import (
    cmd_data_count,
    cmd_data_exists,
    cmd_data_history,
    cmd_data_list,
    cmd_data_register,
    cmd_data_show,
    cmd_data_show_hash,
    cmd_data_update,
)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="agriledger",
        description="Registry for agricultural sensor-data submissions",
    )
    parser.add_argument(
        "--state", default=None,
        help="Path to registry.json (default: $AGRILEDGER_STATE or ~/.agriledger/registry.json)",
    )
    parser.add_argument(
        "--config", default=None,
        help="Path to agriledger.yaml",
    )
    parser.add_argument(
        "--caller", default=os.environ.get("AGRILEDGER_CALLER"),
        help="Principal invoking the command",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Log registry decisions to stderr",
    )
    sub = parser.add_subparsers(dest="command")

    # init
    init = sub.add_parser("init", help="Create an empty registry snapshot")
    init.add_argument("--max-entries", type=int, default=None)
    init.add_argument("--fee", type=int, default=None)
    init.add_argument(
        "--force", action="store_true",
        help="Overwrite an existing snapshot",
    )

    # data
    data = sub.add_parser("data", help="Data entry operations")
    data_sub = data.add_subparsers(dest="subcommand")

    reg = data_sub.add_parser("register", help="Register a new data entry")
    reg.add_argument("hash", help="Content hash of the data")
    reg.add_argument("--metadata", required=True)
    reg.add_argument("--location", required=True)
    reg.add_argument("--crop", required=True, help=f"One of: {', '.join(enum_values(CropType))}")
    reg.add_argument("--capture-date", type=int, required=True)
    reg.add_argument("--price", type=int, required=True)
    reg.add_argument("--data-type", required=True, help=f"One of: {', '.join(enum_values(DataType))}")
    reg.add_argument("--resolution", type=int, required=True)
    reg.add_argument("--lat", type=float, required=True)
    reg.add_argument("--lon", type=float, required=True)
    reg.add_argument("--sensor", required=True, help=f"One of: {', '.join(enum_values(SensorType))}")
    reg.add_argument("--format", required=True, help=f"One of: {', '.join(enum_values(DataFormat))}")

    upd = data_sub.add_parser("update", help="Amend metadata and price of an owned entry")
    upd.add_argument("id", type=int)
    upd.add_argument("--metadata", required=True)
    upd.add_argument("--price", type=int, required=True)

    show = data_sub.add_parser("show", help="Show an entry by id")
    show.add_argument("id", type=int)

    show_hash = data_sub.add_parser("show-hash", help="Show an entry by content hash")
    show_hash.add_argument("hash")

    exists = data_sub.add_parser("exists", help="Check whether a hash is registered")
    exists.add_argument("hash")

    data_sub.add_parser("count", help="Number of registered entries")

    ls = data_sub.add_parser("list", help="List entries with filters")
    ls.add_argument("--owner", default=None)
    ls.add_argument("--crop", default=None)
    ls.add_argument("--data-type", default=None)
    ls.add_argument("--sensor", default=None)

    hist = data_sub.add_parser("history", help="Show the latest amendment of an entry")
    hist.add_argument("id", type=int)

    # admin
    adm = sub.add_parser("admin", help="Registry configuration")
    adm_sub = adm.add_subparsers(dest="subcommand")

    bind = adm_sub.add_parser("bind-authority", help="Bind the fee recipient (one time only)")
    bind.add_argument("principal")

    fee = adm_sub.add_parser("set-fee", help="Change the upload fee")
    fee.add_argument("fee", type=int)

    adm_sub.add_parser("status", help="Registry configuration summary")
    adm_sub.add_parser("check", help="Check snapshot integrity")

    return parser


def main() -> int:
    parser = build_parser()
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if not args.command:
        parser.print_help()
        return 0

    dispatch = {
        ("data", "register"): cmd_data_register,
        ("data", "update"): cmd_data_update,
        ("data", "show"): cmd_data_show,
        ("data", "show-hash"): cmd_data_show_hash,
        ("data", "exists"): cmd_data_exists,
        ("data", "count"): cmd_data_count,
        ("data", "list"): cmd_data_list,
        ("data", "history"): cmd_data_history,
        ("admin", "bind-authority"): cmd_admin_bind,
        ("admin", "set-fee"): cmd_admin_set_fee,
        ("admin", "status"): cmd_admin_status,
        ("admin", "check"): cmd_admin_check,
    }

    try:
        # Handle top-level commands (no subcommand)
        if args.command == "init":
            return cmd_init(args)

        subcommand: str | None = getattr(args, "subcommand", None)
        handler = dispatch.get((args.command, subcommand or ""))
        if handler:
            return handler(args)
    except (FileNotFoundError, ValueError, yaml.YAMLError) as e:
        print(f"ERROR: {e}")
        return 1

    parser.parse_args([args.command, "--help"])
    return 0


if __name__ == "__main__":
    sys.exit(main())
