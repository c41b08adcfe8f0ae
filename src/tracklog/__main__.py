"""tracklog entry point.

Usage:
    python -m tracklog [OPTIONS] menu [--v2] [--json]
    python -m tracklog [OPTIONS] types list|add|edit|rm ...
    python -m tracklog [OPTIONS] log TYPE_ID [--status start|end] [--description TEXT]

Options:
    --config PATH    Path to YAML config file
    --profile NAME   Profile name (dev, prod, test)
    --dry-run        Load config and exit
    --version        Show version
"""

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

from . import __version__
from .activities import Activity, ActivityType, MenuStatus, now_ms
from .config import TracklogConfig
from .config.loader import load_config
from .config.profiles import detect_profile
from .menu import LookupFailure, MenuService, RepositoryActivitySource
from .storage import MongoStorageClient

logger = logging.getLogger("tracklog")


def setup_logging(level: str) -> None:
    """Configure logging based on config."""
    numeric_level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(
        level=numeric_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def _add_type_fields(parser: argparse.ArgumentParser) -> None:
    """Add the optional activity type fields shared by add and edit."""
    parser.add_argument("--toggle", action="store_true", default=None, help="Start/end type")
    parser.add_argument("--start-label", help="Label shown when the next action is start")
    parser.add_argument("--end-label", help="Label shown when the next action is end")
    parser.add_argument("--category-id", help="Owning category")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="tracklog",
        description="tracklog - activity logging with a live next-action menu",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m tracklog menu                  # Flat menu, auto-detected profile
  python -m tracklog menu --v2 --json      # Grouped menu as JSON
  python -m tracklog --profile prod menu   # Use production profile
  python -m tracklog types add --name work --toggle \\
      --start-label "Start work" --end-label "End work"
  python -m tracklog types add --file types.json
  python -m tracklog log 65f1c0ffee0123456789abcd,start

Environment:
  TRACKLOG_PROFILE      Set profile (dev, prod, test)
  TRACKLOG_MONGODB_URI  Override the MongoDB connection URI
""",
    )

    parser.add_argument(
        "--config",
        type=Path,
        help="Path to YAML config file",
        metavar="PATH",
    )

    parser.add_argument(
        "--profile",
        choices=["dev", "prod", "test"],
        help="Configuration profile to use",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"tracklog v{__version__}",
    )

    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Load config and exit (for testing)",
    )

    subparsers = parser.add_subparsers(dest="command")
    menu_parser = subparsers.add_parser("menu", help="Print the next-action menu")
    menu_parser.add_argument("--v2", action="store_true", help="Grouped, enriched menu")
    menu_parser.add_argument("--json", action="store_true", help="Print raw JSON")

    types_parser = subparsers.add_parser("types", help="Manage activity types")
    types_sub = types_parser.add_subparsers(dest="types_command", required=True)

    types_sub.add_parser("list", help="List activity types with their IDs")

    add_parser = types_sub.add_parser("add", help="Create one activity type, or a batch")
    add_source = add_parser.add_mutually_exclusive_group(required=True)
    add_source.add_argument("--name", help="Activity type name")
    add_source.add_argument(
        "--file",
        type=Path,
        metavar="PATH",
        help="JSON file holding one activity type or a list of them",
    )
    _add_type_fields(add_parser)
    add_parser.add_argument("--description", help="Shown for non-toggle types")

    edit_parser = types_sub.add_parser("edit", help="Change fields of an activity type")
    edit_parser.add_argument("type_id", help="Activity type ID")
    edit_parser.add_argument("--name", help="Activity type name")
    _add_type_fields(edit_parser)

    rm_parser = types_sub.add_parser("rm", help="Delete an activity type")
    rm_parser.add_argument("type_id", help="Activity type ID")

    log_parser = subparsers.add_parser("log", help="Log an activity now")
    log_parser.add_argument(
        "target",
        metavar="TYPE_ID",
        help="Activity type ID, or an 'id,status' entry from 'menu --json'",
    )
    log_parser.add_argument("--status", choices=["start", "end"], help="Toggle status to log")
    log_parser.add_argument("--description", help="Free-text note")

    return parser.parse_args(argv)


def open_storage(config: TracklogConfig) -> MongoStorageClient:
    """Create a storage client from config."""
    return MongoStorageClient(
        uri=config.storage.uri,
        database_name=config.storage.database,
        connect_timeout_ms=config.storage.connect_timeout_ms,
        server_selection_timeout_ms=config.storage.server_selection_timeout_ms,
    )


def print_menu(config: TracklogConfig, v2: bool, as_json: bool) -> int:
    """Connect to storage, derive the menu and print it.

    Returns:
        Exit code
    """
    with open_storage(config) as storage:
        source = RepositoryActivitySource(storage.activity_types, storage.activities)
        service = MenuService(source, config.menu)
        menu = asyncio.run(service.menu_v2() if v2 else service.menu_v1())

    if as_json:
        print(json.dumps(menu.to_dict(), indent=2, default=str))
        return 0

    labels = menu.labels if v2 else menu.items
    for label in labels:
        print(label)
    return 0


def _read_type_file(path: Path) -> list[ActivityType]:
    data = json.loads(path.read_text())
    if isinstance(data, dict):
        data = [data]
    return [ActivityType.from_dict(entry) for entry in data]


def _type_changes(args: argparse.Namespace) -> dict[str, Any]:
    """Collect the fields given on the command line."""
    fields = {
        "name": args.name,
        "toggle": args.toggle,
        "start_label": args.start_label,
        "end_label": args.end_label,
        "category_id": args.category_id,
    }
    return {key: value for key, value in fields.items() if value is not None}


def run_types(config: TracklogConfig, args: argparse.Namespace) -> int:
    """Run a 'types' subcommand.

    Returns:
        Exit code
    """
    with open_storage(config) as storage:
        repository = storage.activity_types

        if args.types_command == "list":
            for activity_type in repository.find_all():
                kind = "toggle" if activity_type.toggle else "plain"
                print(f"{activity_type.id}\t{activity_type.name}\t{kind}")
            return 0

        if args.types_command == "add":
            if args.file is not None:
                ids = repository.create_many(_read_type_file(args.file))
            else:
                activity_type = ActivityType(
                    id=None,
                    name=args.name,
                    toggle=bool(args.toggle),
                    start_label=args.start_label or "",
                    end_label=args.end_label or "",
                    category_id=args.category_id,
                    description=args.description,
                )
                ids = [repository.create(activity_type)]
            logger.info(f"Created {len(ids)} activity type(s)")
            for type_id in ids:
                print(type_id)
            return 0

        if args.types_command == "edit":
            if repository.get_by_id(args.type_id) is None:
                print(f"Error: Activity type {args.type_id} not found", file=sys.stderr)
                return 1
            try:
                repository.update(args.type_id, _type_changes(args))
            except ValueError as e:
                print(f"Error: {e}", file=sys.stderr)
                return 2
            print(args.type_id)
            return 0

        # rm
        if repository.delete(args.type_id) == 0:
            print(f"Error: Activity type {args.type_id} not found", file=sys.stderr)
            return 1
        logger.info(f"Deleted activity type {args.type_id}")
        return 0


def run_log(config: TracklogConfig, args: argparse.Namespace) -> int:
    """Log an activity for a type at the current time.

    Accepts the 'id,status' entries printed by 'menu --json', so the
    next action from the menu can be passed straight back.

    Returns:
        Exit code
    """
    type_id, _, menu_status = args.target.partition(",")
    status = args.status
    if status is None and menu_status and menu_status != MenuStatus.NONE.value:
        status = menu_status

    with open_storage(config) as storage:
        activity_type = storage.activity_types.get_by_id(type_id)
        if activity_type is None:
            print(f"Error: Activity type {type_id} not found", file=sys.stderr)
            return 1
        if not activity_type.toggle:
            status = None

        activity = Activity(
            type_id=type_id,
            timestamp=now_ms(),
            status=status,
            description=args.description,
        )
        activity_id = storage.activities.insert(activity)

    logger.info(f"Logged {activity_type.name} ({status or 'no status'})")
    print(activity_id)
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main entry point for tracklog.

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    load_dotenv()
    args = parse_args(argv)

    try:
        config = load_config(path=args.config, profile=args.profile)
    except FileNotFoundError as e:
        print(f"Error: Config file not found: {e}", file=sys.stderr)
        return 1
    except Exception as e:
        print(f"Error loading config: {e}", file=sys.stderr)
        return 1

    setup_logging(config.logging.level)

    logger.info(f"tracklog v{__version__}")
    if args.config:
        logger.info(f"Config: {args.config}")
    else:
        logger.info(f"Profile: {args.profile or detect_profile().value}")

    if args.dry_run:
        logger.info("Dry run mode - exiting after config load")
        logger.info(f"Storage: {config.storage.uri}/{config.storage.database}")
        return 0

    if args.command is None:
        print("Error: no command given (try 'menu')", file=sys.stderr)
        return 2

    try:
        if args.command == "types":
            return run_types(config, args)
        if args.command == "log":
            return run_log(config, args)
        return print_menu(config, v2=args.v2, as_json=args.json)
    except LookupFailure as e:
        logger.error(f"Menu derivation failed: {e}")
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except Exception as e:
        logger.error(f"Command '{args.command}' failed: {e}")
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
