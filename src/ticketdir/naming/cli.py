#!/usr/bin/env python3
"""
ticketdir naming CLI

Command-line interface printing the artifact directory name of one or more tickets.
"""

import argparse
import logging
import os
from pathlib import Path
from typing import Any

import yaml

from .config import load_config
from .errors import ConfigError, InvalidInputError, NamingError, PolicyError
from .models import NamingConfig, Ticket
from .namer import TicketDirectoryNamer

logger = logging.getLogger("ticketdir.naming.cli")


def setup_logging(debug: bool = False):
    """Setup logging configuration."""
    level = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def _load_tickets(path: Path) -> list[dict[str, Any]]:
    """Read ticket records from a YAML or JSON file (a list, or a mapping with ``tickets``)."""
    try:
        data: Any = yaml.safe_load(path.read_text(encoding="utf-8")) or []
    except OSError as e:
        raise ConfigError(f"Cannot read tickets file {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid tickets file {path}: {e}") from e

    if isinstance(data, dict):
        data = data.get("tickets") or []
    if not isinstance(data, list) or not all(isinstance(item, dict) for item in data):
        raise ConfigError(f"{path} must contain a list of ticket records")
    return data


def _build_namer(args) -> TicketDirectoryNamer:
    if args.config:
        config = load_config(args.config, policy=args.policy, base_dir=args.base_dir)
    else:
        config = NamingConfig(policy=args.policy, base_dir=args.base_dir)
    return TicketDirectoryNamer(config, separator=args.separator)


def handle_single_ticket(namer: TicketDirectoryNamer, args) -> int:
    """Handle naming the ticket given on the command line."""
    ticket = Ticket(
        id=args.id,
        title=args.title,
        kpm=args.kpm,
        url=args.url,
        tracker=args.tracker,
    )
    try:
        print(namer.get_ticket_path(ticket))
        return 0
    except InvalidInputError as e:
        print(f"❌ Error: {e}")
        return 1


def handle_tickets_file(namer: TicketDirectoryNamer, path: Path) -> int:
    """Handle naming every ticket of a tickets file; bad records do not stop the others."""
    failures = 0
    records = _load_tickets(path)
    logger.info("Naming %d tickets from %s", len(records), path)
    for record in records:
        try:
            ticket = Ticket.from_mapping(record)
            print(f"{ticket.id}\t{namer.get_ticket_path(ticket)}")
        except InvalidInputError as e:
            logger.error(f"Skipping ticket record: {e}")
            failures += 1
    return 1 if failures else 0


def main(argv: list[str] = None) -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="ticketdir-name",
        description="Print the directory name where a ticket's artifacts are stored"
    )

    # Global options
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    parser.add_argument("--config", type=Path, help="YAML file with a 'naming' section")
    parser.add_argument("--policy", help="Naming policy name or package.module:attribute (or set TICKETDIR_POLICY env var)")
    parser.add_argument("--base-dir", help="Base directory for ticket directories (or set TICKETDIR_BASE_DIR env var)")
    parser.add_argument("--separator", default=os.sep,
                       help=f"Path separator placed after the base directory (default: {os.sep})")

    # Single ticket or a tickets file
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--id", help="Ticket id, e.g. artf74149")
    source.add_argument("--tickets", type=Path, help="YAML/JSON file with a list of tickets")
    parser.add_argument("--title", default="", help="Ticket title")
    parser.add_argument("--kpm", type=int, default=0, help="Ticket KPM number")
    parser.add_argument("--url", default="", help="Ticket URL")
    parser.add_argument("--tracker", default="", help="Tracker containing the ticket")

    args = parser.parse_args(argv)

    # Setup logging
    setup_logging(args.debug)

    try:
        namer = _build_namer(args)
        if args.tickets:
            return handle_tickets_file(namer, args.tickets)
        return handle_single_ticket(namer, args)
    except (ConfigError, PolicyError) as e:
        print(f"❌ Error: {e}")
        return 2
    except NamingError as e:
        print(f"❌ Error: {e}")
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
