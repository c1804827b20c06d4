"""Stockroom database management CLI.

Creates or drops the SQL schema behind the stockroom aggregates when the
active configuration uses a SQL provider (e.g. PROTEAN_ENV=production).

Usage:
    python src/manage.py setup-db   # Create all tables
    python src/manage.py drop-db    # Drop all tables
"""

import argparse

from stockroom.domain import stockroom
from stockroom.utils.db import drop_db, setup_db
from stockroom.utils.logging import configure_logging, get_logger

logger = get_logger(__name__)


def main(argv=None):
    parser = argparse.ArgumentParser(description="Stockroom database management")
    subparsers = parser.add_subparsers(dest="command", required=True)
    subparsers.add_parser("setup-db", help="Create all database tables")
    subparsers.add_parser("drop-db", help="Drop all database tables")
    args = parser.parse_args(argv)

    configure_logging()
    stockroom.init()

    if args.command == "setup-db":
        setup_db(stockroom)
        logger.info("Database schema ready", domain=stockroom.name)
    else:
        drop_db(stockroom)
        logger.info("Database schema dropped", domain=stockroom.name)


if __name__ == "__main__":
    main()
