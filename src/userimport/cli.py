"""CLI entry point for the user importer.

Usage:
    user-import --file users.csv -u USER -p PASSWORD -h HOST
    user-import --file users.csv --dry_run
    user-import --create_table --db-url sqlite:///users.db
"""

import argparse
import logging
import sys

from userimport import create_service
from userimport.config import ImportConfig
from userimport.errors import UserImportError
from userimport.ingestion import Importer

logger = logging.getLogger("userimport")


def build_parser() -> argparse.ArgumentParser:
    # -h is the database host, so argparse's automatic -h/--help is disabled.
    parser = argparse.ArgumentParser(
        prog="user-import",
        description="Create the users table and import users from a CSV file",
        add_help=False,
    )
    parser.add_argument("--file", help="Path to the CSV file (header line is skipped)")
    parser.add_argument(
        "--create_table",
        action="store_true",
        help="Create (or rebuild) the users table and exit without importing",
    )
    parser.add_argument(
        "--dry_run",
        action="store_true",
        help="Parse and validate the file without touching the database",
    )
    parser.add_argument("-u", dest="user", help="Database user")
    parser.add_argument("-p", dest="password", help="Database password")
    parser.add_argument("-h", dest="host", help="Database host")
    parser.add_argument("--db-name", help="Database name (default: users)")
    parser.add_argument(
        "--db-url", help="Database URL (sqlite:/// or postgresql://), overrides -u/-p/-h"
    )
    parser.add_argument(
        "--replace-duplicates",
        action="store_true",
        help="Overwrite rows with an existing email instead of reporting them",
    )
    parser.add_argument("--verbose", action="store_true", help="Log debug output")
    parser.add_argument("--help", action="store_true", help="Show this help text and exit")
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    try:
        args = parser.parse_args(argv)
    except SystemExit as e:
        return e.code if isinstance(e.code, int) else 1

    if args.help:
        parser.print_help()
        return 0

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    try:
        config = ImportConfig.from_args(args)
        service = create_service(config.db_url) if config.db_url else None
        importer = Importer(
            config.path,
            service,
            table_only=config.table_only,
            dry_run=config.dry_run,
            replace_duplicates=config.replace_duplicates,
        )
        report = importer.run()
    except UserImportError as e:
        logger.error("%s", e)
        return 1

    if not config.table_only:
        logger.info("Done. %d users accepted, %d inserted.", report.accepted, report.inserted)
        logger.debug("Report: %s", report.to_dict())
    return 0


if __name__ == "__main__":
    sys.exit(main())
