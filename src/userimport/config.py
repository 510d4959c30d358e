"""Run configuration resolved from command-line flags and the environment.

Flags win over environment variables. Other modules consume ImportConfig
instead of reading argv or os.environ themselves.
"""

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from urllib.parse import quote

from userimport.errors import ConfigError

DEFAULT_DB_HOST = "localhost"
DEFAULT_DB_NAME = "users"


@dataclass(frozen=True)
class ImportConfig:
    """Validated settings for one run.

    Attributes:
        path: Source file, or None in table-only mode.
        table_only: Provision the table and stop.
        dry_run: Parse, validate and print without touching the database.
        db_url: Connection URL, or None when the run needs no database.
        replace_duplicates: Upsert on email instead of failing the row.
    """

    path: Path | None
    table_only: bool
    dry_run: bool
    db_url: str | None
    replace_duplicates: bool = False

    @classmethod
    def from_args(cls, args, env: Mapping[str, str] | None = None) -> "ImportConfig":
        """Build a config from parsed CLI arguments.

        Raises:
            ConfigError: If flags are missing, contradictory or point nowhere.
        """
        env = os.environ if env is None else env

        if args.create_table and args.dry_run:
            raise ConfigError("--create_table and --dry_run cannot be combined.")

        path = None
        if args.file is not None:
            path = Path(args.file)
            if not path.is_file():
                raise ConfigError("Invalid path specified.")
        elif not args.create_table:
            raise ConfigError("Path to data file not specified.")

        db_url = None
        if not args.dry_run:
            db_url = _resolve_db_url(args, env)

        return cls(
            path=path,
            table_only=args.create_table,
            dry_run=args.dry_run,
            db_url=db_url,
            replace_duplicates=args.replace_duplicates,
        )


def _resolve_db_url(args, env: Mapping[str, str]) -> str:
    db_url = args.db_url or env.get("USERIMPORT_DB_URL")
    if db_url:
        return db_url

    user = args.user or env.get("USERIMPORT_DB_USER")
    if not user:
        raise ConfigError("Database user not specified.")
    password = args.password if args.password is not None else env.get("USERIMPORT_DB_PASSWORD")
    host = args.host or env.get("USERIMPORT_DB_HOST", DEFAULT_DB_HOST)
    db_name = args.db_name or env.get("USERIMPORT_DB_NAME", DEFAULT_DB_NAME)
    return build_postgres_url(user, password, host, db_name)


def build_postgres_url(user: str, password: str | None, host: str, db_name: str) -> str:
    credentials = quote(user, safe="")
    if password:
        credentials += ":" + quote(password, safe="")
    return f"postgresql://{credentials}@{host}/{db_name}"
