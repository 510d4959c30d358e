"""PostgreSQL implementation of DatabaseService."""

from contextlib import contextmanager
from typing import Iterator

import psycopg2
import psycopg2.extras

from userimport.errors import StoreConnectionError, StoreError
from userimport.service import DatabaseService
from userimport.types import Params, ParamsList, Row


class PostgresDatabaseService(DatabaseService):
    """PostgreSQL backend using psycopg2.

    Holds a single connection with autocommit off; transaction() commits or
    rolls back the work done inside it.
    """

    placeholder = "%s"

    def __init__(self, dsn: str):
        self._dsn = dsn
        self._conn = None
        self._in_transaction = False

    def connect(self) -> None:
        try:
            conn = psycopg2.connect(self._dsn)
        except psycopg2.Error as e:
            raise StoreConnectionError(f"Cannot connect to database: {e}") from e
        conn.autocommit = False
        self._conn = conn

    def close(self) -> None:
        if self._conn is not None:
            self._conn.close()
            self._conn = None

    def _require_conn(self):
        if self._conn is None:
            raise StoreError("Not connected. Call connect() first.")
        return self._conn

    def _get_conn(self):
        conn = self._require_conn()
        if not self._in_transaction:
            raise RuntimeError(
                "No active transaction. Wrap calls in a `with service.transaction():` block."
            )
        return conn

    @contextmanager
    def transaction(self) -> Iterator[None]:
        conn = self._require_conn()
        self._in_transaction = True
        try:
            yield
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            self._in_transaction = False

    def execute(self, sql: str, params: Params | None = None) -> list[Row]:
        conn = self._get_conn()
        # psycopg2 raises ValueError, not psycopg2.Error, for values it cannot bind (NUL).
        try:
            with conn.cursor(cursor_factory=psycopg2.extras.RealDictCursor) as cur:
                cur.execute(sql, params or ())
                if cur.description is None:
                    return []
                return [dict(row) for row in cur.fetchall()]
        except (psycopg2.Error, ValueError) as e:
            raise StoreError(str(e).strip()) from e

    def execute_many(self, sql: str, params_list: ParamsList) -> None:
        conn = self._get_conn()
        try:
            with conn.cursor() as cur:
                cur.executemany(sql, params_list)
        except (psycopg2.Error, ValueError) as e:
            raise StoreError(str(e).strip()) from e

    def execute_ddl(self, sql: str) -> None:
        conn = self._require_conn()
        try:
            with conn.cursor() as cur:
                for statement in sql.split(";"):
                    statement = statement.strip()
                    if statement:
                        cur.execute(statement)
            conn.commit()
        except psycopg2.Error as e:
            conn.rollback()
            raise StoreError(str(e).strip()) from e
