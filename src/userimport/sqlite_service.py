"""SQLite implementation of DatabaseService."""

import sqlite3
from contextlib import contextmanager
from typing import Iterator

from userimport.errors import StoreConnectionError, StoreError
from userimport.service import DatabaseService
from userimport.types import Params, ParamsList, Row


class SQLiteDatabaseService(DatabaseService):
    """SQLite backend using stdlib sqlite3.

    Holds a single connection. Statements other than DDL must run inside a
    transaction() block.
    """

    placeholder = "?"

    def __init__(self, db_path: str):
        self._db_path = db_path
        self._conn: sqlite3.Connection | None = None
        self._in_transaction = False

    def connect(self) -> None:
        try:
            conn = sqlite3.connect(self._db_path)
        except sqlite3.Error as e:
            raise StoreConnectionError(f"Cannot open {self._db_path}: {e}") from e
        conn.row_factory = sqlite3.Row
        conn.execute("PRAGMA foreign_keys=ON")
        self._conn = conn

    def close(self) -> None:
        if self._conn is not None:
            self._conn.close()
            self._conn = None

    def _require_conn(self) -> sqlite3.Connection:
        if self._conn is None:
            raise StoreError("Not connected. Call connect() first.")
        return self._conn

    def _get_conn(self) -> sqlite3.Connection:
        """Get the connection for the current transaction."""
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
        try:
            cursor = conn.execute(sql, params or ())
            if cursor.description is None:
                return []
            columns = [desc[0] for desc in cursor.description]
            return [dict(zip(columns, row)) for row in cursor.fetchall()]
        except sqlite3.Error as e:
            raise StoreError(str(e)) from e

    def execute_many(self, sql: str, params_list: ParamsList) -> None:
        conn = self._get_conn()
        try:
            conn.executemany(sql, params_list)
        except sqlite3.Error as e:
            raise StoreError(str(e)) from e

    def execute_ddl(self, sql: str) -> None:
        conn = self._require_conn()
        try:
            conn.executescript(sql)
            conn.commit()
        except sqlite3.Error as e:
            raise StoreError(str(e)) from e
