"""Abstract DatabaseService interface."""

from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import Iterator

from userimport.types import Params, ParamsList, Row


class DatabaseService(ABC):
    """Database-agnostic interface for the importer's store access.

    Design principles:
    - One connection per service, opened by connect() and released by close()
    - Parameterized statements only: values are bound, never formatted into SQL
    - Driver errors surface as StoreError regardless of backend
    """

    placeholder = "?"

    @abstractmethod
    def connect(self) -> None:
        """Open the connection. Raises StoreConnectionError on failure."""

    @abstractmethod
    def close(self) -> None:
        """Close the connection and release resources."""

    @abstractmethod
    def execute(self, sql: str, params: Params | None = None) -> list[Row]:
        """Execute a single SQL statement and return rows as dicts."""

    @abstractmethod
    def execute_many(self, sql: str, params_list: ParamsList) -> None:
        """Execute a SQL statement for each parameter set."""

    @abstractmethod
    @contextmanager
    def transaction(self) -> Iterator[None]:
        """Context manager: commits on success, rolls back on error."""

    @abstractmethod
    def execute_ddl(self, sql: str) -> None:
        """Execute DDL statements (DROP TABLE, CREATE TABLE, etc.)."""

    def __enter__(self) -> "DatabaseService":
        self.connect()
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def insert(self, table: str, columns: list[str], row: tuple) -> None:
        """Insert one row. A primary key clash raises StoreError."""
        cols = ", ".join(columns)
        placeholders = ", ".join(self.placeholder for _ in columns)
        self.execute(f"INSERT INTO {table} ({cols}) VALUES ({placeholders})", row)

    def upsert(
        self,
        table: str,
        columns: list[str],
        rows: list[tuple],
        conflict_columns: list[str],
    ) -> None:
        """Insert rows, updating on conflict with the specified columns."""
        if not rows:
            return
        cols = ", ".join(columns)
        placeholders = ", ".join(self.placeholder for _ in columns)
        conflict_cols = ", ".join(conflict_columns)
        update_cols = [c for c in columns if c not in conflict_columns]
        update_clause = ", ".join(f"{c} = excluded.{c}" for c in update_cols)

        if update_cols:
            sql = (
                f"INSERT INTO {table} ({cols}) VALUES ({placeholders}) "
                f"ON CONFLICT ({conflict_cols}) DO UPDATE SET {update_clause}"
            )
        else:
            sql = (
                f"INSERT INTO {table} ({cols}) VALUES ({placeholders}) "
                f"ON CONFLICT ({conflict_cols}) DO NOTHING"
            )
        self.execute_many(sql, rows)
