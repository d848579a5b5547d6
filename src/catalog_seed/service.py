"""Abstract DatabaseService interface."""

from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import Any, Iterator

from catalog_seed.types import Params, ParamsList


class DatabaseService(ABC):
    """Database-agnostic interface used by the seeding pipeline.

    The loader, the reporter and the CLI only ever talk to this ABC, so a run
    against SQLite and a run against PostgreSQL go through the same code.

    A run is sequential, so a service holds exactly one connection: opened by
    connect(), released by close(), and shared by every transaction() in
    between. Transactions do not nest.
    """

    # Exceptions meaning "the store refused this record" (constraint or
    # data errors). Anything else, such as a lost connection, propagates.
    record_errors: tuple[type[Exception], ...] = ()

    def __init__(self) -> None:
        self._conn: Any = None
        self._in_transaction = False

    @abstractmethod
    def _open(self) -> Any:
        """Open and configure a new DB-API connection."""

    def connect(self) -> None:
        if self._conn is None:
            self._conn = self._open()

    def close(self) -> None:
        if self._conn is not None:
            self._conn.close()
            self._conn = None
            self._in_transaction = False

    def _connection(self) -> Any:
        if self._conn is None:
            raise RuntimeError("Not connected. Call service.connect() first.")
        return self._conn

    def _get_conn(self) -> Any:
        """Return the connection, which must be inside transaction()."""
        if not self._in_transaction:
            raise RuntimeError(
                "No active transaction. Wrap calls in a `with service.transaction():` block."
            )
        return self._conn

    @contextmanager
    def transaction(self) -> Iterator[None]:
        """Commit on success, roll back and re-raise on error."""
        conn = self._connection()
        if self._in_transaction:
            raise RuntimeError("Transactions cannot be nested")
        self._in_transaction = True
        try:
            yield
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            self._in_transaction = False

    @abstractmethod
    def execute(self, sql: str, params: Params | None = None) -> list[dict[str, Any]]:
        """Execute a single SQL statement and return rows as dicts."""

    @abstractmethod
    def execute_many(self, sql: str, params_list: ParamsList) -> None:
        """Execute a SQL statement for each parameter set."""

    @abstractmethod
    def execute_ddl(self, sql: str) -> None:
        """Execute DDL statements (CREATE TABLE, CREATE INDEX, etc.)."""

    @abstractmethod
    def batch_insert(self, table: str, columns: list[str], rows: list[tuple]) -> None:
        """Insert multiple rows into a table."""

    def delete_all(self, table: str) -> None:
        """Remove every row from a table in its own transaction."""
        with self.transaction():
            self.execute(f"DELETE FROM {table}")

    def count(self, table: str) -> int:
        with self.transaction():
            rows = self.execute(f"SELECT COUNT(*) AS cnt FROM {table}")
        return int(rows[0]["cnt"])
