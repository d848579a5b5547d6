"""SQLite implementation of DatabaseService."""

import sqlite3
from typing import Any

from catalog_seed.service import DatabaseService
from catalog_seed.types import Params, ParamsList


class SQLiteDatabaseService(DatabaseService):
    """SQLite backend using stdlib sqlite3, with foreign keys enforced."""

    record_errors = (sqlite3.IntegrityError, sqlite3.DataError)

    def __init__(self, db_path: str):
        super().__init__()
        self._db_path = db_path

    def _open(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self._db_path)
        conn.execute("PRAGMA foreign_keys=ON")
        return conn

    def execute(self, sql: str, params: Params | None = None) -> list[dict[str, Any]]:
        cursor = self._get_conn().execute(sql, params or ())
        if cursor.description is None:
            return []
        columns = [desc[0] for desc in cursor.description]
        return [dict(zip(columns, row)) for row in cursor.fetchall()]

    def execute_many(self, sql: str, params_list: ParamsList) -> None:
        self._get_conn().executemany(sql, params_list)

    def execute_ddl(self, sql: str) -> None:
        # executescript commits on its own
        self._connection().executescript(sql)

    def batch_insert(self, table: str, columns: list[str], rows: list[tuple]) -> None:
        if not rows:
            return
        cols = ", ".join(columns)
        placeholders = ", ".join("?" for _ in columns)
        self.execute_many(f"INSERT INTO {table} ({cols}) VALUES ({placeholders})", rows)
