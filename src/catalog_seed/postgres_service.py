"""PostgreSQL implementation of DatabaseService."""

from typing import Any

import psycopg2
import psycopg2.extras

from catalog_seed.service import DatabaseService
from catalog_seed.types import Params, ParamsList


class PostgresDatabaseService(DatabaseService):
    """PostgreSQL backend using psycopg2."""

    record_errors = (psycopg2.IntegrityError, psycopg2.DataError)

    def __init__(self, dsn: str):
        super().__init__()
        self._dsn = dsn

    def _open(self):
        conn = psycopg2.connect(self._dsn)
        conn.autocommit = False
        return conn

    def execute(self, sql: str, params: Params | None = None) -> list[dict[str, Any]]:
        with self._get_conn().cursor(cursor_factory=psycopg2.extras.RealDictCursor) as cur:
            cur.execute(sql, params or ())
            if cur.description is None:
                return []
            return [dict(row) for row in cur.fetchall()]

    def execute_many(self, sql: str, params_list: ParamsList) -> None:
        with self._get_conn().cursor() as cur:
            psycopg2.extras.execute_batch(cur, sql, params_list)

    def execute_ddl(self, sql: str) -> None:
        with self.transaction():
            with self._get_conn().cursor() as cur:
                for statement in sql.split(";"):
                    statement = statement.strip()
                    if statement:
                        cur.execute(statement)

    def batch_insert(self, table: str, columns: list[str], rows: list[tuple]) -> None:
        if not rows:
            return
        cols = ", ".join(columns)
        placeholders = ", ".join("%s" for _ in columns)
        self.execute_many(f"INSERT INTO {table} ({cols}) VALUES ({placeholders})", rows)
