"""Tests for DatabaseService (SQLite backend)."""

import pytest

from catalog_seed import SQLiteDatabaseService, create_service


class TestDatabaseService:
    def test_execute_ddl_and_insert(self, db_service):
        db_service.execute_ddl("CREATE TABLE t (id INTEGER PRIMARY KEY, name TEXT)")
        with db_service.transaction():
            db_service.execute("INSERT INTO t (id, name) VALUES (?, ?)", (1, "alice"))
            rows = db_service.execute("SELECT * FROM t")
        assert rows == [{"id": 1, "name": "alice"}]

    def test_execute_many(self, db_service):
        db_service.execute_ddl("CREATE TABLE t (id INTEGER PRIMARY KEY, val TEXT)")
        with db_service.transaction():
            db_service.execute_many(
                "INSERT INTO t (id, val) VALUES (?, ?)",
                [(1, "a"), (2, "b"), (3, "c")],
            )
            rows = db_service.execute("SELECT * FROM t ORDER BY id")
        assert len(rows) == 3
        assert rows[0]["val"] == "a"

    def test_batch_insert(self, db_service):
        db_service.execute_ddl("CREATE TABLE t (id INTEGER PRIMARY KEY, val TEXT)")
        with db_service.transaction():
            db_service.batch_insert("t", ["id", "val"], [(1, "x"), (2, "y")])
            rows = db_service.execute("SELECT * FROM t ORDER BY id")
        assert len(rows) == 2

    def test_batch_insert_empty_rows(self, db_service):
        db_service.execute_ddl("CREATE TABLE t (id INTEGER PRIMARY KEY, val TEXT)")
        with db_service.transaction():
            db_service.batch_insert("t", ["id", "val"], [])
            rows = db_service.execute("SELECT * FROM t")
        assert rows == []

    def test_failed_batch_insert_rolls_back_whole_batch(self, db_service):
        db_service.execute_ddl("CREATE TABLE t (id INTEGER PRIMARY KEY, val TEXT)")
        with pytest.raises(Exception):
            with db_service.transaction():
                db_service.batch_insert("t", ["id", "val"], [(1, "x"), (1, "dup")])
        assert db_service.count("t") == 0

    def test_delete_all_and_count(self, db_service):
        db_service.execute_ddl("CREATE TABLE t (id INTEGER PRIMARY KEY)")
        with db_service.transaction():
            db_service.batch_insert("t", ["id"], [(1,), (2,), (3,)])
        assert db_service.count("t") == 3

        db_service.delete_all("t")
        assert db_service.count("t") == 0

    def test_foreign_keys_enforced(self, db_service):
        db_service.execute_ddl(
            "CREATE TABLE parent (id INTEGER PRIMARY KEY);"
            "CREATE TABLE child (id INTEGER PRIMARY KEY, parent_id INTEGER REFERENCES parent(id));"
        )
        with pytest.raises(Exception, match="FOREIGN KEY"):
            with db_service.transaction():
                db_service.execute("INSERT INTO child (id, parent_id) VALUES (?, ?)", (1, 42))

    def test_transaction_rollback_on_error(self, db_service):
        db_service.execute_ddl("CREATE TABLE t (id INTEGER PRIMARY KEY, val TEXT)")
        with pytest.raises(ValueError):
            with db_service.transaction():
                db_service.execute("INSERT INTO t (id, val) VALUES (?, ?)", (1, "x"))
                raise ValueError("simulated failure")

        with db_service.transaction():
            rows = db_service.execute("SELECT * FROM t")
        assert rows == []

    def test_requires_transaction(self, db_service):
        db_service.execute_ddl("CREATE TABLE t (id INTEGER PRIMARY KEY)")
        with pytest.raises(RuntimeError, match="No active transaction"):
            db_service.execute("SELECT 1")

    def test_transactions_cannot_nest(self, db_service):
        with db_service.transaction():
            with pytest.raises(RuntimeError, match="nested"):
                with db_service.transaction():
                    pass
        # a rejected inner block leaves the service usable
        assert db_service.count("sqlite_master") == 0


class TestConnection:
    def test_transaction_before_connect(self, tmp_path):
        service = SQLiteDatabaseService(str(tmp_path / "x.db"))
        with pytest.raises(RuntimeError, match="Not connected"):
            with service.transaction():
                pass

    def test_close_is_idempotent_and_reconnect_works(self, tmp_path):
        service = SQLiteDatabaseService(str(tmp_path / "x.db"))
        service.connect()
        service.execute_ddl("CREATE TABLE t (id INTEGER PRIMARY KEY)")
        with service.transaction():
            service.batch_insert("t", ["id"], [(1,)])
        service.close()
        service.close()

        service.connect()
        try:
            assert service.count("t") == 1
        finally:
            service.close()

    def test_connect_twice_keeps_one_connection(self):
        service = SQLiteDatabaseService(":memory:")
        service.connect()
        try:
            service.execute_ddl("CREATE TABLE t (id INTEGER PRIMARY KEY)")
            service.connect()
            assert service.count("t") == 0
        finally:
            service.close()


class TestCreateService:
    def test_sqlite_file_url(self, tmp_path):
        service = create_service(f"sqlite:///{tmp_path / 'x.db'}")
        assert isinstance(service, SQLiteDatabaseService)

    def test_in_memory_uses_single_connection(self):
        service = create_service("sqlite:///:memory:")
        service.connect()
        try:
            service.execute_ddl("CREATE TABLE t (id INTEGER PRIMARY KEY)")
            with service.transaction():
                service.batch_insert("t", ["id"], [(1,)])
            # every transaction must see the same in-memory database
            assert service.count("t") == 1
        finally:
            service.close()

    def test_unsupported_scheme(self):
        with pytest.raises(ValueError, match="Unsupported database URL"):
            create_service("mysql://localhost/db")
