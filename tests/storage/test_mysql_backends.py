from __future__ import annotations

import mysql.connector
import pytest

from src.intern_portal.intern_portal.core.enums import Gender
from src.intern_portal.intern_portal.core.exceptions import StorageError
from src.intern_portal.intern_portal.database.bootstrap import iter_sql_statements, strip_create_db_and_use
from src.intern_portal.intern_portal.profiles.mysql_profile_repository import MySQLProfileRepository
from src.intern_portal.intern_portal.storage.mysql_kv_store import MySQLKeyValueStore


class FakeCursor:
    def __init__(self, db: "FakeDatabase"):
        self._db = db
        self.rowcount = 0

    def execute(self, sql, params=()):
        self._db.executed.append((" ".join(sql.split()), tuple(params)))
        if self._db.error is not None:
            raise self._db.error
        self.rowcount = self._db.rowcount

    def fetchone(self):
        return self._db.rows[0] if self._db.rows else None

    def fetchall(self):
        return list(self._db.rows)

    def close(self):
        pass


class FakeConnection:
    def __init__(self, db: "FakeDatabase"):
        self._db = db

    def cursor(self, dictionary=True):
        return FakeCursor(self._db)

    def commit(self):
        self._db.commits += 1

    def rollback(self):
        self._db.rollbacks += 1

    def close(self):
        pass


class FakeDatabase:
    """Stands in for DatabaseConnection: hands out fake connections."""

    def __init__(self, rows=None, *, rowcount=0, error=None):
        self.rows = rows or []
        self.rowcount = rowcount
        self.error = error
        self.executed: list[tuple[str, tuple]] = []
        self.commits = 0
        self.rollbacks = 0

    def connect(self, *, with_database: bool = True):
        return FakeConnection(self)


def test_kv_store_get_decodes_json():
    db = FakeDatabase(rows=[{"v": '["u1", "u2"]'}])
    assert MySQLKeyValueStore(db).get("presentation_presented_ids") == ["u1", "u2"]
    assert db.executed == [("SELECT v FROM kv_store WHERE k=%s", ("presentation_presented_ids",))]


def test_kv_store_get_missing_and_malformed():
    assert MySQLKeyValueStore(FakeDatabase()).get("k") is None
    with pytest.raises(StorageError):
        MySQLKeyValueStore(FakeDatabase(rows=[{"v": "{oops"}])).get("k")


def test_kv_store_set_upserts_and_commits():
    db = FakeDatabase()
    MySQLKeyValueStore(db).set("k", ["a"])

    sql, params = db.executed[0]
    assert sql.startswith("INSERT INTO kv_store(k, v) VALUES(%s, %s) ON DUPLICATE KEY UPDATE")
    assert params == ("k", '["a"]')
    assert db.commits == 1


def test_kv_store_delete_reports_rowcount():
    assert MySQLKeyValueStore(FakeDatabase(rowcount=1)).delete("k") is True
    assert MySQLKeyValueStore(FakeDatabase(rowcount=0)).delete("k") is False


def test_kv_store_wraps_driver_errors_and_rolls_back():
    db = FakeDatabase(error=mysql.connector.Error("gone away"))
    with pytest.raises(StorageError):
        MySQLKeyValueStore(db).set("k", [])
    assert db.rollbacks == 1


def test_profile_repository_maps_rows_and_filters_positions():
    db = FakeDatabase(
        rows=[
            {"uid": "u1", "name": "An", "email": None, "avatar": None, "position": "Data Intern",
             "gender": "F", "is_student": 1, "has_wifi": 0, "active": None},
        ]
    )
    repo = MySQLProfileRepository(db)

    interns = repo.list_interns(positions=["Data Intern", "QA Intern"])
    assert interns[0].id == "u1"
    assert interns[0].gender == Gender.FEMALE
    assert interns[0].is_student is True
    assert interns[0].has_connectivity is False

    sql, params = db.executed[0]
    assert "position IN (%s,%s)" in sql
    assert sql.endswith("ORDER BY name ASC")
    assert params == ("Data Intern", "QA Intern")


def test_schema_statements_split_outside_quotes():
    sql = strip_create_db_and_use(
        "CREATE DATABASE IF NOT EXISTS x;\nUSE x;\n-- comment; here\n"
        "CREATE TABLE a (v VARCHAR(8) DEFAULT 'a;b');\nCREATE TABLE b (id INT)"
    )
    statements = list(iter_sql_statements(sql))
    assert statements == ["CREATE TABLE a (v VARCHAR(8) DEFAULT 'a;b')", "CREATE TABLE b (id INT)"]
