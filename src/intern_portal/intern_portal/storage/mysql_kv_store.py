from __future__ import annotations

import json
from typing import Any, Optional

import mysql.connector

from ..core.exceptions import StorageError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .repository import KeyValueStore


class MySQLKeyValueStore(KeyValueStore):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get(self, key: str) -> Optional[Any]:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute("SELECT v FROM kv_store WHERE k=%s", (key,))
                row = fetchone(cur)
        except mysql.connector.Error as e:
            raise StorageError(f"Cannot read key {key!r}: {e}") from e
        if not row:
            return None
        try:
            return json.loads(row["v"])
        except ValueError as e:
            raise StorageError(f"Malformed value for key {key!r}") from e

    def set(self, key: str, value: Any) -> None:
        payload = json.dumps(value)
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO kv_store(k, v) VALUES(%s, %s)
                    ON DUPLICATE KEY UPDATE v=VALUES(v)
                    """,
                    (key, payload),
                )
        except mysql.connector.Error as e:
            raise StorageError(f"Cannot write key {key!r}: {e}") from e

    def delete(self, key: str) -> bool:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute("DELETE FROM kv_store WHERE k=%s", (key,))
                return cur.rowcount > 0
        except mysql.connector.Error as e:
            raise StorageError(f"Cannot delete key {key!r}: {e}") from e
