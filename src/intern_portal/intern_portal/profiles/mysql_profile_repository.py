from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import Candidate
from .repository import ProfileRepository


class MySQLProfileRepository(ProfileRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_interns(self, *, positions: Optional[Sequence[str]] = None) -> Sequence[Candidate]:
        sql = """
            SELECT uid, name, email, avatar, position, gender, is_student, has_wifi, active
            FROM interns
            WHERE role='intern' AND (active IS NULL OR active <> 0)
        """
        params: list = []
        if positions:
            placeholders = ",".join(["%s"] * len(positions))
            sql += f" AND position IN ({placeholders})"
            params.extend(positions)
        sql += " ORDER BY name ASC"

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            return [Candidate.from_record(r) for r in fetchall(cur)]
