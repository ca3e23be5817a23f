from __future__ import annotations

import json
from pathlib import Path
from typing import Optional, Sequence

from ..core.exceptions import StorageError
from .model import Candidate
from .repository import ProfileRepository


class JsonProfileRepository(ProfileRepository):
    """Roster kept in a JSON file (list of profile objects).

    Used for local development and demos where no MySQL server is around.
    """

    def __init__(self, path: str | Path):
        self._path = Path(path)

    def list_interns(self, *, positions: Optional[Sequence[str]] = None) -> Sequence[Candidate]:
        if not self._path.exists():
            return []
        try:
            rows = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            raise StorageError(f"Cannot read roster {self._path}: {e}") from e
        if not isinstance(rows, list):
            raise StorageError(f"Roster {self._path} must contain a JSON list")

        out = []
        for row in rows:
            if not isinstance(row, dict):
                continue
            if row.get("role", "intern") != "intern" or row.get("active") is False:
                continue
            if positions and (row.get("position") or "") not in positions:
                continue
            out.append(Candidate.from_record(row))
        out.sort(key=lambda c: c.name)
        return out
