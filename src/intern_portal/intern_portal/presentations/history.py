from __future__ import annotations

import logging
from typing import Iterable

from ..core.constants import PRESENTED_IDS_KEY
from ..storage.repository import KeyValueStore

logger = logging.getLogger(__name__)


class PresentedHistory:
    """Durable record of who already presented.

    Reads fall back to an empty history and writes are best-effort: the
    engine's in-memory set stays authoritative, and since every save is a
    full overwrite a failed write is repaired by the next successful one.
    """

    def __init__(self, store: KeyValueStore, *, key: str = PRESENTED_IDS_KEY):
        self._store = store
        self._key = key

    def load(self) -> list[str]:
        try:
            raw = self._store.get(self._key)
        except Exception as e:
            logger.warning("presented history unreadable, starting empty: %s", e)
            return []
        if raw is None:
            return []
        if not isinstance(raw, list):
            logger.warning("presented history has unexpected shape %s, starting empty", type(raw).__name__)
            return []

        seen: dict[str, None] = {}
        for item in raw:
            if isinstance(item, (str, int)) and not isinstance(item, bool):
                seen.setdefault(str(item), None)
        return list(seen)

    def save(self, ids: Iterable[str]) -> bool:
        try:
            self._store.set(self._key, list(ids))
            return True
        except Exception as e:
            logger.warning("could not persist presented history: %s", e)
            return False

    def clear(self) -> bool:
        try:
            self._store.delete(self._key)
            return True
        except Exception as e:
            logger.warning("could not delete presented history: %s", e)
            return False
