from __future__ import annotations

from typing import Any, Optional, Protocol


class KeyValueStore(Protocol):
    """Durable key -> JSON value storage.

    `get` returns None for a missing key and raises StorageError when the
    stored payload cannot be read or decoded. `set` overwrites the whole value.
    """

    def get(self, key: str) -> Optional[Any]:
        raise NotImplementedError

    def set(self, key: str, value: Any) -> None:
        raise NotImplementedError

    def delete(self, key: str) -> bool:
        raise NotImplementedError
