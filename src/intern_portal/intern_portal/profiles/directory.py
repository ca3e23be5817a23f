from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Iterable, Mapping, Optional, Sequence, Union

from ..common.datetime_utils import monotonic_now
from ..core.constants import DEFAULT_DIRECTORY_TTL_SECONDS, POSITION_GROUPS
from .model import Candidate
from .repository import ProfileRepository

logger = logging.getLogger(__name__)


def expand_positions(
    positions: Union[str, Iterable[str], None],
    groups: Mapping[str, Sequence[str]] = POSITION_GROUPS,
) -> list[str]:
    """Normalize a position or list of positions, expanding group aliases such as 'dev'."""
    if not positions:
        return []
    if isinstance(positions, str):
        positions = [positions]

    expanded: list[str] = []
    for pos in positions:
        if pos in groups:
            expanded.extend(groups[pos])
        else:
            expanded.append(pos)
    return expanded


@dataclass
class _CacheEntry:
    ts: float
    data: tuple[Candidate, ...]


class ProfileDirectory:
    """Roster of interns with a time-to-live cache in front of the repository.

    The cache only ever holds the unfiltered roster. A position-filtered call
    served while the cache is fresh filters the cached data; a filtered call
    on a stale cache goes to the repository and leaves the cache alone.
    """

    def __init__(
        self,
        profiles: ProfileRepository,
        *,
        ttl_seconds: float = DEFAULT_DIRECTORY_TTL_SECONDS,
        clock: Callable[[], float] = monotonic_now,
        groups: Mapping[str, Sequence[str]] = POSITION_GROUPS,
    ):
        self._profiles = profiles
        self._ttl = float(ttl_seconds)
        self._clock = clock
        self._groups = groups
        self._cache: Optional[_CacheEntry] = None

    def _fresh(self) -> bool:
        return self._cache is not None and self._clock() - self._cache.ts < self._ttl

    def list_candidates(self, positions: Union[str, Iterable[str], None] = None) -> list[Candidate]:
        wanted = expand_positions(positions, self._groups)

        if self._fresh():
            data = self._cache.data
            if wanted:
                return [c for c in data if c.position in wanted]
            return list(data)

        if wanted:
            return list(self._profiles.list_interns(positions=wanted))

        data = tuple(self._profiles.list_interns())
        self._cache = _CacheEntry(ts=self._clock(), data=data)
        logger.debug("profile directory refreshed (%d interns)", len(data))
        return list(data)

    def invalidate(self) -> None:
        self._cache = None
