from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Candidate


class ProfileRepository(Protocol):
    """Repository interface for intern profiles.

    Implementations return active interns only (rows whose `active` flag is
    explicitly false are excluded), ordered by name.
    """

    def list_interns(self, *, positions: Optional[Sequence[str]] = None) -> Sequence[Candidate]:
        raise NotImplementedError
