from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import Gender


@dataclass(frozen=True)
class Candidate:
    """Domain entity: an intern who can be called up to present.

    Plain data only; the directory and repositories build these.
    """

    id: str
    name: str
    position: str = "Intern"
    gender: Gender = Gender.UNSPECIFIED
    is_student: bool = False
    has_connectivity: bool = False
    email: Optional[str] = None
    avatar: Optional[str] = None

    @classmethod
    def from_record(cls, row: dict) -> "Candidate":
        """Build a candidate from a roster row (database row or JSON object)."""
        return cls(
            id=str(row.get("uid") or row.get("id")),
            name=str(row.get("name") or ""),
            position=row.get("position") or "Intern",
            gender=Gender.parse(row.get("gender")),
            is_student=bool(row.get("is_student", row.get("isStudent", False))),
            has_connectivity=bool(row.get("has_wifi", row.get("hasWifi", row.get("has_connectivity", False)))),
            email=row.get("email"),
            avatar=row.get("avatar"),
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "position": self.position,
            "gender": self.gender.value,
            "is_student": self.is_student,
            "has_connectivity": self.has_connectivity,
            "email": self.email,
            "avatar": self.avatar,
        }
