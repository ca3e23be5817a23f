from __future__ import annotations

import json
from dataclasses import dataclass, field

from src.intern_portal.intern_portal.core.enums import Gender
from src.intern_portal.intern_portal.profiles.directory import ProfileDirectory, expand_positions
from src.intern_portal.intern_portal.profiles.json_profile_repository import JsonProfileRepository
from src.intern_portal.intern_portal.profiles.model import Candidate


@dataclass
class FakeClock:
    now: float = 1000.0

    def __call__(self) -> float:
        return self.now


@dataclass
class CountingProfiles:
    interns: list[Candidate]
    calls: list = field(default_factory=list)

    def list_interns(self, *, positions=None):
        self.calls.append(positions)
        if positions:
            return [c for c in self.interns if c.position in positions]
        return list(self.interns)


def _interns():
    return [
        Candidate(id="1", name="An", position="Fullstack Engineer Intern"),
        Candidate(id="2", name="Binh", position="UI/UX Engineer Intern"),
        Candidate(id="3", name="Chi", position="Data Intern"),
    ]


def test_expand_positions_groups_and_plain_names():
    assert expand_positions(None) == []
    assert expand_positions("Data Intern") == ["Data Intern"]
    assert expand_positions(["dev", "Data Intern"]) == [
        "Fullstack Engineer Intern",
        "UI/UX Engineer Intern",
        "Data Intern",
    ]


def test_cache_is_used_until_ttl_expires():
    clock = FakeClock()
    repo = CountingProfiles(_interns())
    directory = ProfileDirectory(repo, ttl_seconds=60, clock=clock)

    assert len(directory.list_candidates()) == 3
    clock.now += 59
    assert len(directory.list_candidates()) == 3
    assert len(repo.calls) == 1

    clock.now += 1
    directory.list_candidates()
    assert len(repo.calls) == 2


def test_fresh_cache_serves_position_filters():
    clock = FakeClock()
    repo = CountingProfiles(_interns())
    directory = ProfileDirectory(repo, clock=clock)
    directory.list_candidates()

    dev = directory.list_candidates("dev")
    assert [c.id for c in dev] == ["1", "2"]
    assert len(repo.calls) == 1


def test_stale_filtered_query_does_not_poison_cache():
    clock = FakeClock()
    repo = CountingProfiles(_interns())
    directory = ProfileDirectory(repo, clock=clock)

    assert [c.id for c in directory.list_candidates("Data Intern")] == ["3"]
    assert repo.calls == [["Data Intern"]]

    assert len(directory.list_candidates()) == 3


def test_invalidate_forces_reload():
    repo = CountingProfiles(_interns())
    directory = ProfileDirectory(repo, clock=FakeClock())
    directory.list_candidates()
    directory.invalidate()
    directory.list_candidates()
    assert len(repo.calls) == 2


def test_json_roster_skips_inactive_and_non_interns(tmp_path):
    roster = tmp_path / "roster.json"
    roster.write_text(
        json.dumps(
            [
                {"uid": "z", "name": "Zed", "gender": "M", "isStudent": True, "hasWifi": True},
                {"uid": "a", "name": "Anh", "gender": "F", "active": True, "position": "Data Intern"},
                {"uid": "off", "name": "Gone", "active": False},
                {"uid": "boss", "name": "Mentor", "role": "admin"},
                {"uid": "o", "name": "Oanh", "gender": "O"},
            ]
        ),
        encoding="utf-8",
    )
    repo = JsonProfileRepository(roster)

    interns = repo.list_interns()
    assert [c.id for c in interns] == ["a", "o", "z"]
    zed = interns[-1]
    assert zed.gender == Gender.MALE
    assert zed.is_student and zed.has_connectivity
    assert zed.position == "Intern"
    assert interns[1].gender == Gender.UNSPECIFIED

    assert [c.id for c in repo.list_interns(positions=["Data Intern"])] == ["a"]


def test_json_roster_missing_file_is_empty(tmp_path):
    assert JsonProfileRepository(tmp_path / "nope.json").list_interns() == []
