"""Example: drive the presentation queue without Flask.

Controllers are a thin layer; everything below goes straight to the engine.
"""

from src.intern_portal.intern_portal.core.enums import Gender
from src.intern_portal.intern_portal.presentations.history import PresentedHistory
from src.intern_portal.intern_portal.presentations.service import PresentationQueueEngine
from src.intern_portal.intern_portal.presentations.ticker import ManualTicker
from src.intern_portal.intern_portal.profiles.model import Candidate
from src.intern_portal.intern_portal.storage.memory_store import InMemoryKeyValueStore


class StaticPool:
    def __init__(self, candidates):
        self._candidates = list(candidates)

    def list_candidates(self):
        return list(self._candidates)


def main():
    pool = StaticPool(
        [
            Candidate(id="a", name="An", gender=Gender.FEMALE, is_student=True),
            Candidate(id="b", name="Binh", gender=Gender.MALE),
            Candidate(id="c", name="Chi", gender=Gender.FEMALE, has_connectivity=True),
        ]
    )
    ticker = ManualTicker()
    engine = PresentationQueueEngine(pool, PresentedHistory(InMemoryKeyValueStore()), ticker=ticker)

    engine.generate_queue(10)
    engine.start_or_resume()
    ticker.advance(10)
    print(engine.current.name, engine.timer)
    engine.mark_presented()
    print(engine.snapshot().to_dict())


if __name__ == "__main__":
    main()
