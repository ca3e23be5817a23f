from __future__ import annotations

import logging
import random
import threading
from functools import wraps
from typing import Callable, Optional, Protocol, Sequence

from ..common.validators import require_duration, require_int
from ..core.constants import (
    DEFAULT_DURATION_SECONDS,
    LOW_TIME_THRESHOLD_SECONDS,
    MIN_DURATION_SECONDS,
    TICK_INTERVAL_SECONDS,
    UPCOMING_PREVIEW_LIMIT,
    WARNING_THRESHOLD_SECONDS,
)
from ..core.enums import AudioCue, TimerPhase
from ..profiles.model import Candidate
from .audio import AudioCueDevice, NullAudioDevice, play_cue
from .availability import compute_available, shuffle
from .history import PresentedHistory
from .model import FilterCriteria, QueueSnapshot, TimerState
from .ticker import TickHandle, ThreadingTicker, Ticker

logger = logging.getLogger(__name__)


class CandidatePool(Protocol):
    def list_candidates(self) -> Sequence[Candidate]:
        raise NotImplementedError


Listener = Callable[[QueueSnapshot], None]


def _serialized(method):
    @wraps(method)
    def wrapper(self, *args, **kwargs):
        with self._lock:
            return method(self, *args, **kwargs)

    return wrapper


class PresentationQueueEngine:
    """Presentation queue and countdown.

    State machine::

        Idle    --start-->           Running
        Running --pause-->           Paused
        Running --tick to 0-->       Expired
        Paused  --start-->           Running
        any     --generate/mark_presented/skip/reset--> Idle

    Operations that do not apply in the current state are no-ops returning
    False. Public operations run one at a time under the engine lock; ticker
    callbacks from a cancelled countdown are recognised by their run number
    and ignored.
    """

    def __init__(
        self,
        pool: CandidatePool,
        history: PresentedHistory,
        *,
        audio: AudioCueDevice | None = None,
        ticker: Ticker | None = None,
        criteria: FilterCriteria | None = None,
        default_duration: int = DEFAULT_DURATION_SECONDS,
        rng: random.Random | None = None,
        tick_interval: float = TICK_INTERVAL_SECONDS,
    ):
        self._pool = pool
        self._history = history
        self._audio = audio or NullAudioDevice()
        self._ticker = ticker or ThreadingTicker()
        self._criteria = criteria or FilterCriteria()
        self._rng = rng or random.Random()
        self._tick_interval = tick_interval
        self._lock = threading.RLock()
        self._listeners: list[Listener] = []

        self._presented: dict[str, None] = dict.fromkeys(history.load())
        self._roster: tuple[Candidate, ...] = ()
        self._queue: list[Candidate] = []
        self._timer = TimerState.idle()
        self._duration = int(default_duration)
        self._warning_fired = False

        self._countdown: Optional[TickHandle] = None
        self._run = 0

    # ---- read side -------------------------------------------------

    @property
    def queue(self) -> tuple[Candidate, ...]:
        return tuple(self._queue)

    @property
    def current(self) -> Optional[Candidate]:
        return self._queue[0] if self._queue else None

    @property
    def presented_ids(self) -> frozenset[str]:
        return frozenset(self._presented)

    @property
    def timer(self) -> TimerState:
        return self._timer

    @property
    def duration_seconds(self) -> int:
        return self._duration

    @property
    def criteria(self) -> FilterCriteria:
        return self._criteria

    def upcoming(self, limit: int = UPCOMING_PREVIEW_LIMIT) -> list[Candidate]:
        return self._queue[1 : 1 + limit]

    @_serialized
    def available(self) -> list[Candidate]:
        """Re-read the pool; if that fails, answer from the roster of the last successful read."""
        try:
            self._roster = tuple(self._pool.list_candidates())
        except Exception:
            logger.warning("could not read candidate pool, using last known roster", exc_info=True)
        return compute_available(self._roster, self._presented.keys(), self._criteria)

    @_serialized
    def snapshot(self) -> QueueSnapshot:
        current = self.current
        available = compute_available(self._roster, self._presented.keys(), self._criteria)
        waiting = max(0, len(self._queue) - 1)
        return QueueSnapshot(
            current=current,
            upcoming=tuple(self.upcoming()),
            queue_length=len(self._queue),
            remaining_presenters=waiting,
            duration_seconds=self._duration,
            estimated_total_seconds=waiting * self._duration,
            timer=self._timer,
            presented_ids=tuple(self._presented),
            available_count=sum(1 for c in available if current is None or c.id != current.id),
            filter=self._criteria,
        )

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a renderer; returns a callable that unsubscribes it."""
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    # ---- configuration ---------------------------------------------

    @_serialized
    def set_filter(self, criteria: FilterCriteria) -> bool:
        if criteria == self._criteria:
            return False
        self._criteria = criteria
        self._notify()
        return True

    @_serialized
    def set_duration(self, seconds) -> bool:
        self._duration = require_duration(seconds)
        self._notify()
        return True

    @_serialized
    def adjust_duration(self, delta_seconds) -> bool:
        """Nudge the per-presenter duration; a running countdown keeps its remaining time."""
        delta = require_int(delta_seconds, "delta_seconds")
        duration = max(MIN_DURATION_SECONDS, self._duration + delta)
        if duration == self._duration:
            return False
        self._duration = duration
        self._notify()
        return True

    # ---- queue operations ------------------------------------------

    @_serialized
    def generate_queue(self, duration_seconds, *, criteria: FilterCriteria | None = None) -> bool:
        duration = require_duration(duration_seconds)
        criteria = criteria if criteria is not None else self._criteria
        roster = tuple(self._pool.list_candidates())
        available = compute_available(roster, self._presented.keys(), criteria)

        self._criteria = criteria
        self._roster = roster
        self._cancel_countdown()
        self._queue = shuffle(available, self._rng)
        self._duration = duration
        self._timer = TimerState.idle()
        self._warning_fired = False
        logger.info("queue generated: %d presenters, %ds each", len(self._queue), duration)
        self._notify()
        return True

    @_serialized
    def start_or_resume(self) -> bool:
        phase = self._timer.phase
        if phase == TimerPhase.IDLE:
            if not self._queue:
                logger.debug("start ignored: queue is empty")
                return False
            remaining = self._duration
        elif phase == TimerPhase.PAUSED:
            remaining = self._timer.remaining
        else:
            logger.debug("start ignored in phase %s", phase.value)
            return False

        if remaining <= 0:
            return False
        self._timer = TimerState.running(remaining)
        self._start_countdown()
        self._notify()
        return True

    @_serialized
    def pause(self) -> bool:
        if not self._timer.is_running:
            return False
        self._cancel_countdown()
        self._timer = TimerState.paused(self._timer.remaining)
        self._notify()
        return True

    @_serialized
    def tick(self) -> bool:
        if not self._timer.is_running:
            return False

        remaining = max(0, self._timer.remaining - 1)
        if remaining == 0:
            self._cancel_countdown()
            self._timer = TimerState.expired()
            play_cue(self._audio, AudioCue.STOP)
            self._notify()
            return True

        self._timer = TimerState.running(remaining)
        if LOW_TIME_THRESHOLD_SECONDS < remaining <= WARNING_THRESHOLD_SECONDS and not self._warning_fired:
            self._warning_fired = True
            play_cue(self._audio, AudioCue.WARNING)
        if remaining <= LOW_TIME_THRESHOLD_SECONDS:
            play_cue(self._audio, AudioCue.LOW_TIME)
        self._notify()
        return True

    @_serialized
    def mark_presented(self) -> bool:
        if not self._queue:
            return False

        first, rest = self._queue[0], self._queue[1:]
        self._presented.setdefault(first.id, None)
        self._history.save(self._presented)

        self._cancel_countdown()
        self._queue = shuffle(rest, self._rng)
        self._timer = TimerState.idle()
        self._warning_fired = False
        logger.info("%s presented, %d left", first.id, len(self._queue))
        self._notify()
        return True

    @_serialized
    def skip_one(self) -> bool:
        if len(self._queue) <= 1:
            return False

        rotated = self._queue[1:] + self._queue[:1]
        self._cancel_countdown()
        self._queue = shuffle(rotated, self._rng)
        self._timer = TimerState.idle()
        self._warning_fired = False
        self._notify()
        return True

    @_serialized
    def reset_all(self) -> bool:
        self._cancel_countdown()
        self._presented.clear()
        self._history.clear()
        self._queue = []
        self._timer = TimerState.idle()
        self._duration = 0
        self._warning_fired = False
        logger.info("presentation history reset")
        self._notify()
        return True

    def shutdown(self) -> None:
        with self._lock:
            self._cancel_countdown()

    # ---- internals -------------------------------------------------

    def _start_countdown(self) -> None:
        self._cancel_countdown()
        run = self._run

        def on_tick() -> None:
            with self._lock:
                if run != self._run:
                    return
                self.tick()

        self._countdown = self._ticker.every(self._tick_interval, on_tick)

    def _cancel_countdown(self) -> None:
        self._run += 1
        if self._countdown is not None:
            self._countdown.cancel()
            self._countdown = None

    def _notify(self) -> None:
        if not self._listeners:
            return
        try:
            snapshot = self.snapshot()
        except Exception:
            logger.warning("could not build queue snapshot for listeners", exc_info=True)
            return
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception:
                logger.warning("queue listener %r failed", listener, exc_info=True)
