from __future__ import annotations

import logging
import threading
from collections import deque
from dataclasses import dataclass
from typing import Protocol, Sequence

from ..core.enums import AudioCue

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Tone:
    frequency: float
    duration_ms: int = 200
    waveform: str = "sine"

    def to_dict(self) -> dict:
        return {"frequency": self.frequency, "duration_ms": self.duration_ms, "waveform": self.waveform}


# (offset_ms, tone) pairs
CUE_TONES: dict[AudioCue, tuple[tuple[int, Tone], ...]] = {
    AudioCue.WARNING: ((0, Tone(880, 120)), (150, Tone(1320, 120))),
    AudioCue.LOW_TIME: ((0, Tone(1000, 120)),),
    AudioCue.STOP: ((0, Tone(440, 220)), (250, Tone(220, 360))),
}


class AudioCueDevice(Protocol):
    def play(self, cue: AudioCue, tones: Sequence[tuple[int, Tone]]) -> None:
        raise NotImplementedError


class NullAudioDevice(AudioCueDevice):
    def play(self, cue: AudioCue, tones: Sequence[tuple[int, Tone]]) -> None:
        return None


class BufferedAudioDevice(AudioCueDevice):
    """Keeps played cues until a client drains them.

    The web UI polls the state endpoint and plays the drained tones in the
    browser, since the server has no speaker worth talking to.
    """

    def __init__(self, maxlen: int = 64):
        self._pending: deque[dict] = deque(maxlen=maxlen)
        self._lock = threading.Lock()

    def play(self, cue: AudioCue, tones: Sequence[tuple[int, Tone]]) -> None:
        with self._lock:
            self._pending.append(
                {"cue": cue.value, "tones": [dict(offset_ms=offset, **tone.to_dict()) for offset, tone in tones]}
            )

    def drain(self) -> list[dict]:
        with self._lock:
            out = list(self._pending)
            self._pending.clear()
        return out


def play_cue(device: AudioCueDevice, cue: AudioCue) -> None:
    """Fire-and-forget: any device failure is logged and dropped."""
    try:
        device.play(cue, CUE_TONES[cue])
    except Exception:
        logger.debug("audio cue %s failed", cue.value, exc_info=True)
