"""
tone_scheduler.py
-----------------
Declarative sound cues and a frame-driven queue that releases their tones.

A cue is a short list of Tone records; each tone starts `delay_ms` after the
cue was scheduled. The scheduler converts delays to frames at Display.FPS so
cues stay in step with the frame loop.
"""

from typing import Dict, List, NamedTuple

from dino_deputy.core.runtime.game_settings import Display


class Tone(NamedTuple):
    delay_ms: int
    frequency: float
    duration: float
    wave: str = "square"
    volume: float = 0.3


WAVES = ("square", "sine", "sawtooth")


# ===========================================================
# Cue Library
# ===========================================================

def _arpeggio(notes, duration, step_ms, volume):
    return [Tone(i * step_ms, freq, duration, "square", volume) for i, freq in enumerate(notes)]


def _fanfare():
    notes = (523, 659, 784, 1047, 1047, 784, 1047)
    durations = (0.15, 0.15, 0.15, 0.3, 0.15, 0.15, 0.4)
    tones = []
    time_ms = 0
    for freq, duration in zip(notes, durations):
        tones.append(Tone(round(time_ms), freq, duration, "square", 0.25))
        time_ms += duration * 700
    return tones


SOUND_CUES: Dict[str, List[Tone]] = {
    "jump": [
        Tone(0, 400, 0.1, "square", 0.2),
        Tone(50, 600, 0.1, "square", 0.15),
    ],
    "bonus": [
        Tone(0, 880, 0.08, "sine", 0.2),
        Tone(60, 1100, 0.1, "sine", 0.15),
    ],
    "shoot": [
        Tone(0, 150, 0.08, "square", 0.4),
        Tone(20, 800, 0.05, "sawtooth", 0.2),
    ],
    "start": [
        Tone(0, 440, 0.1, "square", 0.2),
        Tone(80, 550, 0.1, "square", 0.2),
        Tone(160, 660, 0.15, "square", 0.2),
    ],
    "level_up": _arpeggio((523, 659, 784, 1047), 0.15, 100, 0.2),
    "game_over": _arpeggio((400, 350, 300, 200), 0.2, 150, 0.25),
    "victory": _fanfare(),
}


def combo_cue(combo: int) -> List[Tone]:
    """
    Kill sound whose pitch climbs with the combo.

    1x = 880 Hz up to 5x = 1320 Hz; from 3x a third high note is added.
    """
    pitch = 880 * (1 + (min(combo, 5) - 1) * 0.125)
    tones = [
        Tone(0, pitch, 0.1, "square", 0.25),
        Tone(50, pitch * 1.25, 0.12, "square", 0.2),
    ]
    if combo >= 3:
        tones.append(Tone(100, pitch * 1.5, 0.08, "sine", 0.15))
    return tones


def ms_to_frames(delay_ms: float, fps: int = Display.FPS) -> int:
    return int(round(delay_ms * fps / 1000))


# ===========================================================
# Scheduler
# ===========================================================

class ToneScheduler:
    """Holds pending tones and hands them out on the frame they are due."""

    def __init__(self, fps: int = Display.FPS):
        self.fps = fps
        self.muted = False
        self._frame = 0
        self._pending = []

    def schedule(self, tones: List[Tone]) -> int:
        """
        Queue a cue.

        Returns:
            Number of tones queued (0 while muted)
        """
        if self.muted:
            return 0
        for tone in tones:
            due = self._frame + ms_to_frames(tone.delay_ms, self.fps)
            self._pending.append((due, tone))
        return len(tones)

    def tick(self) -> List[Tone]:
        """Advance one frame and return the tones due on it, in cue order."""
        due_now = [tone for due, tone in self._pending if due <= self._frame]
        self._pending = [(due, tone) for due, tone in self._pending if due > self._frame]
        self._frame += 1
        return due_now

    def set_muted(self, muted: bool):
        """Muting also drops anything still pending."""
        self.muted = muted
        if muted:
            self._pending.clear()

    def clear(self):
        self._pending.clear()

    @property
    def pending(self) -> int:
        return len(self._pending)
