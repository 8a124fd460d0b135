"""
sound_manager.py
----------------
Synthesised sound effects driven by world events.

Responsibilities
----------------
- Map world events to sound cues (jump, shots, kills, near misses, level up,
  death, victory, start).
- Release scheduled tones each frame through ToneScheduler.
- Render tones to 16-bit PCM and play them with pygame.mixer; rendered
  sounds are cached per (frequency, duration, wave).
- Mute toggle and master volume (0-100, squared for a log-like curve).

If the mixer cannot start (no audio device), the manager stays silent but
keeps accepting cues so the rest of the game never needs to check.
"""

import math
import struct

import pygame

from dino_deputy.audio.tone_scheduler import SOUND_CUES, Tone, ToneScheduler, combo_cue
from dino_deputy.core.debug.debug_logger import DebugLogger
from dino_deputy.core.services.event_manager import (
    EnemyFiredEvent,
    EnemyKilledEvent,
    GameStartedEvent,
    JumpEvent,
    LevelUpEvent,
    NearMissEvent,
    PlayerDiedEvent,
    ShotFiredEvent,
    VictoryEvent,
)

DECAY_FLOOR = 0.01


# ===========================================================
# Synthesis
# ===========================================================

def _wave_sample(wave: str, phase: float) -> float:
    """One sample in [-1, 1] for a phase measured in cycles."""
    if wave == "sine":
        return math.sin(2 * math.pi * phase)
    if wave == "sawtooth":
        return 2.0 * (phase - math.floor(phase + 0.5))
    return 1.0 if math.sin(2 * math.pi * phase) >= 0 else -1.0


def synthesize(tone: Tone, sample_rate: int, channels: int = 1) -> bytes:
    """
    Render a tone as signed 16-bit little-endian PCM.

    The amplitude falls exponentially from tone.volume to DECAY_FLOOR over
    the tone's duration.

    Args:
        tone: Tone to render
        sample_rate: Samples per second
        channels: Interleaved channel count (samples are duplicated)

    Returns:
        Raw PCM bytes suitable for pygame.mixer.Sound(buffer=...)
    """
    n = int(sample_rate * tone.duration)
    if n <= 0 or tone.volume <= 0:
        return b""

    ratio = DECAY_FLOOR / tone.volume
    frame = struct.Struct("<" + "h" * channels)
    buf = bytearray()
    for i in range(n):
        t = i / sample_rate
        gain = tone.volume * ratio ** (t / tone.duration)
        value = int(_wave_sample(tone.wave, tone.frequency * t) * gain * 32767)
        buf += frame.pack(*([value] * channels))
    return bytes(buf)


def volume_scale(level: int) -> float:
    """Map a 0-100 UI level to a 0.0-1.0 gain."""
    if level <= 0:
        return 0.0
    return min((level / 100) ** 2, 1.0)


# ===========================================================
# Sound Manager
# ===========================================================

class SoundManager:
    """Plays synthesised cues in response to world events."""

    def __init__(self, muted: bool = False, volume: int = 100):
        """
        Args:
            muted: Start muted
            volume: Master volume level 0-100
        """
        DebugLogger.init_entry("SoundManager")

        self.scheduler = ToneScheduler()
        self.scheduler.set_muted(muted)
        self.master_volume = volume_scale(volume)
        self._cache = {}
        self.enabled = self._init_mixer()

    def _init_mixer(self) -> bool:
        try:
            if not pygame.mixer.get_init():
                pygame.mixer.init()
            self.sample_rate, _, self.channels = pygame.mixer.get_init()
        except pygame.error as e:
            DebugLogger.warn(f"Audio disabled: {e}", category="audio")
            return False
        DebugLogger.init_sub(f"Mixer: {self.sample_rate} Hz, {self.channels} ch")
        return True

    # ===========================================================
    # Event Wiring
    # ===========================================================

    def attach(self, events):
        """Subscribe cue handlers to a world's event bus."""
        events.subscribe(GameStartedEvent, self._on_start)
        events.subscribe(JumpEvent, self._on_jump)
        events.subscribe(ShotFiredEvent, self._on_shot)
        events.subscribe(EnemyFiredEvent, self._on_shot)
        events.subscribe(EnemyKilledEvent, self._on_kill)
        events.subscribe(NearMissEvent, self._on_near_miss)
        events.subscribe(LevelUpEvent, self._on_level_up)
        events.subscribe(PlayerDiedEvent, self._on_death)
        events.subscribe(VictoryEvent, self._on_victory)

    def _on_start(self, event):
        self.play_cue("start")

    def _on_jump(self, event):
        self.play_cue("jump")

    def _on_shot(self, event):
        self.play_cue("shoot")

    def _on_kill(self, event: EnemyKilledEvent):
        self.scheduler.schedule(combo_cue(event.combo))

    def _on_near_miss(self, event):
        self.play_cue("bonus")

    def _on_level_up(self, event):
        self.play_cue("level_up")

    def _on_death(self, event):
        self.play_cue("game_over")

    def _on_victory(self, event):
        self.play_cue("victory")

    # ===========================================================
    # Playback
    # ===========================================================

    def play_cue(self, name: str):
        tones = SOUND_CUES.get(name)
        if tones is None:
            DebugLogger.warn(f"Unknown sound cue '{name}'", category="audio")
            return
        self.scheduler.schedule(tones)

    def update(self):
        """Play every tone due this frame. Call once per rendered frame."""
        for tone in self.scheduler.tick():
            self._play_tone(tone)

    def _play_tone(self, tone: Tone):
        if not self.enabled:
            return
        try:
            sound = self._sound_for(tone)
            sound.set_volume(self.master_volume)
            sound.play()
        except pygame.error as e:
            DebugLogger.warn(f"Tone playback failed, disabling audio: {e}", category="audio")
            self.enabled = False

    def _sound_for(self, tone: Tone):
        key = (round(tone.frequency, 2), tone.duration, tone.wave, tone.volume)
        sound = self._cache.get(key)
        if sound is None:
            pcm = synthesize(tone, self.sample_rate, self.channels)
            sound = self._cache[key] = pygame.mixer.Sound(buffer=pcm)
        return sound

    # ===========================================================
    # Volume
    # ===========================================================

    @property
    def muted(self) -> bool:
        return self.scheduler.muted

    def toggle_mute(self) -> bool:
        """
        Flip mute.

        Returns:
            The new muted state
        """
        self.scheduler.set_muted(not self.scheduler.muted)
        if self.scheduler.muted and self.enabled:
            pygame.mixer.stop()
        DebugLogger.action(f"Sound {'muted' if self.muted else 'unmuted'}", category="audio")
        return self.muted

    def set_volume(self, level: int):
        self.master_volume = volume_scale(level)
