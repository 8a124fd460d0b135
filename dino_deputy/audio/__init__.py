"""
Audio exports.

Provides declarative sound cues, the frame-driven tone scheduler and the
pygame.mixer synthesiser.
"""

from dino_deputy.audio.tone_scheduler import SOUND_CUES, Tone, ToneScheduler, combo_cue

__all__ = [
    'SOUND_CUES',
    'Tone',
    'ToneScheduler',
    'combo_cue',
]
