"""Pitch lists and frequencies handed to an audio layer."""

from typing import Iterable, List, Union

import numpy as np

from .logger import get_logger
from .note_types import FretboardPosition, Pitch
from .pitch import from_midi, midi_number

# Get logger for this module
logger = get_logger(__name__)

# Standard reference: A4 = 440Hz, MIDI note 69
A4_FREQUENCY = 440.0
A4_MIDI = 69


def _as_pitch(item: Union[Pitch, FretboardPosition]) -> Pitch:
    pitch = item.note if isinstance(item, FretboardPosition) else item
    if pitch.octave is None:
        raise ValueError(f"Playback needs absolute pitches, {pitch} has no octave")
    return pitch


def playback_names(
    items: Iterable[Union[Pitch, FretboardPosition]], ascending: bool = False
) -> List[str]:
    """Absolute-pitch names for playback ('E2', 'G#3', ...).

    Args:
        items: Pitches with octaves, or fretboard positions
        ascending: Sort low to high (arpeggio) instead of keeping input order (strum)

    Returns:
        List of names; unisons on different strings are all kept
    """
    pitches = [_as_pitch(item) for item in items]
    if ascending:
        pitches = sorted(pitches, key=midi_number)
    return [str(p) for p in pitches]


def frequency(pitch: Union[Pitch, FretboardPosition], reference: float = A4_FREQUENCY) -> float:
    """Equal-tempered frequency in Hz of an absolute pitch."""
    half_steps = midi_number(_as_pitch(pitch)) - A4_MIDI
    return float(reference * np.power(2.0, half_steps / 12.0))


def pitch_from_frequency(
    freq: float, prefer_flats: bool = False, reference: float = A4_FREQUENCY
) -> Pitch:
    """Nearest equal-tempered pitch to a frequency.

    Note:
        - Middle C is C4 (261.63 Hz)
        - Octave numbers change between B and C (e.g., B3 -> C4)
    """
    if not np.isfinite(freq) or freq <= 0:
        raise ValueError(f"Frequency must be a positive number, got {freq}")

    # Calculate half steps from A4
    half_steps = int(round(12 * np.log2(freq / reference)))
    pitch = from_midi(A4_MIDI + half_steps, prefer_flats)
    logger.debug(f"{freq:.2f}Hz -> {pitch} ({half_steps:+d} half steps from A4)")
    return pitch
