"""Pitch model: parsing, spelling and arithmetic over the 12-step chromatic cycle."""

import re
from dataclasses import replace

from .errors import FormatError, PitchLookupError
from .logger import get_logger
from .note_types import Accidental, Pitch

# Get logger for this module
logger = get_logger(__name__)

SEMITONES_PER_OCTAVE = 12
MIN_OCTAVE = 0
MAX_OCTAVE = 8

# Compile regex to extract note name and octave
# This pattern matches:
# - Note letter (A-G, upper case only)
# - Optional accidental (# or b)
# - Optional octave number
PITCH_PATTERN = re.compile(r"([A-G])([#b]?)(\d*)")

CHROMATIC_SHARPS = ("C", "C#", "D", "D#", "E", "F", "F#", "G", "G#", "A", "A#", "B")
CHROMATIC_FLATS = ("C", "Db", "D", "Eb", "E", "F", "Gb", "G", "Ab", "A", "Bb", "B")

LETTER_INDEX = {"C": 0, "D": 2, "E": 4, "F": 5, "G": 7, "A": 9, "B": 11}
ACCIDENTAL_OFFSET = {Accidental.NATURAL: 0, Accidental.SHARP: 1, Accidental.FLAT: -1}


def _semitone_offset(pitch: Pitch) -> int:
    """Semitones above C of the letter plus accidental, without wrapping."""
    try:
        return LETTER_INDEX[pitch.letter] + ACCIDENTAL_OFFSET[pitch.accidental]
    except KeyError as e:
        raise PitchLookupError(f"No chromatic entry for {pitch!r}") from e


def _from_name(name: str) -> Pitch:
    return Pitch(name[0], name[1:])


def to_index(pitch: Pitch) -> int:
    """Chromatic index of a pitch, C=0 counting upward to B=11."""
    return _semitone_offset(pitch) % SEMITONES_PER_OCTAVE


def from_index(index: int, prefer_flats: bool = False) -> Pitch:
    """Build an octave-less pitch from a chromatic index.

    Args:
        index: Chromatic index, reduced modulo 12
        prefer_flats: Spell black keys as flats (Db) instead of sharps (C#)

    Returns:
        Pitch: The pitch class at that index
    """
    if isinstance(index, bool) or not isinstance(index, int):
        raise PitchLookupError(f"Chromatic index must be an int, got {index!r}")
    names = CHROMATIC_FLATS if prefer_flats else CHROMATIC_SHARPS
    return _from_name(names[index % SEMITONES_PER_OCTAVE])


def parse(text: str) -> Pitch:
    """Parse a compact pitch string such as 'C#4', 'Bb' or 'E2'.

    Raises:
        FormatError: If the string is malformed or the octave is out of range
    """
    if not isinstance(text, str):
        raise FormatError(f"Pitch string expected, got {type(text).__name__}")

    match = PITCH_PATTERN.fullmatch(text)
    if not match:
        raise FormatError(f"Invalid pitch string: {text!r}")

    letter, accidental, octave_text = match.groups()
    octave = None
    if octave_text:
        octave = int(octave_text)
        if not MIN_OCTAVE <= octave <= MAX_OCTAVE:
            raise FormatError(
                f"Octave {octave} in {text!r} is outside {MIN_OCTAVE}-{MAX_OCTAVE}"
            )

    return Pitch(letter, accidental, octave)


def to_string(pitch: Pitch) -> str:
    """Compact string form, e.g. 'C#4' or 'Bb'."""
    return str(pitch)


def normalize(text: str) -> str:
    """Canonical spelling of a pitch string ('C#04' -> 'C#4')."""
    return to_string(parse(text))


def equals(a: Pitch, b: Pitch, ignore_octave: bool = True) -> bool:
    """Compare two pitches by spelling, optionally including the octave.

    C# and Db are different spellings and do not compare equal here; use
    enharmonic_equals() for sounding-pitch comparison.
    """
    if a.name != b.name:
        return False
    return ignore_octave or a.octave == b.octave


def enharmonic_equals(a: Pitch, b: Pitch, ignore_octave: bool = True) -> bool:
    """Compare two pitches by sound (C# == Db), optionally including the octave."""
    if ignore_octave:
        return to_index(a) == to_index(b)
    return midi_number(a) == midi_number(b)


def pitch_class(pitch: Pitch) -> Pitch:
    """The same pitch with its octave stripped."""
    if pitch.octave is None:
        return pitch
    return replace(pitch, octave=None)


def midi_number(pitch: Pitch) -> int:
    """MIDI note number of an absolute pitch (C4 = 60, A4 = 69).

    Spellings that cross the octave boundary are honoured, so Cb4 is B3 (59)
    and B#3 is C4 (60).
    """
    if pitch.octave is None:
        raise ValueError(f"Pitch {pitch} has no octave")
    return (pitch.octave + 1) * SEMITONES_PER_OCTAVE + _semitone_offset(pitch)


def from_midi(number: int, prefer_flats: bool = False) -> Pitch:
    """Build an absolute pitch from a MIDI note number."""
    octave = number // SEMITONES_PER_OCTAVE - 1
    return replace(from_index(number, prefer_flats), octave=octave)


def respell(pitch: Pitch, prefer_flats: bool) -> Pitch:
    """Respell a pitch with sharps or flats, keeping its sounding pitch."""
    if pitch.octave is None:
        return from_index(to_index(pitch), prefer_flats)
    return from_midi(midi_number(pitch), prefer_flats)
