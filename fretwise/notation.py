"""Key signatures and accidental display for a notation renderer.

Accidentals are derived from the key on every call, never stored on the
pitches themselves.
"""

from types import MappingProxyType
from typing import Iterable, List, Optional, Tuple

from .logger import get_logger
from .note_types import Accidental, Pitch, ScaleKind
from .pitch import midi_number, parse

# Get logger for this module
logger = get_logger(__name__)

# Order in which sharps and flats are added to a key signature
SHARP_ORDER = ("F", "C", "G", "D", "A", "E", "B")
FLAT_ORDER = ("B", "E", "A", "D", "G", "C", "F")

# Signature key -> number of sharps (positive) or flats (negative)
SIGNATURE_ACCIDENTALS = MappingProxyType(
    {
        "C": 0,
        "G": 1,
        "D": 2,
        "A": 3,
        "E": 4,
        "B": 5,
        "F#": 6,
        "C#": 7,
        "F": -1,
        "Bb": -2,
        "Eb": -3,
        "Ab": -4,
        "Db": -5,
        "Gb": -6,
    }
)

# Major tonic -> signature key; sharp spellings of flat keys use the flat key
MAJOR_SIGNATURES = MappingProxyType(
    {
        "C": "C",
        "G": "G",
        "D": "D",
        "A": "A",
        "E": "E",
        "B": "B",
        "F#": "F#",
        "C#": "C#",
        "G#": "Ab",
        "D#": "Eb",
        "A#": "Bb",
        "F": "F",
        "Bb": "Bb",
        "Eb": "Eb",
        "Ab": "Ab",
        "Db": "Db",
        "Gb": "Gb",
    }
)

# Minor tonic -> signature of its relative major
MINOR_SIGNATURES = MappingProxyType(
    {
        "A": "C",
        "E": "G",
        "B": "D",
        "F#": "A",
        "C#": "E",
        "G#": "B",
        "D#": "F#",
        "A#": "C#",
        "D": "F",
        "G": "Bb",
        "C": "Eb",
        "F": "Ab",
        "Bb": "Db",
        "Eb": "Gb",
    }
)

# Notes at or above B3 go on the treble staff
TREBLE_BASS_SPLIT = parse("B3")


def key_signature(root: Pitch, kind: ScaleKind) -> Optional[str]:
    """Key signature name for a tonic and scale kind, or None if there is none.

    All three minor kinds share the natural minor signature; the raised
    degrees of harmonic and melodic minor are written as accidentals.
    """
    kind = ScaleKind(kind)
    table = MAJOR_SIGNATURES if kind is ScaleKind.MAJOR else MINOR_SIGNATURES
    signature = table.get(root.name)
    if signature is None:
        logger.debug(f"No key signature for {root.name} {kind.label}")
    return signature


def key_signature_letters(signature: Optional[str]) -> Tuple[str, ...]:
    """Letters altered by a key signature, in signature order."""
    if signature is None:
        return ()
    count = SIGNATURE_ACCIDENTALS[signature]
    if count >= 0:
        return SHARP_ORDER[:count]
    return FLAT_ORDER[:-count]


def accidental_to_show(pitch: Pitch, signature: Optional[str] = None) -> Optional[str]:
    """Accidental a renderer should draw next to a note.

    Returns:
        '#', 'b', 'n' (natural) or None when nothing needs drawing
    """
    written = pitch.accidental.value or None
    if signature is None:
        return written

    if pitch.letter not in key_signature_letters(signature):
        return written

    implied = Accidental.SHARP if SIGNATURE_ACCIDENTALS[signature] > 0 else Accidental.FLAT
    if pitch.accidental is implied:
        return None
    if pitch.accidental is Accidental.NATURAL:
        return "n"
    return written


def split_staves(pitches: Iterable[Pitch]) -> Tuple[List[Pitch], List[Pitch]]:
    """Sort absolute pitches low to high and split them into treble and bass staves.

    Returns:
        (treble, bass); B3 and above are treble
    """
    ordered = sorted(pitches, key=midi_number)
    split = midi_number(TREBLE_BASS_SPLIT)
    treble = [p for p in ordered if midi_number(p) >= split]
    bass = [p for p in ordered if midi_number(p) < split]
    return treble, bass
