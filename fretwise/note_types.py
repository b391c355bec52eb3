"""Type definitions for the Fretwise project."""

from typing import Optional, Tuple
from dataclasses import dataclass
from enum import Enum

from .errors import InvalidPitchError

LETTERS = ("C", "D", "E", "F", "G", "A", "B")


class Accidental(str, Enum):
    """Accidental attached to a pitch letter."""

    NATURAL = ""
    SHARP = "#"
    FLAT = "b"


class ScaleKind(str, Enum):
    """Supported scale types."""

    MAJOR = "major"
    NATURAL_MINOR = "natural_minor"
    HARMONIC_MINOR = "harmonic_minor"
    MELODIC_MINOR = "melodic_minor"

    @property
    def label(self) -> str:
        return SCALE_KIND_LABELS[self]


SCALE_KIND_LABELS = {
    ScaleKind.MAJOR: "Major",
    ScaleKind.NATURAL_MINOR: "Natural Minor",
    ScaleKind.HARMONIC_MINOR: "Harmonic Minor",
    ScaleKind.MELODIC_MINOR: "Melodic Minor",
}


class ChordQuality(str, Enum):
    """Chord qualities known to the builder and the identifier."""

    MAJOR = "major"
    MINOR = "minor"
    DIMINISHED = "diminished"
    AUGMENTED = "augmented"
    MAJOR7 = "major7"
    MINOR7 = "minor7"
    DOMINANT7 = "dominant7"
    DIMINISHED7 = "diminished7"
    HALF_DIMINISHED7 = "half-diminished7"
    SUS2 = "sus2"
    SUS4 = "sus4"
    ADD9 = "add9"
    MAJ9 = "maj9"
    MIN9 = "min9"


@dataclass(frozen=True)
class Pitch:
    """A pitch class with an optional octave (e.g. C#, Bb3).

    The letter is always a single character; the accidental lives in its own
    field. Dataclass equality compares the octave too, use pitch.equals() for
    pitch-class comparison.
    """

    letter: str  # One of C D E F G A B
    accidental: Accidental = Accidental.NATURAL
    octave: Optional[int] = None  # e.g. 4 for middle C

    def __post_init__(self):
        if not isinstance(self.letter, str) or self.letter not in LETTERS:
            raise InvalidPitchError(
                f"Invalid letter: {self.letter!r}. Must be one of {', '.join(LETTERS)}"
            )
        try:
            accidental = Accidental(self.accidental)
        except ValueError:
            raise InvalidPitchError(
                f"Invalid accidental: {self.accidental!r}. Must be '', '#' or 'b'"
            ) from None
        object.__setattr__(self, "accidental", accidental)

        if self.octave is not None and (
            isinstance(self.octave, bool) or not isinstance(self.octave, int)
        ):
            raise InvalidPitchError(f"Invalid octave: {self.octave!r}")

    @property
    def name(self) -> str:
        """Letter plus accidental, without octave."""
        return f"{self.letter}{self.accidental.value}"

    def __str__(self):
        octave = "" if self.octave is None else str(self.octave)
        return f"{self.name}{octave}"


@dataclass(frozen=True)
class Chord:
    """A chord with its notes and optional harmonic function."""

    root: Pitch
    quality: ChordQuality
    notes: Tuple[Pitch, ...]  # Pitch classes, root first
    roman_numeral: str = ""  # Empty outside a key context
    display_name: str = ""

    def __post_init__(self):
        if not self.notes or self.notes[0].name != self.root.name:
            raise ValueError(
                f"Chord notes must start with the root {self.root.name}: "
                f"{[n.name for n in self.notes]}"
            )


@dataclass(frozen=True)
class Scale:
    """A 7-note scale and its 14 diatonic chords (7 triads then 7 sevenths)."""

    root: Pitch
    kind: ScaleKind
    notes: Tuple[Pitch, ...]
    chords: Tuple[Chord, ...] = ()

    @property
    def triads(self) -> Tuple[Chord, ...]:
        return self.chords[:7]

    @property
    def sevenths(self) -> Tuple[Chord, ...]:
        return self.chords[7:]


@dataclass(frozen=True)
class FretboardPosition:
    """Represents a position on the fretboard and its role in a chord or scale."""

    string: int  # String number (1-N, where 1 is the highest-pitched string)
    fret: int  # Fret number (0 for open string)
    note: Pitch  # Always carries an octave
    is_root: bool = False
    is_member: bool = False
    degree_label: Optional[int] = None

    def __str__(self):
        return f"S{self.string}F{self.fret}"


@dataclass(frozen=True)
class KeyMembership:
    """A key in which a chord root occurs, with its Roman numeral there."""

    key: Pitch
    scale_kind: ScaleKind
    roman_numeral: str


@dataclass(frozen=True)
class ChordMatch:
    """A candidate chord for a set of sounded pitches."""

    chord: Chord
    confidence: float  # 0-1
    missing: Tuple[Pitch, ...] = ()  # Chord tones not in the input
    extra: Tuple[Pitch, ...] = ()  # Input pitch classes outside the chord
    key_memberships: Tuple[KeyMembership, ...] = ()
