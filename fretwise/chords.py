"""Diatonic chord construction from scale degrees."""

from types import MappingProxyType
from typing import NamedTuple, Sequence, Tuple

from .logger import get_logger
from .note_types import Chord, ChordQuality, Pitch, ScaleKind
from .pitch import pitch_class

# Get logger for this module
logger = get_logger(__name__)

DIATONIC_SCALE_LENGTH = 7


class DegreeEntry(NamedTuple):
    quality: ChordQuality
    roman: str


Q = ChordQuality

QUALITY_SUFFIXES = MappingProxyType(
    {
        Q.MAJOR: "",
        Q.MINOR: "m",
        Q.DIMINISHED: "dim",
        Q.AUGMENTED: "aug",
        Q.MAJOR7: "maj7",
        Q.MINOR7: "m7",
        Q.DOMINANT7: "7",
        Q.DIMINISHED7: "dim7",
        Q.HALF_DIMINISHED7: "m7♭5",
        Q.SUS2: "sus2",
        Q.SUS4: "sus4",
        Q.ADD9: "add9",
        Q.MAJ9: "maj9",
        Q.MIN9: "m9",
    }
)

TRIADS = MappingProxyType(
    {
        ScaleKind.MAJOR: (
            DegreeEntry(Q.MAJOR, "I"),
            DegreeEntry(Q.MINOR, "ii"),
            DegreeEntry(Q.MINOR, "iii"),
            DegreeEntry(Q.MAJOR, "IV"),
            DegreeEntry(Q.MAJOR, "V"),
            DegreeEntry(Q.MINOR, "vi"),
            DegreeEntry(Q.DIMINISHED, "vii°"),
        ),
        ScaleKind.NATURAL_MINOR: (
            DegreeEntry(Q.MINOR, "i"),
            DegreeEntry(Q.DIMINISHED, "ii°"),
            DegreeEntry(Q.MAJOR, "III"),
            DegreeEntry(Q.MINOR, "iv"),
            DegreeEntry(Q.MINOR, "v"),
            DegreeEntry(Q.MAJOR, "VI"),
            DegreeEntry(Q.MAJOR, "VII"),
        ),
        ScaleKind.HARMONIC_MINOR: (
            DegreeEntry(Q.MINOR, "i"),
            DegreeEntry(Q.DIMINISHED, "ii°"),
            DegreeEntry(Q.AUGMENTED, "III+"),
            DegreeEntry(Q.MINOR, "iv"),
            DegreeEntry(Q.MAJOR, "V"),
            DegreeEntry(Q.MAJOR, "VI"),
            DegreeEntry(Q.DIMINISHED, "vii°"),
        ),
        ScaleKind.MELODIC_MINOR: (
            DegreeEntry(Q.MINOR, "i"),
            DegreeEntry(Q.MINOR, "ii"),
            DegreeEntry(Q.AUGMENTED, "III+"),
            DegreeEntry(Q.MAJOR, "IV"),
            DegreeEntry(Q.MAJOR, "V"),
            DegreeEntry(Q.DIMINISHED, "vi°"),
            DegreeEntry(Q.DIMINISHED, "vii°"),
        ),
    }
)

# Degree i of harmonic and melodic minor is really minor-major7, and degree
# III is augmented-major7. Neither quality is in ChordQuality, so minor7 and
# major7 stand in for them.
SEVENTHS = MappingProxyType(
    {
        ScaleKind.MAJOR: (
            DegreeEntry(Q.MAJOR7, "Imaj7"),
            DegreeEntry(Q.MINOR7, "ii7"),
            DegreeEntry(Q.MINOR7, "iii7"),
            DegreeEntry(Q.MAJOR7, "IVmaj7"),
            DegreeEntry(Q.DOMINANT7, "V7"),
            DegreeEntry(Q.MINOR7, "vi7"),
            DegreeEntry(Q.HALF_DIMINISHED7, "viiø7"),
        ),
        ScaleKind.NATURAL_MINOR: (
            DegreeEntry(Q.MINOR7, "i7"),
            DegreeEntry(Q.HALF_DIMINISHED7, "iiø7"),
            DegreeEntry(Q.MAJOR7, "IIImaj7"),
            DegreeEntry(Q.MINOR7, "iv7"),
            DegreeEntry(Q.MINOR7, "v7"),
            DegreeEntry(Q.MAJOR7, "VImaj7"),
            DegreeEntry(Q.DOMINANT7, "VII7"),
        ),
        ScaleKind.HARMONIC_MINOR: (
            DegreeEntry(Q.MINOR7, "i7"),
            DegreeEntry(Q.HALF_DIMINISHED7, "iiø7"),
            DegreeEntry(Q.MAJOR7, "IIImaj7"),
            DegreeEntry(Q.MINOR7, "iv7"),
            DegreeEntry(Q.DOMINANT7, "V7"),
            DegreeEntry(Q.MAJOR7, "VImaj7"),
            DegreeEntry(Q.DIMINISHED7, "vii°7"),
        ),
        ScaleKind.MELODIC_MINOR: (
            DegreeEntry(Q.MINOR7, "i7"),
            DegreeEntry(Q.MINOR7, "ii7"),
            DegreeEntry(Q.MAJOR7, "IIImaj7"),
            DegreeEntry(Q.DOMINANT7, "IV7"),
            DegreeEntry(Q.DOMINANT7, "V7"),
            DegreeEntry(Q.HALF_DIMINISHED7, "viø7"),
            DegreeEntry(Q.HALF_DIMINISHED7, "viiø7"),
        ),
    }
)


def display_name(root: Pitch, quality: ChordQuality) -> str:
    """Chord symbol such as 'Cmaj7', 'F#m' or 'Bm7♭5'."""
    return f"{root.name}{QUALITY_SUFFIXES[ChordQuality(quality)]}"


def make_chord(
    root: Pitch,
    quality: ChordQuality,
    notes: Sequence[Pitch],
    roman_numeral: str = "",
) -> Chord:
    """Build a Chord from pitch classes, root first."""
    root = pitch_class(root)
    quality = ChordQuality(quality)
    return Chord(
        root=root,
        quality=quality,
        notes=tuple(pitch_class(n) for n in notes),
        roman_numeral=roman_numeral,
        display_name=display_name(root, quality),
    )


def _check_scale(notes: Sequence[Pitch]) -> None:
    if len(notes) != DIATONIC_SCALE_LENGTH:
        raise ValueError(
            f"Diatonic chords need {DIATONIC_SCALE_LENGTH} scale notes, got {len(notes)}"
        )


def _stack_thirds(notes: Sequence[Pitch], degree: int, size: int) -> Tuple[Pitch, ...]:
    # Every other scale note starting at the degree: root, 3rd, 5th, 7th
    return tuple(notes[(degree + 2 * step) % DIATONIC_SCALE_LENGTH] for step in range(size))


def build_triads(notes: Sequence[Pitch], kind: ScaleKind) -> Tuple[Chord, ...]:
    """Build the 7 diatonic triads of a scale.

    Args:
        notes: The 7 scale notes, tonic first
        kind: Scale kind selecting the quality/Roman numeral table

    Returns:
        Tuple of 7 chords, one per scale degree
    """
    _check_scale(notes)
    table = TRIADS[ScaleKind(kind)]
    return tuple(
        make_chord(notes[degree], entry.quality, _stack_thirds(notes, degree, 3), entry.roman)
        for degree, entry in enumerate(table)
    )


def build_sevenths(notes: Sequence[Pitch], kind: ScaleKind) -> Tuple[Chord, ...]:
    """Build the 7 diatonic seventh chords of a scale."""
    _check_scale(notes)
    table = SEVENTHS[ScaleKind(kind)]
    return tuple(
        make_chord(notes[degree], entry.quality, _stack_thirds(notes, degree, 4), entry.roman)
        for degree, entry in enumerate(table)
    )


def build_diatonic_chords(notes: Sequence[Pitch], kind: ScaleKind) -> Tuple[Chord, ...]:
    """Triads followed by seventh chords, 14 in total."""
    chords = build_triads(notes, kind) + build_sevenths(notes, kind)
    logger.debug(
        f"Built {len(chords)} diatonic chords for {ScaleKind(kind).value}: "
        f"{[c.display_name for c in chords]}"
    )
    return chords
