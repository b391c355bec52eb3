"""Scale generation from interval formulas."""

from types import MappingProxyType
from typing import Tuple

from .chords import build_diatonic_chords
from .logger import get_logger
from .note_types import Accidental, Pitch, Scale, ScaleKind
from .pitch import CHROMATIC_SHARPS, from_index, parse, pitch_class, to_index

# Get logger for this module
logger = get_logger(__name__)

# Scale formulas (intervals in semitones from root)
SCALE_FORMULAS = MappingProxyType(
    {
        ScaleKind.MAJOR: (0, 2, 4, 5, 7, 9, 11),
        ScaleKind.NATURAL_MINOR: (0, 2, 3, 5, 7, 8, 10),
        ScaleKind.HARMONIC_MINOR: (0, 2, 3, 5, 7, 8, 11),
        ScaleKind.MELODIC_MINOR: (0, 2, 3, 5, 7, 9, 11),
    }
)

# Keys that traditionally use flat accidentals
FLAT_KEYS = frozenset({"F", "Bb", "Eb", "Ab", "Db", "Gb", "Cb"})

# Semitones from a minor tonic up to its relative major
RELATIVE_MAJOR_OFFSET = 3


def should_use_flats(root: Pitch, kind: ScaleKind = ScaleKind.MAJOR) -> bool:
    """Decide flat or sharp spelling for a key.

    A key uses flats when its root is in FLAT_KEYS or is itself flat. Minor
    kinds also use flats when their relative major does, so D minor borrows
    the Bb of F major. Degree-specific spelling is not considered: D harmonic
    minor spells its leading tone Db, and a whole scale shares one spelling.
    """
    if root.name in FLAT_KEYS or root.accidental is Accidental.FLAT:
        return True
    if ScaleKind(kind) is ScaleKind.MAJOR:
        return False
    relative_major = from_index(to_index(root) + RELATIVE_MAJOR_OFFSET, prefer_flats=True)
    return relative_major.name in FLAT_KEYS


def generate(root: Pitch, kind: ScaleKind) -> Tuple[Pitch, ...]:
    """Generate the 7 pitch classes of a scale.

    Args:
        root: Tonic of the scale; any octave is ignored
        kind: One of the ScaleKind formulas

    Returns:
        Tuple of 7 pitch classes, tonic first
    """
    formula = SCALE_FORMULAS[ScaleKind(kind)]
    root_index = to_index(root)
    use_flats = should_use_flats(root, kind)
    notes = tuple(from_index(root_index + offset, use_flats) for offset in formula)

    # The formula spelling of a root like Cb or E# differs from the root itself;
    # the tonic keeps the caller's spelling
    return (pitch_class(root),) + notes[1:]


def build_scale(root: Pitch, kind: ScaleKind) -> Scale:
    """Calculate scale notes and its 14 diatonic chords."""
    kind = ScaleKind(kind)
    notes = generate(root, kind)
    scale = Scale(
        root=pitch_class(root),
        kind=kind,
        notes=notes,
        chords=build_diatonic_chords(notes, kind),
    )
    logger.debug(
        f"Built {root.name} {kind.label}: {[n.name for n in notes]}"
    )
    return scale


def all_roots() -> Tuple[Pitch, ...]:
    """The 12 chromatic roots, sharp-spelled, starting at C."""
    return tuple(parse(name) for name in CHROMATIC_SHARPS)
