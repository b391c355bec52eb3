"""Mapping between fretboard coordinates and pitches."""

from types import MappingProxyType
from typing import AbstractSet, Iterable, List, Sequence, Tuple, Union

from .logger import get_logger
from .note_types import Chord, FretboardPosition, Pitch, Scale
from .pitch import SEMITONES_PER_OCTAVE, from_midi, midi_number, parse, to_index

# Get logger for this module
logger = get_logger(__name__)

Tuning = Tuple[Pitch, ...]

MAX_FRET = 24

# Open strings from string 1 (high E) to string 6 (low E)
STANDARD_TUNING: Tuning = (
    Pitch("E", octave=4),
    Pitch("B", octave=3),
    Pitch("G", octave=3),
    Pitch("D", octave=3),
    Pitch("A", octave=2),
    Pitch("E", octave=2),
)

# Semitones above a chord root -> chord tone label (1, 3, 5, 7 and tensions)
CHORD_DEGREE_LABELS = MappingProxyType(
    {0: 1, 2: 2, 3: 3, 4: 3, 5: 4, 7: 5, 9: 6, 10: 7, 11: 7}
)


def parse_tuning(names: Iterable[str]) -> Tuning:
    """Build a tuning from pitch strings, highest string first.

    Args:
        names: Pitch strings with octaves, e.g. ["E4", "B3", ...]

    Returns:
        Tuple of open-string pitches
    """
    tuning = tuple(parse(name) for name in names)
    _check_tuning(tuning)
    return tuning


def _check_tuning(tuning: Sequence[Pitch]) -> None:
    if not tuning:
        raise ValueError("A tuning needs at least one string")
    for pitch in tuning:
        if pitch.octave is None:
            raise ValueError(f"Open string {pitch} has no octave")


def note_at(
    string_index: int,
    fret: int,
    tuning: Sequence[Pitch] = STANDARD_TUNING,
    max_fret: int = MAX_FRET,
) -> Pitch:
    """Get the pitch sounding at a string/fret coordinate.

    Args:
        string_index: 0-based index into the tuning (0 = highest string)
        fret: Fret number, 0 for the open string
        tuning: Open-string pitches with octaves
        max_fret: Highest fret on the neck

    Returns:
        Pitch: Sharp-spelled pitch with its absolute octave
    """
    _check_tuning(tuning)
    if not 0 <= string_index < len(tuning):
        raise ValueError(
            f"String index {string_index} out of range for {len(tuning)} strings"
        )
    if not 0 <= fret <= max_fret:
        raise ValueError(f"Fret {fret} out of range 0-{max_fret}")

    return from_midi(midi_number(tuning[string_index]) + fret)


def _degree_label(interval: int, context: Union[Chord, Scale], note: Pitch):
    if isinstance(context, Scale):
        for degree, scale_note in enumerate(context.notes, start=1):
            if to_index(scale_note) == to_index(note):
                return degree
        return None
    return CHORD_DEGREE_LABELS.get(interval)


def positions_for(
    context: Union[Chord, Scale],
    fret_start: int,
    fret_end: int,
    tuning: Sequence[Pitch] = STANDARD_TUNING,
    max_fret: int = MAX_FRET,
) -> List[FretboardPosition]:
    """Calculate all fretboard positions for a chord or scale within a fret range.

    Membership is decided by pitch class, so an A# on the neck belongs to a
    scale spelled with Bb.

    Args:
        context: The chord or scale to tag positions against
        fret_start: First fret of the window (inclusive)
        fret_end: Last fret of the window (inclusive)
        tuning: Open-string pitches with octaves
        max_fret: Highest fret on the neck

    Returns:
        Positions ordered by string (1 first) then fret
    """
    if fret_start < 0 or fret_end < fret_start or fret_end > max_fret:
        raise ValueError(f"Invalid fret window {fret_start}-{fret_end}")

    member_indexes = {to_index(n) for n in context.notes}
    root_index = to_index(context.root)

    positions = []
    for string_index in range(len(tuning)):
        for fret in range(fret_start, fret_end + 1):
            note = note_at(string_index, fret, tuning, max_fret)
            note_index = to_index(note)
            is_member = note_index in member_indexes
            interval = (note_index - root_index) % SEMITONES_PER_OCTAVE
            positions.append(
                FretboardPosition(
                    string=string_index + 1,
                    fret=fret,
                    note=note,
                    is_root=note_index == root_index,
                    is_member=is_member,
                    degree_label=_degree_label(interval, context, note) if is_member else None,
                )
            )

    logger.debug(
        f"Mapped {len(positions)} positions for frets {fret_start}-{fret_end}, "
        f"{sum(p.is_member for p in positions)} members"
    )
    return positions


def fret_window(start: int, size: int, max_fret: int = MAX_FRET) -> Tuple[int, int]:
    """Clamp a scrolling fret window of `size` frets inside 0..max_fret.

    Returns:
        (fret_start, fret_end), both inclusive
    """
    if size < 1:
        raise ValueError(f"Window size must be at least 1, got {size}")
    size = min(size, max_fret + 1)
    start = max(0, min(start, max_fret - size + 1))
    return start, start + size - 1


def pitches_from_positions(positions: Iterable[FretboardPosition]) -> List[Pitch]:
    """Absolute pitches of selected positions, in selection order."""
    return [position.note for position in positions]


def default_voicing(
    positions: Iterable[FretboardPosition], muted: AbstractSet[int] = frozenset()
) -> Tuple[FretboardPosition, ...]:
    """Pick the lowest-fret member on each unmuted string.

    Args:
        positions: Output of positions_for() for a chord
        muted: String numbers (1-N) to leave out

    Returns:
        One position per string that has a member in the window, string 1 first
    """
    chosen = {}
    for position in positions:
        if not position.is_member or position.string in muted:
            continue
        current = chosen.get(position.string)
        if current is None or position.fret < current.fret:
            chosen[position.string] = position
    return tuple(chosen[string] for string in sorted(chosen))


def select_position(
    selection: Iterable[FretboardPosition], position: FretboardPosition
) -> Tuple[FretboardPosition, ...]:
    """Add a position to a selection, replacing any other note on its string.

    Selecting is never a toggle; a string is cleared by muting it.
    """
    kept = [p for p in selection if p.string != position.string]
    kept.append(position)
    return tuple(sorted(kept, key=lambda p: p.string))


def sounding_positions(
    selection: Iterable[FretboardPosition], muted: AbstractSet[int] = frozenset()
) -> Tuple[FretboardPosition, ...]:
    """The selected positions that actually sound, skipping muted strings."""
    return tuple(p for p in selection if p.string not in muted)
