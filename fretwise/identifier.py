"""Chord identification from an unordered set of sounded pitches."""

from types import MappingProxyType
from typing import Iterable, List, Optional, Tuple, Union

from .chords import make_chord
from .logger import get_logger
from .note_types import (
    ChordMatch,
    ChordQuality,
    Chord,
    FretboardPosition,
    KeyMembership,
    Pitch,
    ScaleKind,
)
from .pitch import SEMITONES_PER_OCTAVE, from_index, pitch_class, to_index
from .scales import generate, should_use_flats

# Get logger for this module
logger = get_logger(__name__)

# Penalty applied to confidence for each selected note outside the chord
EXTRA_NOTE_PENALTY = 0.15

# Minimum confidence callers usually require before showing a match
MIN_CHORD_CONFIDENCE = 0.5

# Confidence thresholds for labeling
CONFIDENCE_LABELS = (
    (0.95, "Exact match"),
    (0.8, "Very likely"),
    (0.65, "Likely"),
)

Q = ChordQuality

# Chord formulas (intervals from root in semitones). Order matters: it is the
# tie-break between candidates with equal confidence.
CHORD_FORMULAS = MappingProxyType(
    {
        Q.MAJOR: (0, 4, 7),
        Q.MINOR: (0, 3, 7),
        Q.DIMINISHED: (0, 3, 6),
        Q.AUGMENTED: (0, 4, 8),
        Q.MAJOR7: (0, 4, 7, 11),
        Q.MINOR7: (0, 3, 7, 10),
        Q.DOMINANT7: (0, 4, 7, 10),
        Q.DIMINISHED7: (0, 3, 6, 9),
        Q.HALF_DIMINISHED7: (0, 3, 6, 10),
        Q.SUS2: (0, 2, 7),
        Q.SUS4: (0, 5, 7),
        Q.ADD9: (0, 4, 7, 14),
        Q.MAJ9: (0, 4, 7, 11, 14),
        Q.MIN9: (0, 3, 7, 10, 14),
    }
)

ROMAN_NUMERALS = ("I", "II", "III", "IV", "V", "VI", "VII")
LOWERCASE_QUALITIES = frozenset({Q.MINOR, Q.MINOR7, Q.HALF_DIMINISHED7})
DIMINISHED_QUALITIES = frozenset({Q.DIMINISHED, Q.DIMINISHED7})

# Key contexts searched for every candidate, majors first
MEMBERSHIP_SCALE_KINDS = (ScaleKind.MAJOR, ScaleKind.NATURAL_MINOR)


def _unique_pitch_classes(pitches: Iterable[Union[Pitch, FretboardPosition]]) -> List[Pitch]:
    """Reduce the input to one pitch class per chromatic index, first spelling wins."""
    seen = set()
    unique = []
    for item in pitches:
        pitch = item.note if isinstance(item, FretboardPosition) else item
        index = to_index(pitch)
        if index not in seen:
            seen.add(index)
            unique.append(pitch_class(pitch))
    return unique


def roman_numeral_for(degree: int, quality: ChordQuality) -> str:
    """Roman numeral of a scale degree (0-based), cased by chord quality."""
    numeral = ROMAN_NUMERALS[degree]
    if quality in DIMINISHED_QUALITIES:
        return numeral.lower() + "°"
    if quality in LOWERCASE_QUALITIES:
        return numeral.lower()
    return numeral


def key_memberships(chord: Chord) -> Tuple[KeyMembership, ...]:
    """Find the major and natural minor keys whose scale contains the chord root.

    Only the root is checked: a chord is reported in every key that has its
    root as a scale degree, whatever the key's own chord on that degree is.
    """
    root_index = to_index(chord.root)
    memberships = []
    for kind in MEMBERSHIP_SCALE_KINDS:
        for key_index in range(SEMITONES_PER_OCTAVE):
            key = from_index(key_index)
            scale_indexes = [to_index(n) for n in generate(key, kind)]
            if root_index in scale_indexes:
                degree = scale_indexes.index(root_index)
                memberships.append(
                    KeyMembership(
                        key=key,
                        scale_kind=kind,
                        roman_numeral=roman_numeral_for(degree, chord.quality),
                    )
                )
    return tuple(memberships)


def _match_chord(
    root: Pitch,
    quality: ChordQuality,
    formula: Tuple[int, ...],
    selected: List[Pitch],
    extra_note_penalty: float,
) -> Optional[ChordMatch]:
    root_index = to_index(root)
    use_flats = should_use_flats(root)
    expected_indexes = [(root_index + interval) % SEMITONES_PER_OCTAVE for interval in formula]
    selected_indexes = {to_index(p) for p in selected}

    matched = [i for i in expected_indexes if i in selected_indexes]
    missing = [i for i in expected_indexes if i not in selected_indexes]
    extra = [p for p in selected if to_index(p) not in expected_indexes]

    confidence = max(0.0, len(matched) / len(expected_indexes) - extra_note_penalty * len(extra))
    if confidence <= 0:
        return None

    chord_notes = [root] + [from_index(i, use_flats) for i in expected_indexes[1:]]
    chord = make_chord(root, quality, chord_notes)
    return ChordMatch(
        chord=chord,
        confidence=confidence,
        missing=tuple(from_index(i, use_flats) for i in missing),
        extra=tuple(extra),
        key_memberships=key_memberships(chord),
    )


def identify_chords(
    pitches: Iterable[Union[Pitch, FretboardPosition]],
    extra_note_penalty: float = EXTRA_NOTE_PENALTY,
) -> List[ChordMatch]:
    """Rank every (root, quality) candidate for a set of sounded pitches.

    Each unique input pitch class is tried as the root against every formula
    in CHORD_FORMULAS. Confidence is the fraction of chord tones present minus
    `extra_note_penalty` for each input note outside the chord; candidates at
    or below zero are dropped. Reporting thresholds and top-N truncation are
    left to the caller, see filter_matches().

    Args:
        pitches: Pitches or fretboard positions; octaves and duplicates are ignored
        extra_note_penalty: Confidence deducted per extra note

    Returns:
        Matches sorted by confidence, highest first. Ties keep discovery
        order (input root order, then formula order).
    """
    selected = _unique_pitch_classes(pitches)
    if not selected:
        return []

    matches = []
    for root in selected:
        for quality, formula in CHORD_FORMULAS.items():
            match = _match_chord(root, quality, formula, selected, extra_note_penalty)
            if match is not None:
                logger.debug(
                    f"Candidate {match.chord.display_name}: {match.confidence:.2f} "
                    f"(missing {[p.name for p in match.missing]}, "
                    f"extra {[p.name for p in match.extra]})"
                )
                matches.append(match)

    # sorted() is stable, so equal confidences keep discovery order
    matches = sorted(matches, key=lambda m: m.confidence, reverse=True)
    logger.debug(
        f"Identified {len(matches)} candidates for {[p.name for p in selected]}"
    )
    return matches


def filter_matches(
    matches: Iterable[ChordMatch],
    min_confidence: float = MIN_CHORD_CONFIDENCE,
    limit: Optional[int] = None,
) -> List[ChordMatch]:
    """Keep matches scoring above `min_confidence`, optionally only the first `limit`."""
    kept = [m for m in matches if m.confidence > min_confidence]
    if limit is not None:
        kept = kept[:limit]
    return kept


def confidence_label(confidence: float) -> str:
    """Human-readable label for a confidence score."""
    for threshold, label in CONFIDENCE_LABELS:
        if confidence >= threshold:
            return label
    return "Possible"
