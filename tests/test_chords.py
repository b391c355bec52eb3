import unittest

import pytest

from fretwise.chords import build_sevenths, build_triads, display_name, make_chord
from fretwise.note_types import Chord, ChordQuality, ScaleKind
from fretwise.pitch import equals, parse
from fretwise.scales import all_roots, build_scale, generate


def names(notes):
    return [n.name for n in notes]


class TestMajorChords(unittest.TestCase):
    def setUp(self):
        self.scale = build_scale(parse("C"), ScaleKind.MAJOR)

    def test_triad_names(self):
        self.assertEqual(
            [c.display_name for c in self.scale.triads],
            ["C", "Dm", "Em", "F", "G", "Am", "Bdim"],
        )

    def test_triad_numerals(self):
        self.assertEqual(
            [c.roman_numeral for c in self.scale.triads],
            ["I", "ii", "iii", "IV", "V", "vi", "vii°"],
        )

    def test_triad_notes(self):
        self.assertEqual(names(self.scale.triads[0].notes), ["C", "E", "G"])
        self.assertEqual(names(self.scale.triads[6].notes), ["B", "D", "F"])

    def test_seventh_names(self):
        self.assertEqual(
            [c.display_name for c in self.scale.sevenths],
            ["Cmaj7", "Dm7", "Em7", "Fmaj7", "G7", "Am7", "Bm7♭5"],
        )

    def test_dominant_seventh(self):
        chord = self.scale.sevenths[4]
        self.assertIs(chord.quality, ChordQuality.DOMINANT7)
        self.assertEqual(chord.roman_numeral, "V7")
        self.assertEqual(names(chord.notes), ["G", "B", "D", "F"])

    def test_root_comes_first(self):
        for chord in self.scale.chords:
            self.assertEqual(chord.notes[0], chord.root)

    def test_chord_notes_come_from_the_scale(self):
        scale_names = set(names(self.scale.notes))
        for chord in self.scale.chords:
            self.assertTrue(set(names(chord.notes)) <= scale_names)


class TestMinorChords(unittest.TestCase):
    def test_d_minor_iv(self):
        scale = build_scale(parse("D"), ScaleKind.NATURAL_MINOR)
        chord = scale.triads[3]
        self.assertEqual(chord.roman_numeral, "iv")
        self.assertEqual(chord.display_name, "Gm")
        self.assertEqual(names(chord.notes), ["G", "Bb", "D"])

    def test_d_minor_subtonic_seventh(self):
        scale = build_scale(parse("D"), ScaleKind.NATURAL_MINOR)
        chord = scale.sevenths[6]
        self.assertEqual(chord.roman_numeral, "VII7")
        self.assertEqual(chord.display_name, "C7")
        self.assertEqual(names(chord.notes), ["C", "E", "G", "Bb"])

    def test_harmonic_minor(self):
        scale = build_scale(parse("A"), ScaleKind.HARMONIC_MINOR)
        augmented = scale.triads[2]
        self.assertEqual(augmented.roman_numeral, "III+")
        self.assertEqual(augmented.display_name, "Caug")
        self.assertEqual(names(augmented.notes), ["C", "E", "G#"])

        leading = scale.sevenths[6]
        self.assertEqual(leading.roman_numeral, "vii°7")
        self.assertEqual(leading.display_name, "G#dim7")

    def test_harmonic_minor_tonic_seventh_keeps_scale_notes(self):
        scale = build_scale(parse("A"), ScaleKind.HARMONIC_MINOR)
        tonic = scale.sevenths[0]
        self.assertIs(tonic.quality, ChordQuality.MINOR7)
        self.assertEqual(names(tonic.notes), ["A", "C", "E", "G#"])

    def test_melodic_minor(self):
        scale = build_scale(parse("A"), ScaleKind.MELODIC_MINOR)
        self.assertEqual(scale.sevenths[3].display_name, "D7")
        self.assertEqual(scale.sevenths[3].roman_numeral, "IV7")
        self.assertEqual(scale.sevenths[5].display_name, "F#m7♭5")
        self.assertEqual(scale.sevenths[5].roman_numeral, "viø7")


@pytest.mark.parametrize("kind", list(ScaleKind))
def test_every_diatonic_chord_starts_on_its_root(kind):
    for root in all_roots():
        scale = build_scale(root, kind)
        assert len(scale.chords) == 14
        for chord in scale.chords:
            assert equals(chord.notes[0], chord.root)
            assert len(chord.notes) == (3 if chord in scale.triads else 4)


class TestBuilders(unittest.TestCase):
    def test_wrong_scale_length(self):
        with self.assertRaises(ValueError):
            build_triads([parse("C"), parse("E"), parse("G")], ScaleKind.MAJOR)

    def test_builders_match_scale(self):
        notes = generate(parse("E"), ScaleKind.MAJOR)
        scale = build_scale(parse("E"), ScaleKind.MAJOR)
        self.assertEqual(build_triads(notes, ScaleKind.MAJOR), scale.triads)
        self.assertEqual(build_sevenths(notes, ScaleKind.MAJOR), scale.sevenths)

    def test_display_name(self):
        self.assertEqual(display_name(parse("F#"), ChordQuality.MINOR), "F#m")
        self.assertEqual(display_name(parse("Bb"), "major7"), "Bbmaj7")
        self.assertEqual(display_name(parse("E"), ChordQuality.SUS4), "Esus4")

    def test_make_chord_strips_octaves(self):
        chord = make_chord(parse("C4"), ChordQuality.MAJOR, [parse("C4"), parse("E4"), parse("G4")])
        self.assertIsNone(chord.root.octave)
        self.assertTrue(all(n.octave is None for n in chord.notes))
        self.assertEqual(chord.roman_numeral, "")

    def test_chord_rejects_notes_not_starting_at_root(self):
        with self.assertRaises(ValueError):
            Chord(root=parse("C"), quality=ChordQuality.MAJOR, notes=(parse("E"), parse("G")))


if __name__ == "__main__":
    unittest.main()
