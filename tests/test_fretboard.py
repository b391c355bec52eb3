import unittest

from fretwise.fretboard import (
    MAX_FRET,
    STANDARD_TUNING,
    default_voicing,
    fret_window,
    note_at,
    parse_tuning,
    pitches_from_positions,
    positions_for,
    select_position,
    sounding_positions,
)
from fretwise.errors import FormatError
from fretwise.identifier import identify_chords
from fretwise.note_types import ScaleKind
from fretwise.pitch import midi_number, parse, to_index, to_string
from fretwise.scales import build_scale


class TestNoteAt(unittest.TestCase):
    def test_open_strings(self):
        self.assertEqual(
            [str(note_at(i, 0)) for i in range(6)],
            ["E4", "B3", "G3", "D3", "A2", "E2"],
        )

    def test_fretted_notes(self):
        self.assertEqual(note_at(4, 3), parse("C3"))
        self.assertEqual(note_at(1, 1), parse("C4"))
        self.assertEqual(note_at(2, 3), parse("A#3"))
        self.assertEqual(note_at(5, 5), parse("A2"))

    def test_twelfth_fret_is_an_octave_up(self):
        self.assertEqual(note_at(0, 12), parse("E5"))
        for string_index in range(6):
            for fret in range(13):
                low = note_at(string_index, fret)
                high = note_at(string_index, fret + 12)
                self.assertEqual(midi_number(high) - midi_number(low), 12)
                self.assertEqual(high.name, low.name)

    def test_invalid_coordinates(self):
        with self.assertRaises(ValueError):
            note_at(6, 0)
        with self.assertRaises(ValueError):
            note_at(-1, 0)
        with self.assertRaises(ValueError):
            note_at(0, -1)

    def test_fret_above_the_neck(self):
        with self.assertRaises(ValueError):
            note_at(0, MAX_FRET + 1)
        with self.assertRaises(ValueError):
            note_at(0, 60)
        with self.assertRaises(ValueError):
            note_at(0, 15, max_fret=12)
        self.assertEqual(note_at(0, 15, max_fret=22), parse("G5"))

    def test_every_fret_round_trips_through_parse(self):
        for string_index in range(6):
            for fret in range(MAX_FRET + 1):
                note = note_at(string_index, fret)
                self.assertEqual(parse(to_string(note)), note)

    def test_custom_tuning(self):
        drop_d = parse_tuning(["E4", "B3", "G3", "D3", "A2", "D2"])
        self.assertEqual(note_at(5, 0, drop_d), parse("D2"))
        self.assertEqual(note_at(5, 2, drop_d), parse("E2"))

    def test_tuning_needs_octaves(self):
        with self.assertRaises(ValueError):
            note_at(0, 0, (parse("E"),))
        with self.assertRaises(ValueError):
            parse_tuning([])
        with self.assertRaises(FormatError):
            parse_tuning(["E4", "Q3"])


class TestPositionsFor(unittest.TestCase):
    def setUp(self):
        self.c_major = build_scale(parse("C"), ScaleKind.MAJOR)
        self.c_triad = self.c_major.triads[0]

    def test_window_size(self):
        positions = positions_for(self.c_triad, 0, 3)
        self.assertEqual(len(positions), 24)
        self.assertEqual((positions[0].string, positions[0].fret), (1, 0))
        self.assertEqual((positions[-1].string, positions[-1].fret), (6, 3))

    def test_chord_membership(self):
        positions = positions_for(self.c_triad, 0, 3)
        by_coordinate = {(p.string, p.fret): p for p in positions}

        c3 = by_coordinate[(5, 3)]
        self.assertTrue(c3.is_member)
        self.assertTrue(c3.is_root)
        self.assertEqual(c3.degree_label, 1)

        open_e = by_coordinate[(6, 0)]
        self.assertTrue(open_e.is_member)
        self.assertFalse(open_e.is_root)
        self.assertEqual(open_e.degree_label, 3)

        open_g = by_coordinate[(3, 0)]
        self.assertEqual(open_g.degree_label, 5)

        f_note = by_coordinate[(1, 1)]
        self.assertFalse(f_note.is_member)
        self.assertFalse(f_note.is_root)
        self.assertIsNone(f_note.degree_label)

    def test_root_implies_member(self):
        for position in positions_for(self.c_major, 0, 12):
            if position.is_root:
                self.assertTrue(position.is_member)

    def test_scale_degrees(self):
        positions = positions_for(self.c_major, 0, 12)
        for position in positions:
            if position.is_member:
                scale_index = [to_index(n) for n in self.c_major.notes].index(to_index(position.note))
                self.assertEqual(position.degree_label, scale_index + 1)
            else:
                self.assertIsNone(position.degree_label)

    def test_membership_is_enharmonic(self):
        f_major = build_scale(parse("F"), ScaleKind.MAJOR)
        positions = positions_for(f_major, 0, 4)
        a_sharp = next(p for p in positions if p.string == 3 and p.fret == 3)
        self.assertEqual(a_sharp.note, parse("A#3"))
        self.assertTrue(a_sharp.is_member)
        self.assertEqual(a_sharp.degree_label, 4)

    def test_member_count_matches_pitch_classes(self):
        positions = positions_for(self.c_major, 0, 11)
        members = [p for p in positions if p.is_member]
        # 12 consecutive frets cover each pitch class once per string
        self.assertEqual(len(members), 7 * len(STANDARD_TUNING))

    def test_invalid_window(self):
        with self.assertRaises(ValueError):
            positions_for(self.c_triad, -1, 3)
        with self.assertRaises(ValueError):
            positions_for(self.c_triad, 0, 200)
        with self.assertRaises(ValueError):
            positions_for(self.c_triad, 0, 20, max_fret=19)
        with self.assertRaises(ValueError):
            positions_for(self.c_triad, 5, 3)

    def test_pitches_from_positions(self):
        positions = positions_for(self.c_triad, 0, 0)
        self.assertEqual(
            [str(p) for p in pitches_from_positions(positions)],
            ["E4", "B3", "G3", "D3", "A2", "E2"],
        )

    def test_whole_neck(self):
        positions = positions_for(self.c_triad, 0, MAX_FRET)
        self.assertEqual(len(positions), 6 * (MAX_FRET + 1))


class TestVoicing(unittest.TestCase):
    def setUp(self):
        c_triad = build_scale(parse("C"), ScaleKind.MAJOR).triads[0]
        self.positions = positions_for(c_triad, 0, 3)
        self.by_coordinate = {(p.string, p.fret): p for p in self.positions}

    def test_default_voicing_takes_lowest_member_per_string(self):
        voicing = default_voicing(self.positions)
        self.assertEqual([(p.string, p.fret) for p in voicing], [(1, 0), (2, 1), (3, 0), (4, 2), (5, 3), (6, 0)])
        self.assertEqual([str(p.note) for p in voicing], ["E4", "C4", "G3", "E3", "C3", "E2"])

    def test_default_voicing_is_the_chord(self):
        best = identify_chords(default_voicing(self.positions))[0]
        self.assertEqual(best.chord.display_name, "C")
        self.assertEqual(best.confidence, 1.0)

    def test_muted_strings_are_skipped(self):
        voicing = default_voicing(self.positions, muted=frozenset({6}))
        self.assertEqual([p.string for p in voicing], [1, 2, 3, 4, 5])

    def test_string_without_members_is_left_out(self):
        d_triad = build_scale(parse("D"), ScaleKind.MAJOR).triads[0]
        voicing = default_voicing(positions_for(d_triad, 0, 0))
        # Open E, B and G are not in D F# A
        self.assertEqual([p.string for p in voicing], [4, 5])

    def test_select_position_replaces_the_string(self):
        voicing = default_voicing(self.positions)
        open_a = self.by_coordinate[(5, 0)]
        selection = select_position(voicing, open_a)
        self.assertEqual(len(selection), 6)
        self.assertIn(open_a, selection)
        self.assertNotIn(self.by_coordinate[(5, 3)], selection)
        self.assertEqual([p.string for p in selection], [1, 2, 3, 4, 5, 6])

        match = next(m for m in identify_chords(selection) if m.chord.display_name == "C")
        self.assertAlmostEqual(match.confidence, 0.85)

    def test_select_position_on_empty_selection(self):
        position = self.by_coordinate[(2, 1)]
        self.assertEqual(select_position((), position), (position,))

    def test_sounding_positions(self):
        voicing = default_voicing(self.positions)
        sounding = sounding_positions(voicing, muted=frozenset({1, 2}))
        self.assertEqual([p.string for p in sounding], [3, 4, 5, 6])
        self.assertEqual(sounding_positions(voicing), voicing)


class TestFretWindow(unittest.TestCase):
    def test_window(self):
        self.assertEqual(fret_window(0, 4), (0, 3))
        self.assertEqual(fret_window(5, 4), (5, 8))

    def test_window_is_clamped(self):
        self.assertEqual(fret_window(22, 4, 24), (21, 24))
        self.assertEqual(fret_window(-3, 4), (0, 3))
        self.assertEqual(fret_window(0, 30, 24), (0, 24))

    def test_window_size_must_be_positive(self):
        with self.assertRaises(ValueError):
            fret_window(0, 0)


if __name__ == "__main__":
    unittest.main()
