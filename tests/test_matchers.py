#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
This module includes tests for temporal note matching.
"""
import unittest
import numpy as np

from transgrade import TemporalGreedyMatcher, note_array_from_records, empty_note_array
from transgrade.match import onset_distance_matrix

RNG = np.random.RandomState(1984)


def notes_at(onsets, steps=None):
    steps = steps or ["C"] * len(onsets)
    return note_array_from_records(
        [
            dict(step=step, octave=4, duration=4, note_type="quarter", onset_beat=onset)
            for step, onset in zip(steps, onsets)
        ]
    )


def pairs(comparisons):
    return [
        (
            None if c["expected"] is None else str(c["expected"]["id"]),
            None if c["actual"] is None else str(c["actual"]["id"]),
            c["error_type"],
        )
        for c in comparisons
    ]


class TestTemporalGreedyMatcher(unittest.TestCase):
    def test_distance_matrix(self):
        distances = onset_distance_matrix(notes_at([0, 1]), notes_at([0.5, 1, 3]))
        self.assertTrue(np.allclose(distances, [[0.5, 1, 3], [0.5, 0, 2]]))
        self.assertEqual(onset_distance_matrix(notes_at([0, 1]), empty_note_array()).shape, (2, 0))

    def test_exact_alignment(self):
        comparisons = TemporalGreedyMatcher()(notes_at([0, 1, 2]), notes_at([0, 1, 2]))
        self.assertEqual(
            pairs(comparisons),
            [("n0", "n0", "none"), ("n1", "n1", "none"), ("n2", "n2", "none")],
        )
        self.assertTrue(all(c["is_correct"] for c in comparisons))
        self.assertEqual(comparisons[0]["expected_midi"], 60)
        self.assertEqual(comparisons[0]["actual_midi"], 60)

    def test_tolerance(self):
        matcher = TemporalGreedyMatcher(onset_tolerance=0.25)
        comparisons = matcher(notes_at([0, 1]), notes_at([0.25, 1.5]))
        self.assertEqual(
            pairs(comparisons),
            [("n0", "n0", "none"), ("n1", None, "missing"), (None, "n1", "extra")],
        )

    def test_nearest_wins_and_ties_go_to_lower_index(self):
        matcher = TemporalGreedyMatcher(onset_tolerance=0.5)
        comparisons = matcher(notes_at([1.0]), notes_at([0.5, 0.75, 1.25]))
        matched = [c for c in comparisons if c["expected"] is not None]
        # 0.75 and 1.25 are equally close, the lower index wins
        self.assertEqual(matched[0]["actual"]["id"], "n1")

    def test_actual_notes_are_used_once(self):
        matcher = TemporalGreedyMatcher(onset_tolerance=0.5)
        comparisons = matcher(notes_at([0.0, 0.25]), notes_at([0.1]))
        self.assertEqual(
            pairs(comparisons),
            [("n0", "n0", "none"), ("n1", None, "missing")],
        )

    def test_mismatch_reason(self):
        comparisons = TemporalGreedyMatcher()(notes_at([0], ["C"]), notes_at([0], ["D"]))
        self.assertFalse(comparisons[0]["is_correct"])
        self.assertEqual(comparisons[0]["error_type"], "pitch")
        self.assertEqual(comparisons[0]["actual_midi"], 62)

    def test_sorted_by_position(self):
        comparisons = TemporalGreedyMatcher()(notes_at([0, 2, 4]), notes_at([1, 2, 5]))
        positions = [c["position"] for c in comparisons]
        self.assertEqual(positions, sorted(positions))

    def test_empty_inputs(self):
        matcher = TemporalGreedyMatcher()
        self.assertEqual(matcher(empty_note_array(), empty_note_array()), [])
        self.assertEqual([c["error_type"] for c in matcher(notes_at([0, 1]), empty_note_array())],
                         ["missing", "missing"])
        self.assertEqual([c["error_type"] for c in matcher(empty_note_array(), notes_at([0]))],
                         ["extra"])

    def test_every_note_classified_once(self):
        matcher = TemporalGreedyMatcher()
        for _ in range(20):
            expected = notes_at(np.sort(RNG.randint(0, 40, RNG.randint(0, 15)) / 4.0))
            actual = notes_at(np.sort(RNG.randint(0, 40, RNG.randint(0, 15)) / 4.0))
            comparisons = matcher(expected, actual)
            matched = [c for c in comparisons if c["expected"] is not None and c["actual"] is not None]
            missing = [c for c in comparisons if c["error_type"] == "missing"]
            extra = [c for c in comparisons if c["error_type"] == "extra"]
            self.assertEqual(len(matched) + len(missing), len(expected))
            self.assertEqual(len(matched) + len(extra), len(actual))
            used = [str(c["actual"]["id"]) for c in comparisons if c["actual"] is not None]
            self.assertEqual(len(used), len(set(used)))


if __name__ == "__main__":
    unittest.main()
