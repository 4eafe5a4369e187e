#!/usr/bin/python
# -*- coding: utf-8 -*-
"""
This module contains note matcher classes for short
monophonic excerpts.
"""
import logging

import numpy as np
from scipy.spatial.distance import cdist

from ..config import ONSET_TOLERANCE, DURATION_TOLERANCE
from .compare import compare_notes

logger = logging.getLogger(__name__)

# error types of a comparison
NO_ERROR = "none"
MISSING = "missing"
EXTRA = "extra"


def onset_distance_matrix(expected_note_array, actual_note_array):
    """
    Absolute onset differences in beats.

    Returns
    -------
    distances : np.ndarray
        Array of shape (len(expected), len(actual)).
    """
    if len(expected_note_array) == 0 or len(actual_note_array) == 0:
        return np.zeros((len(expected_note_array), len(actual_note_array)))
    return cdist(
        expected_note_array["onset_beat"].reshape(-1, 1),
        actual_note_array["onset_beat"].reshape(-1, 1),
        metric="cityblock",
    )


def comparison_result(position, expected=None, actual=None, is_correct=False,
                      error_type=NO_ERROR):
    """
    one entry of an evaluation: a matched pair, a missing or an extra note
    """
    return {
        "position": float(position),
        "expected": expected,
        "actual": actual,
        "is_correct": is_correct,
        "error_type": error_type,
        "expected_midi": int(expected["pitch"]) if expected is not None else None,
        "actual_midi": int(actual["pitch"]) if actual is not None else None,
    }


class TemporalGreedyMatcher(object):
    """
    Greedy one-to-one matching by onset proximity.

    Every expected note, in order, takes the closest unused actual
    note whose onset lies within `onset_tolerance` beats (ties go to
    the lower actual index). Matched pairs are compared attribute by
    attribute; unmatched expected notes are missing, leftover actual
    notes are extra.
    """

    def __init__(self,
                 onset_tolerance=ONSET_TOLERANCE,
                 duration_tolerance=DURATION_TOLERANCE):
        self.onset_tolerance = onset_tolerance
        self.duration_tolerance = duration_tolerance

    def __call__(self, expected_note_array, actual_note_array):
        """
        Parameters
        ----------
        expected_note_array : structured ndarray
            Reference notes (already transposed).
        actual_note_array : structured ndarray
            Submitted notes.

        Returns
        -------
        comparisons : list
            Comparison dictionaries sorted by position.
        """
        distances = onset_distance_matrix(expected_note_array, actual_note_array)
        used = np.zeros(len(actual_note_array), dtype=bool)
        comparisons = []

        for e_idx, e_note in enumerate(expected_note_array):
            candidates = np.flatnonzero(~used & (distances[e_idx] <= self.onset_tolerance))

            if len(candidates) == 0:
                comparisons.append(
                    comparison_result(e_note["onset_beat"], expected=e_note, error_type=MISSING)
                )
                continue

            # argmin returns the first, i.e. lowest index, of equally close notes
            a_idx = candidates[np.argmin(distances[e_idx, candidates])]
            used[a_idx] = True
            a_note = actual_note_array[a_idx]

            comparison = compare_notes(e_note, a_note, self.duration_tolerance)
            if not comparison["match"]:
                logger.debug(
                    "note %s at beat %.3f failed on %s (expected %d, got %d)",
                    e_note["id"], e_note["onset_beat"], comparison["reason"],
                    e_note["pitch"], a_note["pitch"],
                )
            comparisons.append(
                comparison_result(
                    e_note["onset_beat"],
                    expected=e_note,
                    actual=a_note,
                    is_correct=comparison["match"],
                    error_type=comparison["reason"] or NO_ERROR,
                )
            )

        for a_idx in np.flatnonzero(~used):
            a_note = actual_note_array[a_idx]
            comparisons.append(
                comparison_result(a_note["onset_beat"], actual=a_note, error_type=EXTRA)
            )

        comparisons.sort(key=lambda comparison: comparison["position"])
        return comparisons
