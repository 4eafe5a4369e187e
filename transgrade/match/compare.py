#!/usr/bin/python
# -*- coding: utf-8 -*-
"""
This module contains the attribute-wise comparison
of two matched notes.
"""
from ..config import DURATION_TOLERANCE, DEFAULT_NOTE_TYPE, NOTE_TYPE_ALIASES

# comparison order, the first failing dimension is reported
PITCH = "pitch"
DURATION = "duration"
TIE = "tie"
SLUR = "slur"
ARTICULATION = "articulation"


def normalize_note_type(note_type):
    """
    canonical name of a symbolic duration ('8th' -> 'eighth')
    """
    if not note_type:
        return DEFAULT_NOTE_TYPE
    normalized = str(note_type).strip().lower()
    return NOTE_TYPE_ALIASES.get(normalized, normalized)


def compare_notes(expected, actual, duration_tolerance=DURATION_TOLERANCE):
    """
    Compare a matched pair of notes.

    Checks run in a fixed order and stop at the first mismatch:
    pitch (exact MIDI pitch), duration (note type, falling back
    to the raw duration within `duration_tolerance`), ties,
    slurs (presence, then start/end roles) and articulation.

    Parameters
    ----------
    expected : structured ndarray record
        Note from the (transposed) reference.
    actual : structured ndarray record
        Note from the submission.
    duration_tolerance : float
        Allowed difference of raw durations when note types differ.

    Returns
    -------
    comparison : dict
        {"match": bool, "reason": name of the failing dimension or None}
    """
    if int(expected["pitch"]) != int(actual["pitch"]):
        return _mismatch(PITCH)

    if normalize_note_type(expected["note_type"]) != normalize_note_type(actual["note_type"]):
        if abs(float(expected["duration"]) - float(actual["duration"])) > duration_tolerance:
            return _mismatch(DURATION)

    if (bool(expected["tie_start"]) != bool(actual["tie_start"])
            or bool(expected["tie_end"]) != bool(actual["tie_end"])):
        return _mismatch(TIE)

    expected_slur = bool(expected["slur_start"] or expected["slur_end"])
    actual_slur = bool(actual["slur_start"] or actual["slur_end"])
    if expected_slur != actual_slur:
        return _mismatch(SLUR)
    if expected_slur and (
        bool(expected["slur_start"]) != bool(actual["slur_start"])
        or bool(expected["slur_end"]) != bool(actual["slur_end"])
    ):
        return _mismatch(SLUR)

    if (expected["articulation"] or None) != (actual["articulation"] or None):
        return _mismatch(ARTICULATION)

    return {"match": True, "reason": None}


def _mismatch(reason):
    return {"match": False, "reason": reason}
