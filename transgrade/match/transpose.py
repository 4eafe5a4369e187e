#!/usr/bin/python
# -*- coding: utf-8 -*-
"""
This module contains methods to transpose note arrays.
"""
import numpy as np

from ..notes import freeze

# sharps preferred
PITCH_CLASS_SPELLING = (
    ("C", 0),
    ("C", 1),
    ("D", 0),
    ("D", 1),
    ("E", 0),
    ("F", 0),
    ("F", 1),
    ("G", 0),
    ("G", 1),
    ("A", 0),
    ("A", 1),
    ("B", 0),
)


def spell_midi_pitch(pitch):
    """
    Canonical (step, alter, octave) spelling of a MIDI pitch.

    Sharps are always preferred, e.g. 70 -> ('A', 1, 4).
    """
    octave, pitch_class = divmod(int(pitch) - 12, 12)
    step, alter = PITCH_CLASS_SPELLING[pitch_class]
    return step, alter, octave


def transpose_note_array(note_array, semitones):
    """
    Shift all notes by a number of semitones.

    Parameters
    ----------
    note_array : structured ndarray
        Notes to transpose.
    semitones : int
        Interval in semitones, may be zero or negative.

    Returns
    -------
    transposed : structured ndarray
        Read-only copy with new `pitch` and a canonical
        `step`/`alter`/`octave` spelling. Every other field
        (onsets, durations, ties, slurs, articulations) is kept.
    """
    transposed = np.array(note_array, copy=True)
    transposed.flags.writeable = True
    transposed["pitch"] = note_array["pitch"] + int(semitones)
    for idx, pitch in enumerate(transposed["pitch"]):
        step, alter, octave = spell_midi_pitch(pitch)
        transposed["step"][idx] = step
        transposed["alter"][idx] = alter
        transposed["octave"][idx] = octave
    return freeze(transposed)
