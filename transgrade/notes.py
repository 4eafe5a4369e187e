#!/usr/bin/python
# -*- coding: utf-8 -*-
"""
This module contains the note array definition shared
by the parser, the transposer and the matchers.

A note sequence is a read-only structured array with one
record per sounding note, ordered by parse order.
"""
import numpy as np
from partitura.utils.music import pitch_spelling_to_midi_pitch

NOTE_DTYPE = [
    ("id", "U16"),
    ("step", "U1"),
    ("alter", "i4"),
    ("octave", "i4"),
    ("pitch", "i4"),
    ("duration", "i4"),
    ("duration_beat", "f8"),
    ("note_type", "U16"),
    ("onset_beat", "f8"),
    ("tie_start", "?"),
    ("tie_end", "?"),
    ("slur_start", "?"),
    ("slur_end", "?"),
    ("slur_number", "U8"),
    ("articulation", "U16"),
]

NOTE_FIELDS = [name for name, _ in NOTE_DTYPE]


def midi_pitch(step, octave, alter=0):
    """
    MIDI pitch of a spelled note: 12 + 12 * octave + semitone(step) + alter
    """
    return int(pitch_spelling_to_midi_pitch(
        step=str(step).upper(), alter=int(alter or 0), octave=int(octave)
    ))


def freeze(note_array):
    """
    mark a note array as read-only and return it
    """
    note_array.flags.writeable = False
    return note_array


def empty_note_array():
    return freeze(np.empty(0, dtype=NOTE_DTYPE))


def note_array_from_records(records):
    """
    Create a read-only note array from note dictionaries.

    Parameters
    ----------
    records : list
        A list of dictionaries with (a subset of) the keys in
        `NOTE_FIELDS`. Missing `id` and `pitch` values are derived,
        every other missing field is left at its zero value.

    Returns
    -------
    note_array : structured ndarray
        Read-only array with dtype `NOTE_DTYPE`.
    """
    note_array = np.zeros(len(records), dtype=NOTE_DTYPE)
    for idx, record in enumerate(records):
        for field, value in record.items():
            if value is None:
                continue
            note_array[field][idx] = value
        if not record.get("id"):
            note_array["id"][idx] = "n{}".format(idx)
        if record.get("pitch") is None:
            note_array["pitch"][idx] = midi_pitch(
                note_array[idx]["step"],
                note_array[idx]["octave"],
                note_array[idx]["alter"],
            )
    return freeze(note_array)


def note_to_dict(note):
    """
    plain python dictionary of a note record (None stays None)
    """
    if note is None:
        return None
    out = {}
    for field in NOTE_FIELDS:
        value = note[field]
        if isinstance(value, np.generic):
            value = value.item()
        out[field] = value
    out["slur_number"] = out["slur_number"] or None
    out["articulation"] = out["articulation"] or None
    return out
