#!/usr/bin/python
# -*- coding: utf-8 -*-
"""
This module contains methods to read partwise MusicXML
into note arrays.
"""
import logging
from collections import namedtuple
from functools import partial, reduce
import xml.etree.ElementTree as ET

from ..config import (
    DEFAULT_DIVISIONS,
    DEFAULT_DURATION,
    DEFAULT_OCTAVE,
    DEFAULT_NOTE_TYPE,
    DEFAULT_SLUR_NUMBER,
    ARTICULATION_PRECEDENCE,
)
from ..errors import GradingError, ParseError
from ..notes import empty_note_array, note_array_from_records
from .container import extract_musicxml
from .xmlutils import (
    local_name,
    iter_local,
    find_local,
    find_all_local,
    children_local,
    text_local,
    attr_local,
    to_int,
)

logger = logging.getLogger(__name__)

STEPS = frozenset("ABCDEFG")
SHARP_ORDER = "FCGDAEB"
FLAT_ORDER = "BEADGCF"

# settings read once from the first measure
PartContext = namedtuple("PartContext", ["divisions", "transpose_octaves", "key_fifths"])

# accumulator threaded through the measures
WalkState = namedtuple("WalkState", ["onset", "last_onset", "octave_shift", "records"])


class NoteLoadResult(namedtuple("NoteLoadResult", ["note_array", "error"])):
    """
    Outcome of loading a score: a note array and the error that
    emptied it (None when loading worked).

    An empty `note_array` with `error` None means the document was
    read fine but contains no notes.
    """
    __slots__ = ()

    @property
    def is_empty(self):
        return len(self.note_array) == 0

    @property
    def ok(self):
        return self.error is None and not self.is_empty


def load_note_array(data, apply_key_signature=False):
    """
    Read raw score input (MusicXML text or bytes, or a compressed
    container) into a note array without raising on bad input.

    Parameters
    ----------
    data : str or bytes
        The score as accepted by :func:`extract_musicxml`.
    apply_key_signature : bool
        See :func:`parse_musicxml`.

    Returns
    -------
    result : NoteLoadResult
        The parsed notes, or an empty note array and the
        :class:`GradingError` that caused it.
    """
    try:
        xml_text = extract_musicxml(data)
        note_array = parse_musicxml(xml_text, apply_key_signature=apply_key_signature)
    except GradingError as err:
        logger.warning("could not load score: %s: %s", type(err).__name__, err)
        return NoteLoadResult(empty_note_array(), err)
    return NoteLoadResult(note_array, None)


def parse_musicxml(xml_text, apply_key_signature=False):
    """
    Parse the first part of a partwise MusicXML document.

    Parameters
    ----------
    xml_text : str
        MusicXML document.
    apply_key_signature : bool
        If True, pitches without an <alter> element take the
        accidental implied by the key signature of the first measure.

    Returns
    -------
    note_array : structured ndarray
        Read-only note array (see `transgrade.notes.NOTE_DTYPE`),
        empty if the document holds no notes. Rests advance the
        onsets but are not part of the array.

    Raises
    ------
    ParseError
        If the document is not well-formed XML.
    """
    try:
        root = ET.fromstring(xml_text)
    except (ET.ParseError, ValueError) as err:
        raise ParseError("malformed MusicXML: {}".format(err)) from err

    part = find_first_part(root)
    measures = find_all_local(part, "measure")
    context = read_part_context(root, part, measures)
    logger.debug(
        "part %s: %d measures, divisions %d, transpose octaves %d",
        attr_local(part, "id"), len(measures), context.divisions,
        context.transpose_octaves,
    )

    if find_local(part, "note") is None:
        logger.warning("no <note> elements found in MusicXML (%d measures)", len(measures))
        return empty_note_array()

    initial = WalkState(onset=0.0, last_onset=0.0, octave_shift=0, records=())
    fold = partial(_fold_measure, context, apply_key_signature)
    final = reduce(fold, measures, initial)

    logger.debug("parsed %d notes", len(final.records))
    if not final.records:
        return empty_note_array()
    return note_array_from_records(list(final.records))


def find_first_part(root):
    """
    first <part> directly under the root, else anywhere, else the root itself
    """
    if local_name(root.tag) == "part":
        return root
    parts = children_local(root, "part")
    if parts:
        return parts[0]
    part = find_local(root, "part")
    return part if part is not None else root


def read_part_context(root, part, measures):
    """
    Divisions, written-to-sounding octave offset and key signature
    from the first measure's attributes. The octave offset of the
    part's own <transpose> and of its <score-part> entry are added.
    """
    divisions = DEFAULT_DIVISIONS
    transpose_octaves = 0
    key_fifths = 0

    attributes = find_local(measures[0], "attributes") if measures else None
    if attributes is not None:
        divisions = to_int(text_local(attributes, "divisions"), DEFAULT_DIVISIONS)
        if divisions <= 0:
            divisions = DEFAULT_DIVISIONS
        transpose_octaves += _octave_change(find_local(attributes, "transpose"))
        key_fifths = to_int(text_local(find_local(attributes, "key"), "fifths"), 0)

    part_id = attr_local(part, "id")
    if part_id:
        for score_part in find_all_local(root, "score-part"):
            if attr_local(score_part, "id") == part_id:
                transpose_octaves += _octave_change(find_local(score_part, "transpose"))
                break

    return PartContext(divisions, transpose_octaves, key_fifths)


def _octave_change(transpose):
    if transpose is None:
        return 0
    return to_int(text_local(transpose, "octave-change"), 0)


def _fold_measure(context, apply_key_signature, state, measure):
    for element in measure.iter():
        name = local_name(element.tag)
        if name == "direction":
            state = _apply_octave_shifts(state, element)
        elif name == "note":
            state = _fold_note(context, apply_key_signature, state, element)
    return state


def _apply_octave_shifts(state, element):
    """
    up/down set the running shift, stop clears it
    """
    for shift in find_all_local(element, "octave-shift"):
        shift_type = attr_local(shift, "type", "")
        octaves = octave_shift_size(attr_local(shift, "size"))
        if shift_type == "up":
            state = state._replace(octave_shift=octaves)
        elif shift_type == "down":
            state = state._replace(octave_shift=-octaves)
        elif shift_type == "stop":
            state = state._replace(octave_shift=0)
        logger.debug("octave-shift %s -> %d", shift_type, state.octave_shift)
    return state


def octave_shift_size(size):
    """
    octaves spanned by an octave-shift of the given size (8 -> 1, 15 -> 2)
    """
    size = to_int(size, 8)
    if size < 8:
        return 1
    return (size - 1) // 7


def _fold_note(context, apply_key_signature, state, note):
    pitch = find_local(note, "pitch")
    is_grace = find_local(note, "grace") is not None
    # grace notes take no time of their own
    duration = to_int(text_local(note, "duration"), 0 if is_grace else DEFAULT_DURATION)
    is_chord = find_local(note, "chord") is not None

    if pitch is None:
        if find_local(note, "rest") is None:
            logger.warning("note element without pitch or rest, skipping")
            return state
        return _advance(context, state, duration, is_chord or is_grace)

    step = (text_local(pitch, "step") or "").upper()
    if step not in STEPS:
        logger.warning("note without valid step %r, skipping", step)
        return state

    alter = to_int(text_local(pitch, "alter"), None)
    if alter is None:
        alter = key_signature_alter(step, context.key_fifths) if apply_key_signature else 0

    octave = to_int(text_local(pitch, "octave"), DEFAULT_OCTAVE)
    octave += context.transpose_octaves + state.octave_shift

    onset = state.last_onset if is_chord else state.onset
    notations = find_local(note, "notations")
    tie_start, tie_end = read_ties(note)
    slur_start, slur_end, slur_number = read_slurs(notations)

    record = dict(
        step=step,
        alter=alter,
        octave=octave,
        duration=duration,
        duration_beat=duration / context.divisions,
        note_type=text_local(note, "type", DEFAULT_NOTE_TYPE),
        onset_beat=onset,
        tie_start=tie_start,
        tie_end=tie_end,
        slur_start=slur_start,
        slur_end=slur_end,
        slur_number=slur_number,
        articulation=read_articulation(notations),
    )
    state = state._replace(records=state.records + (record,))
    return _advance(context, state, duration, is_chord or is_grace)


def _advance(context, state, duration, holds_onset):
    if holds_onset:
        return state
    return state._replace(
        onset=state.onset + duration / context.divisions,
        last_onset=state.onset,
    )


def read_ties(note):
    """
    (tie_start, tie_end) from <tie> and <notations><tied>
    """
    types = [attr_local(tie, "type") for tie in iter_local(note, "tie")]
    types += [attr_local(tied, "type") for tied in iter_local(note, "tied")]
    return "start" in types, "stop" in types


def read_slurs(notations):
    """
    (slur_start, slur_end, slur_number); the number is the one
    of the last start or stop seen, or None without a slur.
    """
    slur_start = slur_end = False
    slur_number = None
    for slur in find_all_local(notations, "slur"):
        slur_type = attr_local(slur, "type")
        if slur_type == "start":
            slur_start = True
        elif slur_type == "stop":
            slur_end = True
        else:
            continue
        slur_number = attr_local(slur, "number", DEFAULT_SLUR_NUMBER)
    return slur_start, slur_end, slur_number


def read_articulation(notations):
    articulations = find_local(notations, "articulations")
    if articulations is None:
        return None
    for tag, articulation in ARTICULATION_PRECEDENCE:
        if find_local(articulations, tag) is not None:
            return articulation
    return None


def key_signature_alter(step, fifths):
    """
    Accidental the key signature puts on `step`
    (1 sharp, -1 flat, 0 natural).
    """
    if fifths > 0 and step in SHARP_ORDER[:fifths]:
        return 1
    if fifths < 0 and step in FLAT_ORDER[:-fifths]:
        return -1
    return 0
