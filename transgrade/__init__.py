#!/usr/bin/python
# -*- coding: utf-8 -*-
"""
The top level of the package contains functions to
grade transposed and dictated MusicXML excerpts.
"""
import logging

from .errors import GradingError, FormatError, ExtractionError, ParseError
from .notes import NOTE_DTYPE, note_array_from_records, empty_note_array, midi_pitch
from .parse import (
    extract_musicxml,
    parse_musicxml,
    load_note_array,
    NoteLoadResult,
)
from .match import (
    TemporalGreedyMatcher,
    transpose_note_array,
    spell_midi_pitch,
    compare_notes,
    normalize_note_type,
)
from .evaluate import (
    evaluate_transposition,
    evaluate_listen_and_write,
    points_earned,
    print_evaluation_report,
    handle_transposition_request,
    handle_listen_and_write_request,
    report_to_json,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "GradingError",
    "FormatError",
    "ExtractionError",
    "ParseError",
    "NOTE_DTYPE",
    "note_array_from_records",
    "empty_note_array",
    "midi_pitch",
    "extract_musicxml",
    "parse_musicxml",
    "load_note_array",
    "NoteLoadResult",
    "TemporalGreedyMatcher",
    "transpose_note_array",
    "spell_midi_pitch",
    "compare_notes",
    "normalize_note_type",
    "evaluate_transposition",
    "evaluate_listen_and_write",
    "points_earned",
    "print_evaluation_report",
    "handle_transposition_request",
    "handle_listen_and_write_request",
    "report_to_json",
]
