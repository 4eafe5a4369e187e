#!/usr/bin/python
# -*- coding: utf-8 -*-
"""
This module contains methods to transpose, align
and compare note arrays.
"""

from .transpose import transpose_note_array, spell_midi_pitch
from .compare import compare_notes, normalize_note_type
from .matchers import (
    TemporalGreedyMatcher,
    onset_distance_matrix,
    comparison_result,
    NO_ERROR,
    MISSING,
    EXTRA,
)
