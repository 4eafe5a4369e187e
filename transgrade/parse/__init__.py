#!/usr/bin/python
# -*- coding: utf-8 -*-
"""
This module contains methods to read scores (plain or
compressed MusicXML) into note arrays.
"""

from .container import extract_musicxml, is_compressed, resolve_payload_entry, read_entry
from .musicxml import (
    NoteLoadResult,
    load_note_array,
    parse_musicxml,
    key_signature_alter,
    octave_shift_size,
)
from .xmlutils import local_name, find_local, find_all_local, text_local
