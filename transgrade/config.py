#!/usr/bin/python
# -*- coding: utf-8 -*-
"""
Default values for parsing, alignment and scoring.
"""
import os

# MusicXML fallbacks
DEFAULT_DIVISIONS = 4
DEFAULT_DURATION = 4
DEFAULT_OCTAVE = 4
DEFAULT_NOTE_TYPE = "quarter"
DEFAULT_SLUR_NUMBER = "1"

# tolerances (beats for onsets, raw duration units for durations)
ONSET_TOLERANCE = float(os.getenv("TRANSGRADE_ONSET_TOLERANCE", "0.25"))
DURATION_TOLERANCE = float(os.getenv("TRANSGRADE_DURATION_TOLERANCE", "0.1"))

# compressed containers
MAX_CONTAINER_DEPTH = 1
CONTAINER_MANIFEST = "META-INF/container.xml"
CONVENTIONAL_SCORE_NAMES = ("score.xml", "score.musicxml", "score.mxl")
MUSICXML_SUFFIXES = (".xml", ".musicxml")

# first match wins
ARTICULATION_PRECEDENCE = (
    ("staccatissimo", "staccatissimo"),
    ("staccato", "staccato"),
    ("strong-accent", "marcato"),
    ("marcato", "marcato"),
    ("accent", "accent"),
    ("tenuto", "tenuto"),
)

NOTE_TYPE_ALIASES = {
    "w": "whole",
    "whole": "whole",
    "h": "half",
    "half": "half",
    "q": "quarter",
    "quarter": "quarter",
    "8": "eighth",
    "8th": "eighth",
    "eighth": "eighth",
    "16": "sixteenth",
    "16th": "sixteenth",
    "sixteenth": "sixteenth",
    "32": "32nd",
    "32nd": "32nd",
    "64": "64th",
    "64th": "64th",
}
