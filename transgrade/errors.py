#!/usr/bin/python
# -*- coding: utf-8 -*-
"""
This module contains the exceptions raised while reading scores.

Loading is fail-soft: :func:`transgrade.parse.load_note_array` catches
every :class:`GradingError` and hands it back next to an empty note
array, so a single broken submission never aborts an evaluation.
"""


class GradingError(Exception):
    """
    Base class for all failures while reading a score.
    """


class FormatError(GradingError):
    """
    Input is not a recognizable MusicXML document or container
    (corrupt archive, undecodable bytes, PDF, ...).
    """


class ExtractionError(GradingError):
    """
    A compressed container was found but holds no resolvable
    MusicXML payload, or containers are nested too deep.
    """


class ParseError(GradingError):
    """
    The MusicXML payload is not well-formed XML.
    """
