#!/usr/bin/python
# -*- coding: utf-8 -*-
"""
This module contains the request/response contract of the
grading endpoints: payload validation and JSON conversion of
evaluation reports. Transport (HTTP routing, authentication)
lives with the caller.
"""
from typing import Dict, Tuple, Any, Mapping
import logging

from ..notes import note_to_dict
from .eval import evaluate_transposition, evaluate_listen_and_write

logger = logging.getLogger(__name__)

MISSING_FIELDS = "Missing required fields: questionId and studentMusicXML"
MISSING_REFERENCE = "referenceMusicXML is required"
INVALID_SEMITONES = "transpositionSemitones must be an integer"

REPORT_KEYS = {
    "score": "score",
    "percentage": "percentage",
    "total_notes": "totalNotes",
    "correct_notes": "correctNotes",
    "incorrect_notes": "incorrectNotes",
    "missing_notes": "missingNotes",
    "extra_notes": "extraNotes",
    "error": "error",
}

COMPARISON_KEYS = {
    "position": "position",
    "is_correct": "isCorrect",
    "error_type": "errorType",
    "expected_midi": "expectedMIDI",
    "actual_midi": "actualMIDI",
}

NOTE_KEYS = {
    "step": "step",
    "octave": "octave",
    "alter": "alter",
    "duration": "duration",
    "note_type": "type",
    "onset_beat": "position",
    "tie_start": "tieStart",
    "tie_end": "tieEnd",
    "slur_start": "slurStart",
    "slur_end": "slurEnd",
    "slur_number": "slurNumber",
    "articulation": "articulation",
}


def handle_transposition_request(payload: Mapping[str, Any]) -> Tuple[int, Dict[str, Any]]:
    """
    Evaluate a transposition request.

    Parameters
    ----------
    payload: mapping with questionId, studentMusicXML, referenceMusicXML
        and optionally transpositionSemitones (defaults to 0)

    Returns
    -------
    status: HTTP-style status code (200 or 400)
    body: {"success": True, "data": report} or {"success": False, "error": message}
    """
    invalid = _validate(payload)
    if invalid is not None:
        return invalid

    semitones = payload.get("transpositionSemitones") or 0
    if isinstance(semitones, bool):
        return _failure(INVALID_SEMITONES)
    if isinstance(semitones, float) and not semitones.is_integer():
        return _failure(INVALID_SEMITONES)
    try:
        semitones = int(semitones)
    except (TypeError, ValueError):
        return _failure(INVALID_SEMITONES)

    logger.info("evaluating transposition for question %s", payload["questionId"])
    report = evaluate_transposition(
        payload["referenceMusicXML"], payload["studentMusicXML"], semitones
    )
    return 200, {"success": True, "data": report_to_json(report)}


def handle_listen_and_write_request(payload: Mapping[str, Any]) -> Tuple[int, Dict[str, Any]]:
    """
    Evaluate a listen-and-write (dictation) request; same
    payload as a transposition request without the interval.
    """
    invalid = _validate(payload)
    if invalid is not None:
        return invalid

    logger.info("evaluating listen-and-write for question %s", payload["questionId"])
    report = evaluate_listen_and_write(payload["referenceMusicXML"], payload["studentMusicXML"])
    return 200, {"success": True, "data": report_to_json(report)}


def _validate(payload):
    if not payload.get("questionId") or not payload.get("studentMusicXML"):
        return _failure(MISSING_FIELDS)
    if not payload.get("referenceMusicXML"):
        return _failure(MISSING_REFERENCE)
    return None


def _failure(message):
    return 400, {"success": False, "error": message}


def report_to_json(report: Dict[str, Any]) -> Dict[str, Any]:
    """
    JSON serializable copy of a report with camelCase keys.
    """
    out = {json_key: report[key] for key, json_key in REPORT_KEYS.items()}
    out["details"] = [comparison_to_json(c) for c in report["details"]]
    return out


def comparison_to_json(comparison: Dict[str, Any]) -> Dict[str, Any]:
    out = {json_key: comparison[key] for key, json_key in COMPARISON_KEYS.items()}
    out["expected"] = note_to_json(comparison["expected"])
    out["actual"] = note_to_json(comparison["actual"])
    return out


def note_to_json(note):
    note = note_to_dict(note)
    if note is None:
        return None
    return {json_key: note[key] for key, json_key in NOTE_KEYS.items()}
