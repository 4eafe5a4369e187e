#!/usr/bin/python
# -*- coding: utf-8 -*-
"""
This module contains methods to grade a submitted score
against a (transposed) reference score.
"""
from typing import List, Dict, Optional, Any
import logging
import math

from ..config import ONSET_TOLERANCE, DURATION_TOLERANCE
from ..parse import load_note_array
from ..match import TemporalGreedyMatcher, transpose_note_array, MISSING, EXTRA

logger = logging.getLogger(__name__)


def evaluate_transposition(
    reference_score: Any,
    student_score: Any,
    semitones: int = 0,
    onset_tolerance: float = ONSET_TOLERANCE,
    duration_tolerance: float = DURATION_TOLERANCE,
    apply_key_signature: bool = False,
) -> Dict[str, Any]:
    """
    Grade a student's transposition of a reference excerpt.

    Parameters
    ----------
    reference_score: MusicXML text or bytes, or a compressed container
    student_score: MusicXML text or bytes, or a compressed container
    semitones: interval by which the reference is transposed before comparison
    onset_tolerance: maximal onset difference (beats) of a matched pair
    duration_tolerance: raw duration tolerance of the note comparison
    apply_key_signature: let the key signature supply missing accidentals

    Returns
    -------
    report: dict
        score (0-100), percentage, total_notes, correct_notes,
        incorrect_notes, missing_notes, extra_notes, details (list of
        comparison dictionaries) and error (None unless an input
        could not be used).
    """
    reference = load_note_array(reference_score, apply_key_signature)
    student = load_note_array(student_score, apply_key_signature)
    logger.debug(
        "evaluating %d reference notes against %d student notes, %d semitones",
        len(reference.note_array), len(student.note_array), semitones,
    )

    if reference.is_empty:
        return empty_report(
            error=_empty_message("reference", reference.error),
        )

    if student.is_empty:
        n_reference = len(reference.note_array)
        return empty_report(
            total_notes=n_reference,
            missing_notes=n_reference,
            error=_empty_message("student", student.error),
        )

    transposed = transpose_note_array(reference.note_array, semitones)
    matcher = TemporalGreedyMatcher(onset_tolerance, duration_tolerance)
    details = matcher(transposed, student.note_array)

    report = summarize_comparisons(details, total_notes=len(transposed))
    logger.info(
        "score %d: %d/%d correct, %d incorrect, %d missing, %d extra",
        report["score"], report["correct_notes"], report["total_notes"],
        report["incorrect_notes"], report["missing_notes"], report["extra_notes"],
    )
    return report


def evaluate_listen_and_write(
    reference_score: Any,
    student_score: Any,
    **kwargs: Any,
) -> Dict[str, Any]:
    """
    Grade a dictation: the submission is compared to the
    reference as written (no transposition).
    """
    return evaluate_transposition(reference_score, student_score, 0, **kwargs)


def summarize_comparisons(
    details: List[Dict[str, Any]], total_notes: int
) -> Dict[str, Any]:
    """
    Aggregate comparison dictionaries into a report.
    Extra notes are counted but do not enter the score.
    """
    correct_notes = sum(1 for c in details if c["is_correct"])
    incorrect_notes = sum(
        1
        for c in details
        if not c["is_correct"] and c["expected"] is not None and c["actual"] is not None
    )
    missing_notes = sum(1 for c in details if c["error_type"] == MISSING)
    extra_notes = sum(1 for c in details if c["error_type"] == EXTRA)

    score = round_half_up(100.0 * correct_notes / total_notes) if total_notes > 0 else 0

    return {
        "score": score,
        "percentage": score,
        "total_notes": total_notes,
        "correct_notes": correct_notes,
        "incorrect_notes": incorrect_notes,
        "missing_notes": missing_notes,
        "extra_notes": extra_notes,
        "details": details,
        "error": None,
    }


def empty_report(
    total_notes: int = 0, missing_notes: int = 0, error: Optional[str] = None
) -> Dict[str, Any]:
    return {
        "score": 0,
        "percentage": 0,
        "total_notes": total_notes,
        "correct_notes": 0,
        "incorrect_notes": 0,
        "missing_notes": missing_notes,
        "extra_notes": 0,
        "details": [],
        "error": error,
    }


def _empty_message(which: str, error: Optional[Exception]) -> str:
    message = "No notes found in {} MusicXML".format(which)
    if error is not None:
        message += " ({}: {})".format(type(error).__name__, error)
    return message


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def points_earned(report: Dict[str, Any], max_points: float) -> int:
    """
    Points for a question worth `max_points`, rounded half up.
    """
    return round_half_up(report["percentage"] / 100.0 * max_points)


def print_evaluation_report(report: Dict[str, Any]) -> None:
    print("------------------")
    if report["error"]:
        print("Error: ", report["error"])
    print(
        "Score: ",
        report["score"],
        "Correct ",
        report["correct_notes"],
        "/",
        report["total_notes"],
    )
    print(
        "Incorrect ",
        report["incorrect_notes"],
        "Missing ",
        report["missing_notes"],
        "Extra ",
        report["extra_notes"],
    )
    print("------------------")
    for comparison in report["details"]:
        if comparison["is_correct"]:
            continue
        print(
            "Beat ",
            format(comparison["position"], ".3f"),
            comparison["error_type"],
            "expected ",
            comparison["expected_midi"],
            "actual ",
            comparison["actual_midi"],
        )
    print("------------------")
