#!/usr/bin/python
# -*- coding: utf-8 -*-
"""
This module contains methods to grade submissions and
to serve the grading request contract.
"""

from .eval import (
    evaluate_transposition,
    evaluate_listen_and_write,
    summarize_comparisons,
    empty_report,
    points_earned,
    print_evaluation_report,
    round_half_up,
)
from .endpoints import (
    handle_transposition_request,
    handle_listen_and_write_request,
    report_to_json,
)
