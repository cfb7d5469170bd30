"""Scoring package exposing the public evaluation entrypoints."""

from .entrypoint import (
    evaluate_intonation,
    evaluate_samples,
    fuse_final_score,
    graduate_text_and_intonation,
    intonation_details,
    measure_kansai_intonation,
)
from .report import print_intonation_only, print_score_report

__all__ = [
    "evaluate_intonation",
    "evaluate_samples",
    "fuse_final_score",
    "graduate_text_and_intonation",
    "intonation_details",
    "measure_kansai_intonation",
    "print_intonation_only",
    "print_score_report",
]
