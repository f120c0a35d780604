"""
Sequence Alignment Module
Global pairwise alignment with score matrix traceback and rendering
"""

from .score_matrix import ScoreMatrix
from .pairwise import (
    GAP_CHAR,
    ScoringScheme,
    AlignmentResult,
    GlobalAligner,
    score,
    traceback,
    traceback_path,
    unreachable_score,
    pairwise
)
from .display import format_matrix, print_matrix, plot_matrix

__all__ = [
    "GAP_CHAR",
    "ScoreMatrix",
    "ScoringScheme",
    "AlignmentResult",
    "GlobalAligner",
    "score",
    "traceback",
    "traceback_path",
    "unreachable_score",
    "pairwise",
    "format_matrix",
    "print_matrix",
    "plot_matrix"
]
