"""
Column mapping services.

Each module handles one step: scoring, assignment, validation, session state.
"""

from services.match_scorer import (
    calculate_match_score,
    get_match_quality,
    debug_match_scores,
    classify_confidence,
)
from services.column_assigner import auto_detect_columns
from services.mapping_validator import validate_mapping
from services.mapping_state import MappingState

__all__ = [
    "calculate_match_score",
    "get_match_quality",
    "debug_match_scores",
    "classify_confidence",
    "auto_detect_columns",
    "validate_mapping",
    "MappingState",
]
