"""
Automatic column assignment.

Turns pairwise match scores into a one-to-one field → column mapping.
"""

from typing import Sequence
import structlog

from models.column_mapping import ColumnMapping, MatchScore, SystemFieldDefinition
from services.match_scorer import calculate_match_score

logger = structlog.get_logger(__name__)

DEFAULT_MIN_CONFIDENCE = 0.5


def auto_detect_columns(
    columns: Sequence[str],
    fields: Sequence[SystemFieldDefinition],
    min_confidence: float = DEFAULT_MIN_CONFIDENCE,
) -> ColumnMapping:
    """
    Map each field to its best column, greedily.

    Candidates below min_confidence are discarded. The rest are walked
    best score first (ties keep field-then-column order) and a pair is
    taken only if neither its field nor its column is taken yet. This is
    first-fit, not a globally optimal matching.

    Args:
        columns: File column names
        fields: System fields to fill
        min_confidence: Lowest confidence accepted for a candidate

    Returns:
        One entry per field key; unmatched fields map to None
    """
    candidates: list[MatchScore] = []
    for field in fields:
        for column in columns:
            match = calculate_match_score(column, field)
            if match.confidence >= min_confidence:
                candidates.append(match)

    # sorted() is stable, so equal scores keep enumeration order
    candidates = sorted(candidates, key=lambda m: m.score, reverse=True)

    mapping: dict[str, str] = {}
    used_columns: set[str] = set()

    for match in candidates:
        if match.field_key in mapping or match.column in used_columns:
            continue
        mapping[match.field_key] = match.column
        used_columns.add(match.column)
        logger.debug(
            "column_assigned",
            field=match.field_key,
            column=match.column,
            score=round(match.score, 1),
            method=match.method.value
        )

    result: ColumnMapping = {field.key: mapping.get(field.key) for field in fields}

    logger.info(
        "columns_auto_detected",
        columns=len(columns),
        candidates=len(candidates),
        mapped=len(mapping),
        unmapped=[key for key, value in result.items() if value is None]
    )

    return result
