"""
Match scorer for column headers.

Scores how well one file column matches one system field using layered
heuristics, in order of precedence:

1. Exact match on the normalized field key (score 100)
2. Exact match on the field label (score 95)
3. Composite of keyword tables (60%), edit-distance similarity (25%)
   and word overlap (15%)

Every function here is pure and deterministic.
"""

from typing import Sequence

from rapidfuzz.distance import Levenshtein

from config.fields import FIELD_KEYWORDS
from models.column_mapping import (
    MatchMethod,
    MatchQuality,
    MatchQualityReport,
    MatchScore,
    SystemFieldDefinition,
)
from utils.text_utils import (
    normalize_header,
    normalize_field_key,
    split_words,
    split_on_whitespace,
)


# Composite weights
KEYWORD_WEIGHT = 0.6
SIMILARITY_WEIGHT = 0.25
OVERLAP_WEIGHT = 0.15

# Method thresholds (strictly greater than)
KEYWORD_METHOD_THRESHOLD = 0.7
FUZZY_METHOD_THRESHOLD = 0.8
OVERLAP_METHOD_THRESHOLD = 0.6

# Keyword scoring factors
KEYWORD_IN_COLUMN_FACTOR = 1.0
COLUMN_IN_KEYWORD_FACTOR = 0.9
WORD_MATCH_FACTOR = 0.85
SIMILAR_KEYWORD_FACTOR = 0.75
SIMILAR_KEYWORD_MIN = 0.7


# ===================
# STRING MEASURES
# ===================

def similarity_ratio(a: str, b: str) -> float:
    """
    Edit-distance similarity in [0, 1], case-insensitive.

    1 - levenshtein(a, b) / max(len(a), len(b)); two empty strings are identical.
    """
    a, b = a.lower(), b.lower()
    max_len = max(len(a), len(b))
    if max_len == 0:
        return 1.0
    distance = Levenshtein.distance(a, b)
    return 1 - distance / max_len


def word_overlap_score(a: str, b: str) -> float:
    """Jaccard similarity of the two word sets. 0 if either side has no words."""
    words_a = set(split_words(a))
    words_b = set(split_words(b))
    if not words_a or not words_b:
        return 0.0
    return len(words_a & words_b) / len(words_a | words_b)


def keyword_match_score(column: str, keywords: Sequence[tuple[str, float]]) -> float:
    """
    Average weighted keyword evidence for a column, in [0, 1].

    Per keyword, the first rule that applies wins:
    - column contains the keyword: full weight
    - keyword contains the column (column longer than 2 chars): 0.9 x weight
    - some column word and keyword word contain one another:
      0.85 x weight x matched-word ratio (capped at 1)
    - edit-distance similarity above 0.7: 0.75 x weight x similarity
    """
    if not keywords:
        return 0.0

    normalized_column = normalize_header(column)
    total = 0.0

    for keyword, weight in keywords:
        normalized_keyword = keyword.lower().strip()

        if normalized_keyword in normalized_column:
            total += weight * KEYWORD_IN_COLUMN_FACTOR
            continue

        if normalized_column in normalized_keyword and len(normalized_column) > 2:
            total += weight * COLUMN_IN_KEYWORD_FACTOR
            continue

        column_words = split_on_whitespace(normalized_column)
        keyword_words = split_on_whitespace(normalized_keyword)
        word_matches = sum(
            1
            for col_word in column_words
            for key_word in keyword_words
            if col_word == key_word or key_word in col_word or col_word in key_word
        )

        if word_matches > 0:
            ratio = min(1.0, word_matches / max(len(column_words), len(keyword_words)))
            total += weight * ratio * WORD_MATCH_FACTOR
            continue

        similarity = similarity_ratio(normalized_column, normalized_keyword)
        if similarity > SIMILAR_KEYWORD_MIN:
            total += weight * similarity * SIMILAR_KEYWORD_FACTOR

    return total / len(keywords)


# ===================
# SCORING
# ===================

def calculate_match_score(column: str, field: SystemFieldDefinition) -> MatchScore:
    """
    Score one column against one system field.

    Args:
        column: Column header as it appears in the file
        field: System field definition

    Returns:
        MatchScore with score in [0, 100] and confidence in [0, 1]
    """
    normalized_column = normalize_header(column)
    field_key = normalize_field_key(field.key)
    field_label = field.label.lower()

    if normalized_column == field_key:
        return MatchScore(
            column=column,
            field_key=field.key,
            score=100.0,
            confidence=1.0,
            method=MatchMethod.EXACT_MATCH,
        )

    if normalized_column == field_label:
        return MatchScore(
            column=column,
            field_key=field.key,
            score=95.0,
            confidence=0.95,
            method=MatchMethod.LABEL_MATCH,
        )

    keyword_score = keyword_match_score(column, FIELD_KEYWORDS.get(field.key, ()))

    similarity = max(
        similarity_ratio(normalized_column, field_key),
        similarity_ratio(normalized_column, field_label),
    )

    overlap = max(
        word_overlap_score(normalized_column, field_key),
        word_overlap_score(normalized_column, field_label),
    )

    composite = (
        keyword_score * KEYWORD_WEIGHT
        + similarity * SIMILARITY_WEIGHT
        + overlap * OVERLAP_WEIGHT
    )
    composite = min(1.0, max(0.0, composite))

    if keyword_score > KEYWORD_METHOD_THRESHOLD:
        method, confidence = MatchMethod.KEYWORD_MATCH, keyword_score
    elif similarity > FUZZY_METHOD_THRESHOLD:
        method, confidence = MatchMethod.FUZZY_MATCH, similarity
    elif overlap > OVERLAP_METHOD_THRESHOLD:
        method, confidence = MatchMethod.WORD_OVERLAP, overlap
    else:
        method, confidence = MatchMethod.SEMANTIC_MATCH, composite

    return MatchScore(
        column=column,
        field_key=field.key,
        score=composite * 100,
        confidence=min(1.0, confidence),
        method=method,
    )


def classify_confidence(confidence: float) -> MatchQuality:
    """Bucket a confidence value for display."""
    if confidence >= 0.9:
        return MatchQuality.EXCELLENT
    if confidence >= 0.7:
        return MatchQuality.GOOD
    if confidence >= 0.5:
        return MatchQuality.FAIR
    return MatchQuality.POOR


def get_match_quality(column: str, field: SystemFieldDefinition) -> MatchQualityReport:
    """Score a pair and attach its display quality bucket."""
    match = calculate_match_score(column, field)
    return MatchQualityReport(
        score=match.score,
        confidence=match.confidence,
        method=match.method,
        quality=classify_confidence(match.confidence),
    )


def debug_match_scores(
    columns: Sequence[str],
    fields: Sequence[SystemFieldDefinition],
) -> list[MatchScore]:
    """Every column/field pair, best score first."""
    scores = [
        calculate_match_score(column, field)
        for field in fields
        for column in columns
    ]
    return sorted(scores, key=lambda m: m.score, reverse=True)
