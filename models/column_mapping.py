"""
Column mapping models.

Data structures shared by the file ingestor, the match scorer and the
mapping state.
"""

from enum import Enum
from typing import Optional, Literal

from pydantic import Field, field_validator

from models.base import BaseSchema, FrozenSchema


# Field key -> file column (None when the field is not mapped)
ColumnMapping = dict[str, Optional[str]]


class MatchMethod(str, Enum):
    """Heuristic that produced a match score."""
    EXACT_MATCH = "exact_match"
    LABEL_MATCH = "label_match"
    KEYWORD_MATCH = "keyword_match"
    FUZZY_MATCH = "fuzzy_match"
    WORD_OVERLAP = "word_overlap"
    SEMANTIC_MATCH = "semantic_match"


class MatchQuality(str, Enum):
    """Display bucket over match confidence."""
    EXCELLENT = "excellent"
    GOOD = "good"
    FAIR = "fair"
    POOR = "poor"


class SystemFieldDefinition(FrozenSchema):
    """A canonical field the application expects after import."""
    key: str = Field(pattern=r"^[a-z][a-z0-9_]*$", description="snake_case identifier")
    label: str = Field(min_length=1)
    required: bool = False
    description: str = ""


class FilePreview(FrozenSchema):
    """
    Normalized view of an uploaded file.

    Only the first few rows are kept in sample_rows; total_rows is the
    full number of data rows in the file.
    """
    file_name: str
    file_size_bytes: int = Field(ge=0)
    file_format: Literal["csv", "xlsx", "xls"]
    columns: tuple[str, ...]
    sample_rows: tuple[dict[str, str], ...] = ()
    total_rows: int = Field(ge=0)

    @field_validator("columns")
    @classmethod
    def columns_unique_and_non_empty(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        if any(not c.strip() for c in v):
            raise ValueError("column names must be non-empty")
        if len(set(v)) != len(v):
            raise ValueError("column names must be unique")
        return v


class MatchScore(FrozenSchema):
    """Similarity between one file column and one system field."""
    column: str
    field_key: str
    score: float = Field(ge=0, le=100)
    confidence: float = Field(ge=0, le=1)
    method: MatchMethod


class MatchQualityReport(FrozenSchema):
    """Match score with its display quality bucket."""
    score: float = Field(ge=0, le=100)
    confidence: float = Field(ge=0, le=1)
    method: MatchMethod
    quality: MatchQuality


class MappingValidation(BaseSchema):
    """Result of checking required fields against a mapping."""
    is_valid: bool
    missing_required_fields: list[str] = Field(default_factory=list)


class MappingStateSnapshot(FrozenSchema):
    """Read-only view of a MappingState handed to the presentation layer."""
    file_preview: Optional[FilePreview] = None
    column_mapping: ColumnMapping = Field(default_factory=dict)
    is_valid: bool = False
    missing_required_fields: list[str] = Field(default_factory=list)
    is_loading: bool = False
    error: Optional[dict] = None
