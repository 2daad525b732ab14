"""
Pydantic models for validation and serialization.
"""

from models.base import (
    BaseSchema,
    FrozenSchema,
)
from models.column_mapping import (
    ColumnMapping,
    MatchMethod,
    MatchQuality,
    SystemFieldDefinition,
    FilePreview,
    MatchScore,
    MatchQualityReport,
    MappingValidation,
    MappingStateSnapshot,
)

__all__ = [
    # Base
    "BaseSchema",
    "FrozenSchema",

    # Column mapping
    "ColumnMapping",
    "MatchMethod",
    "MatchQuality",
    "SystemFieldDefinition",
    "FilePreview",
    "MatchScore",
    "MatchQualityReport",
    "MappingValidation",
    "MappingStateSnapshot",
]
