"""
Required-field validation for column mappings.
"""

from typing import Mapping, Optional, Sequence

from config.fields import SYSTEM_FIELDS
from models.column_mapping import MappingValidation, SystemFieldDefinition


def validate_mapping(
    mapping: Mapping[str, Optional[str]],
    fields: Sequence[SystemFieldDefinition] = SYSTEM_FIELDS,
) -> MappingValidation:
    """
    Check that every required field has a column.

    A field counts as missing when its value is None, "" or absent.
    Labels are reported in field order.
    """
    missing = [
        field.label
        for field in fields
        if field.required and not mapping.get(field.key)
    ]
    return MappingValidation(is_valid=not missing, missing_required_fields=missing)
