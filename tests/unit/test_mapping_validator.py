"""
Unit tests for required-field validation.

Run: pytest tests/unit/test_mapping_validator.py -v
"""

from models.column_mapping import SystemFieldDefinition
from services.mapping_validator import validate_mapping


class TestValidateMapping:
    """Tests for validate_mapping()"""

    def test_required_field_mapped(self, system_fields):
        result = validate_mapping({"email": "Email", "name": None}, system_fields)
        assert result.is_valid is True
        assert result.missing_required_fields == []

    def test_required_field_none(self, system_fields):
        result = validate_mapping({"email": None, "name": "Full Name"}, system_fields)
        assert result.is_valid is False
        assert result.missing_required_fields == ["Email Address"]

    def test_required_field_empty_string(self, system_fields):
        result = validate_mapping({"email": ""}, system_fields)
        assert result.is_valid is False
        assert result.missing_required_fields == ["Email Address"]

    def test_required_field_absent(self, system_fields):
        result = validate_mapping({}, system_fields)
        assert result.missing_required_fields == ["Email Address"]

    def test_defaults_to_system_fields(self):
        assert validate_mapping({"email": "E"}).is_valid is True
        assert validate_mapping({}).missing_required_fields == ["Email Address"]

    def test_optional_fields_never_reported(self):
        fields = [SystemFieldDefinition(key="notes", label="Notes")]
        assert validate_mapping({}, fields).is_valid is True

    def test_labels_reported_in_field_order(self):
        fields = [
            SystemFieldDefinition(key="email", label="Email Address", required=True),
            SystemFieldDefinition(key="notes", label="Notes"),
            SystemFieldDefinition(key="phone", label="Phone", required=True),
        ]
        result = validate_mapping({"phone": None}, fields)
        assert result.missing_required_fields == ["Email Address", "Phone"]

    def test_unknown_keys_ignored(self, system_fields):
        result = validate_mapping({"email": "Email", "favourite_colour": "Colour"}, system_fields)
        assert result.is_valid is True
