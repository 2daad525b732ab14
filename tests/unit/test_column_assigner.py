"""
Unit tests for greedy column assignment.

Run: pytest tests/unit/test_column_assigner.py -v
"""

import pytest

from models.column_mapping import SystemFieldDefinition
from services.column_assigner import auto_detect_columns


TRICKY_COLUMNS = [
    "Name",
    "Full Name",
    "First Name",
    "Last Name",
    "Email",
    "E-Mail Addres",
    "Phone",
    "Phone Number",
    "Company Name",
    "Location",
    "Notes",
]


class TestScenarios:
    """End-to-end assignment scenarios."""

    def test_clean_headers(self, scenario_fields):
        mapping = auto_detect_columns(["Email", "Full Name", "Phone Number"], scenario_fields)

        assert mapping == {
            "email": "Email",
            "name": "Full Name",
            "phone_number": "Phone Number",
        }

    def test_clean_headers_against_all_fields(self, system_fields):
        mapping = auto_detect_columns(["Email", "Full Name", "Phone Number"], system_fields)

        assert mapping["email"] == "Email"
        assert mapping["name"] == "Full Name"
        assert mapping["phone_number"] == "Phone Number"
        for key in ("first_name", "last_name", "company_name", "location"):
            assert mapping[key] is None

    def test_no_email_column(self, scenario_fields):
        mapping = auto_detect_columns(["Contact", "Mobile"], scenario_fields)
        assert mapping["email"] is None

    def test_typo_header_is_mapped(self, scenario_fields):
        mapping = auto_detect_columns(["E-Mail Addres", "Full Name"], scenario_fields)
        assert mapping["email"] == "E-Mail Addres"


class TestMappingShape:
    """Totality and injectivity."""

    def test_one_entry_per_field(self, system_fields):
        mapping = auto_detect_columns(TRICKY_COLUMNS, system_fields)
        assert list(mapping) == [f.key for f in system_fields]

    def test_no_column_used_twice(self, system_fields):
        mapping = auto_detect_columns(TRICKY_COLUMNS, system_fields)
        used = [column for column in mapping.values() if column is not None]
        assert len(used) == len(set(used))

    def test_more_fields_than_columns(self, system_fields):
        mapping = auto_detect_columns(["Email"], system_fields)
        assert mapping["email"] == "Email"
        assert sum(1 for v in mapping.values() if v is not None) == 1

    def test_no_columns(self, system_fields):
        mapping = auto_detect_columns([], system_fields)
        assert mapping == {f.key: None for f in system_fields}

    def test_no_fields(self):
        assert auto_detect_columns(["Email"], []) == {}

    def test_deterministic(self, system_fields):
        first = auto_detect_columns(TRICKY_COLUMNS, system_fields)
        second = auto_detect_columns(TRICKY_COLUMNS, system_fields)
        assert first == second


class TestGreedyAssignment:
    """Best score first, first fit."""

    def test_highest_score_claims_contested_column(self, system_fields):
        # "Name" is an exact match for name and a weaker match for first/last name
        mapping = auto_detect_columns(["Name"], system_fields)
        assert mapping["name"] == "Name"
        assert mapping["first_name"] is None
        assert mapping["last_name"] is None

    def test_each_field_gets_its_exact_column(self, system_fields):
        columns = ["first_name", "last_name", "name"]
        mapping = auto_detect_columns(columns, system_fields)
        assert mapping["first_name"] == "first_name"
        assert mapping["last_name"] == "last_name"
        assert mapping["name"] == "name"

    def test_ties_follow_field_order(self):
        primary = SystemFieldDefinition(key="primary_email", label="Email")
        secondary = SystemFieldDefinition(key="work_email", label="Email")

        mapping = auto_detect_columns(["Email"], [primary, secondary])
        assert mapping == {"primary_email": "Email", "work_email": None}

        mapping = auto_detect_columns(["Email"], [secondary, primary])
        assert mapping == {"work_email": "Email", "primary_email": None}


class TestMinConfidence:
    """Candidates below the threshold are ignored."""

    def test_only_exact_matches_at_full_confidence(self, system_fields):
        mapping = auto_detect_columns(["Email", "Full Name", "E-Mail Addres"], system_fields, min_confidence=1.0)
        assert mapping["email"] == "Email"
        assert mapping["name"] is None

    def test_threshold_above_one_maps_nothing(self, system_fields):
        mapping = auto_detect_columns(["Email"], system_fields, min_confidence=1.01)
        assert all(v is None for v in mapping.values())

    @pytest.mark.parametrize("threshold", [0.0, 0.25, 0.5, 0.75])
    def test_shape_holds_for_any_threshold(self, threshold, system_fields):
        mapping = auto_detect_columns(TRICKY_COLUMNS, system_fields, min_confidence=threshold)
        used = [c for c in mapping.values() if c is not None]
        assert len(mapping) == len(system_fields)
        assert len(used) == len(set(used))
