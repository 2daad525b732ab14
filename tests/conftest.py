"""
Shared test fixtures.
"""

import sys
from pathlib import Path

# Add project root to Python path
project_dir = Path(__file__).parent.parent
sys.path.insert(0, str(project_dir))

import pytest

from config import SYSTEM_FIELDS, Settings, configure_logging, get_field
from tests.factories import ContactFileFactory


@pytest.fixture(scope="session", autouse=True)
def configure_test_logging():
    """Route structlog through stdlib logging so pytest captures it."""
    configure_logging(Settings(log_level="DEBUG"))


@pytest.fixture
def system_fields():
    """The seven canonical contact fields."""
    return SYSTEM_FIELDS


@pytest.fixture
def scenario_fields():
    """email (required), name and phone_number."""
    return (get_field("email"), get_field("name"), get_field("phone_number"))


@pytest.fixture
def email_field():
    return get_field("email")


@pytest.fixture
def files() -> type[ContactFileFactory]:
    """
    Contact file factory.

    Usage:
        def test_something(files):
            upload = files.csv(rows=[["Email"], ["a@x.com"]])
    """
    return ContactFileFactory
