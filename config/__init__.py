"""
Configuration module.

Exports:
    settings: Settings instance
    get_settings: Function to get settings
    configure_logging: structlog setup for the hosting application
    SYSTEM_FIELDS: The fixed canonical contact fields
    FIELD_KEYWORDS: Keyword tables used by the match scorer
"""

from config.settings import settings, get_settings, Settings
from config.logging_config import configure_logging
from config.fields import (
    SYSTEM_FIELDS,
    FIELD_KEYWORDS,
    get_field,
)

__all__ = [
    # Settings
    "settings",
    "get_settings",
    "Settings",
    "configure_logging",

    # Fields
    "SYSTEM_FIELDS",
    "FIELD_KEYWORDS",
    "get_field",
]
