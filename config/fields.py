"""
Canonical contact fields and the keyword tables used to recognise them.

Keyword weights express how strongly a header containing the keyword
suggests the field. Each table mixes full names, abbreviations, a
non-English variant and common typos.
"""

from models.column_mapping import SystemFieldDefinition


# =============================================================================
# SYSTEM FIELDS
# =============================================================================

SYSTEM_FIELDS: tuple[SystemFieldDefinition, ...] = (
    SystemFieldDefinition(
        key="email",
        label="Email Address",
        required=True,
        description="Contact's email address",
    ),
    SystemFieldDefinition(
        key="name",
        label="Full Name",
        required=False,
        description="Full name of the contact",
    ),
    SystemFieldDefinition(
        key="first_name",
        label="First Name",
        required=False,
        description="First name of the contact",
    ),
    SystemFieldDefinition(
        key="last_name",
        label="Last Name",
        required=False,
        description="Last name of the contact",
    ),
    SystemFieldDefinition(
        key="company_name",
        label="Company Name",
        required=False,
        description="Company or organization name",
    ),
    SystemFieldDefinition(
        key="location",
        label="Location",
        required=False,
        description="City or location",
    ),
    SystemFieldDefinition(
        key="phone_number",
        label="Phone Number",
        required=False,
        description="Contact phone number",
    ),
)


# =============================================================================
# KEYWORD TABLES
# =============================================================================
# (keyword, weight) pairs. Order matters only for readability.

FIELD_KEYWORDS: dict[str, tuple[tuple[str, float], ...]] = {
    "email": (
        ("email", 1.0),
        ("e-mail", 1.0),
        ("mail", 0.8),
        ("email address", 1.0),
        ("emailaddress", 1.0),
        ("e-mailadres", 0.9),   # Dutch
        ("correo", 0.7),        # Spanish
        ("lead email", 1.0),
        ("contact email", 1.0),
        ("em", 0.75),
        ("eml", 0.75),
    ),
    "name": (
        ("name", 1.0),
        ("full name", 1.0),
        ("fullname", 1.0),
        ("contact name", 1.0),
        ("contact", 0.7),
        ("person", 0.6),
        ("nombre", 0.7),
        ("lead name", 1.0),
        ("contact full name", 1.0),
        ("naem", 0.8),
        ("nm", 0.7),
    ),
    "first_name": (
        ("first name", 1.0),
        ("firstname", 1.0),
        ("first", 0.8),
        ("given name", 1.0),
        ("givenname", 1.0),
        ("fname", 0.95),
        ("forename", 0.9),
        ("fn", 0.85),
        ("fst name", 0.85),
    ),
    "last_name": (
        ("last name", 1.0),
        ("lastname", 1.0),
        ("last", 0.8),
        ("surname", 1.0),
        ("family name", 1.0),
        ("familyname", 1.0),
        ("lname", 0.95),
        ("ln", 0.85),
        ("lst name", 0.85),
    ),
    "company_name": (
        ("company", 1.0),
        ("company name", 1.0),
        ("companyname", 1.0),
        ("organization", 1.0),
        ("org", 0.9),
        ("business", 0.8),
        ("employer", 0.7),
        ("organization name", 1.0),
        ("co", 0.75),
        ("compnay", 0.8),
        ("cmpany", 0.8),
    ),
    "location": (
        ("location", 1.0),
        ("city", 1.0),
        ("place", 0.8),
        ("address", 0.9),
        ("region", 0.9),
        ("town", 0.9),
        ("locality", 0.8),
        ("lead location", 1.0),
        ("office location", 1.0),
        ("loc", 0.75),
        ("loaction", 0.8),
    ),
    "phone_number": (
        ("phone", 1.0),
        ("phone number", 1.0),
        ("phonenumber", 1.0),
        ("mobile", 1.0),
        ("contact number", 1.0),
        ("tel", 0.9),
        ("telephone", 0.9),
        ("cell", 0.9),
        ("lead phone", 1.0),
        ("mobile number", 1.0),
        ("telephone number", 1.0),
        ("ph", 0.8),
        ("phoen", 0.8),
        ("ph no", 0.95),
    ),
}


def get_field(key: str) -> SystemFieldDefinition:
    """Look up a system field by key. Raises KeyError for unknown keys."""
    for field in SYSTEM_FIELDS:
        if field.key == key:
            return field
    raise KeyError(key)
