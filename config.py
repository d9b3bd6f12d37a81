"""Form constants shared by validation, progress and persistence."""

# The ten fields an employee must supply before Section 1 can be signed.
REQUIRED_FIELDS = (
    "last_name",
    "first_name",
    "address",
    "city",
    "state",
    "zip_code",
    "date_of_birth",
    "email",
    "phone",
    "citizenship_status",
)

OPTIONAL_FIELDS = (
    "middle_initial",
    "other_last_names",
    "apt_number",
    "ssn",
    "uscis_a_number",
    "alien_expiration_date",
    "form_i94_number",
    "foreign_passport_number",
    "country_of_issuance",
)

# Columns settable one at a time by the voice tools. id, employee_id, status
# and the timestamp columns are deliberately absent.
MUTABLE_FIELDS = frozenset(REQUIRED_FIELDS + OPTIONAL_FIELDS)

# Placeholders written when a skeleton form is auto-created. Never real data.
SENTINEL_ZIP = "00000"
SENTINEL_DOB = "1990-01-01"
SENTINEL_VALUES = frozenset({SENTINEL_ZIP, SENTINEL_DOB})

SKELETON_DEFAULTS = {
    "last_name": "",
    "first_name": "",
    "address": "",
    "city": "",
    "state": "CA",
    "zip_code": SENTINEL_ZIP,
    "date_of_birth": SENTINEL_DOB,
    "email": "",
    "phone": "",
    "citizenship_status": "us_citizen",
}

NOT_STARTED_MARKER = "All fields - form not started"

US_STATES = frozenset(
    {
        "AL", "AK", "AZ", "AR", "CA", "CO", "CT", "DE", "FL", "GA",
        "HI", "ID", "IL", "IN", "IA", "KS", "KY", "LA", "ME", "MD",
        "MA", "MI", "MN", "MS", "MO", "MT", "NE", "NV", "NH", "NJ",
        "NM", "NY", "NC", "ND", "OH", "OK", "OR", "PA", "RI", "SC",
        "SD", "TN", "TX", "UT", "VT", "VA", "WA", "WV", "WI", "WY",
        "DC",
    }
)

# Maximum stored lengths, mirrored by the column sizes in the DDL.
FIELD_MAX_LENGTHS = {
    "last_name": 100,
    "first_name": 100,
    "middle_initial": 10,
    "other_last_names": 255,
    "address": 255,
    "apt_number": 20,
    "city": 100,
    "state": 2,
    "zip_code": 10,
    "email": 255,
    "uscis_a_number": 50,
    "form_i94_number": 50,
    "foreign_passport_number": 50,
    "country_of_issuance": 100,
}

# Telnyx accepts up to 1600 characters per message.
SMS_MAX_LENGTH = 1600

SIGNATURE_METHOD_VOICE = "voice"
