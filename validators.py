"""
Field validation for I-9 Section 1.

The single-value predicates are pure and return bools so the voice tools can
report "valid: false" without raising. ``validate_form`` composes them into a
whole-record check and raises ``ValidationFailed`` with every problem found.
"""

import re
from datetime import date

from config import FIELD_MAX_LENGTHS, MUTABLE_FIELDS, REQUIRED_FIELDS, US_STATES
from errors import ValidationFailed
from models import CitizenshipStatus
from progress import is_missing

_SSN_RE = re.compile(r"^\d{3}-\d{2}-\d{4}$")
_ZIP_RE = re.compile(r"^\d{5}(-\d{4})?$")
# (123) 456-7890, 123-456-7890, 123.456.7890, 1234567890, +1 123 456 7890
_PHONE_RE = re.compile(r"^(\+1[-.\s]?)?\(?(\d{3})\)?[-.\s]?(\d{3})[-.\s]?(\d{4})$")
_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")

_LABELS = {
    "last_name": "Last name",
    "first_name": "First name",
    "address": "Address",
    "city": "City",
    "state": "State",
    "zip_code": "ZIP code",
    "date_of_birth": "Date of birth",
    "email": "Email",
    "phone": "Phone",
    "citizenship_status": "Citizenship status",
}

# Category -> identifiers of which at least one must be present.
CATEGORY_REQUIREMENTS = {
    CitizenshipStatus.LAWFUL_PERMANENT_RESIDENT.value: ("uscis_a_number", "alien_expiration_date"),
    CitizenshipStatus.AUTHORIZED_ALIEN.value: (
        "uscis_a_number",
        "form_i94_number",
        "foreign_passport_number",
    ),
}


def validate_ssn(ssn: str) -> bool:
    return bool(ssn) and _SSN_RE.match(ssn) is not None


def validate_phone(phone: str) -> bool:
    return bool(phone) and _PHONE_RE.match(phone.strip()) is not None


def validate_zip(zip_code: str) -> bool:
    return bool(zip_code) and _ZIP_RE.match(zip_code) is not None


def validate_state(state: str) -> bool:
    return bool(state) and state.upper() in US_STATES


def validate_citizenship_status(status: str) -> bool:
    return status in {c.value for c in CitizenshipStatus}


def validate_email(email: str) -> bool:
    return bool(email) and _EMAIL_RE.match(email) is not None


def canonical_phone(phone: str) -> str:
    """Return +1XXXXXXXXXX for US numbers; other input is returned stripped."""
    digits = re.sub(r"\D", "", phone or "")
    if len(digits) == 10:
        return f"+1{digits}"
    if len(digits) == 11 and digits.startswith("1"):
        return f"+{digits}"
    return (phone or "").strip()


def normalize_ssn(ssn: str | None) -> str | None:
    """SSNs are stored as 9 undelimited digits."""
    if ssn is None:
        return None
    return re.sub(r"\D", "", ssn)


def _parse_iso_date(value: str) -> date | None:
    try:
        return date.fromisoformat(value)
    except (TypeError, ValueError):
        return None


def missing_category_identifiers(data: dict) -> tuple[str, ...]:
    """Return the identifier options still unmet for the record's category, or ()."""
    options = CATEGORY_REQUIREMENTS.get(data.get("citizenship_status"), ())
    if options and all(is_missing(data.get(f)) for f in options):
        return options
    return ()


def category_error(data: dict) -> dict | None:
    """The conditional-identifier problem for *data* as an error entry, if any."""
    options = missing_category_identifiers(data)
    if not options:
        return None
    return {
        "field": "citizenship_status",
        "message": f"Additional documentation required for {data['citizenship_status']}: "
        f"provide one of {', '.join(options)}",
    }


def length_error(field: str, value) -> dict | None:
    limit = FIELD_MAX_LENGTHS.get(field)
    if value and limit is not None and len(value) > limit:
        return {"field": field, "message": f"{field} must be {limit} characters or less"}
    return None


def _format_errors(data: dict) -> list[dict]:
    """Length and format problems for the values present in *data*; absent values are skipped."""
    errors = []

    def add(field, message):
        errors.append({"field": field, "message": message})

    for field in FIELD_MAX_LENGTHS:
        error = length_error(field, data.get(field))
        if error:
            errors.append(error)

    state = data.get("state")
    if not is_missing(state) and not validate_state(state):
        add("state", "Invalid US state code")

    zip_code = data.get("zip_code")
    if not is_missing(zip_code) and not validate_zip(zip_code):
        add("zip_code", "Invalid ZIP code format (must be 12345 or 12345-6789)")

    dob = data.get("date_of_birth")
    if not is_missing(dob):
        parsed = _parse_iso_date(dob)
        if parsed is None or parsed >= date.today():
            add("date_of_birth", "Invalid date of birth")

    ssn = data.get("ssn")
    if ssn and not validate_ssn(ssn):
        add("ssn", "Invalid SSN format (must be XXX-XX-XXXX)")

    email = data.get("email")
    if not is_missing(email) and not validate_email(email):
        add("email", "Invalid email format")

    phone = data.get("phone")
    if not is_missing(phone) and not validate_phone(phone):
        add("phone", "Invalid US phone number format")

    status = data.get("citizenship_status")
    if not is_missing(status) and not validate_citizenship_status(status):
        add("citizenship_status", "Invalid citizenship status")

    expiration = data.get("alien_expiration_date")
    if expiration and _parse_iso_date(expiration) is None:
        add("alien_expiration_date", "Invalid expiration date")

    return errors


def collect_form_errors(data: dict) -> list[dict]:
    """Every problem with a whole Section 1 record, in field order."""
    errors = [
        {"field": field, "message": f"{_LABELS[field]} is required"}
        for field in REQUIRED_FIELDS
        if is_missing(data.get(field))
    ]
    errors += _format_errors(data)
    error = category_error(data)
    if error:
        errors.append(error)
    return errors


def collect_field_errors(changes: dict) -> list[dict]:
    """Problems with a partial edit: only the supplied fields are checked."""
    errors = [
        {"field": field, "message": f"{_LABELS[field]} is required"}
        for field in REQUIRED_FIELDS
        if field in changes and is_missing(changes[field])
    ]
    return errors + _format_errors(changes)


def validate_form(data: dict) -> dict:
    """Raise ValidationFailed listing every problem in *data*; return it unchanged otherwise."""
    errors = collect_form_errors(data)
    if errors:
        raise ValidationFailed(errors)
    return data


def normalize_columns(data: dict) -> dict:
    """Storage form of form values: blanks as NULL, upper-case state, E.164 phone, bare SSN digits."""
    columns = {k: (None if v == "" else v) for k, v in data.items() if k in MUTABLE_FIELDS}
    if columns.get("state"):
        columns["state"] = columns["state"].upper()
    if columns.get("phone"):
        columns["phone"] = canonical_phone(columns["phone"])
    if columns.get("ssn"):
        columns["ssn"] = normalize_ssn(columns["ssn"])
    return columns
