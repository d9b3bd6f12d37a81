"""Tests for field validators and whole-form validation."""

import pytest

from errors import ValidationFailed
from tests.conftest import VALID_PAYLOAD
from validators import (
    canonical_phone,
    collect_field_errors,
    collect_form_errors,
    missing_category_identifiers,
    normalize_columns,
    normalize_ssn,
    validate_citizenship_status,
    validate_email,
    validate_form,
    validate_phone,
    validate_ssn,
    validate_state,
    validate_zip,
)


@pytest.mark.parametrize("ssn", ["123-45-6789", "000-00-0000"])
def test_ssn_accepts_delimited(ssn):
    assert validate_ssn(ssn)


@pytest.mark.parametrize("ssn", ["123456789", "123-456-789", "12-345-6789", "", None])
def test_ssn_rejects_other_shapes(ssn):
    assert not validate_ssn(ssn)


@pytest.mark.parametrize(
    "phone", ["(555) 123-4567", "555-123-4567", "555.123.4567", "5551234567", "+1 555 123 4567", "+15551234567"]
)
def test_phone_accepts_us_formats(phone):
    assert validate_phone(phone)


@pytest.mark.parametrize("phone", ["55512345678", "+44 20 7946 0958", "123", ""])
def test_phone_rejects_others(phone):
    assert not validate_phone(phone)


def test_zip_formats():
    assert validate_zip("94102")
    assert validate_zip("94102-1234")
    assert not validate_zip("9410")
    assert not validate_zip("94102-12")


def test_state_is_case_insensitive_and_includes_dc():
    assert validate_state("ca")
    assert validate_state("DC")
    assert not validate_state("ZZ")


def test_citizenship_status_closed_set():
    for status in ("us_citizen", "noncitizen_national", "lawful_permanent_resident", "authorized_alien"):
        assert validate_citizenship_status(status)
    assert not validate_citizenship_status("citizen")


def test_email():
    assert validate_email("a@b.co")
    assert not validate_email("not-an-email")


def test_canonical_phone():
    assert canonical_phone("(555) 123-4567") == "+15551234567"
    assert canonical_phone("1-555-123-4567") == "+15551234567"
    assert canonical_phone(" 12345 ") == "12345"


def test_normalize_ssn():
    assert normalize_ssn("123-45-6789") == "123456789"
    assert normalize_ssn(None) is None


def test_valid_payload_passes():
    assert validate_form(dict(VALID_PAYLOAD)) == VALID_PAYLOAD


def test_validate_form_reports_every_problem():
    payload = {**VALID_PAYLOAD, "address": "", "state": "ZZ", "ssn": "123456789"}
    with pytest.raises(ValidationFailed) as exc:
        validate_form(payload)
    assert exc.value.messages == [
        "Address is required",
        "Invalid US state code",
        "Invalid SSN format (must be XXX-XX-XXXX)",
    ]


def test_sentinels_count_as_missing():
    errors = collect_form_errors({**VALID_PAYLOAD, "zip_code": "00000", "date_of_birth": "1990-01-01"})
    assert {e["message"] for e in errors} == {"ZIP code is required", "Date of birth is required"}


def test_future_date_of_birth_rejected():
    errors = collect_form_errors({**VALID_PAYLOAD, "date_of_birth": "2999-01-01"})
    assert errors == [{"field": "date_of_birth", "message": "Invalid date of birth"}]


def test_length_limit():
    errors = collect_form_errors({**VALID_PAYLOAD, "middle_initial": "ABCDEFGHIJK"})
    assert errors == [{"field": "middle_initial", "message": "middle_initial must be 10 characters or less"}]


def test_lawful_permanent_resident_needs_identifier():
    payload = {**VALID_PAYLOAD, "citizenship_status": "lawful_permanent_resident"}
    errors = collect_form_errors(payload)
    assert len(errors) == 1
    assert errors[0]["field"] == "citizenship_status"
    assert "uscis_a_number" in errors[0]["message"]

    payload["uscis_a_number"] = "A123456789"
    assert collect_form_errors(payload) == []


def test_authorized_alien_accepts_any_identifier():
    payload = {**VALID_PAYLOAD, "citizenship_status": "authorized_alien"}
    assert missing_category_identifiers(payload) == (
        "uscis_a_number",
        "form_i94_number",
        "foreign_passport_number",
    )
    payload["foreign_passport_number"] = "X1234567"
    assert missing_category_identifiers(payload) == ()


def test_invalid_expiration_date():
    payload = {**VALID_PAYLOAD, "alien_expiration_date": "next year"}
    assert collect_form_errors(payload) == [
        {"field": "alien_expiration_date", "message": "Invalid expiration date"}
    ]


def test_partial_edit_checks_only_supplied_fields():
    assert collect_field_errors({"city": "Austin"}) == []
    assert collect_field_errors({"state": "Texas", "email": ""}) == [
        {"field": "email", "message": "Email is required"},
        {"field": "state", "message": "state must be 2 characters or less"},
        {"field": "state", "message": "Invalid US state code"},
    ]


def test_normalize_columns():
    assert normalize_columns(
        {"state": "ca", "phone": "(555) 123-4567", "ssn": "123-45-6789", "apt_number": "", "status": "x"}
    ) == {"state": "CA", "phone": "+15551234567", "ssn": "123456789", "apt_number": None}
