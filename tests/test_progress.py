"""Tests for progress evaluation."""

from config import NOT_STARTED_MARKER, REQUIRED_FIELDS, SKELETON_DEFAULTS
from progress import completed_fields, completion_percentage, evaluate_progress, is_missing
from tests.conftest import REQUIRED_VALUES


def test_is_missing():
    assert is_missing(None)
    assert is_missing("")
    assert is_missing("   ")
    assert is_missing("00000")
    assert is_missing("1990-01-01")
    assert not is_missing("Jane")


def test_not_started():
    assert evaluate_progress(None) == {
        "exists": False,
        "completion_percentage": 0,
        "missing_fields": [NOT_STARTED_MARKER],
        "status": "not_started",
    }


def test_skeleton_counts_only_real_defaults():
    progress = evaluate_progress({**SKELETON_DEFAULTS, "status": "in_progress"})
    assert progress["exists"] is True
    # state and citizenship_status carry usable defaults; the rest are blank or sentinels
    assert progress["completion_percentage"] == 20
    assert "zip_code" in progress["missing_fields"]
    assert "date_of_birth" in progress["missing_fields"]
    assert "state" not in progress["missing_fields"]


def test_complete_record():
    progress = evaluate_progress({**REQUIRED_VALUES, "status": "in_progress"})
    assert progress["completion_percentage"] == 100
    assert progress["missing_fields"] == []
    assert progress["status"] == "in_progress"


def test_missing_fields_follow_required_order():
    record = {**REQUIRED_VALUES, "email": "", "last_name": None, "status": "in_progress"}
    assert evaluate_progress(record)["missing_fields"] == ["last_name", "email"]


def test_completion_percentage_rounds():
    assert completion_percentage(0) == 100
    assert completion_percentage(len(REQUIRED_FIELDS)) == 0
    assert completion_percentage(3) == 70


def test_completed_fields_include_optional():
    record = {**REQUIRED_VALUES, "ssn": "123456789", "apt_number": ""}
    fields = completed_fields(record)
    assert "ssn" in fields
    assert "apt_number" not in fields
