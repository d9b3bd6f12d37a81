"""Progress evaluation over a form snapshot. Read only."""

from config import (
    NOT_STARTED_MARKER,
    OPTIONAL_FIELDS,
    REQUIRED_FIELDS,
    SENTINEL_VALUES,
)
from models import FormStatus


def is_missing(value) -> bool:
    """True if *value* is absent, blank, or one of the skeleton placeholders.

    This is the only definition of "missing" in the service; progress, the
    section 1 completion guard, submission validation and caller context all
    go through it.
    """
    if value is None:
        return True
    text = str(value).strip()
    return text == "" or text in SENTINEL_VALUES


def missing_required_fields(record: dict) -> list[str]:
    return [f for f in REQUIRED_FIELDS if is_missing(record.get(f))]


def completed_fields(record: dict) -> list[str]:
    """All form fields, required or optional, that hold real data."""
    return [f for f in REQUIRED_FIELDS + OPTIONAL_FIELDS if not is_missing(record.get(f))]


def completion_percentage(missing_count: int) -> int:
    total = len(REQUIRED_FIELDS)
    return round(100 * (total - missing_count) / total)


def evaluate_progress(record: dict | None) -> dict:
    if record is None:
        return {
            "exists": False,
            "completion_percentage": 0,
            "missing_fields": [NOT_STARTED_MARKER],
            "status": FormStatus.NOT_STARTED.value,
        }

    missing = missing_required_fields(record)
    return {
        "exists": True,
        "completion_percentage": completion_percentage(len(missing)),
        "missing_fields": missing,
        "status": record.get("status"),
        "completed_at": record.get("completed_at"),
        "current_data": record,
    }
