"""
Field-level writes: one field at a time from the voice assistant, and
partial edits by HR.
"""

import structlog

from config import MUTABLE_FIELDS, SKELETON_DEFAULTS
from errors import InvalidField, NotFound, ValidationFailed
from models import FormStatus
from validators import (
    CATEGORY_REQUIREMENTS,
    category_error,
    collect_field_errors,
    length_error,
    normalize_columns,
    normalize_ssn,
)

logger = structlog.get_logger(__name__)

# Fields whose change can affect the conditional identifier rule.
_CATEGORY_FIELDS = frozenset(
    {"citizenship_status", *(f for options in CATEGORY_REQUIREMENTS.values() for f in options)}
)


def ensure_form(store, employee_id: str) -> dict:
    """Return the employee's form, creating a placeholder-filled one on first write."""
    form = store.fetch_form_by_employee(employee_id)
    if form is None:
        form = store.insert_form(
            employee_id, {**SKELETON_DEFAULTS, "status": FormStatus.IN_PROGRESS.value}
        )
        logger.info("form_skeleton_created", employee_id=employee_id, form_id=form["id"])
    return form


def save_field(store, employee_id: str, field_name: str, value) -> dict:
    """
    Overwrite a single form field and return the updated form.

    Values are stored as text without cross-field validation so a call can
    fill the form in any order. Only the column width is enforced. Status
    never changes here.
    """
    if field_name not in MUTABLE_FIELDS:
        raise InvalidField(field_name)

    text = None if value is None else str(value)
    if field_name == "ssn":
        text = normalize_ssn(text)

    error = length_error(field_name, text)
    if error:
        raise ValidationFailed([error], detail=error["message"])

    if store.fetch_employee(employee_id) is None:
        raise NotFound("Employee not found")

    ensure_form(store, employee_id)

    form = store.update_form_field(employee_id, field_name, text)
    logger.info("form_field_saved", employee_id=employee_id, field=field_name)
    return form


def update_form(store, form_id: str, changes: dict) -> dict:
    """
    HR edit of any subset of form fields. Each supplied value is validated;
    required fields cannot be blanked. Status is untouched.
    """
    unknown = sorted(set(changes) - MUTABLE_FIELDS)
    if unknown:
        raise InvalidField(unknown[0])
    if not changes:
        raise ValidationFailed(
            [{"field": "body", "message": "No fields to update"}], detail="No fields to update"
        )

    form = store.fetch_form(form_id)
    if form is None:
        raise NotFound("I-9 form not found")

    errors = collect_field_errors(changes)
    if _CATEGORY_FIELDS & set(changes):
        error = category_error({**form, **changes})
        if error:
            errors.append(error)
    if errors:
        raise ValidationFailed(errors)

    updated = store.update_form(form_id, normalize_columns(changes))
    logger.info("form_fields_updated", form_id=form_id, fields=sorted(changes))
    return updated
