"""
The I-9 status lifecycle.

    not_started -> in_progress -> completed -> needs_correction -> completed ...
                                           -> data_approved -> verified

``not_started`` is virtual (no row yet). Every action is looked up in a
static table keyed by ``Action``; guards are checked against the record the
caller just read, and the write is conditional on that record's status so a
concurrent transition is reported rather than overwritten.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum

import structlog

from config import SIGNATURE_METHOD_VOICE
from errors import InvalidTransition, NotFound, ValidationFailed
from models import STORED_STATUSES, FormStatus
from progress import missing_required_fields
from validators import category_error

logger = structlog.get_logger(__name__)


class Action(str, Enum):
    COMPLETE_SECTION1 = "complete_section1"
    APPROVE_DATA = "approve_data"
    REQUEST_CORRECTIONS = "request_corrections"
    VERIFY_FINAL = "verify_final"


@dataclass(frozen=True)
class Transition:
    sources: tuple[FormStatus, ...]
    target: FormStatus
    hr_review: bool = False


TRANSITIONS: dict[Action, Transition] = {
    # A resubmission after corrections re-enters completed the same way.
    Action.COMPLETE_SECTION1: Transition(
        (FormStatus.IN_PROGRESS, FormStatus.NEEDS_CORRECTION), FormStatus.COMPLETED
    ),
    Action.APPROVE_DATA: Transition((FormStatus.COMPLETED,), FormStatus.DATA_APPROVED, True),
    Action.REQUEST_CORRECTIONS: Transition(
        (FormStatus.COMPLETED,), FormStatus.NEEDS_CORRECTION, True
    ),
    Action.VERIFY_FINAL: Transition((FormStatus.DATA_APPROVED,), FormStatus.VERIFIED, True),
}

assert set(TRANSITIONS) == set(Action), "every Action needs a transition"

# Once a form reaches one of these it belongs to HR and cannot be resubmitted.
LOCKED_STATUSES = frozenset(
    {FormStatus.COMPLETED.value, FormStatus.DATA_APPROVED.value, FormStatus.VERIFIED.value}
)


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _check_inputs(action: Action, reviewer: str | None, notes: str | None) -> None:
    errors = []
    if TRANSITIONS[action].hr_review and not (reviewer or "").strip():
        errors.append({"field": "reviewed_by", "message": "Reviewer is required"})
    if action is Action.REQUEST_CORRECTIONS and not (notes or "").strip():
        errors.append(
            {"field": "employer_notes", "message": "Correction notes are required"}
        )
    if errors:
        raise ValidationFailed(errors, detail=errors[0]["message"])


def _check_complete(record: dict) -> None:
    missing = missing_required_fields(record)
    errors = [{"field": f, "message": f"{f} is required"} for f in missing]
    category = category_error(record)
    if category:
        errors.append(category)
    if not errors:
        return
    if missing:
        detail = f"Cannot complete form. Missing required fields: {', '.join(missing)}"
    else:
        detail = f"Cannot complete form. {category['message']}"
    raise ValidationFailed(errors, detail=detail)


def check_status(record: dict, action: Action) -> Transition:
    transition = TRANSITIONS[action]
    allowed = [s.value for s in transition.sources]
    if record.get("status") not in allowed:
        raise InvalidTransition(record.get("status"), allowed, action.value)
    return transition


def plan_transition(
    record: dict,
    action: Action,
    reviewer: str | None = None,
    notes: str | None = None,
    now: datetime | None = None,
) -> dict:
    """Return the column changes for *action* on *record*, or raise if a guard fails."""
    _check_inputs(action, reviewer, notes)
    transition = check_status(record, action)
    now = now or _now()
    changes = {"status": transition.target.value}

    if action is Action.COMPLETE_SECTION1:
        _check_complete(record)
        changes["completed_at"] = record.get("completed_at") or now
        changes["employee_signature_date"] = now
        changes["employee_signature_method"] = SIGNATURE_METHOD_VOICE

    if transition.hr_review:
        changes["employer_reviewed_at"] = now
        changes["employer_reviewed_by"] = reviewer.strip()

    if action is Action.REQUEST_CORRECTIONS:
        changes["employer_notes"] = notes.strip()

    return changes


def apply_transition(
    store,
    record: dict,
    action: Action,
    reviewer: str | None = None,
    notes: str | None = None,
) -> dict:
    """Plan, then persist conditionally on the status that was read. Returns the new row."""
    changes = plan_transition(record, action, reviewer=reviewer, notes=notes)
    updated = store.update_form(record["id"], changes, expected_status=record["status"])
    if updated is None:
        fresh = store.fetch_form(record["id"])
        if fresh is None:
            raise NotFound("I-9 form not found")
        raise InvalidTransition(
            fresh["status"], [s.value for s in TRANSITIONS[action].sources], action.value
        )
    logger.info(
        "form_transition",
        form_id=record["id"],
        action=action.value,
        from_status=record["status"],
        to_status=updated["status"],
    )
    return updated


def complete_section1(store, employee_id: str) -> dict:
    form = store.fetch_form_by_employee(employee_id)
    if form is None:
        raise NotFound("I-9 form not found for employee")
    return apply_transition(store, form, Action.COMPLETE_SECTION1)


def override_status(store, form_id: str, status: str) -> dict:
    """
    Legacy direct status write. Skips the transition guards entirely, so it is
    an administrative escape hatch only and is always logged as a warning.
    """
    if status not in STORED_STATUSES:
        raise ValidationFailed(
            [{"field": "status", "message": "Valid status is required"}],
            detail="Valid status is required",
        )
    form = store.fetch_form(form_id)
    if form is None:
        raise NotFound("I-9 form not found")

    changes = {"status": status}
    if status == FormStatus.COMPLETED.value and not form.get("completed_at"):
        changes["completed_at"] = _now()

    updated = store.update_form(form_id, changes)
    logger.warning(
        "form_status_overridden",
        form_id=form_id,
        from_status=form["status"],
        to_status=status,
    )
    return updated
