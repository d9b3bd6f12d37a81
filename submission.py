"""One-shot submission of a complete Section 1 payload."""

from datetime import datetime, timezone

import structlog

from config import SIGNATURE_METHOD_VOICE
from errors import AlreadySubmitted
from identity import find_or_create_employee
from models import FormStatus
from validators import normalize_columns, validate_form
from workflow import LOCKED_STATUSES

logger = structlog.get_logger(__name__)


def submit_complete(store, notifier, payload: dict) -> dict:
    """
    Validate, then insert or update the employee's form as completed.

    Forms HR already holds (completed, data_approved, verified) are never
    overwritten. The confirmation SMS is best effort.
    """
    validate_form(payload)

    employee, _ = find_or_create_employee(store, payload["phone"], payload.get("email"))
    existing = store.fetch_form_by_employee(employee["id"])
    if existing and existing["status"] in LOCKED_STATUSES:
        raise AlreadySubmitted(existing["id"], existing["status"])

    now = datetime.now(timezone.utc)
    columns = {
        **normalize_columns(payload),
        "status": FormStatus.COMPLETED.value,
        "employee_signature_date": now,
        "employee_signature_method": SIGNATURE_METHOD_VOICE,
    }

    if existing:
        columns["completed_at"] = existing.get("completed_at") or now
        form = store.update_form(existing["id"], columns, expected_status=existing["status"])
        if form is None:
            fresh = store.fetch_form(existing["id"]) or existing
            raise AlreadySubmitted(existing["id"], fresh["status"])
    else:
        columns["completed_at"] = now
        form = store.insert_form(employee["id"], columns)

    try:
        sms_sent = bool(notifier.send_submitted(employee["phone"]))
    except Exception:
        logger.exception("sms_notification_failed", form_id=form["id"])
        sms_sent = False

    logger.info("form_submitted", form_id=form["id"], employee_id=employee["id"], sms_sent=sms_sent)
    return {
        "form": form,
        "form_id": form["id"],
        "employee_id": employee["id"],
        "sms_sent": sms_sent,
    }
