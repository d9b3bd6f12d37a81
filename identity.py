"""Phone-keyed employee identity: the anchor every voice call starts from."""

import structlog

from errors import ValidationFailed
from validators import canonical_phone, validate_phone

logger = structlog.get_logger(__name__)


def find_or_create_employee(store, phone: str, email: str | None = None) -> tuple[dict, bool]:
    """
    Return ``(employee, created)`` for *phone*.

    Lookup is by canonical E.164 phone. A malformed phone only fails when a
    new employee would have to be created.
    """
    canonical = canonical_phone(phone)
    employee = store.fetch_employee_by_phone(canonical)
    if employee:
        return employee, False

    if not validate_phone(phone or ""):
        raise ValidationFailed(
            [{"field": "phone", "message": "Invalid phone number format"}],
            detail="Invalid phone number format",
        )

    employee = store.insert_employee(canonical, email or None)
    if employee is None:
        # Lost a race with a concurrent insert for the same phone.
        return store.fetch_employee_by_phone(canonical), False

    logger.info("employee_created", employee_id=employee["id"])
    return employee, True
